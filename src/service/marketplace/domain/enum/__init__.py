from src.service.marketplace.domain.enum.verification_status import VerificationStatus

__all__ = ['VerificationStatus']
