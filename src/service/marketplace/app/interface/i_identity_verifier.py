from abc import ABC, abstractmethod


class IIdentityVerifier(ABC):
    """Validates an opaque bearer token and yields the verified subject email"""

    @abstractmethod
    async def verify(self, *, token: str) -> str:
        """
        Raises:
            AuthenticationError: When the token is missing, expired, malformed
                or carries no email claim
        """
        pass
