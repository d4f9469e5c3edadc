"""
Identity Verifier (Driven Adapter)

Two modes, chosen by settings:
- IDENTITY_JWKS_URL set: RS256 ID tokens from an external identity provider
  (e.g. Firebase), keys fetched from the provider's JWKS endpoint
- otherwise: HS256 tokens signed with SECRET_KEY (local development and tests)

The verifier only proves who the caller is. Roles are always read from the
user table, never from the token.
"""

from typing import Any, Dict, Optional

import anyio
import jwt

from src.platform.config.core_setting import Settings, settings
from src.platform.exception.exceptions import AuthenticationError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_identity_verifier import IIdentityVerifier


UNAUTHORIZED = 'Unauthorized Access!'


class JwtIdentityVerifier(IIdentityVerifier):
    def __init__(self, config: Optional[Settings] = None) -> None:
        config = config or settings
        self.secret = config.SECRET_KEY.get_secret_value()
        self.algorithm = config.IDENTITY_ALGORITHM
        self.audience = config.IDENTITY_AUDIENCE
        self.issuer = config.IDENTITY_ISSUER
        self.jwks_client: Optional[jwt.PyJWKClient] = (
            jwt.PyJWKClient(config.IDENTITY_JWKS_URL, cache_keys=True)
            if config.IDENTITY_JWKS_URL
            else None
        )

    @Logger.io(truncate_content=True)
    async def verify(self, *, token: str) -> str:
        if not token:
            raise AuthenticationError(UNAUTHORIZED)

        try:
            payload = await self._decode(token)
        except jwt.PyJWTError as e:
            Logger.base.info(f'🔒 [AUTH] Rejected token: {type(e).__name__}')
            raise AuthenticationError(UNAUTHORIZED) from e

        email = payload.get('email')
        if not email or not isinstance(email, str):
            raise AuthenticationError(UNAUTHORIZED)
        return email.strip().lower()

    async def _decode(self, token: str) -> Dict[str, Any]:
        options = {'verify_aud': self.audience is not None}

        if self.jwks_client is None:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options=options,
            )

        # PyJWKClient fetches the key set over blocking HTTP
        signing_key = await anyio.to_thread.run_sync(
            self.jwks_client.get_signing_key_from_jwt, token
        )
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=['RS256'],
            audience=self.audience,
            issuer=self.issuer,
            options=options,
        )
