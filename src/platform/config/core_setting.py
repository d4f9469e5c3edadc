from pathlib import Path
from typing import List, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_PROJECT_ROOT = Path(__file__).resolve().parents[3]
_ENV_PATH = _PROJECT_ROOT / '.env'
_ENV_FILE = _ENV_PATH if _ENV_PATH.exists() else (_PROJECT_ROOT / '.env.example')


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_ignore_empty=True,
        extra='ignore',
    )

    PROJECT_NAME: str = 'Ticket Marketplace'
    VERSION: str = '0.1.0'
    DEBUG: bool = True  # Set to False in production

    # PostgreSQL
    POSTGRES_SERVER: str = 'localhost'
    POSTGRES_PORT: int = 5432
    POSTGRES_USER: str = 'postgres'
    POSTGRES_PASSWORD: SecretStr = SecretStr('postgres')
    POSTGRES_DB: str = 'ticket_marketplace'

    @property
    def DATABASE_URL_ASYNC(self) -> str:
        return (
            f'postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD.get_secret_value()}'
            f'@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}'
        )

    # SQLAlchemy engine pool
    DB_POOL_SIZE: int = 10
    DB_POOL_MAX_OVERFLOW: int = 5
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 3600
    DB_POOL_PRE_PING: bool = True

    # asyncpg pool (booking ledger, settlement, advertise toggle)
    ASYNCPG_POOL_MIN_SIZE: int = 2
    ASYNCPG_POOL_MAX_SIZE: int = 20
    ASYNCPG_POOL_COMMAND_TIMEOUT: float = 30.0
    ASYNCPG_POOL_MAX_INACTIVE_LIFETIME: float = 300.0
    ASYNCPG_POOL_TIMEOUT: float = 10.0

    # CORS
    CLIENT_DOMAIN: Optional[str] = None
    BACKEND_CORS_ORIGINS: List[str] = []  # add your frontend URL here

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: str | List[str]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, list):
            return v
        return []

    @property
    def CORS_ORIGINS(self) -> List[str]:
        origins = list(self.BACKEND_CORS_ORIGINS)
        if self.CLIENT_DOMAIN and self.CLIENT_DOMAIN not in origins:
            origins.append(self.CLIENT_DOMAIN)
        return origins

    # Identity provider
    # Without IDENTITY_JWKS_URL tokens are HS256-signed with SECRET_KEY (local dev and tests)
    SECRET_KEY: SecretStr = SecretStr('test_secret_key_change_in_production')
    IDENTITY_ALGORITHM: str = 'HS256'
    IDENTITY_JWKS_URL: Optional[str] = None
    IDENTITY_AUDIENCE: Optional[str] = None
    IDENTITY_ISSUER: Optional[str] = None

    # Payment processor
    STRIPE_SECRET_KEY: SecretStr = SecretStr('sk_test_change_me')
    PAYMENT_CURRENCY: str = 'usd'

    # Marketplace rules
    ADVERTISE_CAP: int = 6
    LATEST_TICKETS_LIMIT: int = 8
    SEAT_ASSIGNMENT_ATTEMPTS: int = 5

    # Payment reconciliation sweep (0 disables)
    RECONCILE_INTERVAL_SECONDS: int = 300


settings = Settings()  # type: ignore
