import asyncio

import asyncpg
import orjson
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.logging.loguru_io import Logger


# Global connection pools per event loop
asyncpg_pools: dict[int, asyncpg.Pool] = {}


async def _init_connection(conn: asyncpg.Connection) -> None:
    """Initialize each connection with UUID and JSONB codecs"""

    def _uuid_decoder(value: bytes) -> UUID:
        """Decode PostgreSQL UUID binary data to uuid_utils.UUID"""
        return UUID(bytes=value)

    def _uuid_encoder(value: UUID) -> bytes:
        """Encode uuid_utils.UUID (or stdlib uuid.UUID) to binary for PostgreSQL"""
        return value.bytes

    await conn.set_type_codec(
        'uuid',
        encoder=_uuid_encoder,
        decoder=_uuid_decoder,
        schema='pg_catalog',
        format='binary',
    )
    await conn.set_type_codec(
        'jsonb',
        encoder=lambda value: orjson.dumps(value).decode(),
        decoder=orjson.loads,
        schema='pg_catalog',
    )


async def get_asyncpg_pool() -> asyncpg.Pool:
    current_loop = asyncio.get_running_loop()
    loop_id = id(current_loop)

    # Fast path: pool already exists for this loop
    if loop_id in asyncpg_pools:
        return asyncpg_pools[loop_id]

    # Slow path: create new pool (should only happen at startup)
    # Convert SQLAlchemy URL to asyncpg format
    dsn = settings.DATABASE_URL_ASYNC.replace('postgresql+asyncpg://', 'postgresql://')

    pool = await asyncpg.create_pool(
        dsn,
        min_size=settings.ASYNCPG_POOL_MIN_SIZE,
        max_size=settings.ASYNCPG_POOL_MAX_SIZE,
        command_timeout=settings.ASYNCPG_POOL_COMMAND_TIMEOUT,
        max_inactive_connection_lifetime=settings.ASYNCPG_POOL_MAX_INACTIVE_LIFETIME,
        timeout=settings.ASYNCPG_POOL_TIMEOUT,
        init=_init_connection,
    )
    asyncpg_pools[loop_id] = pool

    Logger.base.info(
        f'🏊 [Pool] asyncpg pool created (min={settings.ASYNCPG_POOL_MIN_SIZE}, '
        f'max={settings.ASYNCPG_POOL_MAX_SIZE}) for event loop {loop_id}'
    )
    return pool


async def close_asyncpg_pool() -> None:
    """
    Close the asyncpg connection pool for the current event loop

    Note: Only closes the pool for the current event loop.
    Other event loops' pools remain active.
    """
    loop_id = id(asyncio.get_running_loop())

    if loop_id in asyncpg_pools:
        pool = asyncpg_pools.pop(loop_id)
        await pool.close()


async def close_all_asyncpg_pools() -> None:
    """Close all asyncpg connection pools (application shutdown only)"""
    for loop_id, pool in list(asyncpg_pools.items()):
        try:
            await pool.close()
        except Exception as e:
            Logger.base.warning(f'⚠️  [Pool] Failed to close pool for loop {loop_id}: {e}')
    asyncpg_pools.clear()
