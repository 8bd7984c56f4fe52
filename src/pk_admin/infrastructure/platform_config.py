"""PlatformConfigRepository: key/value rows in platform_config."""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings

PLATFORM_FEE_KEY = "platform_fee_bps"

_GET_SQL = text("SELECT value FROM platform_config WHERE key = :key")

_UPSERT_SQL = text("""
    INSERT INTO platform_config (key, value)
    VALUES (:key, :value)
    ON CONFLICT (key) DO UPDATE
        SET value = EXCLUDED.value,
            updated_at = NOW()
""")


class PlatformConfigRepository:
    async def get_fee_bps(self, db: AsyncSession) -> int:
        value = (await db.execute(_GET_SQL, {"key": PLATFORM_FEE_KEY})).scalar_one_or_none()
        return int(value) if value is not None else settings.DEFAULT_PLATFORM_FEE_BPS

    async def set_fee_bps(self, db: AsyncSession, fee_bps: int) -> None:
        await db.execute(_UPSERT_SQL, {"key": PLATFORM_FEE_KEY, "value": fee_bps})
