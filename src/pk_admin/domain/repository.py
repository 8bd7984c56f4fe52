"""PlatformConfig Protocol: marketplace-wide settings stored in the database."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession


class PlatformConfigProtocol(Protocol):
    async def get_fee_bps(self, db: AsyncSession) -> int:
        """Current platform fee; the configured default until the admin sets one."""
        ...

    async def set_fee_bps(self, db: AsyncSession, fee_bps: int) -> None: ...
