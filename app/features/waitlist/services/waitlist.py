from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.waitlist.models.waitlist import WaitlistEntry
from app.platform.logger import get_logger

logger = get_logger("waitlist_service")

ALREADY_ON_WAITLIST = "You are already on the waitlist!"


class WaitlistService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_email(self, email: str) -> Optional[WaitlistEntry]:
        result = await self.db.execute(select(WaitlistEntry).where(WaitlistEntry.email == email))
        return result.scalars().first()

    async def join(self, email: str, name: Optional[str] = None) -> WaitlistEntry:
        """
        Insert a new entry unless the email is already registered.

        Raises HTTPException(400) when the pre-check finds the email. A duplicate
        that slips past the pre-check is rejected by the unique constraint at
        commit time; that error is rolled back and re-raised to the caller.
        """
        if await self.get_by_email(email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=ALREADY_ON_WAITLIST)

        entry = WaitlistEntry(email=email, name=name)
        self.db.add(entry)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise
        await self.db.refresh(entry)

        logger.info(f"Waitlist entry created for {email}")
        return entry

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(WaitlistEntry))
        return result.scalar_one()
