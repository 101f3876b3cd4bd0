from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.features.waitlist.schemas.waitlist import MessageOut, WaitlistCountOut, WaitlistIn
from app.features.waitlist.services.waitlist import WaitlistService
from app.features.waitlist.utils.emailer import send_welcome_email
from app.platform.db.session import get_db
from app.platform.logger import get_logger
from app.platform.response import api_response
from app.platform.services.email import Mailer, get_mailer

logger = get_logger("waitlist_routes")

router = APIRouter(prefix="/api/waitlist", tags=["Waitlist"])


@router.post(
    "/join",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
    responses={400: {"model": MessageOut}, 500: {"model": MessageOut}},
)
async def join_waitlist(
    waitlist_in: WaitlistIn,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    mailer: Mailer = Depends(get_mailer),
):
    service = WaitlistService(db)
    try:
        entry = await service.join(waitlist_in.email, waitlist_in.name)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception(f"Waitlist join error: {e}")
        return api_response(
            message="Something went wrong. Please try again.",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    # Runs after the response is sent; delivery never affects the outcome
    background_tasks.add_task(send_welcome_email, mailer, entry.email, entry.name)

    return api_response(
        message="Success! You are on the list.",
        status_code=status.HTTP_201_CREATED,
    )


@router.get(
    "/count",
    response_model=WaitlistCountOut,
    responses={500: {"model": MessageOut}},
)
async def waitlist_count(db: AsyncSession = Depends(get_db)):
    try:
        count = await WaitlistService(db).count()
    except Exception as e:
        logger.exception(f"Waitlist count error: {e}")
        return api_response(
            message="Error fetching count",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return api_response(data={"count": count})
