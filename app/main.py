import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.features.health.routes.health import router as health_router
from app.features.waitlist.routes.waitlist import router as waitlist_router
from app.platform.config import Settings, get_settings
from app.platform.db.session import Database
from app.platform.exceptions import add_exception_handlers
from app.platform.logger import configure_logging
from app.platform.services.email import Mailer

# Configure logging to show INFO level messages
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await app.state.db.create_all()
    yield
    await app.state.db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_DIR)

    app = FastAPI(
        title=f"{settings.APP_NAME} API",
        description="Waitlist signups with welcome emails",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    # Process-wide handles; request handlers reach them through dependencies
    app.state.settings = settings
    app.state.db = Database(settings.DATABASE_URL)
    app.state.mailer = Mailer(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    add_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(waitlist_router)

    return app


app = create_app()
