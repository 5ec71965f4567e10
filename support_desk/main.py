from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from support_desk.api.router import api_router
from support_desk.core.config import get_settings
from support_desk.core.database import close_pools
from support_desk.core.errors import register_exception_handlers
from support_desk.core.logging import get_logger, setup_logging

settings = get_settings()
setup_logging(settings.log_level, json_logs=settings.log_json)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting support desk API", extra={"environment": settings.app_env})
    yield
    close_pools()
    logger.info("Support desk API stopped")


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    debug=settings.app_debug,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Support desk backend is running"}
