import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from apis.base import api_router
from apis.errors import register_error_handlers
from core.config import settings
from core.logging import get_logger, setup_logging

logger = get_logger(__name__)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.PROJECT_NAME, version=settings.PROJECT_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type"],
    )
    register_error_handlers(app)
    app.include_router(api_router, prefix=settings.API_PREFIX)
    return app


setup_logging(settings.LOG_FILTER)
app = create_app()


if __name__ == "__main__":
    logger.info("server listening on: %s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)
