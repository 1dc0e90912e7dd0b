import uvicorn
from fastapi import FastAPI

from quiz_ladder.api.routes.health import router as health_router
from quiz_ladder.api.routes.internal_ladder import router as internal_ladder_router
from quiz_ladder.core.config import get_settings
from quiz_ladder.core.logging import configure_logging


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings.log_level, json_logs=settings.app_env != "dev")

    app = FastAPI(
        title="Quiz Ladder API",
        version="0.1.0",
        docs_url="/docs" if settings.app_env == "dev" else None,
        redoc_url=None,
    )
    app.include_router(health_router)
    app.include_router(internal_ladder_router)
    return app


app = create_app()


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "quiz_ladder.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "dev",
    )


if __name__ == "__main__":
    run()
