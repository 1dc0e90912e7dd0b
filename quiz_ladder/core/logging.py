import logging
import sys
from uuid import UUID

import structlog


def configure_logging(log_level: str = "INFO", *, json_logs: bool = True) -> None:
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def bind_game_context(*, user_id: int, game_id: UUID | None = None) -> None:
    """Attaches the acting user (and game, once known) to every log line of the request."""
    structlog.contextvars.clear_contextvars()
    context: dict[str, object] = {"user_id": user_id}
    if game_id is not None:
        context["game_id"] = str(game_id)
    structlog.contextvars.bind_contextvars(**context)
