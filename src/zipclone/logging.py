import logging

import structlog


def setup_logging(level: int = logging.WARNING) -> None:
    """
    Configure package logger defaults and the structlog pipeline.

    Parameters
    ----------
    level : int, optional
        Level applied to the ``zipclone`` logger.
    """
    logging.getLogger(name="zipclone").setLevel(level=level)
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
