"""Link click logging using Loguru's built-in async features."""

import os
from datetime import datetime, timezone

from loguru import logger

from shorturls.core.config import settings

EVENT_TYPE = "link_click"

# Bound logger for click events, created by setup_click_logging()
click_logger = None
_sink_ids = []


def _is_click_event(record) -> bool:
    return record["extra"].get("event_type") == EVENT_TYPE


def setup_click_logging():
    """Configure the click logger with its own file sinks."""
    global click_logger

    click_logger = logger.bind(event_type=EVENT_TYPE)

    if not settings.CLICK_LOGGING_ENABLED or _sink_ids:
        return click_logger

    os.makedirs(settings.LOG_DIR, exist_ok=True)

    _sink_ids.append(logger.add(
        f"{settings.LOG_DIR}/link_clicks.log",
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | IP:{extra[ip]} | Code:{extra[short]} | {message}",
        rotation=settings.LOG_ROTATION,
        retention=settings.LOG_RETENTION,
        enqueue=True,
        level="INFO",
        backtrace=False,
        diagnose=False,
        filter=_is_click_event,
    ))

    _sink_ids.append(logger.add(
        f"{settings.LOG_DIR}/link_clicks.json",
        serialize=True,
        enqueue=True,
        level="INFO",
        filter=_is_click_event,
    ))

    return click_logger


def teardown_click_logging() -> None:
    """Remove the click sinks, flushing their queues."""
    while _sink_ids:
        logger.remove(_sink_ids.pop())


def log_link_click(short: str, ip_address: str, user_agent: str = ""):
    """
    Log a request for a short code using Loguru's non-blocking logging.

    Args:
        short: The short code that was followed
        ip_address: The client's IP address
        user_agent: Optional user agent string
    """
    if click_logger is None:
        setup_click_logging()

    click_logger.bind(
        ip=ip_address,
        short=short,
        user_agent=user_agent,
        timestamp=datetime.now(timezone.utc).isoformat(),
    ).info(f"Short code requested: {short}")
