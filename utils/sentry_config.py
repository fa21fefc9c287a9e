import logging
import os

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from utils.exceptions import DuplicatePlayerError, PlayerNotFoundError, UserNotFoundError

logger = logging.getLogger(__name__)

# Caused by bad command input, not by the bot
IGNORED_ERRORS = (UserNotFoundError, DuplicatePlayerError, PlayerNotFoundError)


def drop_user_errors(event, hint):
    exc_info = hint.get("exc_info")
    if exc_info and isinstance(exc_info[1], IGNORED_ERRORS):
        return None
    return event


def setup_sentry():
    if sentry_sdk.get_client().is_active():
        return
    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        logger.warning("⚠️ SENTRY_DSN not found. Sentry is DISABLED.")
        return
    current_env = os.getenv("ENV", "development")
    sentry_logging = LoggingIntegration(
        level=logging.INFO,
        event_level=logging.ERROR,
    )
    try:
        sentry_sdk.init(
            dsn=dsn,
            integrations=[sentry_logging],
            traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.2")),
            attach_stacktrace=True,
            environment=current_env,
            before_send=drop_user_errors,
        )
        logger.info(f"✅ Sentry tracking initialized in {current_env} mode.")
    except Exception as e:
        logger.error(f"❌ Failed to initialize Sentry: {e}")
