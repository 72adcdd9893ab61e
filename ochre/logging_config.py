import logging
import sys

from ochre.log_context import ContextFilter
from ochre.settings import settings

LOG_LEVEL = settings.log_level.upper()
NUMERIC_LOG_LEVEL = getattr(logging, LOG_LEVEL, logging.INFO)
LOG_FORMAT = "%(levelname)s:%(name)s:%(message)s%(context)s"
_LOGGER = logging.getLogger(__name__)

# These libraries log every HTTP request at DEBUG
logging.getLogger("urllib3").setLevel(logging.WARNING)
logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
logging.getLogger("requests").setLevel(logging.WARNING)


def configure_logging() -> None:
    """Configure the root logger for stdout streaming.

    :return: The function does not return anything.
    :rtype: None
    """
    root = logging.getLogger()
    configured = not root.handlers
    if configured:
        logging.basicConfig(
            level=NUMERIC_LOG_LEVEL, format=LOG_FORMAT, stream=sys.stdout
        )

    # LOG_FORMAT reads record.context, which only ContextFilter sets
    for handler in root.handlers:
        if not any(isinstance(f, ContextFilter) for f in handler.filters):
            handler.addFilter(ContextFilter())

    if configured:
        _LOGGER.debug("🧵 Configured basic logging with level %s.", LOG_LEVEL)


__all__ = ["configure_logging"]
