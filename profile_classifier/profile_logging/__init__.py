"""
Structured logging for the profile classifier.

Engine events go to an injectable Observer; the default is a structlog
logger per module, rendered as JSON lines.
"""

from profile_classifier.profile_logging.logger import (
    Observer,
    configure_logging,
    get_logger,
    resolve_observer,
)

__all__ = ["Observer", "configure_logging", "get_logger", "resolve_observer"]
