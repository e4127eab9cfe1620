"""
Logging configuration.

All output goes to stdout through one handler. A redacting filter masks
anything shaped like a credential digest or a DSN password before a record
is formatted, so no code path can leak one into the log.
"""

import logging
import re
import sys
from core.config import settings

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_DIGEST_RE = re.compile(r"\b[0-9a-fA-F]{40}\b")
_DSN_PASSWORD_RE = re.compile(r"(://[^:/\s@]+:)[^@\s]+@")


class CredentialRedactingFilter(logging.Filter):
    """Mask hex digests and DSN passwords in the rendered message"""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _DSN_PASSWORD_RE.sub(r"\1***@", _DIGEST_RE.sub("<digest>", message))
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def setup_logging():
    """Configure application logging"""
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CredentialRedactingFilter())

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[handler]
    )

    # Statement echo would print bound parameters
    for name in ("sqlalchemy.engine", "sqlalchemy.pool", "aiomysql"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured at {settings.LOG_LEVEL} level ({settings.ENVIRONMENT})"
    )
