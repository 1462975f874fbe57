import logging
import re
from typing import Iterable, Union


def redact(text: str) -> str:
    """Mask auth headers and token-like query values in free text."""
    text = re.sub(
        r"(Authorization:?)\s+(?:(?:Bearer|Basic)\s+)?\S+",
        r"\1 ***",
        text,
        flags=re.IGNORECASE,
    )
    return re.sub(
        r"(token|secret|password|key)=[^&\s'\")]+",
        r"\1=***",
        text,
        flags=re.IGNORECASE,
    )


class RedactingFilter(logging.Filter):
    """Redact token-bearing fields from log records.

    The geolocation token travels as a query parameter, so request URLs
    logged by urllib3 carry it verbatim.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            record.msg = redact(str(record.getMessage()))
            record.args = None
        except Exception:
            pass
        return True


def setup_logging(
    level: Union[int, str] = logging.INFO,
    loggers: Iterable[str] = ("adot_core", "adot_cli", "urllib3"),
) -> None:
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level)
    f = RedactingFilter()
    # Logger filters do not see records from child loggers; handler filters do.
    for handler in logging.getLogger().handlers:
        if not any(isinstance(x, RedactingFilter) for x in handler.filters):
            handler.addFilter(f)
    for name in loggers:
        logging.getLogger(name).setLevel(level)
