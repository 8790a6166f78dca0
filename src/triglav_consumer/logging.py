import logging
import re
from typing import Any

LOG_EXTRA_FIELDS = (
    "operation",
    "method",
    "url",
    "status",
    "duration_ms",
    "attempt",
)

# header/field names whose values never reach a log line
_SECRET_RE = re.compile(
    r"(?i)\b(authorization|access_token|password)(\"?\s*[:=]\s*[\"']?)([^\s\"',}]+)"
)
REDACTED = "***"


def redact(text: str) -> str:
    """Mask credential values such as `Authorization: <token>` inside `text`."""
    return _SECRET_RE.sub(rf"\1\2{REDACTED}", text)


class LogfmtFormatter(logging.Formatter):
    """Small logfmt-style formatter that tolerates missing extras."""

    def format(self, record: logging.LogRecord) -> str:
        kv: list[str] = [
            f"level={record.levelname.lower()}",
            f"logger={record.name}",
        ]

        msg = record.getMessage()
        if msg:
            kv.append(f"event={self._fmt_val(msg)}")

        for key in LOG_EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is None:
                continue
            kv.append(f"{key}={self._fmt_val(val)}")

        if record.exc_info:
            kv.append(f"exc_type={record.exc_info[0].__name__}")

        return " ".join(kv)

    @staticmethod
    def _fmt_val(val: Any) -> str:
        if isinstance(val, (int, float, bool)):
            return str(val)
        s = redact(str(val))
        if " " in s or "=" in s or '"' in s:
            s = '"' + s.replace('"', '\\"') + '"'
        return s


def setup_logging(level: str = "INFO", logger_name: str = "") -> None:
    """Attach a logfmt handler to `logger_name` (root by default)."""

    target = logging.getLogger(logger_name)
    # Avoid duplicate handlers if called twice
    for h in list(target.handlers):
        target.removeHandler(h)

    handler = logging.StreamHandler()
    handler.setFormatter(LogfmtFormatter())
    target.addHandler(handler)
    target.setLevel(getattr(logging, level.upper(), logging.INFO))


__all__ = ["setup_logging", "LogfmtFormatter", "LOG_EXTRA_FIELDS", "redact"]
