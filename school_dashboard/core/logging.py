# PUBLIC_INTERFACE
"""
Structured logging helpers for the service.

- Avoids logging secrets, cookie values and raw identifiers.
- Adds request_id context when provided.
"""
from __future__ import annotations

import json
import sys
import time
from typing import Any, Dict, Optional

_SENSITIVE_KEYS = {
    "token",
    "password",
    "secret",
    "cookie",
    "authorization",
    "apikey",
    "teacher_id",
    "principal_id",
}


def _mask_secret(value: Any) -> Any:
    if value is None:
        return None
    text = str(value)
    if len(text) <= 6:
        return "***"
    return f"{text[:2]}***{text[-2:]}"


def log(level: str, message: str, *, request_id: Optional[str] = None, **kwargs: Any) -> None:
    record: Dict[str, Any] = {
        "ts": round(time.time(), 3),
        "level": level.lower(),
        "msg": message,
    }
    if request_id:
        record["request_id"] = request_id

    for k, v in kwargs.items():
        if k in _SENSITIVE_KEYS:
            record[k] = _mask_secret(v)
        else:
            record[k] = v
    sys.stdout.write(json.dumps(record, default=str) + "\n")
    sys.stdout.flush()


# PUBLIC_INTERFACE
def info(message: str, **kwargs: Any) -> None:
    """Info level structured log."""
    log("INFO", message, **kwargs)


# PUBLIC_INTERFACE
def warning(message: str, **kwargs: Any) -> None:
    """Warning level structured log."""
    log("WARN", message, **kwargs)


# PUBLIC_INTERFACE
def error(message: str, **kwargs: Any) -> None:
    """Error level structured log."""
    log("ERROR", message, **kwargs)
