import secrets
import time
from typing import Any

from study_group_api.content.validators import ErrorKind


def make_request_id() -> str:
    """Best-effort trace token; not guaranteed unique."""
    return f"req_{secrets.token_hex(6)}_{int(time.time() * 1000)}"


def error_envelope(
    status_code: int,
    error: ErrorKind | str,
    message: str,
    request_id: str | None = None,
    **extra: Any,
) -> tuple[int, dict[str, Any]]:
    payload: dict[str, Any] = {
        "success": False,
        "message": message,
        "error": error.value if isinstance(error, ErrorKind) else error,
    }
    if request_id is not None:
        payload["requestId"] = request_id
    payload.update(extra)
    return status_code, payload


def ok_envelope(message: str, **payload: Any) -> tuple[int, dict[str, Any]]:
    return 200, {"success": True, "message": message, "error": None, **payload}
