from fastapi import Request

from study_group_api.config import get_settings


class UnauthorizedError(Exception):
    pass


def get_current_user_id(request: Request) -> str:
    """Caller identity as resolved by the fronting auth layer."""
    header = get_settings().auth_user_header
    user_id = (request.headers.get(header) or "").strip()
    if not user_id:
        raise UnauthorizedError(f"Forbidden: missing {header} header")
    return user_id
