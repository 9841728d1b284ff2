from fastapi import Request

from ..errors import LoginRequired


def current_user(request: Request) -> dict | None:
    return request.session.get("user")


def require_user(request: Request) -> dict:
    user = current_user(request)
    if not user:
        raise LoginRequired(request.url.path)
    return user


def display_name(user: dict | None) -> str:
    if not user:
        return ""
    return user.get("name") or user.get("email") or user.get("sub") or ""
