"""Decorators for bearer-token protected views."""

from functools import wraps

from flask import g, request

from esportske.errors import ForbiddenError, UnauthorizedError

from .services import AuthService, extract_bearer_token


def login_required(f=None, admin_required=False):
    """Reject the request unless it carries a valid bearer token.

    On success ``g.account`` holds the verified account. With
    ``admin_required`` the admin check runs before the view and
    ``g.admin`` holds its :class:`AdminStatus`.

    Usage:
    @login_required
    def protected_view():
        ...

    @login_required(admin_required=True)
    def admin_view():
        ...
    """

    def decorator(func):
        @wraps(func)
        def decorated_function(*args, **kwargs):
            token = extract_bearer_token(request.headers.get("Authorization"))
            if admin_required:
                status = AuthService.check_admin(token)
                if status.user_id is None:
                    raise UnauthorizedError("Unauthorized - invalid access token")
                if not status.is_admin:
                    raise ForbiddenError("Admin access required")
                g.admin = status
                g.account = status.account
            else:
                g.account = AuthService.resolve_account(token)
            return func(*args, **kwargs)

        return decorated_function

    if f:
        return decorator(f)
    return decorator
