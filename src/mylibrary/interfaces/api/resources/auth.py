"""Request-user helpers shared by resources."""

import falcon
import falcon.asgi

from mylibrary.interfaces.api.middleware.auth import RequestUser


def request_user(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> RequestUser | None:
    """User for read endpoints; anonymous allowed. Sets 401 for a rejected token."""
    user = getattr(req.context, "user", None)
    if user is None:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
    return user


def authenticated_user(req: falcon.asgi.Request, resp: falcon.asgi.Response) -> RequestUser | None:
    """User for endpoints that need a signed-in caller. Sets 401 otherwise."""
    user = getattr(req.context, "user", None)
    if user is None or user.is_anonymous:
        resp.status = falcon.HTTP_401
        resp.media = {"error": "Unauthorized"}
        return None
    return user
