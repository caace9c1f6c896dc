"""Maps domain exceptions to HTTP responses."""

import logging

import falcon
import falcon.asgi

from mylibrary.domain.exceptions import (
    AlreadyMember,
    MyLibraryError,
    NameConflict,
    NoGrant,
    NoSuchDocument,
    NoSuchUser,
    NotFound,
    NotMember,
    OwnerImmutable,
    PermissionDenied,
    TransientError,
    ValidationError,
)

logger = logging.getLogger(__name__)

NOT_ACCESSIBLE = "Collection not accessible"
RETRY_AFTER_SECONDS = "1"

# Checked in order; first matching class wins.
_STATUS_BY_ERROR: list[tuple[type[MyLibraryError], str]] = [
    (ValidationError, falcon.HTTP_400),
    (NameConflict, falcon.HTTP_409),
    (AlreadyMember, falcon.HTTP_409),
    (OwnerImmutable, falcon.HTTP_409),
    (NotMember, falcon.HTTP_404),
    (NoGrant, falcon.HTTP_404),
    (NoSuchUser, falcon.HTTP_422),
    (NoSuchDocument, falcon.HTTP_422),
]


async def handle_domain_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: MyLibraryError, params
) -> None:
    """Render a domain error.

    PermissionDenied and NotFound produce the same response so callers cannot
    probe which private collection ids exist.
    """
    if isinstance(ex, (PermissionDenied, NotFound)):
        logger.debug("%s %s: %s", req.method, req.path, ex)
        resp.status = falcon.HTTP_404
        resp.media = {"error": NOT_ACCESSIBLE}
        return

    if isinstance(ex, TransientError):
        resp.status = falcon.HTTP_503
        resp.set_header("Retry-After", RETRY_AFTER_SECONDS)
        resp.media = {"error": str(ex)}
        return

    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(ex, error_type):
            resp.status = status
            resp.media = {"error": str(ex)}
            return

    logger.error("Unmapped domain error on %s %s: %r", req.method, req.path, ex)
    resp.status = falcon.HTTP_500
    resp.media = {"error": "Internal Server Error"}


async def handle_unexpected_error(
    req: falcon.asgi.Request, resp: falcon.asgi.Response, ex: Exception, params
) -> None:
    """Log the traceback and answer 500 without internal details."""
    logger.exception("Unhandled error on %s %s", req.method, req.path)
    resp.status = falcon.HTTP_500
    resp.media = {"title": "500 Internal Server Error"}


def register_error_handlers(app: falcon.asgi.App) -> None:
    """Install handlers; the more specific domain handler takes precedence."""
    app.add_error_handler(Exception, handle_unexpected_error)
    app.add_error_handler(MyLibraryError, handle_domain_error)
