"""Auth middleware - resolves the bearer token to a library user, or anonymous."""

from dataclasses import dataclass

import falcon.asgi


@dataclass
class RequestUser:
    """User from request context. ``user_id`` is None for anonymous requests."""

    user_id: int | None
    username: str | None = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None


ANONYMOUS = RequestUser(user_id=None)


class AuthMiddleware:
    """Middleware that validates the token and sets req.context.user.

    No Authorization header means anonymous. A token that fails validation,
    or names a user unknown to the library, leaves req.context.user as None.
    """

    def __init__(self, unit_of_work_factory: type, keycloak_provider=None) -> None:
        self._uow_factory = unit_of_work_factory
        self._keycloak = keycloak_provider

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Extract user from Authorization header."""
        auth = req.get_header("Authorization")
        if not auth:
            req.context.user = ANONYMOUS
            return

        req.context.user = None
        if not auth.startswith("Bearer ") or not self._keycloak:
            return

        identity = self._keycloak.identify(auth[7:])
        if identity is None:
            return

        async with self._uow_factory() as uow:
            user_id = await uow.users.get_id_by_username(identity.username)
        if user_id is not None:
            req.context.user = RequestUser(user_id=user_id, username=identity.username)
