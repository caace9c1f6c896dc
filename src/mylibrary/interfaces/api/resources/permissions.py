"""Permissions API resources."""

import falcon.asgi

from mylibrary.application.use_cases.permission.grant_permission import GrantPermissionUseCase
from mylibrary.application.use_cases.permission.list_permissions import ListPermissionsUseCase
from mylibrary.application.use_cases.permission.revoke_permission import RevokePermissionUseCase
from mylibrary.domain.value_objects import PermissionLevel
from mylibrary.interfaces.api.resources.auth import authenticated_user
from mylibrary.interfaces.api.resources.serializers import grant_to_dict


class PermissionsResource:
    """GET /v1/collections/{id}/permissions - list explicit grants."""

    def __init__(self, list_permissions: ListPermissionsUseCase) -> None:
        self._list = list_permissions

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, collection_id: int
    ) -> None:
        user = authenticated_user(req, resp)
        if not user:
            return
        grants = await self._list.execute(user.user_id, collection_id)
        resp.media = {"items": [grant_to_dict(g) for g in grants]}
        resp.status = falcon.HTTP_200


class PermissionResource:
    """PUT/DELETE /v1/collections/{id}/permissions/{user_id} - grant and revoke."""

    def __init__(
        self,
        grant_permission: GrantPermissionUseCase,
        revoke_permission: RevokePermissionUseCase,
    ) -> None:
        self._grant = grant_permission
        self._revoke = revoke_permission

    async def on_put(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: int,
        user_id: int,
    ) -> None:
        """Grant or change a user's permission. Body: {"permission": "edit"}."""
        user = authenticated_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            raw_level = body["permission"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return

        # InvalidPermissionLevel is a ValidationError and renders as 400.
        level = PermissionLevel.parse(raw_level)
        grant = await self._grant.execute(user.user_id, collection_id, user_id, level)
        resp.media = grant_to_dict(grant)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: int,
        user_id: int,
    ) -> None:
        """Revoke a user's explicit permission."""
        user = authenticated_user(req, resp)
        if not user:
            return
        await self._revoke.execute(user.user_id, collection_id, user_id)
        resp.status = falcon.HTTP_204
