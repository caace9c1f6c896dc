"""Collection API resources."""

import falcon.asgi

from mylibrary.application.dto import CollectionCreateInput, CollectionPatch
from mylibrary.application.use_cases.collection.create_collection import CreateCollectionUseCase
from mylibrary.application.use_cases.collection.delete_collection import DeleteCollectionUseCase
from mylibrary.application.use_cases.collection.get_collection import GetCollectionUseCase
from mylibrary.application.use_cases.collection.get_collection_statistics import (
    GetCollectionStatisticsUseCase,
)
from mylibrary.application.use_cases.collection.update_collection import UpdateCollectionUseCase
from mylibrary.application.use_cases.discovery.list_accessible_collections import (
    ListAccessibleCollectionsUseCase,
)
from mylibrary.application.use_cases.discovery.list_owned_collections import (
    ListOwnedCollectionsUseCase,
)
from mylibrary.application.use_cases.discovery.list_public_collections import (
    ListPublicCollectionsUseCase,
)
from mylibrary.application.use_cases.discovery.search_collections import (
    SearchCollectionsUseCase,
)
from mylibrary.interfaces.api.resources.auth import authenticated_user, request_user
from mylibrary.interfaces.api.resources.serializers import (
    collection_to_dict,
    statistics_to_dict,
)


def _bad_request(resp: falcon.asgi.Response, message: str) -> None:
    resp.status = falcon.HTTP_400
    resp.media = {"error": message}


class CollectionsResource:
    """GET/POST /v1/collections - list accessible (or owned) collections, create."""

    def __init__(
        self,
        create_collection: CreateCollectionUseCase,
        list_accessible: ListAccessibleCollectionsUseCase,
        list_owned: ListOwnedCollectionsUseCase,
    ) -> None:
        self._create = create_collection
        self._list_accessible = list_accessible
        self._list_owned = list_owned

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """List accessible collections; ``?scope=owned`` lists the caller's own."""
        scope = req.get_param("scope") or "accessible"
        if scope == "owned":
            user = authenticated_user(req, resp)
            if not user:
                return
            colls = await self._list_owned.execute(user.user_id)
        elif scope == "accessible":
            user = request_user(req, resp)
            if not user:
                return
            colls = await self._list_accessible.execute(user.user_id)
        else:
            _bad_request(resp, f"Unknown scope: {scope}")
            return

        resp.media = {"items": [collection_to_dict(c) for c in colls]}
        resp.status = falcon.HTTP_200

    async def on_post(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        """Create collection owned by the caller."""
        user = authenticated_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            name = body["name"]
            description = body.get("description")
            is_public = body.get("is_public", False)
        except (KeyError, TypeError, AttributeError) as e:
            _bad_request(resp, f"Missing or invalid field: {e}")
            return
        if not isinstance(name, str) or not isinstance(is_public, bool):
            _bad_request(resp, "name must be a string and is_public a boolean")
            return
        if description is not None and not isinstance(description, str):
            _bad_request(resp, "description must be a string")
            return

        collection = await self._create.execute(
            user.user_id,
            CollectionCreateInput(name=name, description=description, is_public=is_public),
        )
        resp.media = collection_to_dict(collection)
        resp.status = falcon.HTTP_201


class PublicCollectionsResource:
    """GET /v1/collections/public - browse public collections."""

    def __init__(self, list_public: ListPublicCollectionsUseCase) -> None:
        self._list_public = list_public

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        if not request_user(req, resp):
            return
        limit = req.get_param_as_int("limit", default=50)
        offset = req.get_param_as_int("offset", default=0)
        colls = await self._list_public.execute(limit=limit, offset=offset)
        resp.media = {"items": [collection_to_dict(c) for c in colls], "limit": limit, "offset": offset}
        resp.status = falcon.HTTP_200


class CollectionSearchResource:
    """GET /v1/collections/search?q=... - search by name and description."""

    def __init__(self, search_collections: SearchCollectionsUseCase) -> None:
        self._search = search_collections

    async def on_get(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user = request_user(req, resp)
        if not user:
            return
        query = req.get_param("q") or ""
        public_only = req.get_param_as_bool("public_only", default=False)
        colls = await self._search.execute(query, user.user_id, public_only=public_only)
        resp.media = {"items": [collection_to_dict(c) for c in colls]}
        resp.status = falcon.HTTP_200


class CollectionResource:
    """GET/PATCH/DELETE /v1/collections/{id}."""

    def __init__(
        self,
        get_collection: GetCollectionUseCase,
        update_collection: UpdateCollectionUseCase,
        delete_collection: DeleteCollectionUseCase,
    ) -> None:
        self._get = get_collection
        self._update = update_collection
        self._delete = delete_collection

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, collection_id: int
    ) -> None:
        user = request_user(req, resp)
        if not user:
            return
        collection = await self._get.execute(collection_id, user.user_id)
        resp.media = collection_to_dict(collection)
        resp.status = falcon.HTTP_200

    async def on_patch(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, collection_id: int
    ) -> None:
        """Partial update: only fields present in the body are changed."""
        user = authenticated_user(req, resp)
        if not user:
            return

        body = await req.get_media()
        if not isinstance(body, dict):
            _bad_request(resp, "Body must be a JSON object")
            return

        patch = CollectionPatch()
        if "name" in body:
            if not isinstance(body["name"], str):
                _bad_request(resp, "name must be a string")
                return
            patch.name = body["name"]
        if "description" in body:
            if body["description"] is not None and not isinstance(body["description"], str):
                _bad_request(resp, "description must be a string or null")
                return
            patch.description = body["description"]
        if "is_public" in body:
            if not isinstance(body["is_public"], bool):
                _bad_request(resp, "is_public must be a boolean")
                return
            patch.is_public = body["is_public"]

        collection = await self._update.execute(collection_id, user.user_id, patch)
        resp.media = collection_to_dict(collection)
        resp.status = falcon.HTTP_200

    async def on_delete(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, collection_id: int
    ) -> None:
        user = authenticated_user(req, resp)
        if not user:
            return
        await self._delete.execute(collection_id, user.user_id)
        resp.status = falcon.HTTP_204


class CollectionStatisticsResource:
    """GET /v1/collections/{id}/statistics."""

    def __init__(self, get_statistics: GetCollectionStatisticsUseCase) -> None:
        self._get_statistics = get_statistics

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, collection_id: int
    ) -> None:
        user = request_user(req, resp)
        if not user:
            return
        stats = await self._get_statistics.execute(collection_id, user.user_id)
        resp.media = statistics_to_dict(stats)
        resp.status = falcon.HTTP_200
