"""Falcon ASGI application."""

from dataclasses import dataclass

import falcon.asgi
from falcon.asgi import App

from mylibrary.interfaces.api.errors import register_error_handlers
from mylibrary.interfaces.api.resources.books import CollectionBookResource, CollectionBooksResource
from mylibrary.interfaces.api.resources.collections import (
    CollectionResource,
    CollectionSearchResource,
    CollectionsResource,
    CollectionStatisticsResource,
    PublicCollectionsResource,
)
from mylibrary.interfaces.api.resources.health import HealthResource
from mylibrary.interfaces.api.resources.permissions import PermissionResource, PermissionsResource


@dataclass
class ApiResources:
    """All resources the API routes to."""

    health: HealthResource
    collections: CollectionsResource
    public_collections: PublicCollectionsResource
    collection_search: CollectionSearchResource
    collection: CollectionResource
    collection_statistics: CollectionStatisticsResource
    collection_books: CollectionBooksResource
    collection_book: CollectionBookResource
    permissions: PermissionsResource
    permission: PermissionResource


def create_app(resources: ApiResources, middleware: list | None = None) -> App:
    """Create Falcon ASGI app with routes and error handlers."""
    app = falcon.asgi.App(middleware=middleware or [])
    register_error_handlers(app)

    app.add_route("/v1/health", resources.health)
    app.add_route("/v1/health/ready", resources.health, suffix="ready")
    app.add_route("/v1/collections", resources.collections)
    app.add_route("/v1/collections/public", resources.public_collections)
    app.add_route("/v1/collections/search", resources.collection_search)
    app.add_route("/v1/collections/{collection_id:int}", resources.collection)
    app.add_route(
        "/v1/collections/{collection_id:int}/statistics", resources.collection_statistics
    )
    app.add_route("/v1/collections/{collection_id:int}/books", resources.collection_books)
    app.add_route(
        "/v1/collections/{collection_id:int}/books/{book_id:int}", resources.collection_book
    )
    app.add_route("/v1/collections/{collection_id:int}/permissions", resources.permissions)
    app.add_route(
        "/v1/collections/{collection_id:int}/permissions/{user_id:int}", resources.permission
    )
    return app
