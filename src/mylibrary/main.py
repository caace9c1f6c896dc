"""Application entry point and composition root."""

import logging

from mylibrary import __version__
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
from mylibrary.application.use_cases.membership.add_book import AddBookUseCase
from mylibrary.application.use_cases.membership.is_book_in_collection import (
    IsBookInCollectionUseCase,
)
from mylibrary.application.use_cases.membership.list_collection_books import (
    ListCollectionBooksUseCase,
)
from mylibrary.application.use_cases.membership.remove_book import RemoveBookUseCase
from mylibrary.application.use_cases.permission.grant_permission import GrantPermissionUseCase
from mylibrary.application.use_cases.permission.list_permissions import ListPermissionsUseCase
from mylibrary.application.use_cases.permission.revoke_permission import RevokePermissionUseCase
from mylibrary.config import Settings, get_settings
from mylibrary.infrastructure.auth.keycloak_provider import KeycloakProvider
from mylibrary.infrastructure.permission.permission_resolver import CollectionPermissionResolver
from mylibrary.infrastructure.persistence.postgres.connection import create_pool
from mylibrary.infrastructure.persistence.postgres.unit_of_work import create_uow_factory
from mylibrary.interfaces.api.app import ApiResources, create_app
from mylibrary.interfaces.api.middleware.auth import AuthMiddleware
from mylibrary.interfaces.api.middleware.cors import CORSMiddleware, parse_origins
from mylibrary.interfaces.api.middleware.pool_lifespan import PoolLifespanMiddleware
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

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Install a root handler at the configured level."""
    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def build_resources(uow_factory, settings: Settings, pool=None) -> ApiResources:
    """Wire use cases and resources around one unit-of-work factory."""
    resolver = CollectionPermissionResolver()

    return ApiResources(
        health=HealthResource(pool),
        collections=CollectionsResource(
            CreateCollectionUseCase(unit_of_work_factory=uow_factory),
            ListAccessibleCollectionsUseCase(
                unit_of_work_factory=uow_factory,
                preview_size=settings.accessible_preview_size,
            ),
            ListOwnedCollectionsUseCase(unit_of_work_factory=uow_factory),
        ),
        public_collections=PublicCollectionsResource(
            ListPublicCollectionsUseCase(
                unit_of_work_factory=uow_factory,
                preview_size=settings.public_preview_size,
                max_limit=settings.public_page_size_max,
            )
        ),
        collection_search=CollectionSearchResource(
            SearchCollectionsUseCase(
                unit_of_work_factory=uow_factory,
                max_results=settings.search_result_limit,
                preview_size=settings.public_preview_size,
            )
        ),
        collection=CollectionResource(
            GetCollectionUseCase(uow_factory, resolver),
            UpdateCollectionUseCase(uow_factory, resolver),
            DeleteCollectionUseCase(uow_factory, resolver),
        ),
        collection_statistics=CollectionStatisticsResource(
            GetCollectionStatisticsUseCase(uow_factory, resolver)
        ),
        collection_books=CollectionBooksResource(
            ListCollectionBooksUseCase(uow_factory, resolver),
            AddBookUseCase(uow_factory, resolver),
        ),
        collection_book=CollectionBookResource(
            IsBookInCollectionUseCase(uow_factory, resolver),
            RemoveBookUseCase(uow_factory, resolver),
        ),
        permissions=PermissionsResource(ListPermissionsUseCase(uow_factory, resolver)),
        permission=PermissionResource(
            GrantPermissionUseCase(uow_factory, resolver),
            RevokePermissionUseCase(uow_factory, resolver),
        ),
    )


def create_mylibrary_app():
    """Composition root - build Falcon app with all dependencies."""
    settings = get_settings()
    configure_logging(settings)

    pool = create_pool(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout,
        statement_timeout_ms=settings.db_statement_timeout_ms,
        isolation_level=settings.db_isolation_level,
    )
    uow_factory = create_uow_factory(pool)

    keycloak = (
        KeycloakProvider(
            server_url=settings.keycloak_url,
            realm=settings.keycloak_realm,
            client_id=settings.keycloak_client_id,
            client_secret=settings.keycloak_client_secret,
        )
        if settings.keycloak_client_secret
        else None
    )
    if keycloak is None:
        logger.warning("Keycloak client secret not set; bearer tokens will be rejected")

    return create_app(
        build_resources(uow_factory, settings, pool=pool),
        middleware=[
            CORSMiddleware(parse_origins(settings.cors_origins)),
            PoolLifespanMiddleware(pool),
            AuthMiddleware(uow_factory, keycloak),
        ],
    )


def main() -> None:
    """CLI entry point - run the API with uvicorn."""
    import uvicorn

    logger.info("MyLibrary v%s starting", __version__)
    uvicorn.run(
        "mylibrary.main:create_mylibrary_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
