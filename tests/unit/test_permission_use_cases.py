"""Unit tests for grant, revoke and list permissions."""

import pytest

from mylibrary.application.use_cases.permission.grant_permission import (
    GrantPermissionUseCase,
)
from mylibrary.application.use_cases.permission.list_permissions import (
    ListPermissionsUseCase,
)
from mylibrary.application.use_cases.permission.revoke_permission import (
    RevokePermissionUseCase,
)
from mylibrary.domain.exceptions import (
    NoGrant,
    NoSuchUser,
    NotFound,
    OwnerImmutable,
    PermissionDenied,
)
from mylibrary.domain.value_objects import PermissionLevel

from tests.conftest import FakeUnitOfWork


@pytest.fixture
def collection(store):
    return store.add_collection(1, "Classics")


@pytest.mark.asyncio
async def test_grant_creates_grant(store, uow_factory, resolver, collection) -> None:
    grant = await GrantPermissionUseCase(uow_factory, resolver).execute(
        1, collection.id, 2, PermissionLevel.VIEW
    )

    assert grant.level is PermissionLevel.VIEW
    assert grant.granted_by == 1
    assert await resolver.effective_permission(
        FakeUnitOfWork(store), collection.id, 2
    ) is PermissionLevel.VIEW


@pytest.mark.asyncio
async def test_grant_twice_keeps_single_row(store, uow_factory, resolver, collection) -> None:
    use_case = GrantPermissionUseCase(uow_factory, resolver)
    await use_case.execute(1, collection.id, 2, PermissionLevel.VIEW)
    await use_case.execute(1, collection.id, 2, PermissionLevel.EDIT)

    grants = [g for (cid, _), g in store.grants.items() if cid == collection.id]
    assert len(grants) == 1
    assert grants[0].level is PermissionLevel.EDIT


@pytest.mark.asyncio
async def test_regrant_replaces_granter(store, uow_factory, resolver, collection) -> None:
    store.add_grant(collection.id, 3, PermissionLevel.ADMIN, granted_by=1)
    use_case = GrantPermissionUseCase(uow_factory, resolver)
    await use_case.execute(1, collection.id, 2, PermissionLevel.VIEW)
    await use_case.execute(3, collection.id, 2, PermissionLevel.VIEW)

    assert store.grants[(collection.id, 2)].granted_by == 3


@pytest.mark.asyncio
async def test_grant_to_owner_rejected(uow_factory, resolver, collection) -> None:
    with pytest.raises(OwnerImmutable):
        await GrantPermissionUseCase(uow_factory, resolver).execute(
            1, collection.id, 1, PermissionLevel.VIEW
        )


@pytest.mark.asyncio
async def test_grant_to_unknown_user(uow_factory, resolver, collection) -> None:
    with pytest.raises(NoSuchUser):
        await GrantPermissionUseCase(uow_factory, resolver).execute(
            1, collection.id, 77, PermissionLevel.VIEW
        )


@pytest.mark.asyncio
async def test_grant_requires_admin(store, uow_factory, resolver, collection) -> None:
    store.add_grant(collection.id, 2, PermissionLevel.EDIT)
    with pytest.raises(PermissionDenied):
        await GrantPermissionUseCase(uow_factory, resolver).execute(
            2, collection.id, 3, PermissionLevel.VIEW
        )
    assert (collection.id, 3) not in store.grants


@pytest.mark.asyncio
async def test_admin_grantee_can_grant(store, uow_factory, resolver, collection) -> None:
    store.add_grant(collection.id, 2, PermissionLevel.ADMIN)
    grant = await GrantPermissionUseCase(uow_factory, resolver).execute(
        2, collection.id, 3, PermissionLevel.ADD_BOOKS
    )
    assert grant.granted_by == 2


@pytest.mark.asyncio
async def test_grant_on_missing_collection(uow_factory, resolver) -> None:
    with pytest.raises(NotFound):
        await GrantPermissionUseCase(uow_factory, resolver).execute(
            1, 999, 2, PermissionLevel.VIEW
        )


@pytest.mark.asyncio
async def test_revoke_removes_access(store, uow_factory, resolver, collection) -> None:
    store.add_grant(collection.id, 2, PermissionLevel.EDIT)
    await RevokePermissionUseCase(uow_factory, resolver).execute(1, collection.id, 2)

    assert (collection.id, 2) not in store.grants
    assert await resolver.effective_permission(FakeUnitOfWork(store), collection.id, 2) is None


@pytest.mark.asyncio
async def test_revoke_on_public_leaves_view(store, uow_factory, resolver) -> None:
    coll = store.add_collection(1, "Open", is_public=True)
    store.add_grant(coll.id, 2, PermissionLevel.EDIT)
    await RevokePermissionUseCase(uow_factory, resolver).execute(1, coll.id, 2)
    assert await resolver.effective_permission(FakeUnitOfWork(store), coll.id, 2) is PermissionLevel.VIEW


@pytest.mark.asyncio
async def test_revoke_without_grant(uow_factory, resolver, collection) -> None:
    with pytest.raises(NoGrant):
        await RevokePermissionUseCase(uow_factory, resolver).execute(1, collection.id, 2)


@pytest.mark.asyncio
async def test_revoke_owner_rejected(uow_factory, resolver, collection) -> None:
    with pytest.raises(OwnerImmutable):
        await RevokePermissionUseCase(uow_factory, resolver).execute(1, collection.id, 1)


@pytest.mark.asyncio
async def test_revoke_requires_admin(store, uow_factory, resolver, collection) -> None:
    store.add_grant(collection.id, 2, PermissionLevel.EDIT)
    store.add_grant(collection.id, 3, PermissionLevel.VIEW)
    with pytest.raises(PermissionDenied):
        await RevokePermissionUseCase(uow_factory, resolver).execute(2, collection.id, 3)
    assert (collection.id, 3) in store.grants


@pytest.mark.asyncio
async def test_list_permissions_as_owner(store, uow_factory, resolver, collection) -> None:
    store.add_grant(collection.id, 2, PermissionLevel.VIEW, granted_by=1)
    store.add_grant(collection.id, 3, PermissionLevel.EDIT, granted_by=1)

    grants = await ListPermissionsUseCase(uow_factory, resolver).execute(1, collection.id)

    assert {(g.user_id, g.level) for g in grants} == {
        (2, PermissionLevel.VIEW),
        (3, PermissionLevel.EDIT),
    }
    assert all(g.granted_by_username == "owner" for g in grants)
    assert {g.username for g in grants} == {"bob", "carol"}


@pytest.mark.asyncio
async def test_list_permissions_edit_is_not_enough(store, uow_factory, resolver, collection) -> None:
    store.add_grant(collection.id, 2, PermissionLevel.EDIT)
    with pytest.raises(PermissionDenied):
        await ListPermissionsUseCase(uow_factory, resolver).execute(2, collection.id)


@pytest.mark.asyncio
async def test_list_permissions_anonymous_denied(store, uow_factory, resolver) -> None:
    coll = store.add_collection(1, "Open", is_public=True)
    with pytest.raises(PermissionDenied):
        await ListPermissionsUseCase(uow_factory, resolver).execute(None, coll.id)
