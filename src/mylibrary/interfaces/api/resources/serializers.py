"""JSON shapes for API responses."""

from mylibrary.application.dto import CollectionStatistics
from mylibrary.domain.entities import Collection, CollectionBook, PermissionGrant


def collection_to_dict(c: Collection) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "description": c.description,
        "owner_id": c.owner_id,
        "owner_username": c.owner_username,
        "is_public": c.is_public,
        "created_at": c.created_at.isoformat(),
        "updated_at": c.updated_at.isoformat(),
        "book_count": c.book_count,
        "book_ids": list(c.book_ids),
    }


def book_to_dict(b: CollectionBook) -> dict:
    return {
        "book_id": b.book_id,
        "title": b.title,
        "author": b.author,
        "file_type": b.file_type,
        "added_at": b.added_at.isoformat(),
        "added_by": b.added_by,
        "added_by_username": b.added_by_username,
    }


def grant_to_dict(g: PermissionGrant) -> dict:
    return {
        "user_id": g.user_id,
        "username": g.username,
        "permission": g.level.value,
        "granted_at": g.granted_at.isoformat(),
        "granted_by": g.granted_by,
        "granted_by_username": g.granted_by_username,
    }


def statistics_to_dict(s: CollectionStatistics) -> dict:
    data = {
        "collection_name": s.collection.name,
        "description": s.collection.description,
        "owner": s.collection.owner_username,
        "created_at": s.collection.created_at.isoformat(),
        "total_books": s.total_books,
        "file_types": s.file_types,
        "recent_additions": [book_to_dict(b) for b in s.recent_additions],
    }
    if s.contributors is not None:
        data["contributors"] = [
            {"user_id": c.user_id, "username": c.username, "books_added": c.books_added}
            for c in s.contributors
        ]
    return data
