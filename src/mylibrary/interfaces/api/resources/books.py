"""Collection membership API resources."""

import falcon.asgi

from mylibrary.application.use_cases.membership.add_book import AddBookUseCase
from mylibrary.application.use_cases.membership.is_book_in_collection import (
    IsBookInCollectionUseCase,
)
from mylibrary.application.use_cases.membership.list_collection_books import (
    ListCollectionBooksUseCase,
)
from mylibrary.application.use_cases.membership.remove_book import RemoveBookUseCase
from mylibrary.interfaces.api.resources.auth import authenticated_user, request_user
from mylibrary.interfaces.api.resources.serializers import book_to_dict


class CollectionBooksResource:
    """GET/POST /v1/collections/{id}/books - list and add books."""

    def __init__(
        self,
        list_books: ListCollectionBooksUseCase,
        add_book: AddBookUseCase,
    ) -> None:
        self._list_books = list_books
        self._add_book = add_book

    async def on_get(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, collection_id: int
    ) -> None:
        """List books, most recently added first."""
        user = request_user(req, resp)
        if not user:
            return
        books = await self._list_books.execute(collection_id, user.user_id)
        resp.media = {"items": [book_to_dict(b) for b in books]}
        resp.status = falcon.HTTP_200

    async def on_post(
        self, req: falcon.asgi.Request, resp: falcon.asgi.Response, collection_id: int
    ) -> None:
        """Add book to collection."""
        user = authenticated_user(req, resp)
        if not user:
            return

        try:
            body = await req.get_media()
            book_id = body["book_id"]
        except (KeyError, TypeError) as e:
            resp.status = falcon.HTTP_400
            resp.media = {"error": f"Missing required field: {e}"}
            return
        if not isinstance(book_id, int) or isinstance(book_id, bool):
            resp.status = falcon.HTTP_400
            resp.media = {"error": "book_id must be an integer"}
            return

        membership = await self._add_book.execute(collection_id, book_id, user.user_id)
        resp.media = {
            "collection_id": membership.collection_id,
            "book_id": membership.book_id,
            "added_at": membership.added_at.isoformat(),
            "added_by": membership.added_by,
        }
        resp.status = falcon.HTTP_201


class CollectionBookResource:
    """GET/DELETE /v1/collections/{id}/books/{book_id} - membership check and removal."""

    def __init__(
        self,
        is_book_in_collection: IsBookInCollectionUseCase,
        remove_book: RemoveBookUseCase,
    ) -> None:
        self._is_member = is_book_in_collection
        self._remove_book = remove_book

    async def on_get(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: int,
        book_id: int,
    ) -> None:
        """Report membership; false also when the collection is not visible."""
        user = request_user(req, resp)
        if not user:
            return
        member = await self._is_member.execute(collection_id, book_id, user.user_id)
        resp.media = {"member": member}
        resp.status = falcon.HTTP_200

    async def on_delete(
        self,
        req: falcon.asgi.Request,
        resp: falcon.asgi.Response,
        collection_id: int,
        book_id: int,
    ) -> None:
        user = authenticated_user(req, resp)
        if not user:
            return
        await self._remove_book.execute(collection_id, book_id, user.user_id)
        resp.status = falcon.HTTP_204
