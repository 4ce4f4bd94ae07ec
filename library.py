import logging
from threading import RLock
from typing import Iterator, List, Optional, Tuple, Type

from book import Book, LibraryItem, OperationResult, Outcome

logger = logging.getLogger(__name__)


class Library:
    """Manages the in-memory collection of books.

    Books are kept in insertion order and are unique by ``id``. Every
    operation reports an :class:`OperationResult` instead of raising, so
    callers decide how to present duplicates, missing ids and wrong-state
    transitions.
    """

    # Item kinds the catalog lends out. New kinds are added here.
    accepted_types: Tuple[Type[LibraryItem], ...] = (Book,)

    def __init__(self) -> None:
        self.books: List[Book] = []
        # Sync FastAPI handlers run in a thread pool and share one Library.
        self._lock = RLock()

    # ------------------------- Core operations ------------------------- #
    def add_item(self, item: LibraryItem) -> OperationResult:
        """Add a pre-constructed item. Prevent duplicates by ID."""
        if not isinstance(item, self.accepted_types):
            raise TypeError(f"Unsupported library item: {type(item).__name__}")

        with self._lock:
            if any(existing.id == item.id for existing in self.books):
                logger.warning(f"Rejected duplicate book id={item.id}")
                return OperationResult(Outcome.DUPLICATE, f"Error: Book with ID {item.id} already exists.")
            self.books.append(item)

        logger.info(f"Book added: id={item.id}, title={item.title!r}")
        return OperationResult(Outcome.ADDED, f"Added: {item}", item)

    def list_items(self) -> List[Book]:
        """All books in insertion order (a fresh list on every call)."""
        with self._lock:
            return list(self.books)

    def find_book_by_id(self, id: int) -> Optional[Book]:
        with self._lock:
            for book in self.books:
                if book.id == id:
                    return book
        return None

    def is_available(self, id: int) -> Optional[bool]:
        """Availability of the book with ``id``, or None if it is not registered."""
        book = self.find_book_by_id(id)
        return book.is_available() if book else None

    def borrow_book(self, id: int) -> OperationResult:
        with self._lock:
            book = self.find_book_by_id(id)
            if book is None:
                logger.warning(f"Borrow requested for unknown book id={id}")
                return OperationResult(Outcome.NOT_FOUND, "Book not found.")
            result = book.borrow()

        logger.info(f"Borrow book id={id}: {result.outcome.value}")
        return result

    def return_book(self, id: int) -> OperationResult:
        with self._lock:
            book = self.find_book_by_id(id)
            if book is None:
                logger.warning(f"Return requested for unknown book id={id}")
                return OperationResult(Outcome.NOT_FOUND, "Book not found.")
            if book.is_available():
                result = OperationResult(Outcome.NOT_BORROWED, "Book was not borrowed.", book)
            else:
                result = book.return_item()

        logger.info(f"Return book id={id}: {result.outcome.value}")
        return result

    # ------------------------- Utilities ------------------------- #
    def __len__(self) -> int:
        with self._lock:
            return len(self.books)

    def __iter__(self) -> Iterator[Book]:
        return iter(self.list_items())
