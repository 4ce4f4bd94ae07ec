from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BookStatus(Enum):
    AVAILABLE = "available"
    BORROWED = "borrowed"


class Outcome(Enum):
    """Reported result of a catalog operation."""

    ADDED = "added"
    DUPLICATE = "duplicate"
    BORROWED = "borrowed"
    ALREADY_BORROWED = "already_borrowed"
    RETURNED = "returned"
    NOT_BORROWED = "not_borrowed"
    NOT_FOUND = "not_found"


_SUCCESS_OUTCOMES = {Outcome.ADDED, Outcome.BORROWED, Outcome.RETURNED}


@dataclass
class OperationResult:
    outcome: Outcome
    message: str
    book: "Book | None" = None

    @property
    def ok(self) -> bool:
        return self.outcome in _SUCCESS_OUTCOMES

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return self.message


class LibraryItem:
    """Common interface for anything the catalog can lend out.

    Subclasses own their status; the catalog only relies on ``id``, ``title``
    and ``is_available()``.
    """

    def __init__(self, id: int, title: str) -> None:
        self._id = id
        self._title = title

    @property
    def id(self) -> int:
        return self._id

    @property
    def title(self) -> str:
        return self._title

    def is_available(self) -> bool:
        raise NotImplementedError


class Book(LibraryItem):
    """Represents a single book item in the library."""

    def __init__(self, id: int, title: str, author: str = "Unknown") -> None:
        super().__init__(id, title)
        self.author = author
        self.status = BookStatus.AVAILABLE

    def is_available(self) -> bool:
        return self.status is BookStatus.AVAILABLE

    def borrow(self) -> OperationResult:
        if self.is_available():
            self.status = BookStatus.BORROWED
            return OperationResult(Outcome.BORROWED, f"{self.title} has been borrowed.", self)
        return OperationResult(Outcome.ALREADY_BORROWED, f"{self.title} is already borrowed.", self)

    def return_item(self) -> OperationResult:
        if self.status is BookStatus.BORROWED:
            self.status = BookStatus.AVAILABLE
            return OperationResult(Outcome.RETURNED, f"{self.title} has been returned.", self)
        return OperationResult(Outcome.NOT_BORROWED, f"{self.title} was not borrowed.", self)

    def __str__(self) -> str:
        label = "[Available]" if self.is_available() else "[Borrowed]"
        return f"{self.id} - {self.title} by {self.author} {label}"

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title={self.title!r}, author={self.author!r}, status={self.status.value})"

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "author": self.author, "status": self.status.value}
