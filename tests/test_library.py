import threading

import pytest

from library import Library
from book import Book, BookStatus, LibraryItem, Outcome


def test_add_list_and_find(lib):
    assert lib.list_items() == []

    book = Book(1, "Ulysses", "James Joyce")
    result = lib.add_item(book)

    assert result.outcome is Outcome.ADDED
    assert result.message == "Added: 1 - Ulysses by James Joyce [Available]"
    assert lib.find_book_by_id(1) is book
    assert len(lib.list_items()) == 1
    assert lib.list_items()[0].title == "Ulysses"

def test_add_duplicate_id(lib):
    lib.add_item(Book(1, "Dune", "Herbert"))

    result = lib.add_item(Book(1, "Other", "X"))

    assert result.outcome is Outcome.DUPLICATE
    assert result.message == "Error: Book with ID 1 already exists."
    assert result.book is None
    assert len(lib) == 1
    assert lib.find_book_by_id(1).title == "Dune"

def test_add_rejects_unsupported_item(lib):
    with pytest.raises(TypeError):
        lib.add_item(LibraryItem(1, "Abstract"))
    assert len(lib) == 0

def test_find_missing_returns_none(lib):
    lib.add_item(Book(1, "Dune"))
    assert lib.find_book_by_id(2) is None
    assert lib.is_available(2) is None

def test_list_preserves_insertion_order(lib):
    for book_id, title in [(3, "C"), (1, "A"), (2, "B")]:
        lib.add_item(Book(book_id, title))

    lib.borrow_book(1)
    lib.return_book(1)
    lib.borrow_book(2)

    assert [b.id for b in lib.list_items()] == [3, 1, 2]
    # Restartable and reflects the latest state
    assert [b.is_available() for b in lib] == [True, True, False]

def test_list_items_returns_a_copy(lib):
    lib.add_item(Book(1, "Dune"))
    listing = lib.list_items()
    listing.clear()
    assert len(lib.list_items()) == 1

def test_borrow_twice(lib):
    lib.add_item(Book(1, "Dune", "Herbert"))

    first = lib.borrow_book(1)
    second = lib.borrow_book(1)

    assert first.outcome is Outcome.BORROWED
    assert first.message == "Dune has been borrowed."
    assert second.outcome is Outcome.ALREADY_BORROWED
    assert second.message == "Dune is already borrowed."
    assert lib.find_book_by_id(1).status is BookStatus.BORROWED

def test_return_never_borrowed(lib):
    lib.add_item(Book(1, "Dune"))

    result = lib.return_book(1)

    assert result.outcome is Outcome.NOT_BORROWED
    assert result.message == "Book was not borrowed."
    assert lib.is_available(1) is True

def test_borrow_return_return(lib):
    lib.add_item(Book(1, "Dune"))
    lib.borrow_book(1)

    first = lib.return_book(1)
    second = lib.return_book(1)

    assert first.outcome is Outcome.RETURNED
    assert first.message == "Dune has been returned."
    assert second.outcome is Outcome.NOT_BORROWED
    assert lib.is_available(1) is True

def test_unknown_id(lib):
    assert lib.borrow_book(42).outcome is Outcome.NOT_FOUND
    assert lib.borrow_book(42).message == "Book not found."
    assert lib.return_book(42).outcome is Outcome.NOT_FOUND

def test_full_scenario(lib):
    assert lib.add_item(Book(1, "Dune", "Herbert")).outcome is Outcome.ADDED
    assert lib.add_item(Book(1, "Other", "X")).outcome is Outcome.DUPLICATE
    assert [(b.id, b.title) for b in lib.list_items()] == [(1, "Dune")]

    assert lib.borrow_book(1).outcome is Outcome.BORROWED
    assert lib.is_available(1) is False
    assert lib.borrow_book(1).outcome is Outcome.ALREADY_BORROWED
    assert lib.is_available(1) is False

    assert lib.return_book(1).outcome is Outcome.RETURNED
    assert lib.is_available(1) is True
    assert lib.return_book(1).outcome is Outcome.NOT_BORROWED

def test_concurrent_adds_keep_ids_unique():
    lib = Library()
    barrier = threading.Barrier(8)
    outcomes = []

    def worker(n):
        barrier.wait()
        outcomes.append(lib.add_item(Book(7, f"Copy {n}")).outcome)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(lib) == 1
    assert outcomes.count(Outcome.ADDED) == 1
    assert outcomes.count(Outcome.DUPLICATE) == 7
