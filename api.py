import logging
from typing import List
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException, Depends, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import APIKeyHeader
from pydantic import BaseModel

from book import Book, OperationResult, Outcome
from library import Library
from config import settings

logger = logging.getLogger(__name__)

# One in-memory catalog per process; state is lost when the server stops.
library = Library()

app = FastAPI(title=f"{settings.app_name} API", version=settings.app_version)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Security ---
api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)

def get_api_key(api_key: str | None = Security(api_key_header)):
    """Dependency that validates the API key."""
    if api_key == settings.api_key:
        return api_key
    raise HTTPException(
        status_code=403,
        detail="Could not validate credentials",
    )

# --- Models ---
class BookModel(BaseModel):
    id: int
    title: str
    author: str
    status: str

class BookCreateModel(BaseModel):
    id: int
    title: str
    author: str | None = None

class OperationResultModel(BaseModel):
    outcome: str
    message: str
    book: BookModel | None = None

class HealthModel(BaseModel):
    status: str
    timestamp: str
    total_books: int

# --- Helpers ---
def _result_to_model(result: OperationResult) -> OperationResultModel:
    book = BookModel(**result.book.to_dict()) if result.book else None
    return OperationResultModel(outcome=result.outcome.value, message=result.message, book=book)

def _raise_for_outcome(result: OperationResult) -> None:
    """Map rejected outcomes to HTTP errors; no-op transitions stay 200."""
    if result.outcome in (Outcome.NOT_FOUND, Outcome.DUPLICATE):
        logger.info(f"Request rejected: {result.outcome.value} ({result.message})")
    if result.outcome is Outcome.NOT_FOUND:
        raise HTTPException(status_code=404, detail=result.message)
    if result.outcome is Outcome.DUPLICATE:
        raise HTTPException(status_code=400, detail=result.message)

# --- Health Check ---
@app.get("/health", response_model=HealthModel)
def health():
    """Lightweight health endpoint."""
    now_iso = datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
    return HealthModel(status="healthy", timestamp=now_iso, total_books=len(library))

# --- Books ---
@app.get("/books", response_model=List[BookModel])
def get_books():
    """All books in the order they were added."""
    return [BookModel(**book.to_dict()) for book in library.list_items()]

@app.get("/books/{book_id}", response_model=BookModel)
def get_book(book_id: int):
    """Get a single book by its ID."""
    book = library.find_book_by_id(book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found.")
    return BookModel(**book.to_dict())

@app.post("/books", response_model=OperationResultModel, dependencies=[Depends(get_api_key)])
def add_book(payload: BookCreateModel):
    """Add a new book to the library."""
    if payload.author is None:
        book = Book(payload.id, payload.title)
    else:
        book = Book(payload.id, payload.title, payload.author)
    result = library.add_item(book)
    _raise_for_outcome(result)
    return _result_to_model(result)

@app.post("/books/{book_id}/borrow", response_model=OperationResultModel, dependencies=[Depends(get_api_key)])
def borrow_book(book_id: int):
    """Borrow a book; borrowing a book that is already out is reported, not rejected."""
    result = library.borrow_book(book_id)
    _raise_for_outcome(result)
    return _result_to_model(result)

@app.post("/books/{book_id}/return", response_model=OperationResultModel, dependencies=[Depends(get_api_key)])
def return_book(book_id: int):
    result = library.return_book(book_id)
    _raise_for_outcome(result)
    return _result_to_model(result)
