from flask import current_app

from vulms.errors import BookNotFound, ValidationError
from vulms.models.book import Book
from vulms.repositories.book_repo import BookRepo
from vulms.utils.payload import text_field


def _parse_copies(value) -> int:
    if value is None or (isinstance(value, str) and value.strip() == ""):
        return 1
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError("totalCopies must be a whole number")
    try:
        copies = int(value)
    except (TypeError, ValueError):
        raise ValidationError("totalCopies must be a whole number")
    if copies < 1:
        raise ValidationError("totalCopies must be at least 1")
    return copies


class BookService:
    def __init__(self, session=None):
        self.books = BookRepo(session)

    def list_books(self, search: str = None, genre: str = None):
        return self.books.search(search=search, genre=genre)

    def list_genres(self):
        return self.books.genres()

    def get_book(self, book_id: int):
        book = self.books.get(book_id)
        if not book:
            raise BookNotFound()
        return book

    def create_book(self, data: dict):
        title = text_field(data, "title")
        author = text_field(data, "author")
        genre = text_field(data, "genre")
        if not title or not author or not genre:
            raise ValidationError("Title, author, and genre are required")

        copies = _parse_copies(data.get("totalCopies"))
        book = Book(
            title=title,
            author=author,
            genre=genre,
            isbn=(text_field(data, "isbn") or None),
            cover_image=(text_field(data, "coverImage") or None),
            total_copies=copies,
            available_copies=copies,
            available=True,
        )
        self.books.create(book)
        current_app.logger.info(f"[books] added book={book.id} '{book.title}' copies={copies}")
        return book
