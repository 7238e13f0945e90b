from sqlalchemy import select, update, func, or_, case

from vulms.extensions import db
from vulms.models.book import Book


class BookRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def search(self, search: str = None, genre: str = None):
        stmt = select(Book)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(Book.title.ilike(pattern), Book.author.ilike(pattern)))
        if genre and genre != "All":
            stmt = stmt.where(Book.genre == genre)
        return self.session.scalars(stmt.order_by(Book.title)).all()

    def genres(self):
        return self.session.scalars(select(Book.genre).distinct().order_by(Book.genre)).all()

    def get(self, book_id: int):
        return self.session.get(Book, book_id)

    def get_available(self, book_id: int):
        return self.session.scalar(
            select(Book).where(Book.id == book_id, Book.available_copies > 0)
        )

    def get_by_isbn(self, isbn: str):
        return self.session.scalar(select(Book).where(Book.isbn == isbn))

    def count(self) -> int:
        return self.session.scalar(select(func.count(Book.id)))

    def create(self, book: Book):
        self.session.add(book)
        self.session.commit()
        return book

    def take_copy(self, book_id: int) -> bool:
        """Decrement the copy count only if a copy is left; False otherwise."""
        books = Book.__table__
        # "available" is set first from the pre-update count; MySQL applies SET in order
        result = self.session.execute(
            update(books)
            .where(books.c.id == book_id, books.c.available_copies > 0)
            .ordered_values(
                (books.c.available, case((books.c.available_copies > 1, True), else_=False)),
                (books.c.available_copies, books.c.available_copies - 1),
            )
        )
        return result.rowcount == 1

    def put_back_copy(self, book_id: int) -> bool:
        result = self.session.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(available_copies=Book.available_copies + 1, available=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
