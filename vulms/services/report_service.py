from datetime import datetime, time

from sqlalchemy import select, func

from vulms.extensions import db
from vulms.models.book import Book
from vulms.models.transaction import Transaction
from vulms.repositories.book_repo import BookRepo
from vulms.repositories.transaction_repo import TransactionRepo
from vulms.repositories.user_repo import UserRepo

POPULAR_LIMIT = 5
SECONDS_PER_DAY = 24 * 60 * 60


def _iso(value):
    return value.isoformat() if value else None


class ReportService:
    """Read-only views over the catalog and the loan ledger."""

    def __init__(self, session=None, clock=None):
        self.session = session or db.session
        self.clock = clock or datetime.utcnow

        self.books = BookRepo(self.session)
        self.transactions = TransactionRepo(self.session)
        self.users = UserRepo(self.session)

    def _overdue_cutoff(self, now: datetime) -> datetime:
        # a loan is overdue once its due date is on an earlier calendar day
        return datetime.combine(now.date(), time.min)

    def stats(self):
        now = self.clock()
        return {
            "totalBooks": self.books.count(),
            "totalUsers": self.users.count_by_role("student"),
            "activeLoans": self.transactions.count_active(),
            "overdueBooks": self.transactions.count_overdue(self._overdue_cutoff(now)),
            "popularBooks": self.popular_books(),
        }

    def popular_books(self, limit: int = POPULAR_LIMIT):
        borrow_count = func.count(Transaction.id).label("borrow_count")
        rows = self.session.execute(
            select(Book.id, Book.title, Book.author, borrow_count)
            .outerjoin(Transaction, Transaction.book_id == Book.id)
            .group_by(Book.id, Book.title, Book.author)
            .order_by(borrow_count.desc(), Book.id.asc())
            .limit(limit)
        ).all()
        return [
            {"id": r.id, "title": r.title, "author": r.author, "borrow_count": r.borrow_count}
            for r in rows
        ]

    def all_transactions(self):
        today = self.clock().date()
        return [
            {
                "id": t.id,
                "borrow_date": _iso(t.borrow_date),
                "due_date": _iso(t.due_date),
                "return_date": _iso(t.return_date),
                "status": t.status,
                "username": t.user.username if t.user else None,
                "email": t.user.email if t.user else None,
                "title": t.book.title if t.book else None,
                "author": t.book.author if t.book else None,
                "current_status": t.current_status(today),
            }
            for t in self.transactions.list_all()
        ]

    def overdue(self):
        """Active overdue loans, longest overdue first.

        ``days_overdue`` is a fractional number of days since the due
        timestamp, while the overdue test itself compares calendar dates.
        """
        now = self.clock()
        rows = []
        for t in self.transactions.find_overdue(self._overdue_cutoff(now)):
            rows.append({
                "id": t.id,
                "borrow_date": _iso(t.borrow_date),
                "due_date": _iso(t.due_date),
                "username": t.user.username if t.user else None,
                "email": t.user.email if t.user else None,
                "title": t.book.title if t.book else None,
                "author": t.book.author if t.book else None,
                "days_overdue": (now - t.due_date).total_seconds() / SECONDS_PER_DAY,
            })
        rows.sort(key=lambda r: r["days_overdue"], reverse=True)
        return rows

    def my_books(self, user_id: int):
        today = self.clock().date()
        return [
            {
                "transaction_id": t.id,
                "borrow_date": _iso(t.borrow_date),
                "due_date": _iso(t.due_date),
                "status": t.status,
                "book_id": t.book_id,
                "title": t.book.title if t.book else None,
                "author": t.book.author if t.book else None,
                "cover_image": t.book.cover_image if t.book else None,
                "current_status": t.current_status(today),
            }
            for t in self.transactions.list_by_user(user_id, active_only=True)
        ]

    def history(self, user_id: int):
        return [
            {
                "transaction_id": t.id,
                "borrow_date": _iso(t.borrow_date),
                "due_date": _iso(t.due_date),
                "return_date": _iso(t.return_date),
                "status": t.status,
                "title": t.book.title if t.book else None,
                "author": t.book.author if t.book else None,
                "cover_image": t.book.cover_image if t.book else None,
            }
            for t in self.transactions.list_by_user(user_id)
        ]
