import logging
from datetime import datetime, timedelta

from flask import current_app, has_app_context
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from vulms.errors import (
    LibraryError,
    BorrowLimitExceeded,
    BookUnavailable,
    DuplicateBorrow,
    TransactionNotFound,
    StoreError,
)
from vulms.extensions import db
from vulms.models.transaction import Transaction, ACTIVE
from vulms.repositories.book_repo import BookRepo
from vulms.repositories.transaction_repo import TransactionRepo
from vulms.repositories.user_repo import UserRepo

BORROW_LIMIT = 3
LOAN_PERIOD_DAYS = 7

# child of the "vulms" logger, so records reach app.logger
log = logging.getLogger(__name__)


def _setting(key, default):
    if has_app_context():
        return current_app.config.get(key, default)
    return default


class BorrowService:
    """Moves books between the catalog and the loan ledger.

    Every public operation runs in one database transaction on ``session``:
    either the ledger row and the copy count change together or nothing is
    written. The last-copy and double-return races are closed by conditional
    updates whose affected-row count is checked before committing.
    """

    def __init__(self, session=None, clock=None, borrow_limit=None, loan_period_days=None):
        self.session = session or db.session
        self.clock = clock or datetime.utcnow
        if borrow_limit is None:
            borrow_limit = _setting("BORROW_LIMIT", BORROW_LIMIT)
        if loan_period_days is None:
            loan_period_days = _setting("LOAN_PERIOD_DAYS", LOAN_PERIOD_DAYS)
        self.borrow_limit = borrow_limit
        self.loan_period_days = loan_period_days

        self.books = BookRepo(self.session)
        self.transactions = TransactionRepo(self.session)
        self.users = UserRepo(self.session)

    def borrow(self, user_id: int, book_id: int) -> Transaction:
        try:
            self.users.lock(user_id)

            if self.transactions.count_active_for_user(user_id) >= self.borrow_limit:
                raise BorrowLimitExceeded(
                    f"Maximum borrowing limit reached ({self.borrow_limit} books)"
                )

            if self.books.get_available(book_id) is None:
                raise BookUnavailable()

            if self.transactions.find_active_loan(user_id, book_id) is not None:
                raise DuplicateBorrow()

            if not self.books.take_copy(book_id):
                # another request took the last copy after the check above
                raise BookUnavailable()

            now = self.clock()
            loan = self.transactions.add(Transaction(
                user_id=user_id,
                book_id=book_id,
                borrow_date=now,
                due_date=now + timedelta(days=self.loan_period_days),
                status=ACTIVE,
            ))

            # the first count ran outside the write transaction on some engines;
            # now that this request holds the write lock, concurrent loans are visible
            if self.transactions.count_active_for_user(user_id) > self.borrow_limit:
                raise BorrowLimitExceeded(
                    f"Maximum borrowing limit reached ({self.borrow_limit} books)"
                )
            self.session.commit()
        except LibraryError as e:
            self.session.rollback()
            log.info(f"[borrow] user={user_id} book={book_id} rejected: {e}")
            raise
        except IntegrityError as e:
            # the active-loan unique index caught a concurrent duplicate
            self.session.rollback()
            log.info(f"[borrow] user={user_id} book={book_id} duplicate active loan: {e.orig}")
            raise DuplicateBorrow() from e
        except SQLAlchemyError as e:
            self.session.rollback()
            log.exception(f"[borrow] user={user_id} book={book_id} store error: {e}")
            raise StoreError() from e

        log.info(f"[borrow] user={user_id} book={book_id} transaction={loan.id} due={loan.due_date}")
        return loan

    def return_book(self, user_id: int, transaction_id: int) -> Transaction:
        return self._close(transaction_id, user_id=user_id)

    def admin_return(self, transaction_id: int) -> Transaction:
        return self._close(transaction_id, user_id=None)

    def _close(self, transaction_id: int, user_id=None) -> Transaction:
        try:
            loan = self.transactions.find_active(transaction_id, user_id=user_id)
            if loan is None:
                raise TransactionNotFound()

            if not self.transactions.close(loan.id, self.clock()):
                raise TransactionNotFound()

            self.books.put_back_copy(loan.book_id)
            self.session.commit()
        except LibraryError as e:
            self.session.rollback()
            log.info(f"[return] transaction={transaction_id} user={user_id} rejected: {e}")
            raise
        except SQLAlchemyError as e:
            self.session.rollback()
            log.exception(f"[return] transaction={transaction_id} store error: {e}")
            raise StoreError() from e

        log.info(f"[return] transaction={loan.id} user={loan.user_id} book={loan.book_id} returned")
        return loan

