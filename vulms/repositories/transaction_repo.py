from datetime import datetime

from sqlalchemy import select, update, func

from vulms.extensions import db
from vulms.models.transaction import Transaction, ACTIVE, RETURNED


class TransactionRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, transaction_id: int):
        return self.session.get(Transaction, transaction_id)

    def count_active_for_user(self, user_id: int) -> int:
        return self.session.scalar(
            select(func.count(Transaction.id)).where(
                Transaction.user_id == user_id, Transaction.status == ACTIVE
            )
        )

    def find_active(self, transaction_id: int, user_id: int = None):
        stmt = select(Transaction).where(
            Transaction.id == transaction_id, Transaction.status == ACTIVE
        )
        if user_id is not None:
            stmt = stmt.where(Transaction.user_id == user_id)
        return self.session.scalar(stmt)

    def find_active_loan(self, user_id: int, book_id: int):
        return self.session.scalar(
            select(Transaction).where(
                Transaction.user_id == user_id,
                Transaction.book_id == book_id,
                Transaction.status == ACTIVE,
            )
        )

    def add(self, transaction: Transaction):
        self.session.add(transaction)
        self.session.flush()
        return transaction

    def close(self, transaction_id: int, returned_at: datetime) -> bool:
        """Mark an active transaction returned; False if it was no longer active."""
        result = self.session.execute(
            update(Transaction)
            .where(Transaction.id == transaction_id, Transaction.status == ACTIVE)
            .values(status=RETURNED, return_date=returned_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    def list_by_user(self, user_id: int, active_only: bool = False):
        stmt = select(Transaction).where(Transaction.user_id == user_id)
        if active_only:
            stmt = stmt.where(Transaction.status == ACTIVE).order_by(Transaction.due_date.asc())
        else:
            stmt = stmt.order_by(Transaction.borrow_date.desc(), Transaction.id.desc())
        return self.session.scalars(stmt).all()

    def list_all(self):
        return self.session.scalars(
            select(Transaction).order_by(Transaction.borrow_date.desc(), Transaction.id.desc())
        ).all()

    def count_active(self) -> int:
        return self.session.scalar(
            select(func.count(Transaction.id)).where(Transaction.status == ACTIVE)
        )

    def _overdue_filter(self, stmt, cutoff: datetime):
        # cutoff is midnight of the current day: due dates on earlier days are overdue
        return stmt.where(Transaction.status == ACTIVE, Transaction.due_date < cutoff)

    def count_overdue(self, cutoff: datetime) -> int:
        return self.session.scalar(
            self._overdue_filter(select(func.count(Transaction.id)), cutoff)
        )

    def find_overdue(self, cutoff: datetime):
        return self.session.scalars(
            self._overdue_filter(select(Transaction), cutoff).order_by(Transaction.due_date.asc())
        ).all()
