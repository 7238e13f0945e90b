from datetime import datetime, date
from vulms.extensions import db

ACTIVE = "active"
RETURNED = "returned"
OVERDUE = "overdue"  # display only, never stored


class Transaction(db.Model):
    """A single loan of one book to one user.

    Only ``active`` and ``returned`` are ever persisted. Whether a loan is
    overdue is worked out when it is read, see :meth:`current_status`.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        db.CheckConstraint("status IN ('active', 'returned')", name="ck_transactions_status"),
    )

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    book_id = db.Column(db.Integer, db.ForeignKey("books.id"), nullable=False, index=True)

    borrow_date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    due_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.DateTime, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=ACTIVE, index=True)

    user = db.relationship("User", backref="transactions")
    book = db.relationship("Book", backref="transactions")

    def is_overdue(self, today: date = None) -> bool:
        today = today or datetime.utcnow().date()
        return self.status == ACTIVE and self.due_date.date() < today

    def current_status(self, today: date = None) -> str:
        return OVERDUE if self.is_overdue(today) else self.status
