from sqlalchemy import select

from vulms.extensions import db
from vulms.models.notification_log import NotificationLog


class NotificationRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def already_sent(self, transaction_id: int, notif_type: str = "overdue_reminder") -> bool:
        return self.session.scalar(
            select(NotificationLog.id).filter_by(
                transaction_id=transaction_id, type=notif_type, success=True
            ).limit(1)
        ) is not None

    def log(self, entry: NotificationLog):
        self.session.add(entry)
        return entry
