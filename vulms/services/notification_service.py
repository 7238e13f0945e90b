from datetime import datetime, time

from flask import current_app

from vulms.extensions import db
from vulms.models.notification_log import NotificationLog
from vulms.repositories.notification_repo import NotificationRepo
from vulms.repositories.transaction_repo import TransactionRepo
from vulms.services.mail_service import MailService

REMINDER = "overdue_reminder"


class NotificationService:
    def __init__(self, session=None, clock=None):
        self.session = session or db.session
        self.clock = clock or datetime.utcnow
        self.transactions = TransactionRepo(self.session)
        self.notifications = NotificationRepo(self.session)

    def send_overdue_reminders(self):
        """Mail every borrower with an overdue loan that has not been reminded yet.

        Loan status is left untouched; overdue stays a read-time property.
        Every attempt is logged, failed ones are retried on the next run.
        """
        now = self.clock()
        overdue = self.transactions.find_overdue(datetime.combine(now.date(), time.min))
        counts = {"overdue": len(overdue), "sent": 0, "failed": 0, "skipped": 0}

        for t in overdue:
            if self.notifications.already_sent(t.id, REMINDER):
                counts["skipped"] += 1
                continue

            email = t.user.email if t.user else None
            if not email:
                ok, err, body = False, "missing_email", None
            else:
                subject, body = MailService.overdue_reminder(t)
                ok, err = MailService.send_email(email, subject, body)

            self.notifications.log(NotificationLog(
                transaction_id=t.id,
                type=REMINDER,
                email=email,
                message=body,
                success=ok,
                error_message=err,
                sent_at=now,
            ))
            counts["sent" if ok else "failed"] += 1

        self.session.commit()
        current_app.logger.info(
            f"[overdue_check] overdue={counts['overdue']} sent={counts['sent']} "
            f"failed={counts['failed']} skipped={counts['skipped']}"
        )
        return counts
