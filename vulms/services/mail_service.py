from flask import current_app
from flask_mail import Message

from vulms.extensions import mail


class MailService:
    @staticmethod
    def send_email(to_email: str, subject: str, body: str):
        """
        return: (success, error_text)
        """
        try:
            mail.send(Message(subject=subject, recipients=[to_email], body=body))
            return True, None
        except Exception as e:
            # SMTP failures are logged per loan, the reminder run carries on
            current_app.logger.warning(f"[MailService] could not send to {to_email}: {e}")
            return False, str(e)

    @staticmethod
    def overdue_reminder(transaction):
        user = transaction.user
        book = transaction.book
        subject = "Library: overdue book"
        body = (
            f"Hello {user.username},\n\n"
            f"'{book.title}' by {book.author} was due on {transaction.due_date:%Y-%m-%d}.\n"
            f"Please return it to the library as soon as possible.\n"
        )
        return subject, body
