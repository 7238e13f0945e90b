from flask import current_app

from vulms.extensions import db
from vulms.services.notification_service import NotificationService


def run_overdue_check_job(app):
    with app.app_context():
        try:
            NotificationService().send_overdue_reminders()
        except Exception as e:
            db.session.rollback()
            current_app.logger.exception(f"[overdue_check] failed: {e}")
