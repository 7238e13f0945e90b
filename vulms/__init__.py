from flask import Flask, jsonify
from sqlalchemy.exc import SQLAlchemyError

from vulms.config import Config
from vulms.errors import LibraryError, StoreError
from vulms.extensions import db, migrate, jwt, mail
from vulms.db_objects import ensure_db_objects


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if overrides:
        app.config.update(overrides)

    # models must be imported before create_all / migrations see the metadata
    from vulms.models import user, book, transaction, notification_log  # noqa: F401

    # 1) db first, ensure_db_objects needs db.engine
    db.init_app(app)
    ensure_db_objects(app)

    # 2) other extensions
    migrate.init_app(app, db)
    jwt.init_app(app)
    mail.init_app(app)

    # 3) API blueprints, all under /api
    from vulms.controllers.auth_controller import auth_bp
    from vulms.controllers.book_controller import book_bp
    from vulms.controllers.transaction_controller import transaction_bp
    from vulms.controllers.admin_controller import admin_bp
    from vulms.cli import cli_bp
    app.register_blueprint(auth_bp, url_prefix="/api")
    app.register_blueprint(book_bp, url_prefix="/api")
    app.register_blueprint(transaction_bp, url_prefix="/api")
    app.register_blueprint(admin_bp, url_prefix="/api/admin")
    app.register_blueprint(cli_bp)

    @app.errorhandler(LibraryError)
    def library_error(e):
        return jsonify({"error": e.message}), e.status_code

    @app.errorhandler(SQLAlchemyError)
    def store_error(e):
        db.session.rollback()
        app.logger.exception(f"[store] unhandled database error: {e}")
        return jsonify({"error": StoreError.default_message}), StoreError.status_code

    @app.get("/health")
    def health():
        return jsonify({"ok": True})

    # overdue reminder job (SCHEDULER_ENABLED)
    from vulms.tasks.scheduler import start_scheduler
    start_scheduler(app)

    return app
