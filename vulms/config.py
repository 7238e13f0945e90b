import os


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "vulms-dev-secret-key")

    SQLALCHEMY_DATABASE_URI = os.getenv("SQLALCHEMY_DATABASE_URI", "sqlite:///vulms.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    # create tables + active-loan index at startup (migrations take over when off)
    AUTO_CREATE_DB = _flag("AUTO_CREATE_DB", "1")

    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "vulms-dev-jwt-secret")

    SESSION_COOKIE_NAME = os.getenv("SESSION_COOKIE_NAME", "vulms_session")
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")
    SESSION_COOKIE_SECURE = _flag("SESSION_COOKIE_SECURE")
    PERMANENT_SESSION_LIFETIME = int(os.getenv("PERMANENT_SESSION_LIFETIME", str(24 * 60 * 60)))

    # Borrowing policy
    BORROW_LIMIT = int(os.getenv("BORROW_LIMIT", "3"))
    LOAN_PERIOD_DAYS = int(os.getenv("LOAN_PERIOD_DAYS", "7"))

    ALLOW_ADMIN_SIGNUP = _flag("ALLOW_ADMIN_SIGNUP")

    # Overdue reminder job
    SCHEDULER_ENABLED = _flag("SCHEDULER_ENABLED")
    OVERDUE_CHECK_MINUTES = int(os.getenv("OVERDUE_CHECK_MINUTES", "60"))

    MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
    MAIL_PORT = int(os.getenv("MAIL_PORT", "25"))
    MAIL_USE_TLS = _flag("MAIL_USE_TLS")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME", "")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD", "")
    MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "library@univen.local")
