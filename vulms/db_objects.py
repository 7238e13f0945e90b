from sqlalchemy import inspect, text

from vulms.extensions import db

ACTIVE_LOAN_INDEX = "ux_transactions_active_loan"

# one active loan per (user, book); engines without filtered indexes rely on the service check
ACTIVE_LOAN_INDEX_SQL = {
    "sqlite": f"""
        CREATE UNIQUE INDEX IF NOT EXISTS {ACTIVE_LOAN_INDEX}
        ON transactions (user_id, book_id)
        WHERE status = 'active'
    """,
    "postgresql": f"""
        CREATE UNIQUE INDEX IF NOT EXISTS {ACTIVE_LOAN_INDEX}
        ON transactions (user_id, book_id)
        WHERE status = 'active'
    """,
    "mssql": f"""
        IF NOT EXISTS (SELECT 1 FROM sys.indexes WHERE name = N'{ACTIVE_LOAN_INDEX}')
        CREATE UNIQUE INDEX {ACTIVE_LOAN_INDEX}
        ON dbo.transactions (user_id, book_id)
        WHERE status = 'active'
    """,
}


def ensure_db_objects(app, create_tables=None):
    if create_tables is None:
        create_tables = app.config.get("AUTO_CREATE_DB", True)

    with app.app_context():
        if create_tables:
            db.create_all()

        if not inspect(db.engine).has_table("transactions"):
            app.logger.warning(f"[db_objects] no transactions table yet, skipped {ACTIVE_LOAN_INDEX}; run `flask init-db`.")
            return

        dialect = db.engine.dialect.name
        sql = ACTIVE_LOAN_INDEX_SQL.get(dialect)
        if sql is None:
            app.logger.warning(f"[db_objects] no filtered index support for '{dialect}', skipped {ACTIVE_LOAN_INDEX}.")
            return

        conn = db.engine.connect()
        trans = conn.begin()
        try:
            conn.execute(text(sql))
            trans.commit()
            app.logger.info(f"[db_objects] {ACTIVE_LOAN_INDEX} ensured ({dialect}).")
        except Exception as e:
            trans.rollback()
            app.logger.error(f"[db_objects] failed to ensure {ACTIVE_LOAN_INDEX}: {e}")
            raise
        finally:
            conn.close()
