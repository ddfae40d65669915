"""Utility script to validate the configured database connection and schema."""

from sqlalchemy import inspect, text

from app.db.base import Base
from app.db.session import SessionLocal, engine


def main() -> None:
    """Ensure the database answers queries and every invoicing table exists."""

    with SessionLocal() as session:
        session.execute(text("SELECT 1"))

    existing = set(inspect(engine).get_table_names())
    missing = sorted(table.name for table in Base.metadata.sorted_tables if table.name not in existing)
    if missing:
        print(f"Database reachable, but tables are missing: {', '.join(missing)}. Run `alembic upgrade head`.")
        raise SystemExit(1)
    print("Database connection succeeded; schema is up to date.")


if __name__ == "__main__":
    main()
