# Import every model so Base.metadata is complete for Alembic and create_all.
from app.db.base_class import Base
from app import models  # noqa: F401

__all__ = ["Base"]
