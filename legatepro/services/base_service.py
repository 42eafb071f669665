"""Shared service base with session lifecycle behavior."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from legatepro.core.exceptions import DatabaseError, ServiceError
from legatepro.database import db as database


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session | None = None) -> None:
        self.db = db or database.SessionLocal()

    def commit(self) -> None:
        """Commit the current transaction, rolling back on failure."""
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ServiceError("Record conflicts with an existing record.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DatabaseError(f"Commit failed: {exc.__class__.__name__}") from exc

    def flush(self) -> None:
        """Flush pending changes, mapping failures like `commit`."""
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            raise ServiceError("Record conflicts with an existing record.") from exc
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise DatabaseError(f"Flush failed: {exc.__class__.__name__}") from exc

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()
