"""Persistence: SQLAlchemy models, database and repositories."""

from douanier.infrastructure.persistence.database import Database

__all__ = ["Database"]
