"""
Database initialization script.

Creates the target PostgreSQL database when missing, then creates the
Douanier tables from the ORM models.

Usage:
    ENV=development python scripts/init_database.py
"""

import asyncio
import sys

import asyncpg
from sqlalchemy import inspect
from sqlalchemy.engine import make_url

from douanier.config.settings import get_settings
from douanier.infrastructure.persistence.database import Database
from douanier.infrastructure.persistence.models import Base


async def create_database_if_not_exists(database_url: str) -> None:
    """Create the PostgreSQL database if it doesn't exist."""
    url = make_url(database_url)
    if url.get_backend_name() != "postgresql":
        print(f"Backend '{url.get_backend_name()}' creates its database on connect")
        return

    print("Checking if database exists...")
    conn = await asyncpg.connect(
        host=url.host or "localhost",
        port=url.port or 5432,
        user=url.username,
        password=url.password,
        database="postgres",
    )
    try:
        exists = await conn.fetchval(
            "SELECT 1 FROM pg_database WHERE datname = $1",
            url.database,
        )
        if exists:
            print(f"Database '{url.database}' already exists")
        else:
            print(f"Creating database '{url.database}'...")
            await conn.execute(f'CREATE DATABASE "{url.database}"')
            print("Database created successfully")
    finally:
        await conn.close()


async def create_tables(database: Database) -> list[str]:
    """Create missing tables and return the tables now present."""
    print("\nCreating tables...")
    await database.create_all()

    async with database.engine.connect() as conn:
        tables = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).get_table_names()
        )
    return sorted(tables)


async def main() -> None:
    """Run database initialization."""
    settings = get_settings()
    display_url = make_url(settings.DATABASE_URL).render_as_string(
        hide_password=True
    )

    print("Douanier Database Initialization")
    print("=" * 50)
    print(f"Database URL: {display_url}")
    print("=" * 50)

    database = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
    try:
        # Step 1: Create database
        await create_database_if_not_exists(settings.DATABASE_URL)

        # Step 2: Create tables
        await database.connect()
        tables = await create_tables(database)
        print(f"Found tables: {', '.join(tables)}")

        # Step 3: Verify tables
        missing = set(Base.metadata.tables) - set(tables)
        if missing:
            print(f"Missing tables: {', '.join(sorted(missing))}")
            sys.exit(1)

        print("\n" + "=" * 50)
        print("Database initialization completed successfully!")
        print("=" * 50)

    except Exception as e:
        print("\n" + "=" * 50)
        print(f"Database initialization failed: {e}")
        print("=" * 50)
        sys.exit(1)
    finally:
        await database.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
