"""
Database configuration and table definitions.

This module sets up a SQLAlchemy engine and describes the relational
schema with SQLAlchemy Core tables. Rows are mapped to the plain
entities in app.models by the repositories in app.repository, so no
declarative ORM classes live here.
"""

from sqlalchemy import (
    create_engine,
    event,
    MetaData,
    Table,
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
)
from sqlalchemy.engine import Engine
from pathlib import Path

from app.config import get_settings

settings = get_settings()

metadata = MetaData()

user_table = Table(
    "user",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("username", String(50), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
)

api_token_table = Table(
    "api_token",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("token", String(32), nullable=False, unique=True),
    Column("userId", Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False),
    Column("notes", String(255), nullable=True),
    Column("createdAt", String(19), nullable=False),
)

programmer_table = Table(
    "programmer",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("nickname", String(255), nullable=False, unique=True),
    Column("avatarNumber", Integer, nullable=False),
    Column("tagLine", String(255), nullable=True),
    Column("userId", Integer, ForeignKey("user.id"), nullable=False),
    Column("powerLevel", Integer, nullable=False, default=0),
)

project_table = Table(
    "project",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(255), nullable=False),
    Column("difficultyLevel", Integer, nullable=False),
)

# Timestamps are stored as "YYYY-MM-DD HH:MM:SS" strings and the outcome
# as an integer; BattleRepository converts both back when hydrating.
battle_table = Table(
    "battle",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("programmerId", Integer, ForeignKey("programmer.id", ondelete="CASCADE"), nullable=False),
    Column("projectId", Integer, ForeignKey("project.id"), nullable=False),
    Column("didProgrammerWin", Integer, nullable=False),
    Column("foughtAt", String(19), nullable=False),
    Column("notes", Text, nullable=True),
)


# Enable foreign key constraints for SQLite
@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """Enable foreign key constraints on SQLite connections."""
    if dbapi_conn.__class__.__module__.startswith("sqlite3"):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def make_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """
    Create an engine for the given URL.

    SQLite file databases get their parent directory created first.
    """
    connect_args = kwargs.pop("connect_args", {})
    if database_url.startswith("sqlite"):
        connect_args.setdefault("check_same_thread", False)  # Needed for SQLite
        db_path = database_url.split("///", 1)[-1]
        if "///" in database_url and db_path and db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    return create_engine(database_url, echo=echo, connect_args=connect_args, **kwargs)


# Application engine
engine = make_engine(settings.database.DATABASE_URL, echo=settings.database.ECHO_SQL)


def get_engine() -> Engine:
    """
    Dependency function returning the database engine.

    Repositories open a short-lived connection per operation, so the
    engine (not a session) is what gets handed around. Tests override
    this dependency with an in-memory engine.
    """
    return engine


def init_db(bind: Engine = None) -> None:
    """
    Initialise the database.

    Creates all tables if they don't exist. Called on application startup.
    """
    bind = bind or engine
    metadata.create_all(bind=bind)
    print(f"Database initialised at {bind.url}")
