"""
Database connection management
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from starlette.requests import HTTPConnection

from .config import Settings
from .logging import get_logger

logger = get_logger(__name__)

Base = declarative_base()


class DatabaseConnectionError(Exception):
    """Raised when the database cannot be reached at startup."""


class Database:
    """Process-wide handle: one engine and one session factory."""

    def __init__(self, url: str, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False

        self.url = url
        self.engine = create_engine(url, echo=echo, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def connect(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(f"Cannot connect to database: {e}") from e
        logger.info("Database connected", url=self.engine.url.render_as_string(hide_password=True))

    def synchronize(self) -> None:
        # registers UserModel on Base.metadata
        from .model.sqlalchemy import user  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Database schema synchronized", tables=sorted(Base.metadata.tables))

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database disconnected")


def create_database(settings: Settings) -> Database:
    """Build the handle from settings, connect, and create tables if configured."""
    database = Database(settings.sqlalchemy_url(), echo=settings.sql_echo)
    database.connect()
    if settings.synchronize:
        database.synchronize()
    return database


def get_db(connection: HTTPConnection) -> Generator[Session, None, None]:
    database: Database = connection.app.state.database
    with database.session() as db:
        yield db
