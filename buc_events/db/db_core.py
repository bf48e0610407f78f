"""Core database functionality and configuration.

This module provides database management with proper configuration,
connection pooling, and session handling for the SQL store backend.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, inspect
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from .tables import Base
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

DEFAULT_SQLITE_PATH = Path(__file__).parent.parent.parent / 'data' / 'events.db'

class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via the url parameter.

        Args:
            url: Full SQLAlchemy connection URL. Overrides everything else.
            sqlite_path: Path to SQLite database file (for development)
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
        """
        url = url or os.environ.get('DATABASE_URL')
        if url:
            self.url = url
        elif IS_PRODUCTION_ENVIRONMENT:
            raise ValueError(
                "Database URL must be provided either via the url parameter "
                "or DATABASE_URL environment variable when in production environment"
            )
        else:
            self.url = f"sqlite:///{sqlite_path or DEFAULT_SQLITE_PATH}"

        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def sqlite_file(self) -> Optional[Path]:
        """Path of a file-backed SQLite database, None for in-memory or other databases."""
        prefix = 'sqlite:///'
        if not self.url.startswith(prefix):
            return None
        path = self.url[len(prefix):]
        if not path or path == ':memory:':
            return None
        return Path(path)

    @property
    def connection_url(self) -> str:
        """Get the database connection URL."""
        # Older hosting platforms hand out postgres:// which SQLAlchemy no longer accepts
        if self.url.startswith('postgres://'):
            return 'postgresql+psycopg://' + self.url[len('postgres://'):]
        return self.url

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args = {"echo": self.echo}

        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            # An in-memory database only exists on its one connection
            if self.sqlite_file is None:
                args["poolclass"] = StaticPool
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args

class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass

class DatabaseConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass

class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass

class Database:
    """Database management: engine, schema and transactional sessions."""

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._tables_checked = False

        # Initialize engine on creation
        self._setup_engine()

    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        db_file = self.config.sqlite_file
        if db_file is not None:
            db_file.parent.mkdir(parents=True, exist_ok=True)
        try:
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise DatabaseConnectionError(f"Failed to create database engine: {e}") from e

    def init_db(self) -> None:
        """Initialize the database schema."""
        if not self.engine:
            raise DatabaseConnectionError("Database engine not initialized")

        try:
            Base.metadata.create_all(self.engine)
            self._tables_checked = True
            logger.info("Database schema initialized successfully")
        except Exception as e:
            raise DatabaseError(f"Failed to initialize database schema: {e}") from e

    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return
        if not self.engine:
            raise DatabaseConnectionError("Database engine not initialized")

        try:
            existing_tables = inspect(self.engine).get_table_names()
            required_tables = set(Base.metadata.tables)

            if not required_tables.issubset(existing_tables):
                logger.info("Some tables missing, initializing database schema")
                Base.metadata.create_all(self.engine)
                logger.info("Database schema initialized successfully")

            self._tables_checked = True

        except Exception as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        Handles commit/rollback automatically and ensures proper cleanup.

        Example:
            with database.session() as session:
                row = session.get(EventRow, event_id)
                row.title = "New Title"
                # No need to call commit - it's handled automatically

        Raises:
            DatabaseConnectionError: If the database could not be reached
            SessionError: If there are other issues with the session
            DatabaseError: If database schema verification fails
        """
        # Ensure tables exist before providing a session
        self.ensure_tables_exist()

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except OperationalError as e:
            session.rollback()
            raise DatabaseConnectionError(f"Database connection error: {e}") from e
        except Exception as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        finally:
            session.close()

    def dispose(self) -> None:
        """Release pooled connections."""
        if self.engine:
            self.engine.dispose()
