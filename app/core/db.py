from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def engine_options(database_url: str) -> dict:
    """Pool and deadline options for the given backend."""
    url = make_url(database_url)
    options = {
        "pool_pre_ping": True,
        "echo": settings.LOG_LEVEL == "DEBUG",
    }
    if url.get_backend_name() == "sqlite":
        # sqlite3 takes its busy timeout in seconds
        options["connect_args"] = {
            "check_same_thread": False,
            "timeout": settings.DB_STATEMENT_TIMEOUT_MS / 1000,
        }
        return options

    options.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
    )
    if url.get_backend_name() == "postgresql":
        options["connect_args"] = {
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
        }
    return options


def _begin_immediate(engine) -> None:
    """Take SQLite's write lock when a transaction begins, not at its first write.

    pysqlite defers BEGIN until the first DML statement, so two connections
    can both read before either writes. Emitting BEGIN IMMEDIATE ourselves
    makes the second one wait on the busy timeout instead.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(database_url: str):
    engine = create_engine(database_url, **engine_options(database_url))
    if make_url(database_url).get_backend_name() == "sqlite":
        _begin_immediate(engine)
    return engine


# SQLAlchemy setup
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db():
    """Dependency for getting database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind=None):
    """Create all tables - for development only"""
    try:
        Base.metadata.create_all(bind=bind or engine)
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Error creating tables: {e}")
        raise


def check_connection(bind=None):
    """Open one connection and run a trivial query; raises on failure."""
    try:
        with (bind or engine).connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connected successfully")
    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        raise
