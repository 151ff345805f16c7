from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi import Request
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """
    Owns the engine and session factory for one application instance.
    Built once by create_app() and stored on app.state.database.
    """

    def __init__(self, database_url: str):
        self.url = database_url
        engine_kwargs = {}
        if database_url.startswith("sqlite"):
            # SQLite connections are shared with the threadpool FastAPI runs sync handlers in
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                # A single shared connection, otherwise every session sees its own empty database
                engine_kwargs["poolclass"] = StaticPool
        self.engine: Engine = create_engine(database_url, **engine_kwargs)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def create_all(self):
        create_db_and_tables(self.engine)

    def session(self):
        return self.SessionLocal()

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request):
    """
    Dependency to get a database session.
    Ensures the database session is always closed after the request.
    """
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()


def create_db_and_tables(engine: Engine):
    # Import all models so they are registered with Base.metadata before create_all
    from learnhub import models  # noqa: F401
    logger.debug(f"Creating tables on {engine.url}")
    Base.metadata.create_all(bind=engine)
