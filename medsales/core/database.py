from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine.base import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from medsales.core.config import settings


def get_db_engine(database_uri: str = settings.DATABASE_URI) -> Engine:
    """Get db engine:
    This function returns the database engine.
    It is used to create the database session.
    An in-memory SQLite URI shares a single connection so every
    session sees the same tables.
    """
    if database_uri.startswith("sqlite"):
        return create_engine(
            database_uri,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(database_uri, pool_pre_ping=True)


db_engine = get_db_engine()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """
    Get db:
        This function returns the database session.
        It is used in the in any router file to get
        the database session.
    """
    database: Session = SessionLocal()
    try:
        yield database
    finally:
        database.close()


def init_db(engine: Engine = db_engine) -> None:
    """Create every table registered on the declarative base."""
    import medsales.models.product  # noqa: F401
    import medsales.models.post  # noqa: F401
    import medsales.models.setting  # noqa: F401
    import medsales.models.upload  # noqa: F401
    import medsales.models.user  # noqa: F401

    Base.metadata.create_all(bind=engine)
