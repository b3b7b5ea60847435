"""Engine, session factory and declarative base for the AvaTax sync tables."""
import os

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

# Default is a local sqlite file; deployments point DATABASE_URL at the
# commerce database so invoices and queue rows share it.
SQLALCHEMY_DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///./avatax_sync.db")

_connect_args = {"check_same_thread": False} if SQLALCHEMY_DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass


def init_db(bind: Engine | None = None) -> None:
    """Create all tables. Model modules must be imported first so metadata is complete."""
    import app.models.db  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
