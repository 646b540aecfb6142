from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase, Session


class Base(DeclarativeBase):
    pass


def create_db_engine(database_url: str, timeout_seconds: float = 5.0) -> Engine:
    """Build an engine whose connects and lock waits are bounded by ``timeout_seconds``."""
    if database_url.startswith("sqlite"):
        # sessions are handed across FastAPI's worker threads
        connect_args = {"check_same_thread": False, "timeout": timeout_seconds}
        return create_engine(database_url, connect_args=connect_args)

    # the server cancels any statement (including lock waits) that outlives the timeout
    connect_args = {
        "connect_timeout": max(1, int(timeout_seconds)),
        "options": f"-c statement_timeout={int(timeout_seconds * 1000)}",
    }
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_timeout=timeout_seconds,
        pool_pre_ping=True,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine):
    # registers the tables on Base.metadata
    from movie_reviews.db import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
