from __future__ import annotations

import logging
from typing import Callable, Iterator, TypeVar

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from restaurant_inventory.errors import StorageError

logger = logging.getLogger(__name__)

Base = declarative_base()

T = TypeVar("T")


class Database:
    """Engine and session factory for one process.

    Built once by the app factory and stored on ``app.state.database``; the
    engine's connection pool is what concurrent requests share.
    """

    def __init__(self, url: str) -> None:
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args = {"check_same_thread": False}
        self.url = url
        self.engine = create_engine(url, connect_args=connect_args, future=True)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine, future=True)

    def init_db(self) -> None:
        from restaurant_inventory import db_models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def dispose(self) -> None:
        self.engine.dispose()


def commit_or_raise(db: Session, what: str) -> None:
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to persist %s", what)
        raise StorageError() from exc


def run_with_retry(db: Session, operation: Callable[[], T], *, max_retries: int, what: str) -> T:
    """Run ``operation`` and commit, re-running it when a versioned row went stale.

    ``operation`` must reload whatever it mutates so a retry starts from the
    committed state. Everything it stages lands in a single commit.
    """
    for attempt in range(max_retries + 1):
        result = operation()
        try:
            db.commit()
        except StaleDataError:
            db.rollback()
            logger.warning("Concurrent update on %s (attempt %d); retrying", what, attempt + 1)
            continue
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Failed to persist %s", what)
            raise StorageError() from exc
        return result
    raise StorageError("The record was modified concurrently; please retry.")


def get_db(request: Request) -> Iterator[Session]:
    database: Database = request.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
