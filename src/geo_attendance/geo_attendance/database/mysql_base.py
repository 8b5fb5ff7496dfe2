from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Optional, TypeVar

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

T = TypeVar("T")


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """One connection per unit of work: commit on success, roll back on any error."""

    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        logger.warning("Rolling back transaction on %s", conn_factory.config.describe())
        conn.rollback()
        raise
    finally:
        conn.close()


def fetch_one_as(cur, mapper: Callable[[dict], T]) -> Optional[T]:
    row = cur.fetchone()
    return mapper(row) if row else None


def fetch_all_as(cur, mapper: Callable[[dict], T]) -> list[T]:
    return [mapper(row) for row in cur.fetchall() or []]
