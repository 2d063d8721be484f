from __future__ import annotations

import logging
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..core.exceptions import ConflictError, DuplicateSlotError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Names of the unique keys in database/schema.sql.
UQ_SLOT_POSITION = "uq_slot_position"
UQ_SLOT_GUARD_SHIFT = "uq_slot_guard_shift"


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


@contextmanager
def translate_integrity_errors():
    """Turn duplicate-key errors from the slot table's unique keys into domain errors."""

    try:
        yield
    except IntegrityError as e:
        if e.errno != errorcode.ER_DUP_ENTRY:
            raise
        message = str(e.msg or e)
        logger.warning("Unique key rejected slot write: %s", message)
        if UQ_SLOT_GUARD_SHIFT in message:
            raise ConflictError("Guard is already assigned to another slot for this date and shift") from e
        if UQ_SLOT_POSITION in message:
            raise DuplicateSlotError("Slot already exists for this site, date, shift, role and number") from e
        raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_bool(value: Any) -> Optional[bool]:
    """Normalize a nullable TINYINT(1) column to tri-state bool."""

    if value is None:
        return None
    return bool(int(value))


def normalize_mysql_decimal(value: Any) -> Optional[Decimal]:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))
