from __future__ import annotations

from decimal import Decimal

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from guard_attendance.core.exceptions import ConflictError, DuplicateSlotError
from guard_attendance.database.bootstrap import _strip_create_db_and_use, _strip_line_comments, iter_sql_statements
from guard_attendance.database.mysql_base import (
    normalize_mysql_bool,
    normalize_mysql_decimal,
    translate_integrity_errors,
)


def test_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO sites (name) VALUES ('North; Gate');\nINSERT INTO sites (name) VALUES (\"a;b\");  \n"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO sites (name) VALUES ('North; Gate')",
        'INSERT INTO sites (name) VALUES ("a;b")',
    ]


def test_splitter_handles_escaped_quote_and_trailing_statement():
    sql = "SELECT 'it\\'s;fine'; SELECT 1"

    assert list(iter_sql_statements(sql)) == ["SELECT 'it\\'s;fine'", "SELECT 1"]


def test_create_database_and_use_lines_are_removed():
    sql = "CREATE DATABASE IF NOT EXISTS guards;\nUSE guards;\n-- tables\nCREATE TABLE t (id INT);\n"

    cleaned = _strip_line_comments(_strip_create_db_and_use(sql))

    assert list(iter_sql_statements(cleaned)) == ["CREATE TABLE t (id INT)"]


def _dup(key: str) -> IntegrityError:
    return IntegrityError(
        msg=f"Duplicate entry '7-2024-01-01-day' for key 'daily_attendance_slots.{key}'",
        errno=errorcode.ER_DUP_ENTRY,
    )


def test_guard_key_violation_becomes_conflict():
    with pytest.raises(ConflictError):
        with translate_integrity_errors():
            raise _dup("uq_slot_guard_shift")


def test_position_key_violation_becomes_duplicate_slot():
    with pytest.raises(DuplicateSlotError):
        with translate_integrity_errors():
            raise _dup("uq_slot_position")


def test_other_integrity_errors_pass_through():
    fk_error = IntegrityError(msg="Cannot add or update a child row", errno=errorcode.ER_NO_REFERENCED_ROW_2)

    with pytest.raises(IntegrityError):
        with translate_integrity_errors():
            raise fk_error


def test_mysql_value_normalizers():
    assert normalize_mysql_bool(None) is None
    assert normalize_mysql_bool(0) is False
    assert normalize_mysql_bool("1") is True
    assert normalize_mysql_decimal(None) is None
    assert normalize_mysql_decimal(850.5) == Decimal("850.5")
