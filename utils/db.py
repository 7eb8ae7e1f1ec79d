"""
Database utilities for SQLite operations.

Provides connection management, lazy schema bootstrap and a generic report
store shared by the habits and tasks domains. Each domain describes its
table with a ReportTable; the store handles SQL, pooling and error mapping.

Usage:
    from utils.db import ReportStore

    store = ReportStore(settings.SQLITE_PATH, HABITS_TABLE)
    report_id = store.add(report)
    report = store.get(report_id)
    store.close()
"""

import logging
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Generic, NamedTuple, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from utils.config import settings
from utils.errors import (
    DecodeError,
    NotFound,
    SchemaInitFatal,
    StoreClosed,
    StoreError,
    UnexpectedRowCount,
)

logger = logging.getLogger(__name__)

ReportT = TypeVar("ReportT", bound=BaseModel)


class Column(NamedTuple):
    name: str
    kind: str  # INTEGER or TEXT

    def ddl(self) -> str:
        if self.kind == "INTEGER":
            return f"{self.name} INTEGER CHECK ({self.name} >= 0)"
        return f"{self.name} {self.kind}"


@dataclass(frozen=True)
class ReportTable(Generic[ReportT]):
    """
    Mapping between a report model and its table.

    Attributes:
        name: Table name
        columns: Data columns in insert order, report_id excluded
        to_row: Report -> tuple of column values, same order as columns
        from_row: Dict of column values (report_id included) -> Report
    """

    name: str
    columns: tuple[Column, ...]
    to_row: Callable[[ReportT], tuple[Any, ...]]
    from_row: Callable[[dict[str, Any]], ReportT]

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    def create_statement(self) -> str:
        column_ddl = ",\n                ".join(c.ddl() for c in self.columns)
        return f"""
            CREATE TABLE IF NOT EXISTS {self.name} (
                report_id INTEGER PRIMARY KEY AUTOINCREMENT,
                {column_ddl}
            )
        """

    def insert_statement(self) -> str:
        placeholders = ", ".join("?" for _ in self.columns)
        return f"INSERT INTO {self.name} ({', '.join(self.column_names)}) VALUES ({placeholders})"

    def get_statement(self) -> str:
        return f"SELECT report_id, {', '.join(self.column_names)} FROM {self.name} WHERE report_id = ?"


def _db_uri(db_path: str, mode: str) -> str:
    return f"{Path(db_path).resolve().as_uri()}?mode={mode}"


def get_conn(db_path: Optional[str] = None) -> sqlite3.Connection:
    """
    Get SQLite connection to an existing database with dict-friendly row factory.

    The connection may be used from any thread; callers are responsible for
    not sharing it between threads concurrently.

    Args:
        db_path: Database file, defaults to settings.SQLITE_PATH

    Returns:
        SQLite connection with row_factory set to sqlite3.Row

    Raises:
        sqlite3.Error: If the database does not exist or cannot be opened
    """
    conn = sqlite3.connect(
        _db_uri(db_path or settings.SQLITE_PATH, "rw"),
        uri=True,
        check_same_thread=False,
    )
    conn.row_factory = sqlite3.Row
    return conn


def _create_schema(db_path: str, table: ReportTable) -> None:
    """Create the database file (if needed) and the report table."""
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(_db_uri(db_path, "rwc"), uri=True)
    try:
        with conn:
            conn.execute(table.create_statement())
    finally:
        conn.close()


def ensure_schema(db_path: str, table: ReportTable) -> None:
    """
    Make sure the database and the report table exist, creating them if needed.

    Bootstrap outcomes:
    - database missing: create database and table
    - database present, table missing: create table
    - both present: nothing to do
    - database unreachable or unusable: SchemaInitFatal

    Table creation uses CREATE TABLE IF NOT EXISTS, so two processes
    bootstrapping the same fresh database cannot create duplicates.

    Raises:
        SchemaInitFatal: If the database cannot be opened or prepared
    """
    try:
        try:
            conn = get_conn(db_path)
        except sqlite3.OperationalError:
            if Path(db_path).exists():
                raise
            logger.info("Database missing, creating: path=%s, table=%s", db_path, table.name)
            _create_schema(db_path, table)
            logger.info("DB schema ready: table=%s", table.name)
            return

        try:
            conn.execute("SELECT 1").fetchone()
            exists = conn.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?",
                (table.name,),
            ).fetchone()
        finally:
            conn.close()

        if exists is None:
            logger.info("Table missing, creating: path=%s, table=%s", db_path, table.name)
            _create_schema(db_path, table)

    except (sqlite3.Error, OSError) as e:
        logger.error("Could not prepare database: path=%s, table=%s, error=%s", db_path, table.name, str(e))
        raise SchemaInitFatal(f"sqlite: could not prepare {table.name} in {db_path}: {e}") from e

    logger.info("DB schema ready: table=%s", table.name)


def exec_affecting_one_row(conn: sqlite3.Connection, statement: str, args: tuple[Any, ...] = ()) -> sqlite3.Cursor:
    """
    Execute a write statement inside a transaction, expecting one row affected.

    The transaction is rolled back when the row count differs from one.

    Raises:
        UnexpectedRowCount: If zero or several rows were affected
        StoreError: If the statement fails
    """
    try:
        with conn:
            cursor = conn.execute(statement, args)
            if cursor.rowcount != 1:
                raise UnexpectedRowCount(cursor.rowcount)
    except sqlite3.Error as e:
        raise StoreError(f"sqlite: could not execute statement: {e}") from e
    return cursor


class ReportStore(Generic[ReportT]):
    """
    Add-by-value / get-by-id persistence for one report table.

    Connections are pooled one per thread and released by close().
    """

    def __init__(self, db_path: str, table: ReportTable[ReportT]) -> None:
        """
        Initialize store and bootstrap its schema.

        Args:
            db_path: SQLite database file
            table: Report table mapping

        Raises:
            SchemaInitFatal: If the schema cannot be prepared
        """
        self.db_path = db_path
        self.table = table
        self._insert = table.insert_statement()
        self._get = table.get_statement()
        self._text_columns = [c.name for c in table.columns if c.kind == "TEXT"]

        ensure_schema(db_path, table)

        self._local = threading.local()
        self._pool: list[sqlite3.Connection] = []
        self._pool_lock = threading.Lock()
        self._closed = False

    def __enter__(self) -> "ReportStore[ReportT]":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _conn(self) -> sqlite3.Connection:
        if self._closed:
            raise StoreClosed(f"{self.table.name} store is closed")

        conn = getattr(self._local, "conn", None)
        if conn is None:
            try:
                conn = get_conn(self.db_path)
            except sqlite3.Error as e:
                raise StoreError(f"sqlite: could not get a connection: {e}") from e
            with self._pool_lock:
                if self._closed:
                    conn.close()
                    raise StoreClosed(f"{self.table.name} store is closed")
                self._pool.append(conn)
            self._local.conn = conn
        return conn

    def add(self, report: ReportT) -> int:
        """
        Insert a report; its reportID is ignored and assigned by the database.

        Returns:
            The generated report id

        Raises:
            UnexpectedRowCount: If the insert did not affect exactly one row
            StoreError: If the insert fails
        """
        cursor = exec_affecting_one_row(self._conn(), self._insert, self.table.to_row(report))
        report_id = cursor.lastrowid
        logger.info("Stored report: table=%s, report_id=%d", self.table.name, report_id)
        return report_id

    def get(self, report_id: int) -> ReportT:
        """
        Read a report back by id.

        Raises:
            NotFound: If no row has this id
            DecodeError: If the stored row does not form a valid report
            StoreError: If the query fails
        """
        try:
            row = self._conn().execute(self._get, (report_id,)).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"sqlite: could not get {self.table.name} report: {e}") from e

        if row is None:
            raise NotFound(self.table.name, report_id)

        values = {key: row[key] for key in row.keys()}
        for name in self._text_columns:
            if values[name] is None:
                values[name] = ""

        try:
            return self.table.from_row(values)
        except (ValidationError, KeyError, TypeError, ValueError) as e:
            raise DecodeError(f"could not decode {self.table.name} row {report_id}: {e}") from e

    def close(self) -> None:
        """Close every pooled connection. Safe to call more than once."""
        with self._pool_lock:
            if self._closed:
                return
            self._closed = True
            pool, self._pool = self._pool, []

        for conn in pool:
            conn.close()
        logger.info("Store closed: table=%s, connections=%d", self.table.name, len(pool))
