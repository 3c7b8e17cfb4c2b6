"""
PostgreSQL charity store adapter - Implements CharityStore protocol.

This module provides the PostgreSQL implementation of the domain's
charity store port using psycopg3 with raw SQL.

Consistency Design - Dual Index:
--------------------------------
The uniqueness index is the UNIQUE constraint on ``charities.name``, so the
name -> id mapping lives in the same row as the record it indexes and can
never drift from it. A rename is a single UPDATE guarded by the old name.

Registry counters and settings live in the single-row ``registry_state``
table. The authority binding is a conditional UPDATE
(``WHERE authority_contract IS NULL``), which makes it write-once at the
database level.

Units of work:
--------------
``atomic()`` checks a connection out of the pool, opens a transaction and
locks the ``registry_state`` row with ``SELECT ... FOR UPDATE``. Units on
different connections therefore run one at a time, and the reads a unit
makes to decide what to write still hold when it writes. Every store call
made inside the block runs on that connection; an exception escaping the
block rolls the transaction back.

The active connection is held in a ContextVar, so each thread or task sees
only the unit it opened itself.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from psycopg import Connection, sql
from psycopg_pool import ConnectionPool

from src.domain.models import Charity, CharityUpdate
from src.domain.ports import CharityType, Currency

logger = logging.getLogger(__name__)

_CHARITY_COLUMNS = (
    "name",
    "description",
    "proof_hash",
    "category",
    "location",
    "currency",
    "min_donation",
    "max_goal",
    "timestamp",
    "creator",
    "charity_type",
    "contact_info",
    "status",
    "verification_level",
)

# Fields overwrite_fields() may touch; name goes through rename()
_OVERWRITABLE = frozenset(_CHARITY_COLUMNS) - {"name", "creator"}

# NUMERIC(39, 0) columns come back as Decimal
_AMOUNT_COLUMNS = ("min_donation", "max_goal")


def _charity_from_row(row: tuple[Any, ...]) -> Charity:
    values = dict(zip(_CHARITY_COLUMNS, row, strict=True))
    values["proof_hash"] = bytes(values["proof_hash"])
    values["currency"] = Currency(values["currency"])
    values["charity_type"] = CharityType(values["charity_type"])
    for column in _AMOUNT_COLUMNS:
        values[column] = int(values[column])
    return Charity(**values)


def _column_value(value: Any) -> Any:
    if isinstance(value, Currency | CharityType):
        return value.value
    return value


class PostgresCharityStore:
    """
    Implements CharityStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool
        self._active: ContextVar[Connection | None] = ContextVar(
            f"charity_store_conn_{id(self)}", default=None
        )

    def ensure_state(self, max_charities: int, registration_fee: int) -> None:
        """
        Create the registry_state row if it does not exist yet.

        Existing settings (fee, authority binding, counter) are left alone,
        so restarting with different defaults never rewrites live state.
        """
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO registry_state (id, next_charity_id, max_charities, registration_fee)
                VALUES (1, 0, %s, %s)
                ON CONFLICT (id) DO NOTHING
                """,
                (max_charities, registration_fee),
            )

    @contextmanager
    def atomic(self) -> Iterator[None]:
        if self._active.get() is not None:
            # Join the enclosing transaction
            yield
            return

        with self._pool.connection() as conn, conn.transaction():
            # Serializes units across connections until commit or rollback
            conn.execute("SELECT id FROM registry_state WHERE id = 1 FOR UPDATE")
            token = self._active.set(conn)
            try:
                yield
            finally:
                self._active.reset(token)

    @contextmanager
    def _connection(self) -> Iterator[Connection]:
        conn = self._active.get()
        if conn is not None:
            yield conn
        else:
            # pool.connection() commits on clean exit
            with self._pool.connection() as conn:
                yield conn

    def _fetchone(self, query: str, params: tuple[Any, ...] = ()) -> tuple[Any, ...] | None:
        with self._connection() as conn, conn.cursor() as cursor:
            cursor.execute(query, params)
            return cursor.fetchone()

    def get(self, charity_id: int) -> Charity | None:
        columns = ", ".join(f'"{c}"' for c in _CHARITY_COLUMNS)
        row = self._fetchone(f"SELECT {columns} FROM charities WHERE id = %s", (charity_id,))
        if row is None:
            return None
        return _charity_from_row(row)

    def get_update(self, charity_id: int) -> CharityUpdate | None:
        row = self._fetchone(
            """
            SELECT update_name, update_description, update_timestamp, updater
            FROM charity_updates
            WHERE charity_id = %s
            """,
            (charity_id,),
        )
        if row is None:
            return None
        return CharityUpdate(*row)

    def id_for_name(self, name: str) -> int | None:
        if "\x00" in name:
            # PostgreSQL text cannot hold NUL, so no stored name matches
            return None
        row = self._fetchone("SELECT id FROM charities WHERE name = %s", (name,))
        return None if row is None else row[0]

    def exists_by_name(self, name: str) -> bool:
        return self.id_for_name(name) is not None

    def count(self) -> int:
        row = self._fetchone("SELECT next_charity_id FROM registry_state WHERE id = 1")
        return 0 if row is None else row[0]

    def insert_new(self, charity: Charity) -> int:
        """
        Allocate the next id and insert the charity.

        The counter bump and the INSERT run in the caller's transaction; the
        UNIQUE constraint on name rejects a duplicate with an IntegrityError.
        """
        with self._connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                """
                UPDATE registry_state
                SET next_charity_id = next_charity_id + 1
                WHERE id = 1
                RETURNING next_charity_id - 1
                """
            )
            row = cursor.fetchone()
            if row is None:
                raise RuntimeError("registry_state is not initialized")
            charity_id = row[0]

            columns = sql.SQL(", ").join(sql.Identifier(c) for c in _CHARITY_COLUMNS)
            placeholders = sql.SQL(", ").join(sql.Placeholder() for _ in _CHARITY_COLUMNS)
            cursor.execute(
                sql.SQL("INSERT INTO charities (id, {}) VALUES (%s, {})").format(
                    columns, placeholders
                ),
                (charity_id, *(_column_value(getattr(charity, c)) for c in _CHARITY_COLUMNS)),
            )
        return charity_id

    def rename(self, charity_id: int, old_name: str, new_name: str) -> None:
        with self._connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                "UPDATE charities SET name = %s WHERE id = %s AND name = %s",
                (new_name, charity_id, old_name),
            )
            if cursor.rowcount != 1:
                raise KeyError(f"Charity {charity_id} is not indexed as {old_name!r}")

    def overwrite_fields(self, charity_id: int, **fields: Any) -> None:
        unknown = set(fields) - _OVERWRITABLE
        if unknown:
            raise ValueError(f"Cannot overwrite fields: {sorted(unknown)}")
        if not fields:
            return

        assignments = sql.SQL(", ").join(
            sql.SQL("{} = {}").format(sql.Identifier(column), sql.Placeholder())
            for column in fields
        )
        with self._connection() as conn:
            conn.execute(
                sql.SQL("UPDATE charities SET {} WHERE id = %s").format(assignments),
                (*(_column_value(v) for v in fields.values()), charity_id),
            )

    def upsert_update_record(self, charity_id: int, record: CharityUpdate) -> None:
        with self._connection() as conn:
            conn.execute(
                """
                INSERT INTO charity_updates
                    (charity_id, update_name, update_description, update_timestamp, updater)
                VALUES (%s, %s, %s, %s, %s)
                ON CONFLICT (charity_id) DO UPDATE
                SET update_name = EXCLUDED.update_name,
                    update_description = EXCLUDED.update_description,
                    update_timestamp = EXCLUDED.update_timestamp,
                    updater = EXCLUDED.updater
                """,
                (
                    charity_id,
                    record.update_name,
                    record.update_description,
                    record.update_timestamp,
                    record.updater,
                ),
            )

    def authority_contract(self) -> str | None:
        row = self._fetchone("SELECT authority_contract FROM registry_state WHERE id = 1")
        return None if row is None else row[0]

    def bind_authority_contract(self, principal: str) -> bool:
        with self._connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                """
                UPDATE registry_state
                SET authority_contract = %s
                WHERE id = 1 AND authority_contract IS NULL
                """,
                (principal,),
            )
            # 0 rows when a contract is already bound
            return cursor.rowcount == 1

    def registration_fee(self) -> int:
        row = self._fetchone("SELECT registration_fee FROM registry_state WHERE id = 1")
        if row is None:
            raise RuntimeError("registry_state is not initialized")
        return int(row[0])

    def set_registration_fee(self, amount: int) -> None:
        with self._connection() as conn:
            conn.execute(
                "UPDATE registry_state SET registration_fee = %s WHERE id = 1",
                (amount,),
            )

    def max_charities(self) -> int:
        row = self._fetchone("SELECT max_charities FROM registry_state WHERE id = 1")
        if row is None:
            raise RuntimeError("registry_state is not initialized")
        return row[0]


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
