from __future__ import annotations

import logging
import time
from logging import Logger
from pathlib import Path
from typing import Iterable, Iterator

from tabular_db._utils import get_database_path
from tabular_db.compare import rows_difference
from tabular_db.errors import (
    DeserializationError,
    DuplicateNameError,
    NotFoundError,
)
from tabular_db.storage import DocFormats, read_doc, write_doc
from tabular_db.structs import FrozenStruct
from tabular_db.table import Table, TableLike, TableMeta


log = logging.getLogger(__name__)


# bump on any change to the persisted document layout
FORMAT_VERSION: int = 1


class DatabaseMeta(FrozenStruct, frozen=True):
    version: int = FORMAT_VERSION
    tables: list[TableMeta] = []


DatabaseLike = dict | DatabaseMeta


class Database:
    '''
    Collection of uniquely named tables, the root object that gets saved to
    and loaded from disk.

    '''
    def __init__(
        self,
        tables: Iterable[TableLike] = (),
        *,
        log: Logger = log
    ) -> None:
        self._log = log
        self.tables: list[Table] = []
        for t in tables:
            self.add_table(Table.from_like(t))

    def __contains__(self, name: str) -> bool:
        return self.get_table(name) is not None

    def __iter__(self) -> Iterator[Table]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Database):
            return NotImplemented

        return self.tables == other.tables

    @property
    def table_names(self) -> tuple[str, ...]:
        return tuple(t.name for t in self.tables)

    @staticmethod
    def from_like(d: DatabaseLike, *, log: Logger = log) -> Database:
        if isinstance(d, dict):
            d = DatabaseMeta.convert(d)

        return Database(d.tables, log=log)

    def add_table(self, table: Table) -> None:
        if table.name in self:
            raise DuplicateNameError(table.name)

        self.tables.append(table)
        self._log.info(f'added table {table.name} ({len(table):,} rows)')

    def delete_table(self, name: str) -> None:
        table = self.get_table(name)
        if table is None:
            raise NotFoundError(name)

        self.tables.remove(table)
        self._log.info(f'deleted table {name}')

    def get_table(self, name: str) -> Table | None:
        return next((t for t in self.tables if t.name == name), None)

    def _difference_operands(
        self,
        name_a: str,
        name_b: str
    ) -> tuple[Table, Table]:
        a = self.get_table(name_a)
        b = self.get_table(name_b)
        if a is None or b is None:
            missing = [
                name for name, t in ((name_a, a), (name_b, b)) if t is None
            ]
            raise NotFoundError(
                missing,
                f'One of the tables was not found: {", ".join(missing)}'
            )

        a.schema.ensure_compatible(b.schema)
        return a, b

    def _build_difference(self, a: Table, b: Table, result_name: str) -> Table:
        start = time.perf_counter_ns()

        result = Table(result_name, a.fields)
        for row in rows_difference(a.rows, b.rows, a.fields):
            result.add_row(row.copy())

        elapsed_ms = (time.perf_counter_ns() - start) // 1_000_000
        self._log.debug(
            f'difference {a.name} - {b.name}: kept {len(result):,} of '
            f'{len(a):,} rows against {len(b):,}, took {elapsed_ms:,} ms'
        )
        return result

    def compute_difference(
        self,
        name_a: str,
        name_b: str,
        result_name: str
    ) -> Table:
        '''
        Rows of table `name_a` that match no row of table `name_b`, as a new
        table named `result_name` with a copy of A's fields. The result is
        not registered, see `difference`.

        '''
        a, b = self._difference_operands(name_a, name_b)
        return self._build_difference(a, b, result_name)

    def difference(
        self,
        name_a: str,
        name_b: str,
        result_name: str
    ) -> Table:
        '''
        Same as `compute_difference` but the result table also gets added
        to this database.

        Validation happens before any row is scanned: missing tables raise
        `NotFoundError`, incompatible schemas `SchemaMismatchError` and a
        taken `result_name` `DuplicateNameError`.

        '''
        a, b = self._difference_operands(name_a, name_b)
        if result_name in self:
            raise DuplicateNameError(result_name)

        result = self._build_difference(a, b, result_name)
        self.add_table(result)
        return result

    def pretty_str(self) -> str:
        '''Return a human-readable representation of the database.'''
        lines = [f'Database: {len(self.tables)} tables']
        for t in self.tables:
            lines.append('')
            lines.append(t.pretty_str())
        return '\n'.join(lines)

    def encode(self) -> DatabaseMeta:
        return DatabaseMeta(tables=[t.encode() for t in self.tables])

    def save_to_file(
        self,
        path: str | Path | None = None,
        *,
        format: DocFormats | None = None
    ) -> Path:
        path = Path(path) if path else get_database_path()
        size = write_doc(self.encode(), path, format=format)
        self._log.info(
            f'saved {len(self.tables)} tables to {path} ({size:,} bytes)'
        )
        return path

    @staticmethod
    def load_from_file(
        path: str | Path | None = None,
        *,
        format: DocFormats | None = None,
        log: Logger = log
    ) -> Database:
        '''
        Load a database saved with `save_to_file`, a path with no file
        behind it gives back an empty database.

        '''
        path = Path(path) if path else get_database_path()
        meta = read_doc(path, DatabaseMeta, format=format)
        if meta is None:
            log.info(f'no database at {path}, starting empty')
            return Database(log=log)

        if meta.version > FORMAT_VERSION:
            raise DeserializationError(
                path,
                f'document version {meta.version} is newer than supported '
                f'version {FORMAT_VERSION}'
            )

        try:
            db = Database.from_like(meta, log=log)

        except DuplicateNameError as e:
            raise DeserializationError(path, str(e)) from e

        log.info(f'loaded {len(db.tables)} tables from {path}')
        return db
