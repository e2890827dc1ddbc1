from __future__ import annotations

from typing import Any, Iterable, Iterator

import polars as pl

from tabular_db.dtypes import DataType, dtype_from_polars
from tabular_db.schema import Field, FieldLike, Schema
from tabular_db.structs import FrozenStruct
from tabular_db.table.row import Row as Row, RowLike as RowLike


class TableMeta(FrozenStruct, frozen=True):
    name: str
    fields: list[Field] = []
    rows: list[Row] = []


class Table:
    '''
    Named, ordered field list plus the rows stored under it. Row identity is
    positional and rows are not checked against the fields on insertion.

    '''
    def __init__(
        self,
        name: str,
        fields: Iterable[FieldLike] = (),
        rows: Iterable[RowLike] = (),
    ) -> None:
        self.name = name
        self.fields: list[Field] = [Field.from_like(f) for f in fields]
        self.rows: list[Row] = []
        for row in rows:
            self.add_row(row)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Table):
            return NotImplemented

        return (
            self.name == other.name
            and self.fields == other.fields
            and self.rows == other.rows
        )

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Row]:
        return iter(self.rows)

    def __repr__(self) -> str:
        return (
            f'Table(name={self.name!r}, fields={len(self.fields)}, '
            f'rows={len(self.rows)})'
        )

    @staticmethod
    def from_like(t: TableLike) -> Table:
        if isinstance(t, Table):
            return t

        if isinstance(t, dict):
            t = TableMeta.convert(t)

        return Table(t.name, t.fields, t.rows)

    @staticmethod
    def from_frame(name: str, frame: pl.DataFrame) -> Table:
        '''
        Build a table out of a polars frame, field types are inferred from
        the frame schema.

        '''
        table = Table(
            name,
            (
                (col, dtype_from_polars(dtype))
                for col, dtype in frame.schema.items()
            ),
        )
        for row in frame.iter_rows(named=True):
            table.add_row(row)

        return table

    @property
    def schema(self) -> Schema:
        return Schema(self.fields)

    def field(self, name: str) -> Field | None:
        return next((f for f in self.fields if f.name == name), None)

    def add_field(
        self,
        field: FieldLike | str,
        type: DataType | None = None,
    ) -> Field:
        if isinstance(field, str):
            if type is None:
                raise ValueError(f'Field {field!r} needs a type')

            field = (field, type)

        f = Field.from_like(field)
        self.fields.append(f)
        return f

    def add_row(self, row: RowLike) -> Row:
        if not isinstance(row, Row):
            row = Row.from_native(row, self.fields)

        self.rows.append(row)
        return row

    def remove_row(self, index: int) -> Row:
        if not -len(self.rows) <= index < len(self.rows):
            raise IndexError(
                f'Row index {index} out of range for table {self.name!r} '
                f'with {len(self.rows)} rows'
            )

        return self.rows.pop(index)

    def copy(self, name: str | None = None) -> Table:
        '''
        Helper for creating an independent copy of self, optionally under a
        new name.

        '''
        return Table(
            name or self.name,
            self.fields,
            (row.copy() for row in self.rows),
        )

    def as_polars(self) -> pl.Schema:
        return self.schema.as_polars()

    def to_frame(self) -> pl.DataFrame:
        '''
        Materialize rows as a polars frame, missing values end up as nulls,
        values that do not fit their column type too.

        '''
        data: dict[str, list[Any]] = {
            f.name: [
                v.to_python() if (v := row.get(f.name)) is not None else None
                for row in self.rows
            ]
            for f in self.fields
        }
        return pl.DataFrame(data, schema=self.as_polars(), strict=False)

    def pretty_str(self) -> str:
        '''Return a human-readable representation of the table.'''
        lines = [
            f'Table: {self.name}',
            f'Rows: {len(self.rows):,}',
            '',
            self.schema.pretty_str(),
        ]
        return '\n'.join(lines)

    def encode(self) -> TableMeta:
        return TableMeta(
            name=self.name,
            fields=list(self.fields),
            rows=list(self.rows),
        )


TableLike = dict | TableMeta | Table
