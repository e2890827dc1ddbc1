from __future__ import annotations

from typing import Iterable, Iterator

import polars as pl

from tabular_db.dtypes import DataType, dtype_polars_map
from tabular_db.errors import SchemaMismatchError
from tabular_db.structs import FrozenStruct


class Field(FrozenStruct, frozen=True):
    name: str
    type: DataType

    @staticmethod
    def from_like(f: FieldLike) -> Field:
        match f:
            case Field():
                return f

            case dict():
                return Field.convert(f)

            case (name, typ):
                return Field.convert({'name': name, 'type': typ})

        raise TypeError(f'Cannot build a field from {f!r}')


FieldLike = tuple[str, DataType] | dict | Field


class Schema:
    '''
    Ordered field list of a table, order is part of the structure: two
    schemas with the same fields in a different order are not compatible.

    '''
    def __init__(self, fields: Iterable[FieldLike]) -> None:
        self._fields: tuple[Field, ...] = tuple(
            Field.from_like(f) for f in fields
        )

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields)

    def __getitem__(self, i: int) -> Field:
        return self._fields[i]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schema):
            return NotImplemented

        return self._fields == other._fields

    def __hash__(self) -> int:
        return hash(self._fields)

    @property
    def fields(self) -> tuple[Field, ...]:
        return self._fields

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self._fields)

    def first_mismatch(self, other: Schema) -> int | None:
        '''
        Index of the first position, over the common prefix, where field name
        or type differ.

        '''
        for i, (a, b) in enumerate(zip(self._fields, other._fields)):
            if a.name != b.name or a.type != b.type:
                return i

        return None

    def same_structure(self, other: Schema) -> bool:
        return (
            len(self) == len(other)
            and self.first_mismatch(other) is None
        )

    def ensure_compatible(self, other: Schema) -> None:
        if len(self) != len(other):
            raise SchemaMismatchError(
                f'Tables have a different number of fields: '
                f'{len(self)} != {len(other)}'
            )

        i = self.first_mismatch(other)
        if i is not None:
            a, b = self._fields[i], other._fields[i]
            raise SchemaMismatchError(
                f'Fields at index {i} differ by name or type: '
                f'{a.name}: {a.type} != {b.name}: {b.type}',
                index=i,
            )

    def as_polars(self) -> pl.Schema:
        return pl.Schema(
            (f.name, dtype_polars_map[f.type]) for f in self._fields
        )

    def pretty_str(self) -> str:
        '''Return a human-readable representation of the schema.'''
        lines = ['Schema:']
        for f in self._fields:
            lines.append(f'  - {f.name}: {f.type}')
        return '\n'.join(lines)
