from __future__ import annotations

from typing import Any, Iterable, Mapping

from tabular_db.dtypes import DataType, Value, value_of
from tabular_db.schema import Field
from tabular_db.structs import Struct


class Row(Struct):
    '''
    Field name -> value mapping, only meaningful next to the field list of
    the table holding it. A name missing from `values` is a missing value,
    which is not the same as an explicit `NullValue`.

    '''
    values: dict[str, Value] = {}

    @staticmethod
    def from_native(
        values: Mapping[str, Any],
        fields: Iterable[Field] = (),
    ) -> Row:
        types: dict[str, DataType] = {f.name: f.type for f in fields}
        return Row(
            {name: value_of(v, types.get(name)) for name, v in values.items()}
        )

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: str) -> Value | None:
        return self.values.get(name)

    def set(self, name: str, value: Any, dtype: DataType | None = None) -> None:
        self.values[name] = value_of(value, dtype)

    def copy(self) -> Row:
        # values are frozen, a shallow dict copy is enough
        return Row(dict(self.values))

    def to_python(self) -> dict[str, Any]:
        return {name: v.to_python() for name, v in self.values.items()}


RowLike = Row | Mapping[str, Any]
