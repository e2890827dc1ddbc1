'''
Type aware row equality and the row set difference built on top of it.

Comparison never raises: missing values, values of the wrong kind for their
field and unparsable interval text all compare as "not equal".

'''
from __future__ import annotations

from datetime import datetime
import logging
from typing import Iterable, Iterator, Sequence

from tabular_db.dtypes import (
    DateValue,
    IntervalValue,
    NullValue,
    StringValue,
    Value,
    interval_bounds,
)
from tabular_db.schema import Field
from tabular_db.table import Row


log = logging.getLogger(__name__)


def dates_equal(a: Value, b: Value) -> bool:
    match a, b:
        case DateValue(value=x), DateValue(value=y):
            return x.date() == y.date()

    return False


def _bounds(v: Value) -> tuple[datetime, datetime] | None:
    match v:
        case IntervalValue():
            return v.bounds()

        case StringValue(value=text):
            return interval_bounds(text)

    return None


def intervals_equal(a: Value, b: Value) -> bool:
    bounds_a = _bounds(a)
    bounds_b = _bounds(b)
    if bounds_a is None or bounds_b is None:
        return False

    (start_a, end_a), (start_b, end_b) = bounds_a, bounds_b
    return (
        start_a.date() == start_b.date()
        and end_a.date() == end_b.date()
    )


def values_equal(field: Field, a: Value, b: Value) -> bool:
    '''
    Compare two present values stored under `field`.

    '''
    null_a = isinstance(a, NullValue)
    null_b = isinstance(b, NullValue)
    if null_a or null_b:
        return null_a and null_b

    match field.type:
        case 'date':
            return dates_equal(a, b)

        case 'date_interval':
            return intervals_equal(a, b)

    # exact match, value kinds included
    return a == b


class RowComparer:
    '''
    Decides whether two rows are the same under an ordered field list, only
    the listed fields are looked at, extra row values are ignored.

    '''

    def __init__(self, fields: Iterable[Field]) -> None:
        self.fields: tuple[Field, ...] = tuple(fields)

    def __call__(self, a: Row, b: Row) -> bool:
        return self.equal(a, b)

    def equal(self, a: Row, b: Row) -> bool:
        for field in self.fields:
            # missing is never equal, not even to another missing
            va = a.get(field.name)
            vb = b.get(field.name)
            if va is None or vb is None:
                return False

            if not values_equal(field, va, vb):
                return False

        return True

    def contains(self, rows: Iterable[Row], row: Row) -> bool:
        return any(self.equal(row, other) for other in rows)


def rows_difference(
    rows: Iterable[Row],
    others: Sequence[Row],
    fields: Iterable[Field],
) -> Iterator[Row]:
    '''
    Yield every row in `rows` that has no equal row in `others`, duplicates
    in `rows` are all kept.

    '''
    cmp = RowComparer(fields)
    for row in rows:
        if not cmp.contains(others, row):
            yield row
