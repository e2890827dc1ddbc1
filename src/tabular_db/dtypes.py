'''
# Overview

Field types and the values rows carry for them.

# DataType

A closed set of string tags, a field declares one of:

    - string
    - integer
    - float
    - boolean
    - date
    - date_interval

# Values

Row values are a closed tagged union of frozen `msgspec.Struct`s, one variant
per kind of value plus `NullValue`. Encoded documents carry the variant under
a `kind` key:

    {"kind": "date", "value": "2023-01-10T00:00:00"}

`DateValue` always wraps a `datetime`, plain dates are promoted to midnight.

`FloatValue` only holds finite numbers, nan & inf are rejected on creation.

`IntervalValue` keeps the raw `"<start> - <end>"` text it was created with,
endpoints are only parsed when needed (see `IntervalValue.bounds`), malformed
text is stored as is.

'''
from __future__ import annotations

from datetime import date, datetime, time
import math
from typing import Any, Literal

import polars as pl
from polars._typing import PolarsDataType

from tabular_db.structs import FrozenStruct


DataType = Literal[
    'string',
    'integer',
    'float',
    'boolean',
    'date',
    'date_interval',
]

# polars types used when materializing tables as frames
dtype_polars_map: dict[DataType, PolarsDataType] = {
    'string': pl.String,
    'integer': pl.Int64,
    'float': pl.Float64,
    'boolean': pl.Boolean,
    'date': pl.Datetime(time_unit='us'),
    'date_interval': pl.String,
}


def dtype_from_polars(dtype: PolarsDataType) -> DataType:
    '''
    Given a polars frame column type figure out the closest field type.

    '''
    if dtype.is_integer():
        return 'integer'

    if dtype.is_float():
        return 'float'

    if dtype == pl.Date or dtype == pl.Datetime:
        return 'date'

    if dtype == pl.Boolean:
        return 'boolean'

    # all null columns carry no type, fall back to plain text
    if dtype == pl.String or dtype == pl.Null:
        return 'string'

    raise TypeError(f'No field type for polars type {dtype}')


# interval endpoints are joined by this exact literal
INTERVAL_SEPARATOR = ' - '

# accepted after iso 8601 failed, first match wins
fallback_datetime_formats: tuple[str, ...] = (
    '%d.%m.%Y',
    '%d.%m.%Y %H:%M',
    '%d.%m.%Y %H:%M:%S',
    '%d/%m/%Y',
    '%d/%m/%Y %H:%M:%S',
    '%m/%d/%Y',
    '%m/%d/%Y %H:%M:%S',
)


def parse_datetime(text: str) -> datetime | None:
    '''
    Lenient date/time parsing, returns None instead of raising when `text`
    is not a date.

    '''
    text = text.strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text)

    except ValueError:
        pass

    for fmt in fallback_datetime_formats:
        try:
            return datetime.strptime(text, fmt)

        except ValueError:
            continue

    return None


class StringValue(FrozenStruct, frozen=True, tag_field='kind', tag='string'):
    value: str

    def to_python(self) -> str:
        return self.value


class IntegerValue(FrozenStruct, frozen=True, tag_field='kind', tag='integer'):
    value: int

    def to_python(self) -> int:
        return self.value


class FloatValue(FrozenStruct, frozen=True, tag_field='kind', tag='float'):
    value: float

    def __post_init__(self) -> None:
        # json has no nan / inf, they would not survive a save & load
        if not math.isfinite(self.value):
            raise ValueError(f'Float values must be finite, got {self.value}')

    def to_python(self) -> float:
        return self.value


class BooleanValue(FrozenStruct, frozen=True, tag_field='kind', tag='boolean'):
    value: bool

    def to_python(self) -> bool:
        return self.value


class DateValue(FrozenStruct, frozen=True, tag_field='kind', tag='date'):
    value: datetime

    def to_python(self) -> datetime:
        return self.value


class IntervalValue(FrozenStruct, frozen=True, tag_field='kind', tag='interval'):
    value: str

    @staticmethod
    def from_bounds(start: date, end: date) -> IntervalValue:
        return IntervalValue(
            f'{start.isoformat()}{INTERVAL_SEPARATOR}{end.isoformat()}'
        )

    def bounds(self) -> tuple[datetime, datetime] | None:
        return interval_bounds(self.value)

    def to_python(self) -> str:
        return self.value


class NullValue(FrozenStruct, frozen=True, tag_field='kind', tag='null'):

    def to_python(self) -> None:
        return None


Value = (
    StringValue
    | IntegerValue
    | FloatValue
    | BooleanValue
    | DateValue
    | IntervalValue
    | NullValue
)

value_types: tuple[type, ...] = (
    StringValue,
    IntegerValue,
    FloatValue,
    BooleanValue,
    DateValue,
    IntervalValue,
    NullValue,
)


def interval_bounds(text: str) -> tuple[datetime, datetime] | None:
    '''
    Split `"<start> - <end>"` text and parse both endpoints, None if the
    separator is not present exactly once or either side is not a date.

    '''
    parts = text.split(INTERVAL_SEPARATOR)
    if len(parts) != 2:
        return None

    start = parse_datetime(parts[0])
    end = parse_datetime(parts[1])
    if start is None or end is None:
        return None

    return start, end


def value_of(obj: Any, dtype: DataType | None = None) -> Value:
    '''
    Tag a native python value, `dtype` is the declared type of the field it
    is stored under and only decides between string & interval text, and
    whether a (start, end) pair is an interval.

    '''
    if isinstance(obj, value_types):
        return obj

    match obj:
        case None:
            return NullValue()

        # bool before int, bool is an int subclass
        case bool():
            return BooleanValue(obj)

        case int():
            return IntegerValue(obj)

        case float():
            return FloatValue(obj)

        case datetime():
            return DateValue(obj)

        case date():
            return DateValue(datetime.combine(obj, time()))

        case str() if dtype == 'date_interval':
            return IntervalValue(obj)

        case str():
            return StringValue(obj)

        case (date() as start, date() as end) if dtype == 'date_interval':
            return IntervalValue.from_bounds(start, end)

    raise TypeError(
        f'Cannot store value of type {type(obj).__name__} in a row: {obj!r}'
    )
