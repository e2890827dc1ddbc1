from datetime import datetime

import polars as pl
import pytest

from tabular_db._testing import bookings_table, employees_2023
from tabular_db.dtypes import DateValue, IntervalValue, NullValue, StringValue
from tabular_db.schema import Field
from tabular_db.table import Row, Table, TableMeta


def test_definitions():
    table = employees_2023()
    print(table.pretty_str())

    assert table.schema.names == ('Name', 'HireDate')
    assert len(table) == 2
    assert table.field('HireDate') == Field('HireDate', 'date')
    assert table.field('Salary') is None
    assert [r.to_python()['Name'] for r in table] == ['Ann', 'Bob']


def test_add_field_and_row():
    table = Table('stays')
    table.add_field('Guest', 'string')
    table.add_field(Field('Stay', 'date_interval'))
    table.add_field(('Arrival', 'date'))

    with pytest.raises(ValueError):
        table.add_field('Nights')

    row = table.add_row({
        'Guest': 'Ann',
        'Stay': '2024-01-01 - 2024-01-05',
        'Arrival': datetime(2024, 1, 1, 15),
    })
    assert row.values == {
        'Guest': StringValue('Ann'),
        'Stay': IntervalValue('2024-01-01 - 2024-01-05'),
        'Arrival': DateValue(datetime(2024, 1, 1, 15)),
    }

    # rows are not checked against the fields
    odd = table.add_row({'Unknown': 1})
    assert 'Guest' not in odd
    assert len(table) == 2


def test_row_missing_vs_null():
    row = Row.from_native({'Name': None})
    assert 'Name' in row
    assert row.get('Name') == NullValue()
    assert row.get('HireDate') is None

    row.set('HireDate', datetime(2024, 1, 1))
    assert row.get('HireDate') == DateValue(datetime(2024, 1, 1))


def test_remove_row():
    table = employees_2023()
    removed = table.remove_row(0)

    assert removed.to_python()['Name'] == 'Ann'
    assert [r.to_python()['Name'] for r in table] == ['Bob']

    with pytest.raises(IndexError):
        table.remove_row(5)


def test_copy_is_independent():
    table = employees_2023()
    other = table.copy(name='copy')

    assert other.name == 'copy'
    assert other.fields == table.fields
    assert other.rows == table.rows

    other.rows[0].set('Name', 'Zed')
    other.add_field('Extra', 'string')
    assert table.rows[0].to_python()['Name'] == 'Ann'
    assert len(table.fields) == 2


def test_from_like():
    table = employees_2023()
    assert Table.from_like(table) is table

    meta = table.encode()
    assert isinstance(meta, TableMeta)
    assert Table.from_like(meta) == table
    assert Table.from_like(meta.to_dict()) == table


def test_to_frame():
    table = bookings_table()
    table.add_row({'Guest': 'Mal'})

    frame = table.to_frame()

    assert frame.schema == table.as_polars()
    assert frame.height == 4
    assert frame['Guest'].to_list() == ['Ann', 'Bob', 'Eve', 'Mal']
    assert frame['Price'].to_list() == [420.5, 180.0, None, None]
    assert frame['Stay'][0] == '2024-01-01 - 2024-01-05'


def test_frame_round_trip():
    table = employees_2023()
    frame = table.to_frame()

    assert frame.schema['HireDate'] == pl.Datetime(time_unit='us')
    assert Table.from_frame(table.name, frame) == table


def test_from_frame_infers_fields():
    frame = pl.DataFrame({
        'id': [1, 2],
        'score': [0.5, None],
        'active': [True, False],
        'day': [datetime(2024, 1, 1).date(), None],
    })
    table = Table.from_frame('scores', frame)

    assert [(f.name, f.type) for f in table.fields] == [
        ('id', 'integer'),
        ('score', 'float'),
        ('active', 'boolean'),
        ('day', 'date'),
    ]
    assert table.rows[0].get('day') == DateValue(datetime(2024, 1, 1))
    assert table.rows[1].get('score') == NullValue()


def test_from_frame_all_null_column():
    frame = pl.DataFrame({'id': [1, 2], 'note': [None, None]})
    table = Table.from_frame('notes', frame)

    assert table.field('note') == Field('note', 'string')
    assert [r.get('note') for r in table] == [NullValue(), NullValue()]
