import polars as pl
import pytest

from tabular_db.errors import SchemaMismatchError
from tabular_db.schema import Field, Schema


def test_field_from_like():
    f = Field('Name', 'string')
    assert Field.from_like(f) is f
    assert Field.from_like(('Name', 'string')) == f
    assert Field.from_like({'name': 'Name', 'type': 'string'}) == f

    with pytest.raises(TypeError):
        Field.from_like('Name')


def test_schema_compatible():
    a = Schema((('Name', 'string'), ('HireDate', 'date')))
    b = Schema([Field('Name', 'string'), Field('HireDate', 'date')])

    assert a == b
    assert a.same_structure(b)
    assert a.first_mismatch(b) is None
    a.ensure_compatible(b)


def test_schema_field_count_mismatch():
    a = Schema((('Name', 'string'), ('HireDate', 'date')))
    b = Schema((('Name', 'string'),))

    assert not a.same_structure(b)
    with pytest.raises(SchemaMismatchError) as e:
        a.ensure_compatible(b)

    assert e.value.index is None


def test_schema_order_matters():
    a = Schema((('Name', 'string'), ('HireDate', 'date')))
    b = Schema((('HireDate', 'date'), ('Name', 'string')))

    assert not a.same_structure(b)
    with pytest.raises(SchemaMismatchError) as e:
        a.ensure_compatible(b)

    assert e.value.index == 0


def test_schema_type_mismatch_names_index():
    a = Schema((('Name', 'string'), ('HireDate', 'date')))
    b = Schema((('Name', 'string'), ('HireDate', 'string')))

    with pytest.raises(SchemaMismatchError, match='index 1') as e:
        a.ensure_compatible(b)

    assert e.value.index == 1


def test_schema_as_polars():
    s = Schema((
        ('Name', 'string'),
        ('Age', 'integer'),
        ('HireDate', 'date'),
        ('Stay', 'date_interval'),
    ))
    assert s.as_polars() == pl.Schema({
        'Name': pl.String,
        'Age': pl.Int64,
        'HireDate': pl.Datetime(time_unit='us'),
        'Stay': pl.String,
    })
    assert s.names == ('Name', 'Age', 'HireDate', 'Stay')
    assert '  - Stay: date_interval' in s.pretty_str()
