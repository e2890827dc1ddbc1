'''
Glossary:
    - Schema: the ordered (field name, type) pairs of a table.
    - Table: a named schema plus the rows stored under it.
    - Database: uniquely named tables, persisted as a single document.
    - Difference: the rows of a table A that match no row of a table B under
      type aware row equality, materialized as a new table.

'''

from .errors import (
    TabularDBError as TabularDBError,
    DuplicateNameError as DuplicateNameError,
    NotFoundError as NotFoundError,
    SchemaMismatchError as SchemaMismatchError,
    DeserializationError as DeserializationError,
)

from .dtypes import DataType as DataType, value_of as value_of

from .schema import Field as Field, Schema as Schema

from .table import Row as Row, Table as Table

from .compare import RowComparer as RowComparer

from .database import Database as Database
