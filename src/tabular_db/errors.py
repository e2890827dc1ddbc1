'''
Error hierarchy, every error raised by the store derives from
`TabularDBError`.

'''
from __future__ import annotations

from pathlib import Path
from typing import Sequence


class TabularDBError(Exception): ...


class DuplicateNameError(TabularDBError, ValueError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f'A table named {name!r} already exists')


class NotFoundError(TabularDBError, LookupError):
    def __init__(self, names: str | Sequence[str], msg: str | None = None) -> None:
        self.names: tuple[str, ...] = (
            (names,) if isinstance(names, str) else tuple(names)
        )
        if not msg:
            msg = f'Table {self.names[0]!r} not found'

        super().__init__(msg)


class SchemaMismatchError(TabularDBError, ValueError):
    '''
    Two schemas are not structurally equal, `index` points at the first
    offending field position or is None when the field counts differ.

    '''
    def __init__(self, msg: str, index: int | None = None) -> None:
        self.index = index
        super().__init__(msg)


class DeserializationError(TabularDBError, ValueError):
    def __init__(self, path: str | Path | None, reason: str) -> None:
        self.path = Path(path) if path else None
        where = f' from {self.path}' if self.path else ''
        super().__init__(f'Could not load database{where}: {reason}')
