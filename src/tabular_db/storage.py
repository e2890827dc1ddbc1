'''
Whole file document persistence.

Documents are any `msgspec` struct of ours, written as indented json or as
msgpack depending on the target suffix. Writes replace the whole file in
place, there is no journaling.

'''
import logging
from pathlib import Path
from typing import Literal, TypeVar

import msgspec

from tabular_db.errors import DeserializationError
from tabular_db.structs import _Struct


log = logging.getLogger(__name__)


DocFormats = Literal['json', 'msgpack']

T = TypeVar('T', bound=_Struct)


def format_from_path(path: str | Path) -> DocFormats:
    '''
    Given a file path figure out its format from the suffix, anything that
    is not msgpack is json.

    '''
    match Path(path).suffix.lower():
        case '.msgpack' | '.mpk':
            return 'msgpack'

        case _:
            return 'json'


def write_doc(
    doc: _Struct,
    path: str | Path,
    *,
    format: DocFormats | None = None,
) -> int:
    '''
    Serialize `doc` to `path`, creating parent directories as needed,
    returns the amount of bytes written.

    '''
    path = Path(path)
    if not format:
        format = format_from_path(path)

    raw: bytes
    match format:
        case 'json':
            raw = doc.to_json().encode('utf-8')

        case 'msgpack':
            raw = doc.encode()

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(raw)
    log.debug(f'wrote {len(raw):,} bytes of {format} to {path}')
    return len(raw)


def read_doc(
    path: str | Path,
    type: type[T],
    *,
    format: DocFormats | None = None,
) -> T | None:
    '''
    Decode the document at `path` into `type`, None if there is no file
    there. Content that does not decode into `type` raises
    `DeserializationError`.

    '''
    path = Path(path)
    if not path.is_file():
        return None

    if not format:
        format = format_from_path(path)

    raw = path.read_bytes()
    try:
        match format:
            case 'json':
                return type.from_json(raw)

            case 'msgpack':
                return type.from_bytes(raw)

    except msgspec.DecodeError as e:
        raise DeserializationError(path, str(e)) from e
