'''
Misc internal utilities

'''
import os
from pathlib import Path


default_datadir: Path = Path.home() / '.tabulardb'

default_database_name: str = 'database.json'


def get_root_datadir() -> Path:
    return Path(os.getenv('TABULAR_DB_DATADIR', default_datadir))


def get_database_path() -> Path:
    '''
    Database file used when persisting without an explicit path,
    `TABULAR_DB_PATH` wins over `<datadir>/database.json`.

    '''
    if path := os.getenv('TABULAR_DB_PATH'):
        return Path(path)

    return get_root_datadir() / default_database_name


def get_log_level() -> str:
    return os.getenv('TABULAR_DB_LOGLEVEL', 'info')
