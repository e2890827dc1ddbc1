import logging
import time
from typing import IO, Iterable

from colorlog import ColoredFormatter

from tabular_db._utils import get_log_level


log_colors: dict[str, str] = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'bold_red',
}


class UTCColoredFormatter(ColoredFormatter):
    '''
    ColoredFormatter with ISO8601 UTC timestamps and a trailing 'Z'.

    '''
    converter = time.gmtime

    def formatTime(self, record, datefmt=None):
        if datefmt:
            return super().formatTime(record, datefmt)

        t = time.strftime('%Y-%m-%dT%H:%M:%S', self.converter(record.created))
        return f'{t}.{int(record.msecs):03d}Z'


def setup_logging(
    loglevel: str | None = None,
    silence: Iterable[str] = (),
    stream: IO[str] | None = None,
) -> logging.Handler:
    '''
    Install a single colored stream handler on the root logger, level
    defaults to `TABULAR_DB_LOGLEVEL` or info.

    '''
    for noisy in silence:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        UTCColoredFormatter(
            '%(asctime)s %(log_color)s%(levelname)s%(reset)s %(name)s: %(message)s',
            log_colors=log_colors,
        )
    )

    root = logging.getLogger()

    # calling twice must not duplicate output
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel((loglevel or get_log_level()).upper())
    return handler
