from __future__ import annotations
import json, sys, time
from typing import Any

_LEVELS = {'DEBUG': 0, 'INFO': 1, 'WARN': 2, 'ERROR': 3}
_ALIASES = {'WARNING': 'WARN'}
_LOG_LEVEL = 'INFO'
_LOG_FORMAT = 'text'

def configure_logging(level: str = 'INFO', format: str = 'text'):
    global _LOG_LEVEL, _LOG_FORMAT
    lvl = level.upper()
    lvl = _ALIASES.get(lvl, lvl)
    if lvl not in _LEVELS:
        raise ValueError(f'Unknown log level: {level}')
    fmt = format.lower()
    if fmt not in ('json', 'text'):
        raise ValueError(f'Unknown log format: {format}')
    _LOG_LEVEL, _LOG_FORMAT = lvl, fmt

def _enabled(level: str) -> bool:
    return _LEVELS.get(level, 1) >= _LEVELS[_LOG_LEVEL]

def log(level: str, message: str, **fields: Any):
    lvl = level.upper()
    lvl = _ALIASES.get(lvl, lvl)
    if not _enabled(lvl):
        return
    ts = time.strftime('%Y-%m-%dT%H:%M:%SZ', time.gmtime())
    if _LOG_FORMAT == 'json':
        rec = {'ts': ts, 'level': lvl, 'msg': message}
        rec.update(fields)
        line = json.dumps(rec, sort_keys=True, default=str)
    else:
        extra = ' '.join(f'{k}={v}' for k, v in fields.items())
        line = f'{ts} [{lvl}] {message}' + (f' {extra}' if extra else '')
    # stdout carries the report itself
    print(line, file=sys.stderr)

def debug(message: str, **fields: Any): log('debug', message, **fields)

def info(message: str, **fields: Any): log('info', message, **fields)

def warn(message: str, **fields: Any): log('warn', message, **fields)

def error(message: str, **fields: Any): log('error', message, **fields)
