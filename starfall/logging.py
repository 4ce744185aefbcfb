"""
Starfall logging.

Two independent channels:

Console logging:
    Per-module loggers printing ``[module] LEVEL: message``. Levels come
    from the environment on import and can be changed at runtime.

        from starfall.logging import get_logger
        log = get_logger('invaders.spawner')
        log.debug("Meteor at x=%.1f", x)

Structured records:
    JSON-serialisable dicts routed to a sink registered per module
    (for example one record per finished game under 'session').

        from starfall.logging import emit_record
        emit_record('session', {'type': 'game_over', 'score': 1200})

Environment:
    STARFALL_LOG_LEVEL=DEBUG                  default console level
    STARFALL_LOG_<MODULE>=WARNING             level for one module
    STARFALL_LOG_DIR=/tmp/starfall            where FileSink writes
    STARFALL_LOGGING_<MODULE>_ENABLED=true    record sink for a module
    STARFALL_LOGGING_<MODULE>_DIR=...         per-module record directory
"""

import json
import os
import sys
import time
from abc import ABC, abstractmethod
from enum import IntEnum
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional, TextIO


LOG_PREFIX = 'STARFALL_LOG_'
SETTINGS_PREFIX = 'STARFALL_LOGGING_'


class LogLevel(IntEnum):
    """Console levels; numeric values line up with the stdlib's."""
    TRACE = 5
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    OFF = 100


_LEVEL_NAMES = {
    'TRACE': LogLevel.TRACE,
    'DEBUG': LogLevel.DEBUG,
    'INFO': LogLevel.INFO,
    'WARNING': LogLevel.WARNING,
    'WARN': LogLevel.WARNING,
    'ERROR': LogLevel.ERROR,
    'CRITICAL': LogLevel.CRITICAL,
    'OFF': LogLevel.OFF,
}

_config: Dict[str, Any] = {
    'default_level': LogLevel.INFO,
    'module_levels': {},   # logger key -> LogLevel
    'log_dir': None,       # None = platform data directory
    'modules': {},         # record module -> settings dict
}


def _level_from_string(name: str) -> LogLevel:
    """Unknown names fall back to INFO."""
    return _LEVEL_NAMES.get(name.upper(), LogLevel.INFO)


def _module_key(module: str) -> str:
    return module.lower().replace('.', '_').replace('/', '_')


# =============================================================================
# Record sinks
# =============================================================================

class LogSink(ABC):
    """Destination for structured records."""

    @abstractmethod
    def emit(self, module: str, record: Dict[str, Any]) -> None:
        """Write one record for a module."""
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    @abstractmethod
    def close(self) -> None:
        pass


class FileSink(LogSink):
    """
    Appends records as JSON Lines, one file per module.

    Files are named ``<session_name>_<module>.jsonl`` and opened on the
    first record. A header line is written on open and a footer on close.

    Args:
        log_dir: Target directory (default: get_log_dir())
        session_name: File name prefix (default: start timestamp)
    """

    def __init__(self, log_dir: Optional[str] = None, session_name: Optional[str] = None):
        self._log_dir = Path(log_dir) if log_dir else None
        self._session_name = session_name or time.strftime("%Y%m%d_%H%M%S")
        self._files: Dict[str, TextIO] = {}

    def path_for(self, module: str) -> Path:
        if self._log_dir is None:
            self._log_dir = Path(get_log_dir())
        return self._log_dir / f"{self._session_name}_{module}.jsonl"

    def _open(self, module: str) -> TextIO:
        path = self.path_for(module)
        path.parent.mkdir(parents=True, exist_ok=True)
        f = open(path, 'a')
        f.write(json.dumps({
            'type': 'header',
            'module': module,
            'session_name': self._session_name,
            'start_time': time.time(),
        }) + "\n")
        self._files[module] = f
        return f

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        f = self._files.get(module)
        if f is None:
            f = self._open(module)
        f.write(json.dumps({'wall_time': time.time(), **record}) + "\n")

    def flush(self) -> None:
        for f in self._files.values():
            f.flush()

    def close(self) -> None:
        for module, f in self._files.items():
            f.write(json.dumps({'type': 'footer', 'module': module, 'end_time': time.time()}) + "\n")
            f.close()
        self._files.clear()


class NullSink(LogSink):
    """Discards everything (module disabled)."""

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        pass

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass


_sinks: Dict[str, LogSink] = {}


def register_sink(module: str, sink: LogSink) -> None:
    """Route records for module to sink, replacing any previous sink."""
    _sinks[module] = sink


def emit_record(module: str, record: Dict[str, Any]) -> bool:
    """
    Send a record to the module's sink.

    Returns:
        True if a sink received it, False if none is registered
    """
    sink = _sinks.get(module)
    if sink is None:
        return False
    sink.emit(module, record)
    return True


def close_all_sinks() -> None:
    """Close and unregister every sink."""
    for sink in _sinks.values():
        sink.close()
    _sinks.clear()


def get_module_config(module: str) -> Dict[str, Any]:
    """Record settings for a module from STARFALL_LOGGING_<MODULE>_*."""
    return _config['modules'].get(module.lower(), {})


def create_sink_for_environment(module: str, session_name: Optional[str] = None) -> LogSink:
    """FileSink if the module's records are enabled, otherwise NullSink."""
    config = get_module_config(module)
    if not config.get('enabled', False):
        return NullSink()
    return FileSink(log_dir=config.get('dir'), session_name=session_name)


def get_log_dir() -> str:
    """STARFALL_LOG_DIR, or the per-user data directory for the platform."""
    if _config['log_dir']:
        return str(Path(_config['log_dir']).expanduser())

    if sys.platform == 'darwin':
        base = Path.home() / 'Library' / 'Application Support' / 'Starfall'
    elif sys.platform == 'win32':
        base = Path(os.environ.get('APPDATA', str(Path.home()))) / 'Starfall'
    else:
        base = Path(os.environ.get('XDG_DATA_HOME', str(Path.home() / '.local' / 'share'))) / 'starfall'
    return str(base / 'logs')


# =============================================================================
# Configuration
# =============================================================================

def _parse_env_value(value: str) -> Any:
    lower = value.lower()
    if lower in ('true', '1', 'yes', 'on'):
        return True
    if lower in ('false', '0', 'no', 'off'):
        return False
    for cast in (int, float):
        try:
            return cast(value)
        except ValueError:
            pass
    return value


def _load_env_config() -> None:
    env = os.environ
    if 'STARFALL_LOG_LEVEL' in env:
        _config['default_level'] = _level_from_string(env['STARFALL_LOG_LEVEL'])
    if 'STARFALL_LOG_DIR' in env:
        _config['log_dir'] = env['STARFALL_LOG_DIR']

    for key, value in env.items():
        if key.startswith(SETTINGS_PREFIX):
            module, _, setting = key[len(SETTINGS_PREFIX):].lower().partition('_')
            if module and setting:
                _config['modules'].setdefault(module, {})[setting] = _parse_env_value(value)
        elif key.startswith(LOG_PREFIX) and key not in ('STARFALL_LOG_LEVEL', 'STARFALL_LOG_DIR'):
            _config['module_levels'][key[len(LOG_PREFIX):].lower()] = _level_from_string(value)


def configure_logging(level: str = 'INFO', modules: Optional[Dict[str, str]] = None) -> None:
    """
    Set console levels at runtime.

    Args:
        level: Default level for every logger
        modules: Per-logger overrides, keyed like 'invaders_spawner'
    """
    _config['default_level'] = _level_from_string(level)
    for module, module_level in (modules or {}).items():
        _config['module_levels'][_module_key(module)] = _level_from_string(module_level)


_load_env_config()


# =============================================================================
# Console loggers
# =============================================================================

class StarfallLogger:
    """Console logger for one module. Accepts %-style args."""

    def __init__(self, module: str):
        self.module = module
        self._key = _module_key(module)

    @property
    def level(self) -> LogLevel:
        return _config['module_levels'].get(self._key, _config['default_level'])

    def _log(self, level: LogLevel, label: str, msg: str, *args) -> None:
        if level < self.level:
            return
        if args:
            try:
                msg = msg % args
            except (TypeError, ValueError):
                msg = f"{msg} {args}"
        print(f"[{self.module}] {label}: {msg}")

    def debug(self, msg: str, *args) -> None:
        self._log(LogLevel.DEBUG, 'DEBUG', msg, *args)

    def info(self, msg: str, *args) -> None:
        self._log(LogLevel.INFO, 'INFO', msg, *args)

    def warning(self, msg: str, *args) -> None:
        self._log(LogLevel.WARNING, 'WARN', msg, *args)

    def error(self, msg: str, *args) -> None:
        self._log(LogLevel.ERROR, 'ERROR', msg, *args)


@lru_cache(maxsize=64)
def get_logger(module: str) -> StarfallLogger:
    """Cached logger for a module name such as 'invaders.wave'."""
    return StarfallLogger(module)
