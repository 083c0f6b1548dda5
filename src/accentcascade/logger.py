"""Rolling file logger with line-count rotation and ZIP archival."""

from __future__ import annotations

import logging
import os
import sys
import threading
import zipfile
from datetime import datetime
from pathlib import Path
from typing import Any, ClassVar

LOG_NAME = "accentcascade"
LOG_DIR = Path.home() / ".cache" / "accentcascade" / "logs"

MAX_LINES = 2000
BACKUP_COUNT = 5

# LogRecord attributes that are not caller-supplied context
RESERVED_ATTRS = frozenset({
    "name", "msg", "args", "created", "filename", "funcName", "levelname",
    "levelno", "lineno", "module", "msecs", "pathname", "process",
    "processName", "relativeCreated", "stack_info", "exc_info", "exc_text",
    "thread", "threadName", "taskName", "message",
})


class CompactFormatter(logging.Formatter):
    """Format entries as: yyMMdd-HHMMSS.mmm L PPPP TTTT module__ message [key=value...]"""

    LEVEL_MAP: ClassVar[dict[str, str]] = {
        "ERROR": "E",
        "WARNING": "W",
        "INFO": "I",
        "DEBUG": "D",
    }

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created).strftime("%y%m%d-%H%M%S")
        stamp += f".{int(record.msecs):03d}"
        level = self.LEVEL_MAP.get(record.levelname, "?")
        pid = f"{os.getpid() & 0xFFFF:04X}"
        tid = f"{(threading.current_thread().ident or 0) & 0xFFFF:04X}"
        module = record.module[:8].ljust(8)

        line = f"{stamp} {level} {pid} {tid} {module} {record.getMessage()}"

        context = [
            f"{key}={value!r}" if isinstance(value, str) and " " in value else f"{key}={value}"
            for key, value in record.__dict__.items()
            if key not in RESERVED_ATTRS and not key.startswith("_")
        ]
        if context:
            line += " " + " ".join(context)
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


class LineCountHandler(logging.FileHandler):
    """File handler that rotates after ``max_lines`` records.

    Backups are numbered ``<name>.1.log`` (newest) to ``<name>.<backup_count>.log``.
    When the window is full the backups are zipped into ``archive/`` first.
    """

    def __init__(
        self,
        log_dir: Path,
        max_lines: int = MAX_LINES,
        backup_count: int = BACKUP_COUNT,
    ) -> None:
        self.log_dir = log_dir
        self.archive_dir = log_dir / "archive"
        self.max_lines = max_lines
        self.backup_count = backup_count

        self.log_dir.mkdir(parents=True, exist_ok=True)
        self.archive_dir.mkdir(parents=True, exist_ok=True)

        self.current_path = log_dir / f"{LOG_NAME}.log"
        self.line_count = self._count_lines(self.current_path)

        super().__init__(self.current_path, mode="a", encoding="utf-8")

    @staticmethod
    def _count_lines(path: Path) -> int:
        if not path.exists():
            return 0
        with open(path, "rb") as f:
            return sum(1 for _ in f)

    def _backup_path(self, index: int) -> Path:
        return self.log_dir / f"{LOG_NAME}.{index}.log"

    def emit(self, record: logging.LogRecord) -> None:
        super().emit(record)
        self.flush()
        self.line_count += 1
        if self.line_count >= self.max_lines:
            self._rotate()

    def _rotate(self) -> None:
        self.close()

        if self._backup_path(self.backup_count).exists():
            self._archive()

        for index in range(self.backup_count - 1, 0, -1):
            source = self._backup_path(index)
            if source.exists():
                source.rename(self._backup_path(index + 1))

        if self.current_path.exists():
            self.current_path.rename(self._backup_path(1))

        self.line_count = 0
        self.stream = self._open()

    def _archive(self) -> None:
        stamp = datetime.now().strftime("%y%m%d-%H%M%S")
        zip_path = self.archive_dir / f"{LOG_NAME}-{stamp}.zip"
        backups = [self._backup_path(i) for i in range(1, self.backup_count + 1)]

        try:
            with zipfile.ZipFile(zip_path, "w", zipfile.ZIP_DEFLATED) as zf:
                for backup in backups:
                    if backup.exists():
                        zf.write(backup, backup.name)
            # Backups are removed only once the archive is complete
            for backup in backups:
                if backup.exists():
                    backup.unlink()
        except OSError as e:
            print(f"Log archive failed: {e}", file=sys.stderr)


class AppLogger:
    """Wrapper around logging.Logger that takes keyword context."""

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._logger.debug(msg, extra=kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._logger.info(msg, extra=kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        self._logger.warning(msg, extra=kwargs)

    def error(self, msg: str, **kwargs: Any) -> None:
        self._logger.error(msg, extra=kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        self._logger.exception(msg, extra=kwargs)


_logger: AppLogger | None = None


def setup_logger(level: int = logging.INFO, log_dir: Path | None = None) -> AppLogger:
    """Create and configure the application logger.

    Returns the same instance on repeated calls.
    """
    global _logger

    if _logger is not None:
        return _logger

    base_logger = logging.getLogger(LOG_NAME)
    base_logger.setLevel(level)
    base_logger.propagate = False

    if not base_logger.handlers:
        handler = LineCountHandler(log_dir or LOG_DIR)
        handler.setFormatter(CompactFormatter())
        base_logger.addHandler(handler)

    _logger = AppLogger(base_logger)
    return _logger


def get_logger() -> AppLogger:
    """Get the configured logger, setting it up if needed."""
    if _logger is None:
        return setup_logger()
    return _logger


def reset_logger() -> None:
    """Detach handlers so the next ``setup_logger`` starts fresh."""
    global _logger
    base_logger = logging.getLogger(LOG_NAME)
    for handler in list(base_logger.handlers):
        handler.close()
        base_logger.removeHandler(handler)
    _logger = None
