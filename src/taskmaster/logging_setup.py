# src/taskmaster/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

# Console thresholds per logger prefix; anything unlisted needs ERROR.
# uvicorn.access is additionally gated by its logger level (see cli.main).
_CONSOLE_THRESHOLDS = (
    ("taskmaster", logging.NOTSET),
    ("uvicorn", logging.INFO),
)


class _ConsoleNoiseFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        for prefix, threshold in _CONSOLE_THRESHOLDS:
            if record.name == prefix or record.name.startswith(prefix + "."):
                return record.levelno >= threshold
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskmaster",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Replace root handlers with a filtered stderr handler and a full log file
    (<log_dir>/taskmaster.log). Returns the log file path.
    """
    log_file = Path(log_dir) / "taskmaster.log"
    log_file.parent.mkdir(parents=True, exist_ok=True)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    for h in (console, file_handler):
        h.setFormatter(fmt)
        root.addHandler(h)
    root.setLevel(logging.DEBUG)

    # warnings.warn(...) -> 'py.warnings' logger
    logging.captureWarnings(True)

    return log_file
