from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Optional, TextIO

_LEVEL_TAGS = {
    logging.DEBUG: ("DEBUG", ""),
    logging.INFO: ("INFO", "\033[0;32m"),
    logging.WARNING: ("WARN", "\033[1;33m"),
    logging.ERROR: ("ERROR", "\033[0;31m"),
    logging.CRITICAL: ("ERROR", "\033[0;31m"),
}
_RESET = "\033[0m"


class LevelTagFormatter(logging.Formatter):
    """Console format: `[INFO] message`, tag colored when color=True."""

    def __init__(self, *, color: bool) -> None:
        super().__init__("%(message)s")
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        tag, code = _LEVEL_TAGS.get(record.levelno, (record.levelname, ""))
        if self.color and code:
            tag = f"{code}[{tag}]{_RESET}"
        else:
            tag = f"[{tag}]"
        return f"{tag} {super().format(record)}"


def _stream_is_tty(stream: TextIO) -> bool:
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def configure_logging(
    log_path: Optional[str] = None,
    level: int = logging.INFO,
    also_console: bool = True,
    color: Optional[bool] = None,
) -> Optional[str]:
    """Configure logging for a bootstrap run.

    - Console output is leveled ([INFO]/[WARN]/[ERROR]); color defaults to
      "only when stderr is a TTY".
    - log_path, when given, also records everything to a file. If the
      requested location is not writable we fall back to a file in the
      working directory and keep going.

    Returns the actual file path being used (None when console-only).
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_renv_bootstrap_configured", False):
        return getattr(logger, "_renv_bootstrap_log_path", log_path)

    chosen_path: Optional[str] = None
    handlers: list[logging.Handler] = []

    if log_path:
        fmt = logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S%z",
        )
        try:
            Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
            file_handler: logging.Handler = logging.FileHandler(log_path)
            chosen_path = log_path
        except OSError:
            fallback = str(Path.cwd() / "renv-bootstrap.log")
            file_handler = logging.FileHandler(fallback)
            chosen_path = fallback
        file_handler.setFormatter(fmt)
        file_handler.setLevel(logging.DEBUG)
        handlers.append(file_handler)

    if also_console:
        stream = sys.stderr
        console = logging.StreamHandler(stream)
        console.setFormatter(LevelTagFormatter(color=_stream_is_tty(stream) if color is None else color))
        console.setLevel(level)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)
    if chosen_path:
        # The file gets the full command output even when the console is at INFO.
        logger.setLevel(logging.DEBUG)

    setattr(logger, "_renv_bootstrap_configured", True)
    setattr(logger, "_renv_bootstrap_log_path", chosen_path)

    logging.getLogger(__name__).debug("Logging initialized (requested=%s, actual=%s)", log_path, chosen_path)
    return chosen_path
