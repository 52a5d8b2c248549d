"""
Logging configuration for the service.

``setup_logging`` attaches a console handler (and optionally a file
handler) to the root logger the first time it is called.  Every module
then logs through ``logging.getLogger(__name__)`` so records carry the
dotted module path, e.g. ``wazaifi_api.app.services.user_service``.
"""

import logging
from pathlib import Path
from typing import Iterable, Optional

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Chatty third-party loggers kept at WARNING unless running in debug mode.
NOISY_LOGGERS = ("uvicorn.access", "httpx", "asyncio")


def setup_logging(
    level: str = "INFO",
    logfile: Optional[str] = None,
    debug: bool = False,
    noisy: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """Configure the root logger once.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        Path of a UTF-8 log file.  Resolved against the current working
        directory; omitted means console only.
    debug : bool
        When true, third-party loggers listed in ``noisy`` keep the root
        level instead of being raised to ``WARNING``.
    """
    root = logging.getLogger()
    if root.handlers:
        return

    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root.addHandler(console_handler)

    if logfile:
        file_handler = logging.FileHandler(Path(logfile).resolve(), encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if not debug:
        for name in noisy:
            logging.getLogger(name).setLevel(logging.WARNING)
