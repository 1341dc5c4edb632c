"""
Logging for the API server and the seeding script.

Both entry points call ``setup_logging`` with the ``LOG_LEVEL`` and
``LOG_FILE`` settings.  Every request is already logged by the API's
middleware, so uvicorn's own access log is limited to warnings.
"""

import logging
from pathlib import Path
from typing import Optional

from config import LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_HANDLER_NAME = "portfolio"


def _level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level: str = LOG_LEVEL, logfile: Optional[str] = LOG_FILE) -> None:
    """Attach console (and optional file) handlers to the root logger.

    Repeated calls only update the level.
    """
    root = logging.getLogger()
    root.setLevel(_level(level))
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
        return

    handlers = [logging.StreamHandler()]
    if logfile:
        path = Path(logfile).resolve()
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(formatter)
        root.addHandler(handler)
