import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from stocker.config import Settings, get_settings

ROOT_LOGGER = "stocker_api"
MAX_BYTES = 10 * 1024 * 1024  # 10MB per file
BACKUP_COUNT = 5

_CONSOLE_FORMAT = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
_FILE_FORMAT = logging.Formatter(
    "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


def _rotating(path: Path, level: int) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(_FILE_FORMAT)
    return handler


def configure_logging(settings: Settings) -> logging.Logger:
    """Console + app.log + errors.log under LOG_DIR; DEBUG when APP_DEBUG."""
    logs_dir = Path(settings.LOG_DIR)
    logs_dir.mkdir(parents=True, exist_ok=True)
    level = logging.DEBUG if settings.APP_DEBUG else logging.INFO

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    # uvicorn --reload re-imports this module
    root.handlers.clear()

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(_CONSOLE_FORMAT)
    root.addHandler(console)
    root.addHandler(_rotating(logs_dir / "app.log", logging.INFO))
    root.addHandler(_rotating(logs_dir / "errors.log", logging.ERROR))
    return root


logger = configure_logging(get_settings())


def get_logger(name: str = None) -> logging.Logger:
    """Child of the app logger (`stocker_api.<name>`), or the app logger itself."""
    if name:
        return logger.getChild(name)
    return logger
