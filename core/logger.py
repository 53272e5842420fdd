import logging
from pathlib import Path
from typing import Optional

from core.config_service import AppSettings

LOGGER_NAME = "marketdata"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(log_path: Optional[Path] = Path("logs/marketdata.log"), level: str = "INFO") -> logging.Logger:
    """Configure the ``marketdata`` logger once; ``log_path=None`` logs to the console only."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())
    if not logger.handlers:
        formatter = logging.Formatter(LOG_FORMAT)
        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_path is not None:
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)
    return logger


def setup_from_settings(app: AppSettings) -> logging.Logger:
    log_path = Path(app.log_path) if app.log_path else None
    return setup_logger(log_path, level=app.log_level)


def provider_logger(provider: str) -> logging.Logger:
    """Child logger for one provider client, e.g. ``marketdata.binance``."""
    return logging.getLogger(LOGGER_NAME).getChild(provider)
