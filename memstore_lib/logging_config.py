from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def configure_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for applications embedding the store.

    The level is taken from `level` when given, otherwise from the
    `log_level` entry of the YAML file at `config_path`, otherwise WARNING.
    Returns the `memstore_lib` logger.
    """
    default_level = logging.WARNING

    if level is None and config_path is not None and Path(config_path).exists():
        try:
            with Path(config_path).open('r', encoding='utf-8') as _f:
                _cfg = yaml.safe_load(_f) or {}
                if isinstance(_cfg, dict):
                    level = _cfg.get('log_level')
        except Exception:
            # If config parse fails, fall back to default level
            logging.getLogger(__name__).warning('Could not read log level from %s', config_path)
            level = None

    if isinstance(level, str):
        _numeric = getattr(logging, level.upper(), None)
        if isinstance(_numeric, int):
            default_level = _numeric

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=default_level, format=LOG_FORMAT)

    logger = logging.getLogger('memstore_lib')
    logger.setLevel(default_level)
    logger.debug('Log level set to: %s', logging.getLevelName(default_level))
    return logger
