from __future__ import annotations
import logging
import logging.config
from pathlib import Path
import yaml

NAMESPACE = "crosspage_selector"
FALLBACK_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(config_path: str = "configs/logging.yaml", fallback_level: int = logging.WARNING) -> None:
    """Configure logging from a dictConfig YAML file.

    Without the file, the root logger falls back to `fallback_level` on stderr
    and the package loggers to INFO, so the shell output stays readable.
    """
    path = Path(config_path)
    if not path.exists():
        logging.basicConfig(level=fallback_level, format=FALLBACK_FORMAT)
        logging.getLogger(NAMESPACE).setLevel(logging.INFO)
        return

    with path.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)
    logging.config.dictConfig(cfg)


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace ("http" -> "crosspage_selector.http")."""
    if name != NAMESPACE and not name.startswith(NAMESPACE + "."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)
