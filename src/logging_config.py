import logging
import logging.handlers
from pathlib import Path
from typing import Optional


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file_name: str = "last_stand.log",
    package: str = "src.last_stand",
) -> Optional[Path]:
    """Configure logging for the Last Stand plugin.

    The plugin's own loggers always follow ``log_level``. Handlers are only
    installed when nobody has configured the root logger yet; inside a host
    that already logs, records propagate to the host's handlers instead.

    Returns:
        Path of the rotating log file, or None if the host owns the handlers.
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    logging.getLogger(package).setLevel(level)

    root_logger = logging.getLogger()
    if root_logger.handlers:
        logging.getLogger(__name__).debug(
            "Root logger already configured; %s logs at %s", package, log_level
        )
        return None

    log_dir = Path(log_dir or Path(__file__).parent.parent / "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / log_file_name

    root_logger.setLevel(level)

    # File handler with rotation (5MB max, keep 3 backups)
    file_handler = logging.handlers.RotatingFileHandler(
        log_file, maxBytes=5 * 1024 * 1024, backupCount=3
    )
    file_handler.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    logging.getLogger(__name__).info("Logging initialized (level=%s, file=%s)", log_level, log_file)
    return log_file
