"""
Logging setup for the Resume Optimizer API.

Besides the handler configuration, this module owns two log streams the
service relies on when diagnosing extraction quality:

* ``resume_optimizer.remote``: one line per outbound call (LLM, job page)
  with its duration and outcome.
* ``resume_optimizer.fallback``: one WARNING per answer that came from the
  local heuristics because the remote strategy failed.
"""
import functools
import logging
import logging.config
import os
import time
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

LOGGER_PREFIX = "resume_optimizer"
REMOTE_LOGGER = f"{LOGGER_PREFIX}.remote"
FALLBACK_LOGGER = f"{LOGGER_PREFIX}.fallback"

LOG_FORMATS = {
    "simple": "%(levelname)s - %(name)s - %(message)s",
    "detailed": "%(asctime)s | %(levelname)-8s | %(name)-36s | %(message)s",
}

# ENVIRONMENT -> (level, file logging, format); None level means LOG_LEVEL
ENVIRONMENT_PROFILES = {
    "production": (None, True, "detailed"),
    "development": ("DEBUG", True, "detailed"),
    "testing": ("WARNING", False, "simple"),
}

MAX_LOG_BYTES = 10 * 1024 * 1024


def _file_handler(filename: Path, level: str) -> Dict[str, Any]:
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "level": level,
        "formatter": "detailed",
        "filename": str(filename),
        "maxBytes": MAX_LOG_BYTES,
        "backupCount": 5,
        "encoding": "utf8",
    }


def build_logging_config(level: str = "INFO", log_dir: Path = None, format_style: str = "detailed") -> Dict[str, Any]:
    """dictConfig payload: console always, rotating service and error files when log_dir is given."""
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": level,
            "formatter": format_style if format_style in LOG_FORMATS else "detailed",
            "stream": "ext://sys.stdout",
        }
    }
    if log_dir is not None:
        stamp = datetime.now().strftime("%Y%m%d")
        handlers["file"] = _file_handler(log_dir / f"resume_optimizer_{stamp}.log", level)
        handlers["error_file"] = _file_handler(log_dir / f"resume_optimizer_errors_{stamp}.log", "ERROR")

    names = list(handlers)
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            style: {"format": fmt, "datefmt": "%Y-%m-%d %H:%M:%S"} for style, fmt in LOG_FORMATS.items()
        },
        "handlers": handlers,
        "loggers": {
            "": {"level": level, "handlers": names, "propagate": False},
            "uvicorn": {"level": "INFO", "handlers": names, "propagate": False},
            "uvicorn.access": {"level": "INFO", "handlers": ["console"], "propagate": False},
        },
    }


def setup_logging(level: str = "INFO", enable_file: bool = True, format_style: str = "detailed") -> None:
    log_dir = None
    if enable_file:
        log_dir = Path(os.getenv("LOG_DIR", "logs"))
        log_dir.mkdir(parents=True, exist_ok=True)

    logging.config.dictConfig(build_logging_config(level, log_dir, format_style))
    get_logger("logging").info(f"Logging configured - Level: {level}, log dir: {log_dir or 'disabled'}")


def configure_for_environment() -> None:
    """Pick the logging profile from ENVIRONMENT (LOG_LEVEL fills unset levels)."""
    environment = os.getenv("ENVIRONMENT", "development").lower()
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    level, enable_file, format_style = ENVIRONMENT_PROFILES.get(environment, (None, True, "detailed"))
    setup_logging(level=level or log_level, enable_file=enable_file, format_style=format_style)


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under ``resume_optimizer``; accepts module names too."""
    if name == LOGGER_PREFIX or name.startswith(f"{LOGGER_PREFIX}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_PREFIX}.{name}")


def log_remote_call(service: str):
    """
    Decorator for blocking outbound calls. Logs duration and outcome on the
    remote logger under the given service name; exceptions propagate.
    """
    logger = logging.getLogger(REMOTE_LOGGER)

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.warning(
                    f"{service} call {func.__name__} failed after {time.perf_counter() - start:.3f}s: {e}",
                    extra={"service": service, "error_type": e.__class__.__name__},
                )
                raise
            logger.debug(
                f"{service} call {func.__name__} succeeded in {time.perf_counter() - start:.3f}s",
                extra={"service": service},
            )
            return result

        return wrapper

    return decorator


def log_fallback(operation: str, error: Exception) -> None:
    """Record that an answer for operation was produced locally after a remote failure."""
    logging.getLogger(FALLBACK_LOGGER).warning(
        f"Remote {operation} failed ({error.__class__.__name__}: {error}); answered with local heuristics",
        extra={"operation": operation, "error_type": error.__class__.__name__},
    )


@contextmanager
def log_duration(operation: str, logger: logging.Logger, threshold_ms: float = 1000):
    """Log how long the wrapped block took; WARNING above threshold_ms, ERROR on failure."""
    start = time.perf_counter()
    try:
        yield
    except Exception as e:
        logger.error(f"{operation} failed after {(time.perf_counter() - start) * 1000:.0f}ms: {e}")
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    if elapsed_ms > threshold_ms:
        logger.warning(f"{operation} took {elapsed_ms:.0f}ms (threshold {threshold_ms:.0f}ms)")
    else:
        logger.info(f"{operation} completed in {elapsed_ms:.0f}ms")
