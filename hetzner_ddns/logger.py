import functools
import gzip
import inspect
import logging
import logging.handlers
import os
import shutil
import sys
from gzip import GzipFile
from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

logger = logging.getLogger("hetzner_ddns")
logger.setLevel(logging.INFO)
formatter = logging.Formatter(
    "%(asctime)s %(levelname)s [%(module)s:%(funcName)s:%(lineno)d] %(message)s"
)


class _BelowWarning(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < logging.WARNING


# Status lines go to stdout, warnings and failures to stderr
log_stdout_handler = logging.StreamHandler(sys.stdout)
log_stdout_handler.setFormatter(formatter)
log_stdout_handler.addFilter(_BelowWarning())
logger.addHandler(log_stdout_handler)

log_stderr_handler = logging.StreamHandler(sys.stderr)
log_stderr_handler.setFormatter(formatter)
log_stderr_handler.setLevel(logging.WARNING)
logger.addHandler(log_stderr_handler)


def rotator(source, dest):
    with open(source, "rb") as f_in:
        with gzip.open(dest + ".gz", "wb") as f_out:
            assert isinstance(f_out, GzipFile)
            shutil.copyfileobj(f_in, f_out)
    os.remove(source)


def setup_logging(level: str | int = logging.INFO, logs_dir: Path | None = None):
    """
    Set the log level and optionally add a rotating log file.

    Rotated files are gzip compressed at midnight.
    """
    logger.setLevel(level)

    if logs_dir is None:
        return

    logs_dir = Path(logs_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "hetzner-ddns.log"

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and Path(
            handler.baseFilename
        ) == log_file.absolute():
            return

    log_file_handler = logging.handlers.TimedRotatingFileHandler(
        log_file, when="midnight"
    )
    log_file_handler.setFormatter(formatter)
    log_file_handler.rotator = rotator
    logger.addHandler(log_file_handler)


P = ParamSpec("P")
R = TypeVar("R")


def log_exception(
    prefix: str = "",
    default_return: R | None = None,
    level: int = logging.ERROR,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator to wrap a function with try-except and log exceptions.

    Supports both sync and async functions. The exception is logged with the
    bound call arguments and `default_return` is returned instead. Tracebacks
    are only attached at ERROR level and above.

    Args:
        prefix: Optional prefix, may reference parameters as "{name}"
        default_return: Value returned when the wrapped function raises
        level: Log level used for the exception message

    Usage:
        @log_exception("IPv6 lookup", level=logging.WARNING)
        async def lookup():
            ...
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        sig = inspect.signature(func)

        def log(e: Exception, args: tuple, kwargs: dict):
            try:
                bound = sig.bind(*args, **kwargs)
                bound.apply_defaults()
                arguments = dict(bound.arguments)
            except TypeError:
                arguments = {}
            params = ", ".join(
                f"{k}={v!r}" for k, v in arguments.items() if k != "self"
            )
            args_str = f"[{params}] " if params else ""

            prefix_str = ""
            if prefix:
                try:
                    prefix_str = f"{prefix.format_map(arguments)}: "
                except (KeyError, ValueError, IndexError, AttributeError):
                    prefix_str = f"{prefix}: "

            logger.log(
                level,
                f"{args_str}{prefix_str}{type(e).__name__}: {e}",
                exc_info=level >= logging.ERROR,
                stacklevel=3,
            )

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
                try:
                    return await func(*args, **kwargs)
                except Exception as e:
                    log(e, args, kwargs)
                    return default_return  # type: ignore[return-value]

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def sync_wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                log(e, args, kwargs)
                return default_return  # type: ignore[return-value]

        return sync_wrapper  # type: ignore[return-value]

    return decorator
