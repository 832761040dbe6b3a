"""Logging setup for applications that embed TESSERA.

The services only emit records through module loggers under `tessera`.
`configure_logging` makes those records visible: a Rich console handler and,
optionally, a flight recorder that keeps recent history in memory and writes
it to a file once something goes wrong. `bootstrap` calls it when
`TESSERA_LOG_LEVEL` is set.
"""

from __future__ import annotations

import logging
from logging.handlers import MemoryHandler
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

PROJECT_LOGGER = "tessera"
CONSOLE_HANDLER_NAME = "tessera.console"
FLIGHT_RECORDER_NAME = "tessera.flight"

FILE_FORMAT = "[%(asctime)s] %(levelname)s %(name)s:%(lineno)d: %(message)s"


def _console_handler(level: int, color: bool) -> RichHandler:
    console = Console(stderr=True, color_system="auto" if color else None)
    handler = RichHandler(
        level=level,
        console=console,
        rich_tracebacks=True,
        show_time=False,
        show_path=level <= logging.DEBUG,
        markup=False,
    )
    # drop the package prefix: "tessera.service_layer.user_service" -> "user_service"
    handler.setFormatter(logging.Formatter("%(module)s: %(message)s"))
    handler.set_name(CONSOLE_HANDLER_NAME)
    return handler


def _flight_recorder(path: Path, capacity: int) -> MemoryHandler:
    target = logging.FileHandler(path, mode="w", encoding="utf-8")
    target.setFormatter(logging.Formatter(FILE_FORMAT))
    recorder = MemoryHandler(
        capacity=capacity,
        flushLevel=logging.WARNING,
        target=target,
        flushOnClose=True,
    )
    recorder.set_name(FLIGHT_RECORDER_NAME)
    return recorder


def _remove_installed_handlers(project: logging.Logger) -> None:
    for handler in project.handlers[:]:
        if handler.get_name() not in (CONSOLE_HANDLER_NAME, FLIGHT_RECORDER_NAME):
            continue
        project.removeHandler(handler)
        target = getattr(handler, "target", None)
        handler.close()
        if target is not None:
            target.close()


def configure_logging(
    level: int = logging.WARNING,
    *,
    color: bool = True,
    log_path: Path | None = None,
    capacity: int = 2000,
) -> list[logging.Handler]:
    """Send `tessera` records to the console and, optionally, a file.

    Handlers go on the `tessera` logger rather than the root logger, so the
    embedding application's own configuration is left alone. Calling this
    again replaces the handlers installed by the previous call.

    Args:
        level: Minimum level shown on the console. At DEBUG the console also
            shows the source location of each record.
        color: Enable color console output.
        log_path: When given, buffer up to `capacity` records of every level
            and write them to this file whenever a WARNING or worse is logged,
            and when the handler is closed.
        capacity: Number of records the flight recorder keeps in memory.

    Returns:
        The handlers that were attached, console handler first.
    """
    project = logging.getLogger(PROJECT_LOGGER)
    _remove_installed_handlers(project)

    handlers: list[logging.Handler] = [_console_handler(level, color)]
    if log_path is not None:
        handlers.append(_flight_recorder(log_path, capacity))

    # the flight recorder needs every record; the console filters its own
    project.setLevel(logging.DEBUG if log_path is not None else level)
    for handler in handlers:
        project.addHandler(handler)
    return handlers
