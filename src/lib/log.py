"""
Pipeline logging on top of Loguru.

LOG() writes only when a ProgramState has been connected to the current
context and its verbosity reaches the message level. Library callers (an
editor host rendering on every keystroke) never connect a state, so the
renderer and recommender stay silent for them.

The stderr sink takes its format, level and colouring from AppSettings
(FOLIO_LOG_FORMAT, FOLIO_LOG_LEVEL, FOLIO_LOG_COLORIZE). Lines about a
single post carry its slug in the "post" column:

    from folio.lib.log import LOG, state_connectToLogger

    state_connectToLogger(state)
    LOG("Rendering posts...", level=1)
    LOG("Wrote alpha.html", level=3, post="alpha")
"""

from loguru import logger
from typing import Any, Optional
from contextvars import ContextVar
import sys

from ..config import AppSettings, appsettings

_program_state: ContextVar[Optional[Any]] = ContextVar('program_state', default=None)

NO_POST = "-"


def logger_configure(settings: Optional[AppSettings] = None) -> int:
    """
    (Re)install the stderr sink from settings.

    Args:
        settings: AppSettings supplying log_format, log_level, log_colorize

    Returns:
        Loguru handler id of the new sink
    """
    settings = settings or appsettings
    logger.remove()
    logger.configure(extra={"post": NO_POST})
    return logger.add(
        sys.stderr,
        format=settings.log_format,
        level=settings.log_level,
        colorize=settings.log_colorize,
    )


logger_configure()


def state_connectToLogger(state: Any) -> None:
    """
    Connect a ProgramState to the logging context.

    Each pipeline stage calls this on its own copy of the state so that
    LOG() anywhere below it sees that stage's verbosity.

    Args:
        state: ProgramState instance with verbosity attribute
    """
    _program_state.set(state)


def LOG(message: str, level: int = 1, post: Optional[str] = None, **kwargs: Any) -> None:
    """
    Log message if current state's verbosity allows.

    Args:
        message: Log message to display
        level: Minimum verbosity level required (1=normal, 2=verbose, 3=debug)
        post: Slug of the post the message is about, shown in its own column
        **kwargs: Additional loguru metadata

    Verbosity levels:
        1 = Normal output (default)
        2 = Verbose (-v)
        3 = Debug (-vv or higher)
    """
    state = _program_state.get()

    if state and hasattr(state, 'verbosity') and state.verbosity >= level:
        # depth=1 reports the caller's function and line
        logger.bind(post=post or NO_POST).opt(depth=1).debug(message, **kwargs)
