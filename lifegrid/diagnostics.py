"""
Failure hook that turns uncaught exceptions into readable log records.

install_diagnostic_hook() wraps sys.excepthook once per process. The hook
logs a one-line summary plus the formatted traceback on the "lifegrid"
logger, then hands the exception to whatever hook was installed before.
It changes no operation's behavior.
"""

import logging
import sys
import traceback

logger = logging.getLogger("lifegrid")

_previous_hook = None
_installed = False


def format_failure(exc: BaseException) -> str:
    """One-line human readable summary of an exception"""
    message = str(exc)
    if message:
        return f"{type(exc).__name__}: {message}"
    return type(exc).__name__


def _diagnostic_hook(exc_type, exc_value, exc_traceback):
    if not issubclass(exc_type, KeyboardInterrupt):
        details = "".join(traceback.format_exception(exc_type, exc_value, exc_traceback))
        logger.critical("Unrecoverable failure: %s\n%s", format_failure(exc_value), details)

    previous = _previous_hook or sys.__excepthook__
    previous(exc_type, exc_value, exc_traceback)


def install_diagnostic_hook() -> bool:
    """
    Install the failure hook if it is not installed yet.

    Returns:
        True if this call installed the hook, False if it was already present
    """
    global _previous_hook, _installed

    if _installed:
        return False

    _previous_hook = sys.excepthook
    sys.excepthook = _diagnostic_hook
    _installed = True
    logger.debug("Diagnostic hook installed")
    return True


def uninstall_diagnostic_hook():
    """Restore the hook that was active before install_diagnostic_hook()"""
    global _previous_hook, _installed

    if not _installed:
        return

    sys.excepthook = _previous_hook or sys.__excepthook__
    _previous_hook = None
    _installed = False
