"""
Logging for the ZTE ONU client.

Everything logs through the ``zte-onu`` logger.  Session tokens and page
URLs only appear at DEBUG; the urllib3 connection chatter is kept at
WARNING unless debugging, since every page view is several requests.
"""

import logging

try:
    import colorlog
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

log = logging.getLogger("zte-onu")

_LIB_LOGGERS = ("urllib3", "requests")

_FORMAT = "%(asctime)s %(levelname)-7s %(message)s"
_DATEFMT = "%H:%M:%S"


def _make_handler() -> logging.Handler:
    if not _COLORLOG_AVAILABLE:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT, datefmt=_DATEFMT))
        return handler
    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s" + _FORMAT,
        datefmt=_DATEFMT,
        log_colors={
            "DEBUG": "cyan",
            "WARNING": "yellow",
            "ERROR": "red",
            "CRITICAL": "bold_red",
        },
    ))
    return handler


def _setup_logging(debug: bool = False) -> None:
    """Attach one handler to the package logger and set library verbosity."""
    log.setLevel(logging.DEBUG if debug else logging.INFO)
    log.handlers.clear()
    log.addHandler(_make_handler())
    log.propagate = False

    lib_level = logging.DEBUG if debug else logging.WARNING
    for name in _LIB_LOGGERS:
        logging.getLogger(name).setLevel(lib_level)
