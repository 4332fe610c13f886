"""
Logging configuration.
Installs a JSON (python-json-logger) or plain-text formatter on the root logger.
"""
import logging
import sys

from pythonjsonlogger.json import JsonFormatter

from goonergram.config import settings

LOG_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    """
    Configure root logging from settings.

    Safe to call more than once; the previous application handler is replaced.
    """
    handler = logging.StreamHandler(sys.stdout)

    if settings.log_format == "json":
        handler.setFormatter(JsonFormatter(LOG_FIELDS))
    else:
        handler.setFormatter(logging.Formatter(LOG_FIELDS.replace(" %(", " | %(")))

    handler.set_name("goonergram")

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == "goonergram":
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.log_level.upper())

    # Socket.IO logs routine packets at high levels
    logging.getLogger("socketio").setLevel(logging.WARNING)
    logging.getLogger("engineio").setLevel(logging.WARNING)
