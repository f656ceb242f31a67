"""Logging configuration for the Freebox API client."""

import logging

import colorlog

log = logging.getLogger("fbx-exporter")

# Loggers of the HTTP stack, only verbose in debug mode
_HTTP_LOGGERS = ("urllib3", "requests")


def setup_logging(debug: bool = False) -> None:
    """Attach a colored stderr handler to the package logger.

    Debug mode also lets urllib3 report connection pool activity, which is
    where pinned-TLS and idle-pool problems show up.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()
    log.propagate = False

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s %(levelname)-7s%(reset)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
    ))
    log.addHandler(handler)

    for name in _HTTP_LOGGERS:
        http_log = logging.getLogger(name)
        http_log.setLevel(logging.DEBUG if debug else logging.WARNING)
        http_log.handlers.clear()
        if debug:
            http_log.addHandler(handler)
