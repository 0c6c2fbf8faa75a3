"""
Request-Logging: Zugriffsprotokoll und Fehlerprotokoll.
"""

import logging
import time

from flask import Flask, g, got_request_exception, request

access_logger = logging.getLogger('loca.access')
error_logger = logging.getLogger('loca.errors')


def format_access_line(method: str, url: str, status: int, duration_ms: int) -> str:
    return f"{method} {url} {status} {duration_ms}ms"


def register_access_logging(app: Flask):
    """
    Schreibt nach jeder Antwort eine Zeile 'METHODE URL STATUS DAUERms'.
    """

    @app.before_request
    def start_timer():
        g.request_started_at = time.perf_counter()

    @app.after_request
    def log_access(response):
        started = g.get('request_started_at')
        duration_ms = int(round((time.perf_counter() - started) * 1000)) if started else 0
        url = request.full_path if request.query_string else request.path
        access_logger.info(format_access_line(request.method, url, response.status_code, duration_ms))
        return response


def log_request_exception(sender, exception, **extra):
    """Empfänger für got_request_exception: protokolliert unbehandelte Fehler."""
    error_logger.error(
        "Unbehandelter Fehler bei %s %s: %s",
        request.method, request.path, exception,
        exc_info=(type(exception), exception, exception.__traceback__),
    )


def register_error_logging(app: Flask):
    """Protokolliert jede unbehandelte Ausnahme einer Anfrage."""
    got_request_exception.connect(log_request_exception, app)
