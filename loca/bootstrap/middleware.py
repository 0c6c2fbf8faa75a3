"""
Request-Stufen auf WSGI- und Flask-Ebene: Body-Parsing, Method-Override,
Favicon und statische Verzeichnisse.
"""

import logging
import os
from typing import Dict, Iterable, Tuple

from flask import Flask, g, request
from werkzeug.middleware.shared_data import SharedDataMiddleware

logger = logging.getLogger(__name__)

METHOD_OVERRIDE_HEADER = 'HTTP_X_HTTP_METHOD_OVERRIDE'
FAVICON_MAX_AGE = 30 * 24 * 60 * 60


def parse_body():
    """
    Liest JSON- oder Formular-Body der Anfrage nach g.body.
    Mehrfach vorkommende Formularfelder werden zu Listen.

    Raises:
        BadRequest: Wenn ein JSON-Body nicht geparst werden kann
    """
    if request.is_json:
        # Leerer JSON-Body gilt als leeres Objekt
        g.body = request.get_json() if request.get_data(cache=True) else {}
        return

    body = {}
    for key, values in request.form.lists():
        body[key] = values[0] if len(values) == 1 else values
    g.body = body


class MethodOverrideMiddleware:
    """
    Ersetzt die HTTP-Methode eines POST-Requests durch den Wert des
    X-HTTP-Method-Override-Headers.
    """

    allowed_methods = frozenset(['GET', 'HEAD', 'POST', 'DELETE', 'PUT', 'PATCH', 'OPTIONS'])

    def __init__(self, app, methods: Iterable[str] = ('POST',)):
        self.app = app
        self.methods = frozenset(methods)

    def __call__(self, environ, start_response):
        original = environ.get('REQUEST_METHOD', 'GET')
        if original in self.methods:
            method = environ.get(METHOD_OVERRIDE_HEADER, '').upper()
            if method in self.allowed_methods:
                environ['loca.original_method'] = original
                environ['REQUEST_METHOD'] = method
        return self.app(environ, start_response)


class StaticFiles(SharedDataMiddleware):
    """
    Liefert Dateien aus gemounteten Verzeichnissen aus. Nur GET und HEAD werden bedient,
    Anfragen ohne passende Datei laufen an die Anwendung weiter.
    """

    def __call__(self, environ, start_response):
        if environ.get('REQUEST_METHOD') not in ('GET', 'HEAD'):
            return self.app(environ, start_response)
        return super().__call__(environ, start_response)


def wrap_behind_method_override(app: Flask, wrap):
    """
    Legt eine WSGI-Middleware um die Anwendung, aber innerhalb eines
    MethodOverrideMiddleware, damit sie die überschriebene Methode sieht.
    """
    outer = app.wsgi_app
    if isinstance(outer, MethodOverrideMiddleware):
        outer.app = wrap(outer.app)
    else:
        app.wsgi_app = wrap(outer)


def static_mounts(root_dir: str, dist_dir: str) -> Tuple[Tuple[str, str], ...]:
    """
    URL-Präfixe und Verzeichnisse der statischen Dateien, in Prüfreihenfolge.
    """
    node_modules = os.path.join(root_dir, 'node_modules')
    return (
        ('/node_modules', node_modules),
        ('/public', dist_dir),
        ('/public/image', os.path.join(dist_dir, 'images')),
        ('/public/images', os.path.join(dist_dir, 'images')),
        ('/public/fonts', os.path.join(node_modules, 'bootstrap', 'fonts')),
        ('/public/pdf', os.path.join(dist_dir, 'pdf')),
        ('/robots.txt', os.path.join(dist_dir, 'robots.txt')),
        ('/sitemap.xml', os.path.join(dist_dir, 'sitemap.xml')),
    )


def mount_static(app: Flask, mounts: Iterable[Tuple[str, str]], cache_timeout: int = 0) -> Dict[str, str]:
    """
    Hängt die statischen Verzeichnisse vor die Flask-Anwendung.

    Args:
        app: Die Flask-App
        mounts: Paare aus URL-Präfix und Pfad
        cache_timeout: Cache-Dauer in Sekunden

    Returns:
        Die registrierten Exporte
    """
    exports = dict(mounts)
    for prefix, path in exports.items():
        if not os.path.exists(path):
            logger.debug("Statisches Verzeichnis für %s existiert (noch) nicht: %s", prefix, path)
    wrap_behind_method_override(app, lambda inner: StaticFiles(inner, exports, cache_timeout=cache_timeout))
    return exports


def mount_favicon(app: Flask, favicon_path: str):
    if not os.path.isfile(favicon_path):
        logger.warning("Favicon nicht gefunden: %s", favicon_path)
    wrap_behind_method_override(
        app, lambda inner: StaticFiles(inner, {'/favicon.ico': favicon_path}, cache_timeout=FAVICON_MAX_AGE))
