"""
Flask-Integration der Spracherkennung.
"""

import logging
from functools import partial

from flask import Flask, g, request

from .detector import LanguageDetector
from .translator import I18n

logger = logging.getLogger(__name__)


def handle(app: Flask, i18n: I18n, detector: LanguageDetector):
    """
    Registriert die Spracherkennung als Request-Stufe.

    Pro Anfrage werden g.language, g.languages und g.t gesetzt. Die Antwort erhält
    den Sprach-Cookie und den Content-Language-Header.

    Args:
        app: Die Flask-App
        i18n: Übersetzungs-Engine
        detector: Spracherkennung
    """

    @app.before_request
    def detect_language():
        lng = detector.detect(request)
        g.language = lng
        g.languages = i18n.language_chain(lng)
        g.t = partial(i18n.t, lng=lng)

    @app.after_request
    def cache_language(response):
        lng = g.get('language')
        if lng:
            detector.cache_user_language(response, lng)
            response.headers['Content-Language'] = lng
        return response

    @app.context_processor
    def inject_translation():
        lng = g.get('language', i18n.fallback_language)
        return {
            't': g.get('t') or partial(i18n.t, lng=lng),
            'language': lng,
            'language_dir': i18n.dir(lng),
        }
