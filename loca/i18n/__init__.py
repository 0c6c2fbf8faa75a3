"""
Internationalisierung: Ressourcen-Backend, Spracherkennung, Übersetzung und
Formatierung pro Anfrage.
"""

import os

from .backend import FileSystemBackend
from .detector import LanguageDetector, format_language_code
from .formatting import LocaleContext, register_formatting, round_significant
from .middleware import handle
from .translator import I18n


def create_i18n(locales_dir, fallback_language='en', cookie_domain=None):
    """
    Baut Übersetzungs-Engine und Spracherkennung für ein Locale-Verzeichnis.

    Returns:
        Tupel (I18n, LanguageDetector)
    """
    backend = FileSystemBackend(os.path.join(locales_dir, '{{lng}}.json'))
    i18n = I18n(backend, fallback_language=fallback_language)
    detector = LanguageDetector(
        order=('cookie', 'header'),
        lookup_cookie='locaI18next',
        caches=('cookie',),
        cookie_domain=cookie_domain,
        fallback_language=fallback_language,
        supported_languages=backend.available_languages,
    )
    return i18n, detector


__all__ = [
    'FileSystemBackend', 'LanguageDetector', 'I18n', 'LocaleContext',
    'create_i18n', 'format_language_code', 'handle', 'register_formatting',
    'round_significant'
]
