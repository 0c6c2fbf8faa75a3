"""
Spracherkennung aus Cookie und Accept-Language-Header.
"""

import logging
import re
from datetime import timedelta
from typing import Callable, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

LANGUAGE_TAG_RE = re.compile(r'^[A-Za-z]{2,3}(-[A-Za-z0-9]{2,8})*$')
COOKIE_MAX_AGE = timedelta(days=365)


def format_language_code(code: str) -> str:
    """
    Normalisiert einen Sprachcode: 'en-us' -> 'en-US', 'zh-hant-tw' -> 'zh-Hant-TW'.
    """
    parts = code.strip().replace('_', '-').split('-')
    formatted = [parts[0].lower()]
    for part in parts[1:]:
        if len(part) == 4 and part.isalpha():
            formatted.append(part.title())
        elif len(part) <= 3:
            formatted.append(part.upper())
        else:
            formatted.append(part.lower())
    return '-'.join(formatted)


class LanguageDetector:
    """
    Ermittelt die Sprache einer Anfrage anhand einer konfigurierten Reihenfolge von Quellen
    und merkt sich das Ergebnis in einem Cookie.
    """

    def __init__(self,
                 order: Sequence[str] = ('cookie', 'header'),
                 lookup_cookie: str = 'locaI18next',
                 caches: Sequence[str] = ('cookie',),
                 cookie_domain: Optional[str] = None,
                 cookie_max_age: timedelta = COOKIE_MAX_AGE,
                 fallback_language: str = 'en',
                 supported_languages: Optional[Callable[[], Iterable[str]]] = None):
        self.order = tuple(order)
        self.lookup_cookie_name = lookup_cookie
        self.caches = tuple(caches)
        self.cookie_domain = cookie_domain
        self.cookie_max_age = cookie_max_age
        self.fallback_language = fallback_language
        self._supported_languages = supported_languages
        self._lookups = {
            'cookie': self.lookup_cookie,
            'header': self.lookup_header,
        }
        unknown = [name for name in self.order if name not in self._lookups]
        if unknown:
            raise ValueError(f"Unbekannte Erkennungsquellen: {', '.join(unknown)}")

    def lookup_cookie(self, request) -> List[str]:
        value = request.cookies.get(self.lookup_cookie_name)
        return [value] if value else []

    def lookup_header(self, request) -> List[str]:
        # LanguageAccept ist bereits nach Qualität sortiert
        return [value for value in request.accept_languages.values() if value != '*']

    def supported_languages(self) -> List[str]:
        if self._supported_languages is None:
            return []
        return list(self._supported_languages())

    def match(self, candidate: str, supported: Sequence[str]) -> Optional[str]:
        """
        Prüft einen Kandidaten gegen die unterstützten Sprachen.

        Returns:
            Die passende Sprache oder None
        """
        if not candidate or not LANGUAGE_TAG_RE.match(candidate.strip().replace('_', '-')):
            return None

        lng = format_language_code(candidate)
        if not supported:
            return lng

        by_lower = {s.lower(): s for s in supported}
        if lng.lower() in by_lower:
            return by_lower[lng.lower()]

        base = lng.split('-')[0]
        return by_lower.get(base)

    def detect(self, request) -> str:
        """
        Ermittelt die Sprache der Anfrage.

        Args:
            request: Die aktuelle Werkzeug/Flask-Anfrage

        Returns:
            Erkannte Sprache oder die Fallback-Sprache
        """
        supported = self.supported_languages()
        for source in self.order:
            for candidate in self._lookups[source](request):
                lng = self.match(candidate, supported)
                if lng:
                    return lng
        return self.fallback_language

    def cache_user_language(self, response, lng: str):
        """Speichert die erkannte Sprache in den konfigurierten Caches."""
        if 'cookie' not in self.caches:
            return
        response.set_cookie(
            self.lookup_cookie_name,
            lng,
            max_age=self.cookie_max_age,
            domain=self.cookie_domain,
            httponly=False,
        )
