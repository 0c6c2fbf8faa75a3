"""
Übersetzungs-Engine.

Schlüssel werden mit ':::' vom Namespace und mit '::' in verschachtelte Ebenen
getrennt. Pluralformen tragen das Suffix '_plural'. Werte können '{{name}}'-Platzhalter
und sprintf-Platzhalter ('%s', '%d') enthalten.
"""

import logging
import re
from typing import Any, List, Optional

from .backend import DEFAULT_NAMESPACE, FileSystemBackend

logger = logging.getLogger(__name__)

INTERPOLATION_RE = re.compile(r'\{\{\s*([\w.]+)\s*\}\}')

RTL_LANGUAGES = frozenset([
    'ar', 'arc', 'ckb', 'dv', 'fa', 'ha', 'he', 'iw', 'ji', 'khw', 'ks',
    'ps', 'sam', 'sd', 'ug', 'ur', 'yi',
])


class I18n:
    """Übersetzt Schlüssel anhand der Ressourcen eines Backends."""

    def __init__(self,
                 backend: FileSystemBackend,
                 fallback_language: str = 'en',
                 key_separator: str = '::',
                 ns_separator: str = ':::',
                 plural_separator: str = '_',
                 default_ns: str = DEFAULT_NAMESPACE):
        self.backend = backend
        self.fallback_language = fallback_language
        self.key_separator = key_separator
        self.ns_separator = ns_separator
        self.plural_separator = plural_separator
        self.default_ns = default_ns

    def language_chain(self, lng: Optional[str]) -> List[str]:
        """
        Reihenfolge der Sprachen, in denen ein Schlüssel gesucht wird.
        'pt-BR' -> ['pt-BR', 'pt', 'en']
        """
        chain = []
        if lng:
            chain.append(lng)
            base = lng.split('-')[0]
            if base != lng:
                chain.append(base)
        if self.fallback_language not in chain:
            chain.append(self.fallback_language)
        return chain

    def _split_key(self, key: str):
        if self.ns_separator in key:
            ns, key = key.split(self.ns_separator, 1)
            return ns, key
        return self.default_ns, key

    def _resolve(self, resources: dict, key: str) -> Optional[str]:
        # Flache Schlüssel mit Trennzeichen haben Vorrang vor der Verschachtelung
        if key in resources and isinstance(resources[key], str):
            return resources[key]

        node: Any = resources
        for part in key.split(self.key_separator):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def _find(self, ns: str, key: str, lng: Optional[str], count: Optional[int]) -> Optional[str]:
        keys = [key]
        if count is not None and count != 1:
            keys.insert(0, f'{key}{self.plural_separator}plural')

        for language in self.language_chain(lng):
            resources = self.backend.read(language, ns)
            for candidate in keys:
                value = self._resolve(resources, candidate)
                if value is not None:
                    return value
        return None

    def exists(self, key: str, lng: Optional[str] = None) -> bool:
        ns, key = self._split_key(key)
        return self._find(ns, key, lng, None) is not None

    def t(self, key: str, *args, lng: Optional[str] = None, count: Optional[int] = None,
          default: Optional[str] = None, **values) -> str:
        """
        Übersetzt einen Schlüssel.

        Args:
            key: Übersetzungsschlüssel, optional mit Namespace ('ns:::a::b')
            *args: Positionsargumente für sprintf-Platzhalter
            lng: Zielsprache (Standard: Fallback-Sprache)
            count: Anzahl für die Pluralauswahl
            default: Rückgabewert, wenn der Schlüssel fehlt (Standard: der Schlüssel)
            **values: Werte für '{{name}}'-Platzhalter

        Returns:
            Übersetzter Text
        """
        ns, plain_key = self._split_key(key)
        value = self._find(ns, plain_key, lng, count)
        if value is None:
            logger.debug("Fehlende Übersetzung: %s [%s]", key, lng)
            value = default if default is not None else plain_key

        if count is not None:
            values.setdefault('count', count)
        if values:
            value = INTERPOLATION_RE.sub(lambda m: str(values.get(m.group(1), '')), value)

        if args:
            try:
                value = value % args
            except (TypeError, ValueError) as e:
                logger.warning("sprintf-Formatierung für '%s' fehlgeschlagen: %s", key, e)

        return value

    def dir(self, lng: Optional[str]) -> str:
        if not lng:
            return 'ltr'
        return 'rtl' if lng.split('-')[0].lower() in RTL_LANGUAGES else 'ltr'

    def reload(self, *_):
        """Verwirft geladene Ressourcen, z.B. nach Änderungen an dist/locales."""
        self.backend.reload()
        logger.info("Übersetzungen werden beim nächsten Zugriff neu geladen")
