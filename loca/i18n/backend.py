"""
Dateisystem-Backend für Übersetzungsressourcen.
Lädt dist/locales/{{lng}}.json erst, wenn eine Sprache das erste Mal benötigt wird.
"""

import json
import logging
import os
import re
import threading
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE = 'translation'
_PLACEHOLDER_RE = re.compile(r'\{\{\s*(lng|ns)\s*\}\}')


class FileSystemBackend:
    """
    Liest Ressourcen-Dateien nach einem Pfadmuster mit {{lng}} und optional {{ns}}.
    Geladene Dateien werden pro (Sprache, Namespace) zwischengespeichert.
    """

    def __init__(self, load_path: str):
        self.load_path = load_path
        self._cache: Dict[tuple, dict] = {}
        self._languages: Optional[List[str]] = None
        self._lock = threading.Lock()

    def path_for(self, lng: str, ns: str = DEFAULT_NAMESPACE) -> str:
        values = {'lng': lng, 'ns': ns}
        return _PLACEHOLDER_RE.sub(lambda m: values[m.group(1)], self.load_path)

    def read(self, lng: str, ns: str = DEFAULT_NAMESPACE) -> dict:
        """
        Gibt die Ressourcen einer Sprache zurück und lädt sie bei Bedarf.

        Args:
            lng: Sprachcode, z.B. 'fr' oder 'pt-BR'
            ns: Namespace

        Returns:
            Ressourcen als (verschachteltes) Dictionary, leer wenn keine Datei existiert
        """
        cache_key = (lng, ns)
        resources = self._cache.get(cache_key)
        if resources is not None:
            return resources

        with self._lock:
            resources = self._cache.get(cache_key)
            if resources is None:
                resources = self._load(lng, ns)
                self._cache[cache_key] = resources
        return resources

    def _load(self, lng: str, ns: str) -> dict:
        path = self.path_for(lng, ns)
        if not os.path.isfile(path):
            logger.debug("Keine Übersetzungen für %s unter %s", lng, path)
            return {}

        try:
            with open(path, encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Übersetzungsdatei %s konnte nicht gelesen werden: %s", path, e)
            return {}

        if not isinstance(data, dict):
            logger.error("Übersetzungsdatei %s enthält kein JSON-Objekt", path)
            return {}

        logger.debug("Übersetzungen für %s geladen (%d Schlüssel)", lng, len(data))
        return data

    def available_languages(self) -> List[str]:
        """
        Sprachen, für die eine Ressourcen-Datei existiert.
        Nur für Pfadmuster der Form <verzeichnis>/{{lng}}.<endung> ermittelbar.
        """
        if self._languages is not None:
            return self._languages

        directory, filename = os.path.split(self.load_path)
        match = re.fullmatch(r'\{\{\s*lng\s*\}\}(\.\w+)', filename)
        if not match or '{{' in directory or not os.path.isdir(directory):
            return []

        suffix = match.group(1)
        self._languages = sorted(
            name[:-len(suffix)]
            for name in os.listdir(directory)
            if name.endswith(suffix) and os.path.isfile(os.path.join(directory, name))
        )
        return self._languages

    def reload(self):
        """Verwirft alle zwischengespeicherten Ressourcen."""
        with self._lock:
            self._cache.clear()
            self._languages = None
