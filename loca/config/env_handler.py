"""
Umgebungsvariablen-Handler für Loca

Lädt Umgebungsvariablen aus dem Konfigurationsverzeichnis und protokolliert sie.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Mapping

from dotenv import dotenv_values

# Logger für dieses Modul konfigurieren
logger = logging.getLogger('loca.config.env_handler')

SENSITIVE_MARKERS = ("key", "secret", "password", "token", "database_url")


def load_env(config_dir: str, environ: Mapping[str, str]) -> Dict[str, str]:
    """
    Ergänzt die Umgebungsvariablen um die Werte aus <config_dir>/.env.
    Bereits gesetzte Variablen werden nicht überschrieben.

    Args:
        config_dir: Konfigurationsverzeichnis
        environ: Vorhandene Umgebungsvariablen

    Returns:
        Zusammengeführte Umgebungsvariablen
    """
    merged = dict(environ)
    env_file = Path(config_dir) / '.env'

    if env_file.is_file():
        logger.info("Lade .env-Datei von: %s", env_file)
        for key, value in dotenv_values(env_file).items():
            if value is not None and key not in merged:
                merged[key] = value
    else:
        logger.debug("Keine .env-Datei unter %s - verwende Umgebungsvariablen", env_file)

    return merged


def log_env_vars(environ: Mapping[str, str] = None, censor_sensitive: bool = True):
    """
    Protokolliert die relevanten Umgebungsvariablen, zensiert sensible Daten.
    """
    environ = os.environ if environ is None else environ
    categories = {
        "Plattform": ["LOCA_ENV", "NODE_ENV", "LOCA_DEMO_MODE", "DEMO_MODE"],
        "Netzwerk": ["LOCA_HOST", "LOCA_NODEJS_PORT", "PORT"],
        "Logging": ["LOCA_LOGGER_LEVEL", "LOGGER_LEVEL"],
        "Verzeichnisse": ["LOCA_ROOT_DIR", "LOCA_CONFIG_DIR", "CONFIG_DIR"],
        "Datenbank": ["LOCA_DATABASE_URL", "DATABASE_URL"],
        "Sicherheit": ["LOCA_SESSION_SECRET", "SESSION_SECRET"],
    }

    for category, keys in categories.items():
        found_keys = []
        for key in keys:
            if key not in environ:
                continue
            value = environ[key]
            if censor_sensitive and any(marker in key.lower() for marker in SENSITIVE_MARKERS):
                value = value[:4] + "****" + value[-4:] if len(value) > 8 else "********"
            found_keys.append(f"{key}={value}")

        if found_keys:
            logger.debug("%s: %s", category, ', '.join(found_keys))
