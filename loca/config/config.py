"""
Konfigurationsmodul für den Loca-Frontend-Server.
Vereint Logging-Konfiguration und Umgebungsvariablen in expliziten Objekten,
die beim Start einmal erzeugt und an die App-Factory übergeben werden.
"""

import json
import logging
import os
import sys
from datetime import timedelta
from typing import Any, Dict, Mapping, Optional

from loca.config.env_handler import load_env, log_env_vars
from loca.core.exceptions import ConfigError

# Standardlogger für dieses Modul (wird durch setup_logging konfiguriert)
config_logger = logging.getLogger('loca.config')

# Level-Namen, wie sie in bestehenden Deployments gesetzt werden
LEVEL_NAMES = {
    'error': logging.ERROR,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'info': logging.INFO,
    'verbose': logging.DEBUG,
    'debug': logging.DEBUG,
    'silly': logging.DEBUG,
    'critical': logging.CRITICAL,
}

DEFAULT_PORT = 8082
LIVERELOAD_PORT = 9091
SESSION_LIFETIME = timedelta(minutes=5)


def parse_level(level_name: Optional[str]) -> int:
    """
    Übersetzt einen Level-Namen in ein Logging-Level.

    Args:
        level_name: Name des Levels (z.B. 'debug', 'warn', 'INFO')

    Returns:
        Numerisches Logging-Level, DEBUG bei unbekanntem Namen
    """
    if not level_name:
        return logging.DEBUG
    return LEVEL_NAMES.get(level_name.strip().lower(), logging.DEBUG)


def parse_bool(value: Optional[str]) -> bool:
    if value is None:
        return False
    return value.strip().lower() in ('1', 'true', 'yes', 'y', 'on')


class LoggingManager:
    """
    Verwaltet die prozessweite Logging-Konfiguration.
    Entfernt die Standard-Handler und installiert einen einzigen Konsolen-Handler.
    """

    def __init__(self, level_name: str = 'debug', prefix: str = '[loca] ', stream=None):
        """
        Initialisiert den Logging-Manager.

        Args:
            level_name: Schwellwert als Level-Name
            prefix: Präfix für jede Logzeile
            stream: Ausgabestrom (Standard: sys.stdout)
        """
        self.log_level = parse_level(level_name)
        self.log_prefix = prefix
        self.stream = stream
        self._logging_initialized = False

    @property
    def log_format(self) -> str:
        return f'{self.log_prefix}[%(levelname)s] %(name)s: %(message)s'

    def setup_logging(self) -> logging.Logger:
        """
        Konfiguriert das Logging-System für die Anwendung.

        Returns:
            Logger-Instanz der Anwendung
        """
        if self._logging_initialized:
            return logging.getLogger('loca')

        stream = self.stream or sys.stdout

        # Entferne alle bestehenden Handler
        root_logger = logging.getLogger()
        for handler in root_logger.handlers[:]:
            root_logger.removeHandler(handler)

        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(self.log_format))
        root_logger.addHandler(handler)
        root_logger.setLevel(self.log_level)

        # Framework-Logger leiten an den Root-Handler weiter
        for logger_name in ('werkzeug', 'waitress', 'flask', 'livereload'):
            framework_logger = logging.getLogger(logger_name)
            for h in framework_logger.handlers[:]:
                framework_logger.removeHandler(h)
            framework_logger.setLevel(self.log_level)
            framework_logger.propagate = True

        logger = logging.getLogger('loca')
        logger.setLevel(self.log_level)

        self._logging_initialized = True
        config_logger.debug("Logging-System initialisiert (Level %s)", logging.getLevelName(self.log_level))
        return logger

    def force_flush_handlers(self):
        """Leert alle Handler-Puffer, z.B. vor einem Prozessende."""
        for handler in logging.getLogger().handlers:
            try:
                handler.flush()
            except (OSError, ValueError):
                pass


class AppConfig:
    """
    Zentrale Konfiguration des Frontend-Servers.
    Liest Umgebungsvariablen (inklusive optionaler .env-Datei im Konfigurationsverzeichnis)
    und stellt die Flask-Konfiguration bereit.
    """

    def __init__(self, environ: Optional[Mapping[str, str]] = None, root_dir: Optional[str] = None):
        """
        Initialisiert die Konfiguration.

        Args:
            environ: Umgebungsvariablen (Standard: os.environ)
            root_dir: Projektverzeichnis mit dist/ und node_modules/
        """
        source = dict(os.environ if environ is None else environ)

        # Projektverzeichnis: dist/, node_modules/ und config/ liegen hier
        self.base_dir = os.path.abspath(
            root_dir
            or source.get('LOCA_ROOT_DIR')
            or os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        )
        self.config_dir = (source.get('LOCA_CONFIG_DIR')
                           or source.get('CONFIG_DIR')
                           or os.path.join(self.base_dir, 'config'))

        # .env-Werte ergänzen, echte Umgebungsvariablen haben Vorrang
        self.environ = load_env(self.config_dir, source)

        # Allgemeine Konfiguration
        self.env = self._get('LOCA_ENV', 'NODE_ENV', default='development')
        self.debug = self.env != 'production'
        self.logger_level = self._get('LOCA_LOGGER_LEVEL', 'LOGGER_LEVEL', default='debug')
        self.host = self._get('LOCA_HOST', default='0.0.0.0')
        self.port = self._get_int('LOCA_NODEJS_PORT', 'PORT', default=DEFAULT_PORT)
        self.livereload_port = LIVERELOAD_PORT
        self.demomode = parse_bool(self._get('LOCA_DEMO_MODE', 'DEMO_MODE'))

        # Session
        self.session_secret = self._get('LOCA_SESSION_SECRET', 'SESSION_SECRET')
        if not self.session_secret:
            self.session_secret = os.urandom(24).hex()
            config_logger.warning("LOCA_SESSION_SECRET nicht gesetzt, generiere zufälligen Schlüssel")
        self.session_lifetime = SESSION_LIFETIME

        # Verzeichnisse
        self.dist_dir = os.path.join(self.base_dir, 'dist')
        self.node_modules_dir = os.path.join(self.base_dir, 'node_modules')
        self.locales_dir = os.path.join(self.dist_dir, 'locales')
        self.views_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))),
                                      'pages', 'templates')

        # i18n
        self.fallback_language = 'en'
        self.i18n_cookie_domain = self._get('LOCA_I18N_COOKIE_DOMAIN')

        # Datenbank
        self.db_uri = self._get('LOCA_DATABASE_URL', 'DATABASE_URL',
                                default='sqlite:///' + os.path.join(self.base_dir, 'loca.db'))

        self.flask_config = self.get_flask_config()

    def _get(self, *keys: str, default: Optional[str] = None) -> Optional[str]:
        for key in keys:
            value = self.environ.get(key)
            if value:
                return value
        return default

    def _get_int(self, *keys: str, default: int) -> int:
        value = self._get(*keys)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ConfigError(f"Ungültiger Zahlenwert für {'/'.join(keys)}", {'value': value})

    @property
    def mode(self) -> str:
        return 'development' if self.debug else 'production'

    def get_flask_config(self) -> Dict[str, Any]:
        """
        Gibt die Flask-Konfiguration als Dictionary zurück.

        Returns:
            Dictionary mit Flask-Konfigurationsparametern
        """
        return {
            'DEBUG': self.debug,
            'SECRET_KEY': self.session_secret,
            'SESSION_COOKIE_NAME': 'loca_session',
            'SESSION_COOKIE_HTTPONLY': True,
            'SESSION_REFRESH_EACH_REQUEST': True,
            'PERMANENT_SESSION_LIFETIME': self.session_lifetime,
            'SQLALCHEMY_DATABASE_URI': self.db_uri,
            'SQLALCHEMY_TRACK_MODIFICATIONS': False,
            'LOCA_DEMO_MODE': self.demomode,
        }

    def create_logging_manager(self, stream=None) -> LoggingManager:
        return LoggingManager(self.logger_level, stream=stream)

    def as_dict(self) -> Dict[str, Any]:
        """Konfiguration als Dictionary, Geheimnisse zensiert."""
        return {
            'env': self.env,
            'debug': self.debug,
            'demomode': self.demomode,
            'host': self.host,
            'port': self.port,
            'loggerLevel': self.logger_level,
            'configDir': self.config_dir,
            'distDir': self.dist_dir,
            'viewsDir': self.views_dir,
            'database': _censor(self.db_uri),
            'sessionSecret': _censor(self.session_secret),
            'sessionLifetimeSeconds': int(self.session_lifetime.total_seconds()),
        }

    def dump(self) -> str:
        return json.dumps(self.as_dict(), indent='\t')

    def log_env_vars(self):
        log_env_vars(self.environ)


def _censor(value: Optional[str]) -> str:
    if not value:
        return ''
    if len(value) > 8:
        return value[:4] + '****' + value[-4:]
    return '********'
