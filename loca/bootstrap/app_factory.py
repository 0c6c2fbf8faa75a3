"""
App-Factory für den Loca-Frontend-Server.
Erstellt die Flask-App und registriert die Request-Stufen in fester Reihenfolge.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from flask import Flask, g
from flask.sessions import SecureCookieSessionInterface
from flask_login import current_user
from werkzeug.debug import DebuggedApplication

from loca.bootstrap.extensions import db, login_manager
from loca.bootstrap.logging_setup import register_access_logging, register_error_logging
from loca.bootstrap.middleware import (MethodOverrideMiddleware, mount_favicon,
                                       mount_static, parse_body, static_mounts)
from loca.config.config import AppConfig, LoggingManager
from loca.core.db_init import bind_db
from loca.core.models import User
from loca.i18n import I18n, LanguageDetector, create_i18n, handle, register_formatting
from loca.pages import HELPERS
from loca.routes import ROUTES, RouteUnit, resolve_route_units

# Logger konfigurieren
logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Alles, was die Request-Stufen beim Aufbau brauchen."""

    config: AppConfig
    logging_manager: LoggingManager
    i18n: I18n
    detector: LanguageDetector
    stages: List[str] = field(default_factory=list)
    static_exports: Dict[str, str] = field(default_factory=dict)


class LocaSessionInterface(SecureCookieSessionInterface):
    """
    Signierte Cookie-Session. Nicht-leere Sessions sind permanent, ihr Ablauf
    wird bei jeder Antwort um die Session-Lebensdauer verschoben.
    """

    def save_session(self, app, session, response):
        if session and not session.permanent:
            session.permanent = True
        super().save_session(app, session, response)


def register_body_parser(app: Flask, ctx: AppContext):
    app.before_request(parse_body)


def register_method_override(app: Flask, ctx: AppContext):
    app.wsgi_app = MethodOverrideMiddleware(app.wsgi_app)


def register_session(app: Flask, ctx: AppContext):
    app.session_interface = LocaSessionInterface()


def register_authentication(app: Flask, ctx: AppContext):
    login_manager.init_app(app)

    @login_manager.user_loader
    def load_user(user_id: str) -> Optional[User]:
        return db.session.get(User, user_id)

    @app.before_request
    def load_authenticated_user():
        g.user = current_user if current_user.is_authenticated else None


def register_i18n(app: Flask, ctx: AppContext):
    handle(app, ctx.i18n, ctx.detector)


def register_formatting_stage(app: Flask, ctx: AppContext):
    register_formatting(app, ctx.config.fallback_language)


def register_favicon(app: Flask, ctx: AppContext):
    mount_favicon(app, os.path.join(ctx.config.dist_dir, 'images', 'favicon.png'))


def register_static(app: Flask, ctx: AppContext):
    ctx.static_exports = mount_static(app, static_mounts(ctx.config.base_dir, ctx.config.dist_dir))


def register_templating(app: Flask, ctx: AppContext):
    app.template_folder = ctx.config.views_dir
    app.jinja_env.globals['demomode'] = ctx.config.demomode


def register_access_log(app: Flask, ctx: AppContext):
    register_access_logging(app)


def register_error_log(app: Flask, ctx: AppContext):
    register_error_logging(app)


# Reihenfolge ist verbindlich: Body vor Handlern, Session vor Authentifizierung,
# Spracherkennung vor Formatierung
PIPELINE: Tuple[Tuple[str, Callable[[Flask, AppContext], None]], ...] = (
    ('body_parser', register_body_parser),
    ('method_override', register_method_override),
    ('session', register_session),
    ('authentication', register_authentication),
    ('i18n', register_i18n),
    ('formatting', register_formatting_stage),
    ('favicon', register_favicon),
    ('static', register_static),
    ('templating', register_templating),
    ('access_log', register_access_log),
    ('error_log', register_error_log),
)


def create_app(config: Optional[AppConfig] = None,
               routes: Optional[Iterable[RouteUnit]] = None,
               helpers: Optional[Mapping[str, Callable]] = None,
               logging_manager: Optional[LoggingManager] = None) -> Flask:
    """
    Erstellt und konfiguriert die Flask-Anwendung.

    Args:
        config: Konfiguration (Standard: aus den Umgebungsvariablen)
        routes: Routentabelle (Standard: loca.routes.ROUTES)
        helpers: Template-Hilfsfunktionen (Standard: loca.pages.HELPERS)
        logging_manager: Logging-Manager des Prozesses

    Returns:
        Die konfigurierte Flask-App
    """
    config = config or AppConfig()
    logging_manager = logging_manager or config.create_logging_manager()
    i18n, detector = create_i18n(config.locales_dir, config.fallback_language, config.i18n_cookie_domain)
    ctx = AppContext(config=config, logging_manager=logging_manager, i18n=i18n, detector=detector)

    app = Flask('loca', static_folder=None)
    app.config.from_mapping(config.flask_config)
    app.extensions['loca'] = ctx

    # Datenbank anbinden, die Initialisierung erfolgt vor dem Start des Listeners
    bind_db(app)

    for name, register in PIPELINE:
        register(app, ctx)
        ctx.stages.append(name)
        logger.debug("Stufe registriert: %s", name)

    for blueprint in resolve_route_units(ROUTES if routes is None else routes):
        app.register_blueprint(blueprint)
        logger.debug("Routen registriert: %s", blueprint.name)
    ctx.stages.append('routes')

    if config.debug:
        # Entwickler-Fehlerseite nur im Debug-Modus
        app.wsgi_app = DebuggedApplication(app.wsgi_app, evalex=False, pin_security=False)
        ctx.stages.append('debug_error_page')

    app.jinja_env.globals.update(HELPERS if helpers is None else helpers)

    logger.info("App initialisiert (%s-Modus, %d Stufen)", config.mode, len(ctx.stages))
    return app


def get_app_context(app: Flask) -> AppContext:
    return app.extensions['loca']
