#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""
Loca Web-Frontend.
Startet den Server: Logging, App-Factory, Datenbank-Initialisierung, Listener.
"""

import logging
import signal
import sys

from waitress import create_server

from loca.bootstrap.app_factory import create_app, get_app_context
from loca.bootstrap.live_reload import start_livereload
from loca.config.config import AppConfig, LoggingManager
from loca.core.db_init import get_connection_info, init_db
from loca.core.exceptions import ConfigError, StorageInitError

logger = logging.getLogger('loca.app')


def on_listening(app, port):
    """Meldet den gestarteten Listener und startet in der Entwicklung Live-Reload."""
    ctx = get_app_context(app)
    config = ctx.config

    logger.info("Listening port %s", port)
    if not config.debug:
        logger.info("Produktionsmodus")
    else:
        logger.info("Entwicklungsmodus (no minify/no uglify)")
    if config.demomode:
        logger.info("Demo-Modus (Login deaktiviert)")

    logger.debug("Konfiguration geladen aus %s", config.config_dir)
    logger.debug(config.dump())
    config.log_env_vars()

    if config.debug:
        start_livereload(config.dist_dir, config.livereload_port, on_change=ctx.i18n.reload)


def serve(app, host, port):
    """
    Bindet den Listener und bedient Anfragen bis zum Prozessende.
    """
    ctx = get_app_context(app)
    server = create_server(app, host=host, port=port)
    on_listening(app, port)

    def shutdown(sig, frame):
        logger.info("Signal empfangen, beende Server...")
        ctx.logging_manager.force_flush_handlers()
        server.close()
        sys.exit(0)

    signal.signal(signal.SIGTERM, shutdown)

    try:
        server.run()
    except KeyboardInterrupt:
        logger.info("Server durch Benutzer beendet")
    finally:
        ctx.logging_manager.force_flush_handlers()


def main():
    """Einstiegspunkt des Servers."""
    try:
        config = AppConfig()
    except ConfigError as e:
        LoggingManager().setup_logging()
        logger.error("Ungültige Konfiguration: %s", e)
        sys.exit(1)

    logging_manager = config.create_logging_manager()
    logging_manager.setup_logging()

    try:
        app = create_app(config, logging_manager=logging_manager)
        init_db(app)
    except StorageInitError as e:
        logger.error("%s", e)
        logging_manager.force_flush_handlers()
        sys.exit(1)

    logger.debug("Datenbank: %s", get_connection_info(app))
    serve(app, config.host, config.port)


if __name__ == '__main__':
    main()
