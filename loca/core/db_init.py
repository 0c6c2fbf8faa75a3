"""
Modul zur Initialisierung der Datenbankverbindung beim Start.
"""

import logging

from flask import Flask
from sqlalchemy import text
from sqlalchemy.exc import ArgumentError, SQLAlchemyError

from .exceptions import StorageInitError
from .models import db

# Logger konfigurieren
logger = logging.getLogger(__name__)


def bind_db(app: Flask):
    """
    Bindet SQLAlchemy an die App. Flask-SQLAlchemy erzeugt die Engine dabei sofort,
    eine ungültige Datenbank-URL oder ein fehlender Treiber fällt also schon hier auf.

    Raises:
        StorageInitError: Wenn die Engine nicht erstellt werden kann
    """
    try:
        db.init_app(app)
    except (ArgumentError, ImportError) as e:
        raise StorageInitError("Datenbank-Engine konnte nicht erstellt werden", {'error': str(e)}) from e


def init_db(app: Flask):
    """
    Prüft die Datenbankverbindung und erstellt fehlende Tabellen.
    Der Listener darf erst nach erfolgreichem Abschluss gestartet werden.

    Args:
        app: Die Flask-App mit initialisiertem SQLAlchemy

    Raises:
        StorageInitError: Wenn die Datenbank nicht erreichbar ist
    """
    with app.app_context():
        try:
            db.session.execute(text('SELECT 1'))
            db.create_all()
        except SQLAlchemyError as e:
            db.session.rollback()
            raise StorageInitError("Datenbank-Initialisierung fehlgeschlagen", {'error': str(e)}) from e
        finally:
            db.session.remove()

    logger.info("Datenbanktabellen erfolgreich erstellt/überprüft")


def get_connection_info(app: Flask):
    """
    Gibt Informationen über die aktuelle Datenbankverbindung zurück.
    """
    with app.app_context():
        engine = db.engine
        return {
            "dialect": engine.dialect.name,
            "driver": engine.dialect.driver,
            "database": engine.url.database,
        }
