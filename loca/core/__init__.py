"""
Kernkomponenten: Datenbankmodelle, Datenbank-Initialisierung und Ausnahmen.
"""

from .db_init import bind_db, init_db
from .exceptions import ConfigError, LocaError, StorageInitError
from .models import User, db

__all__ = [
    'db', 'User', 'bind_db', 'init_db',
    'LocaError', 'ConfigError', 'StorageInitError'
]
