"""
Ausnahmeklassen für den Loca-Frontend-Server.
"""


class LocaError(Exception):
    """Basisklasse für alle Fehler des Frontend-Servers."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class ConfigError(LocaError):
    """Ungültige oder unvollständige Konfiguration."""


class StorageInitError(LocaError):
    """Die Datenbank konnte beim Start nicht initialisiert werden."""
