"""
Konfiguration des Loca-Frontend-Servers.
"""

from .config import AppConfig, LoggingManager, parse_bool, parse_level

__all__ = ['AppConfig', 'LoggingManager', 'parse_bool', 'parse_level']
