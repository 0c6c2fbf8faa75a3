"""
Bootstrap-Komponenten für die Anwendungsinitialisierung.
"""

from .app_factory import PIPELINE, AppContext, create_app, get_app_context
from .live_reload import start_livereload

__all__ = [
    'PIPELINE', 'AppContext', 'create_app', 'get_app_context', 'start_livereload'
]
