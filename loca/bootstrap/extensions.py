"""
Flask-Erweiterungen für die Anwendung.
Hier werden alle Erweiterungen zentral instanziiert und in create_app initialisiert.
"""

from flask_login import LoginManager

from loca.core.models import db

login_manager = LoginManager()
login_manager.login_view = 'auth.login'
login_manager.session_protection = 'basic'

# Diese Erweiterungen werden in create_app initialisiert
__all__ = ['db', 'login_manager']
