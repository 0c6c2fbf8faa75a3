"""
Routen für Anmeldung und Abmeldung.
Die Sitzung liegt im signierten Session-Cookie, Flask-Login liest sie pro Anfrage.
"""

import logging

from flask import Blueprint, current_app, g, jsonify, redirect, render_template, url_for
from flask_login import current_user, login_user, logout_user

from loca.core.models import User, db

# Logger konfigurieren
logger = logging.getLogger(__name__)


def create_auth_blueprint() -> Blueprint:
    """Erstellt den Blueprint mit den Authentifizierungs-Routen."""
    auth_bp = Blueprint('auth', __name__)

    @auth_bp.route('/login', methods=['GET'])
    def login():
        return render_template('login.html')

    @auth_bp.route('/login', methods=['POST'])
    def login_submit():
        if current_app.config.get('LOCA_DEMO_MODE'):
            logger.info("Login-Versuch im Demo-Modus abgelehnt")
            return render_template('login.html', error=g.t('Login is disabled in demo mode')), 403

        body = g.get('body')
        if not isinstance(body, dict):
            return render_template('login.html', error=g.t('Invalid request')), 400

        email = body.get('email') or ''
        password = body.get('password') or ''
        if not isinstance(email, str) or not isinstance(password, str):
            logger.info("Anmeldung mit ungültigen Feldtypen abgelehnt")
            return render_template('login.html', error=g.t('Invalid request')), 400
        email = email.strip().lower()

        user = db.session.execute(db.select(User).filter_by(email=email)).scalar_one_or_none()
        if user is None or not user.check_password(password):
            logger.info("Fehlgeschlagene Anmeldung für %s", email or '<leer>')
            return render_template('login.html', error=g.t('Invalid email or password')), 401

        login_user(user)
        logger.info("Benutzer %s angemeldet", user.id)
        return redirect(url_for('pages.dashboard'))

    @auth_bp.route('/logout', methods=['GET'])
    def logout():
        if current_user.is_authenticated:
            logger.info("Benutzer %s abgemeldet", current_user.id)
        logout_user()
        return redirect(url_for('pages.index'))

    @auth_bp.route('/api/session', methods=['GET'])
    def session_info():
        if not current_user.is_authenticated:
            return jsonify({'authenticated': False}), 401
        return jsonify({'authenticated': True, 'user': current_user.to_dict()})

    return auth_bp
