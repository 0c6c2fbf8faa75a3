"""
Pytest-Konfiguration und gemeinsame Fixtures für Tests.
"""

import json

import pytest

from loca.bootstrap.app_factory import create_app
from loca.config.config import AppConfig
from loca.core.db_init import init_db
from loca.core.models import User, db as _db

TEST_DATABASE_URI = 'sqlite:///:memory:'
TEST_SECRET = 'test_secret_key'

LOCALES = {
    'en': {
        'Welcome': 'Welcome',
        'Sign in': 'Sign in',
        'Hello %s': 'Hello %s',
        'menu': {'rents': 'Rents', 'tenants': 'Tenants'},
        'tenant': 'One tenant',
        'tenant_plural': '{{count}} tenants',
        'greeting': 'Hi {{name}}',
    },
    'fr': {
        'Welcome': 'Bienvenue',
        'Sign in': 'Se connecter',
        'Hello %s': 'Bonjour %s',
        'menu': {'rents': 'Loyers'},
        'tenant': 'Un locataire',
        'tenant_plural': '{{count}} locataires',
    },
    'de': {
        'Welcome': 'Willkommen',
    },
}


@pytest.fixture
def root_dir(tmp_path):
    """Projektverzeichnis mit dist/, Locale-Dateien und statischen Dateien."""
    dist = tmp_path / 'dist'
    locales = dist / 'locales'
    locales.mkdir(parents=True)
    for lng, resources in LOCALES.items():
        (locales / f'{lng}.json').write_text(json.dumps(resources), encoding='utf-8')

    (dist / 'pdf').mkdir()
    (dist / 'pdf' / 'x.pdf').write_bytes(b'%PDF-1.4 loca test')
    (dist / 'images').mkdir()
    (dist / 'images' / 'favicon.png').write_bytes(b'\x89PNG\r\n\x1a\nfavicon')
    (dist / 'images' / 'logo.png').write_bytes(b'\x89PNG\r\n\x1a\nlogo')
    (dist / 'robots.txt').write_text('User-agent: *\nDisallow:\n')
    (tmp_path / 'config').mkdir()
    return tmp_path


@pytest.fixture
def make_config(root_dir):
    """Erzeugt eine Konfiguration mit Testumgebungsvariablen."""

    def _make(**env):
        environ = {
            'LOCA_SESSION_SECRET': TEST_SECRET,
            'LOCA_DATABASE_URL': TEST_DATABASE_URI,
            **env,
        }
        return AppConfig(environ, root_dir=str(root_dir))

    return _make


@pytest.fixture
def make_app(make_config):
    """Erstellt eine initialisierte Test-App, optional mit eigener Routentabelle."""

    def _make(routes=None, **env):
        app = create_app(make_config(**env), routes=routes)
        app.config.update(TESTING=True)
        init_db(app)
        return app

    return _make


@pytest.fixture
def app(make_app):
    """Erstellt eine Flask-Testanwendung im Entwicklungsmodus."""
    return make_app()


@pytest.fixture
def client(app):
    """Erstellt einen Testclient für Flask."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_user(app):
    """Erstellt einen Testbenutzer."""
    with app.app_context():
        user = User(email='test@example.com', name='Test User')
        user.set_password('geheim123')
        _db.session.add(user)
        _db.session.commit()
        user_id = user.id
    return {'id': user_id, 'email': 'test@example.com', 'password': 'geheim123'}

