"""
Tests für Übersetzungen, Spracherkennung und Formatierung.
"""

import json
from datetime import date
from decimal import Decimal

import pytest
from werkzeug.wrappers import Request

from loca.i18n import (FileSystemBackend, I18n, LanguageDetector, LocaleContext,
                       create_i18n, format_language_code, round_significant)


@pytest.fixture
def locales_dir(root_dir):
    return root_dir / 'dist' / 'locales'


@pytest.fixture
def backend(locales_dir):
    return FileSystemBackend(str(locales_dir / '{{lng}}.json'))


@pytest.fixture
def i18n(backend):
    return I18n(backend, fallback_language='en')


def make_request(**headers):
    return Request.from_values(headers=headers)


# --- Backend ---

def test_backend_loads_lazily_and_caches(backend, locales_dir):
    assert backend.read('fr')['Welcome'] == 'Bienvenue'

    (locales_dir / 'fr.json').write_text(json.dumps({'Welcome': 'Salut'}), encoding='utf-8')
    assert backend.read('fr')['Welcome'] == 'Bienvenue'

    backend.reload()
    assert backend.read('fr')['Welcome'] == 'Salut'


def test_backend_missing_file(backend):
    assert backend.read('ja') == {}


def test_backend_invalid_json(backend, locales_dir):
    (locales_dir / 'it.json').write_text('{kaputt', encoding='utf-8')
    assert backend.read('it') == {}


def test_backend_available_languages(backend, locales_dir):
    assert backend.available_languages() == ['de', 'en', 'fr']

    (locales_dir / 'es.json').write_text('{}', encoding='utf-8')
    assert 'es' not in backend.available_languages()
    backend.reload()
    assert 'es' in backend.available_languages()


def test_backend_path_with_namespace(tmp_path):
    backend = FileSystemBackend(str(tmp_path / '{{lng}}' / '{{ns}}.json'))
    assert backend.path_for('fr', 'common') == str(tmp_path / 'fr' / 'common.json')
    assert backend.available_languages() == []


# --- Spracherkennung ---

def test_format_language_code():
    assert format_language_code('en-us') == 'en-US'
    assert format_language_code('pt_br') == 'pt-BR'
    assert format_language_code('zh-hant-tw') == 'zh-Hant-TW'


def test_detect_from_header(locales_dir):
    _, detector = create_i18n(str(locales_dir))
    request = make_request(**{'Accept-Language': 'fr;q=0.9,de;q=0.5'})
    assert detector.detect(request) == 'fr'


def test_cookie_wins_over_header(locales_dir):
    _, detector = create_i18n(str(locales_dir))
    request = make_request(**{'Accept-Language': 'fr', 'Cookie': 'locaI18next=de'})
    assert detector.detect(request) == 'de'


def test_unsupported_cookie_falls_back_to_header(locales_dir):
    _, detector = create_i18n(str(locales_dir))
    request = make_request(**{'Accept-Language': 'fr', 'Cookie': 'locaI18next=ja'})
    assert detector.detect(request) == 'fr'


def test_unsupported_language_uses_fallback(locales_dir):
    _, detector = create_i18n(str(locales_dir))
    assert detector.detect(make_request(**{'Accept-Language': 'ja'})) == 'en'
    assert detector.detect(make_request()) == 'en'


def test_region_matches_base_language(locales_dir):
    _, detector = create_i18n(str(locales_dir))
    assert detector.detect(make_request(**{'Accept-Language': 'fr-CA'})) == 'fr'


def test_detector_without_supported_languages():
    detector = LanguageDetector()
    assert detector.detect(make_request(**{'Accept-Language': 'pt-br'})) == 'pt-BR'


def test_detector_rejects_unknown_source():
    with pytest.raises(ValueError):
        LanguageDetector(order=('querystring',))


# --- Übersetzung ---

def test_translate_plain_and_fallback(i18n):
    assert i18n.t('Welcome', lng='fr') == 'Bienvenue'
    assert i18n.t('Sign in', lng='de') == 'Sign in'
    assert i18n.t('Welcome') == 'Welcome'


def test_translate_nested_keys(i18n):
    assert i18n.t('menu::rents', lng='fr') == 'Loyers'
    assert i18n.t('menu::tenants', lng='fr') == 'Tenants'


def test_translate_plural(i18n):
    assert i18n.t('tenant', lng='fr', count=1) == 'Un locataire'
    assert i18n.t('tenant', lng='fr', count=3) == '3 locataires'
    assert i18n.t('tenant', lng='en', count=0) == '0 tenants'


def test_translate_interpolation_and_sprintf(i18n):
    assert i18n.t('greeting', name='Ana') == 'Hi Ana'
    assert i18n.t('Hello %s', 'Ana', lng='fr') == 'Bonjour Ana'


def test_translate_missing_key(i18n):
    assert i18n.t('Unknown key', lng='fr') == 'Unknown key'
    assert i18n.t('Unknown key', default='Standard') == 'Standard'
    assert i18n.exists('Welcome', lng='de')
    assert not i18n.exists('Unknown key')


def test_translate_namespace(tmp_path):
    (tmp_path / 'en').mkdir()
    (tmp_path / 'en' / 'translation.json').write_text(json.dumps({'title': 'Rents'}), encoding='utf-8')
    (tmp_path / 'en' / 'billing.json').write_text(json.dumps({'title': 'Invoices'}), encoding='utf-8')
    i18n = I18n(FileSystemBackend(str(tmp_path / '{{lng}}' / '{{ns}}.json')))

    assert i18n.t('title') == 'Rents'
    assert i18n.t('billing:::title') == 'Invoices'
    assert i18n.t('other:::title') == 'title'


def test_language_chain_and_direction(i18n):
    assert i18n.language_chain('pt-BR') == ['pt-BR', 'pt', 'en']
    assert i18n.language_chain(None) == ['en']
    assert i18n.dir('ar') == 'rtl'
    assert i18n.dir('fr-CA') == 'ltr'


# --- Formatierung ---

def test_round_significant():
    assert round_significant(1234) == Decimal('1.2E+3')
    assert round_significant(0.01567) == Decimal('0.016')
    assert round_significant(0) == 0
    with pytest.raises(ValueError):
        round_significant('abc')


def test_number_format_per_locale():
    assert LocaleContext.from_language('en').number_format(1234) == '1,200'
    assert LocaleContext.from_language('de').number_format(1234) == '1.200'
    assert LocaleContext.from_language('en').number_format(0.01567) == '0.016'


def test_currency_format():
    assert LocaleContext.from_language('en').currency_format(12.5) == '$12.50'


def test_format_date():
    ctx = LocaleContext.from_language('en-US')
    assert ctx.date_locale == 'en'
    assert ctx.format_date(date(2024, 1, 15), 'long') == 'January 15, 2024'


def test_unknown_locale_falls_back():
    ctx = LocaleContext.from_language('xx-YY')
    assert ctx.language == 'xx-YY'
    assert str(ctx.locale) == 'en'
