"""
Sprachabhängige Zahlen-, Währungs- und Datumsformatierung pro Anfrage.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from babel import Locale, UnknownLocaleError
from babel.dates import format_date as babel_format_date
from babel.numbers import format_currency, format_decimal
from flask import Flask, g

logger = logging.getLogger(__name__)

MAX_SIGNIFICANT_DIGITS = 2
DEFAULT_CURRENCY = 'USD'


def round_significant(value, digits: int = MAX_SIGNIFICANT_DIGITS) -> Decimal:
    """
    Rundet auf höchstens `digits` signifikante Stellen (kaufmännisch).
    1234 -> 1200, 0.01567 -> 0.016
    """
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Keine Zahl: {value!r}")
    if not number.is_finite() or number == 0:
        return number
    quantum = Decimal(1).scaleb(number.adjusted() - digits + 1)
    return number.quantize(quantum, rounding=ROUND_HALF_UP)


def parse_locale(language: str, fallback: str = 'en') -> Locale:
    try:
        return Locale.parse(language, sep='-')
    except (UnknownLocaleError, ValueError, TypeError):
        logger.debug("Unbekannte Locale %r, verwende %s", language, fallback)
        return Locale.parse(fallback)


@dataclass(frozen=True)
class LocaleContext:
    """Formatierungskontext einer einzelnen Anfrage."""

    language: str
    locale: Locale
    date_locale: str
    currency: str = DEFAULT_CURRENCY

    @classmethod
    def from_language(cls, language: str, fallback: str = 'en') -> 'LocaleContext':
        language = language or fallback
        date_locale = language.split('-')[0]
        return cls(
            language=language,
            locale=parse_locale(language, fallback),
            date_locale=parse_locale(date_locale, fallback).language,
        )

    def number_format(self, value) -> str:
        return format_decimal(round_significant(value), locale=self.locale, decimal_quantization=False)

    def currency_format(self, value, currency: str = None) -> str:
        return format_currency(value, currency or self.currency, locale=self.locale)

    def format_date(self, value, format: str = 'medium') -> str:
        return babel_format_date(value, format=format, locale=self.date_locale)


def register_formatting(app: Flask, fallback_language: str = 'en'):
    """
    Erzeugt pro Anfrage einen LocaleContext aus g.language.
    Muss nach der Spracherkennung registriert werden.
    """

    @app.before_request
    def inject_locale_context():
        g.locale_context = LocaleContext.from_language(g.get('language'), fallback_language)

    @app.context_processor
    def inject_formatters():
        ctx = g.get('locale_context') or LocaleContext.from_language(fallback_language)
        return {
            'locale_context': ctx,
            'number_format': ctx.number_format,
            'currency_format': ctx.currency_format,
            'format_date': ctx.format_date,
        }
