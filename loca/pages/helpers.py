"""
Hilfsfunktionen, die allen Templates als Globals zur Verfügung stehen.
"""

import json
from typing import Any, Optional

from markupsafe import Markup


def public_url(path: str) -> str:
    """URL einer Datei unter dist/, z.B. public_url('css/app.css') -> '/public/css/app.css'."""
    return '/public/' + path.lstrip('/')


def truncate_text(text: Optional[str], length: int = 50, suffix: str = '…') -> str:
    if not text:
        return ''
    if len(text) <= length:
        return text
    return text[:length - len(suffix)].rstrip() + suffix


def class_if(condition: Any, class_name: str, otherwise: str = '') -> str:
    return class_name if condition else otherwise


def to_json(value: Any) -> Markup:
    """JSON für data-Attribute und Inline-Skripte, HTML-sicher maskiert."""
    dumped = json.dumps(value, ensure_ascii=False)
    dumped = dumped.replace('<', '\\u003c').replace('>', '\\u003e').replace('&', '\\u0026')
    return Markup(dumped)


HELPERS = {
    'public_url': public_url,
    'truncate_text': truncate_text,
    'class_if': class_if,
    'to_json': to_json,
}
