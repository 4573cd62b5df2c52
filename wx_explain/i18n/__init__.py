"""Localization support."""

from wx_explain.i18n.translator import (
    Translator,
    format_template,
    available_locales,
    lookup_text,
)

__all__ = [
    'Translator',
    'format_template',
    'available_locales',
    'lookup_text',
]
