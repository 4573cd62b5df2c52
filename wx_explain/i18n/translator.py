"""Key to localized template lookup with parameter interpolation."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional

from wx_explain import config
from wx_explain.errors import LexiconLoadError

logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r'\{(\w+)\}')

# Loaded locale dictionaries, keyed by locale name
_DICTIONARIES: Dict[str, Dict[str, Any]] = {}


def _load_locale(locale: str) -> Optional[Dict[str, Any]]:
    """Load a bundled locale dictionary, or None if there is no such locale."""
    if locale in _DICTIONARIES:
        return _DICTIONARIES[locale]

    path = config.LOCALES_DIR / f"{locale}.json"
    if not path.exists():
        return None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise LexiconLoadError("Unable to read locale dictionary", path=path, details=e) from e
    if not isinstance(data, dict):
        raise LexiconLoadError("Locale dictionary must be a JSON object", path=path)

    _DICTIONARIES[locale] = data
    return data


def available_locales() -> list:
    """List the bundled locale names."""
    return sorted(p.stem for p in Path(config.LOCALES_DIR).glob('*.json'))


def format_template(template: str, params: Optional[Mapping[str, Any]] = None) -> str:
    """
    Substitute ``{name}`` placeholders.

    Placeholders whose parameter is missing or None are left as written.
    """
    if not params:
        return template

    def replace(match: re.Match) -> str:
        value = params.get(match.group(1))
        if value is None:
            return match.group(0)
        return str(value)

    return _PLACEHOLDER.sub(replace, template)


def lookup_text(translator: Callable[..., str], key: str) -> Optional[str]:
    """
    Resolve a key to text, or None on a miss.

    Works with any ``t(key, **params)`` callable: a plain callable signals
    a miss by returning the key unchanged.
    """
    lookup = getattr(translator, 'lookup', None)
    if lookup is not None:
        return lookup(key) or None
    text = translator(key)
    if not text or text == key:
        return None
    return text


class Translator:
    """
    Localization capability.

    Calling the translator with a dotted key returns the template for
    that key in the translator's locale with parameters interpolated.
    A missing key returns the key itself, so callers can detect a miss
    by comparing the result with the key.

    Example:
        t = Translator("en")
        t("explain.metar.wind", wind="240° 15kt")
        # "Wind 240° 15kt"
    """

    def __init__(self, locale: Optional[str] = None, dictionary: Optional[Mapping[str, Any]] = None):
        """
        Initialize translator.

        Args:
            locale: Locale name, defaults to config.DEFAULT_LOCALE
            dictionary: Explicit template dictionary; when omitted the
                bundled dictionary for the locale is used, falling back
                to config.FALLBACK_LOCALE for unknown locales, in which
                case the translator takes the fallback locale as its own
        """
        self.locale = locale or config.DEFAULT_LOCALE
        if dictionary is None:
            dictionary = _load_locale(self.locale)
            if dictionary is None:
                logger.debug("No dictionary for locale %s, using %s", self.locale, config.FALLBACK_LOCALE)
                dictionary = _load_locale(config.FALLBACK_LOCALE) or {}
                self.locale = config.FALLBACK_LOCALE
        self._dictionary = dictionary

    def lookup(self, key: str) -> Optional[str]:
        """Get the raw template for a key, or None if absent."""
        node: Any = self._dictionary
        for part in key.split('.'):
            if not isinstance(node, Mapping) or part not in node:
                return None
            node = node[part]
        if isinstance(node, str):
            return node
        return None

    def has(self, key: str) -> bool:
        return self.lookup(key) is not None

    def __call__(self, key: str, **params: Any) -> str:
        template = self.lookup(key)
        if template is None:
            return key
        return format_template(template, params)

    def __repr__(self) -> str:
        return f"Translator(locale={self.locale!r})"
