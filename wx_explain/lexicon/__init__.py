"""Static lookup tables for NOTAM codes and vocabulary."""

from wx_explain.lexicon.tables import (
    Lexicon,
    LexiconSet,
    load_lexicon,
    load_default_lexicons,
)

__all__ = [
    'Lexicon',
    'LexiconSet',
    'load_lexicon',
    'load_default_lexicons',
]
