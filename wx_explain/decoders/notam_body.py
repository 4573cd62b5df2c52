"""NOTAM item E vocabulary mapper.

Walks the free-text body token by token and replaces ICAO abbreviations
with their localized wording from the body lexicon. A few multi-word
idioms are matched first, and runway/taxiway/apron designators are kept
verbatim after their keyword.

Example (en):
    "RWY 09L/27R CLSD DUE TO WIP" -> "runway 09L/27R closed due to work in progress"
"""

import re
from typing import List, Optional, Sequence, Tuple

from wx_explain.lexicon.tables import LexiconSet, load_default_lexicons

ITEM_E_PREFIX = re.compile(r'^E\)\s*', re.IGNORECASE)

# (token sequence, lexicon key) checked in order at each position
IDIOMS: Sequence[Tuple[Tuple[str, ...], str]] = (
    (("WORK", "IN", "PROGRESS"), "WIP"),
    (("ACT", "ARE"), "ACT ARE"),
    (("PARKING", "STAND"), "PARKING STAND"),
    (("DUE", "TO"), "DUE TO"),
)

# Keywords whose following token is a designator, not vocabulary
DESIGNATOR_KEYWORDS = frozenset({"RWY", "TWY", "APRON"})

NUMBER_ABBREVIATION = "NR."

_TOKEN_PARTS = re.compile(r'^([(\[]*)([A-Z0-9/]+)([.,;:)\]]*)$', re.IGNORECASE)
_NUMBER_PREFIX = re.compile(r'^NR\.(.+)$', re.IGNORECASE)
_NUMBER_ANYWHERE = re.compile(r'NR\.', re.IGNORECASE)


class NotamBodyMapper:
    """
    Localize the vocabulary of a NOTAM body.

    Tokens without a lexicon entry pass through unchanged.
    """

    def __init__(self, locale: str, lexicons: Optional[LexiconSet] = None):
        self.locale = locale
        self.lexicons = lexicons if lexicons is not None else load_default_lexicons()

    def resolve(self, code: str) -> str:
        return self.lexicons.body.get(code, self.locale) or code

    def map_token(self, token: str) -> str:
        """Map a single token, keeping surrounding brackets and punctuation."""
        number = _NUMBER_PREFIX.match(token)
        if number:
            return f"{self.resolve(NUMBER_ABBREVIATION)}{number.group(1)}"
        if NUMBER_ABBREVIATION in token.upper():
            return _NUMBER_ANYWHERE.sub(lambda _: self.resolve(NUMBER_ABBREVIATION), token)

        match = _TOKEN_PARTS.match(token)
        if not match:
            return self.resolve(token.upper()) if token.upper() in self.lexicons.body else token
        prefix, core, suffix = match.groups()
        return f"{prefix}{self.resolve(core.upper())}{suffix}"

    def _match_idiom(self, tokens: List[str], index: int) -> Optional[Tuple[str, int]]:
        for words, key in IDIOMS:
            window = tokens[index:index + len(words)]
            if len(window) == len(words) and all(t.upper() == w for t, w in zip(window, words)):
                return self.resolve(key), len(words)
        return None

    def map_body(self, body: Optional[str]) -> str:
        """
        Map a NOTAM body.

        Returns an empty string for an empty body. Whitespace runs are
        collapsed to single spaces.
        """
        if not body:
            return ""
        cleaned = ITEM_E_PREFIX.sub("", body.strip())
        tokens = cleaned.split()
        if not tokens:
            return cleaned

        result: List[str] = []
        i = 0
        while i < len(tokens):
            token = tokens[i]
            upper = token.upper()

            idiom = self._match_idiom(tokens, i)
            if idiom:
                text, consumed = idiom
                result.append(text)
                i += consumed
                continue

            if upper in DESIGNATOR_KEYWORDS and i + 1 < len(tokens):
                result.append(self.map_token(token))
                result.append(tokens[i + 1])
                i += 2
                continue

            result.append(self.map_token(token))
            i += 1

        return " ".join(result)
