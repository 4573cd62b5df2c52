"""
Read-only code to localized text tables.

Lexicon files are JSON objects of the form::

    {"MR": {"en": "Runway", "zh-CN": "跑道"}, ...}

The bundled files live in ``lexicon/data``; WX_EXPLAIN_LEXICON_DIR can
point at a directory with replacements. Tables are loaded once and never
mutated.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Union

from wx_explain import config
from wx_explain.errors import LexiconLoadError

logger = logging.getLogger(__name__)

SUBJECT_FILE = "notam_q_subject.json"
CONDITION_FILE = "notam_q_condition.json"
FIR_FILE = "fir_codes.json"
BODY_FILE = "notam_body.json"


class Lexicon:
    """
    Immutable ``code -> {locale -> text}`` table.

    Example:
        subjects = Lexicon({"MR": {"en": "Runway"}})
        subjects.get("MR", "en")   # "Runway"
        subjects.get("ZZ", "en")   # None
    """

    def __init__(self, entries: Optional[Mapping[str, Mapping[str, str]]] = None, name: str = ""):
        self.name = name
        self._entries = MappingProxyType({
            code: MappingProxyType(dict(texts)) for code, texts in (entries or {}).items()
        })

    def get(self, code: str, locale: str) -> Optional[str]:
        """Get the text for a code in a locale, or None if absent."""
        texts = self._entries.get(code)
        if not texts:
            return None
        return texts.get(locale) or None

    def __contains__(self, code: object) -> bool:
        return code in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def codes(self):
        return self._entries.keys()

    def __repr__(self) -> str:
        return f"Lexicon(name={self.name!r}, entries={len(self)})"


def load_lexicon(path: Union[str, Path]) -> Lexicon:
    """
    Load one lexicon file.

    Raises:
        LexiconLoadError: If the file is unreadable or not a JSON object
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise LexiconLoadError("Unable to read lexicon", path=path, details=e) from e

    if not isinstance(data, dict):
        raise LexiconLoadError("Lexicon must be a JSON object", path=path)

    entries: Dict[str, Dict[str, str]] = {}
    for code, texts in data.items():
        if isinstance(texts, dict):
            entries[code] = {k: v for k, v in texts.items() if isinstance(v, str)}
        else:
            logger.debug("Skipping malformed lexicon entry %s in %s", code, path.name)
    return Lexicon(entries, name=path.stem)


@dataclass(frozen=True)
class LexiconSet:
    """The lexicons consumed by the decoders."""

    subject: Lexicon
    condition: Lexicon
    fir: Lexicon
    body: Lexicon

    @classmethod
    def empty(cls) -> 'LexiconSet':
        return cls(
            subject=Lexicon(name="subject"),
            condition=Lexicon(name="condition"),
            fir=Lexicon(name="fir"),
            body=Lexicon(name="body"),
        )

    @classmethod
    def from_directory(cls, directory: Union[str, Path]) -> 'LexiconSet':
        """Load all four lexicons from a directory; missing files give empty tables."""
        directory = Path(directory)

        def load(filename: str) -> Lexicon:
            path = directory / filename
            if not path.exists():
                logger.debug("Lexicon %s not found in %s", filename, directory)
                return Lexicon(name=Path(filename).stem)
            return load_lexicon(path)

        return cls(
            subject=load(SUBJECT_FILE),
            condition=load(CONDITION_FILE),
            fir=load(FIR_FILE),
            body=load(BODY_FILE),
        )


# Loaded once on first use
_DEFAULT_LEXICONS: Optional[LexiconSet] = None


def load_default_lexicons() -> LexiconSet:
    """Load the configured lexicons, caching them for the process."""
    global _DEFAULT_LEXICONS
    if _DEFAULT_LEXICONS is None:
        _DEFAULT_LEXICONS = LexiconSet.from_directory(config.get_lexicon_dir())
    return _DEFAULT_LEXICONS
