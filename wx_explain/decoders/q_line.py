"""NOTAM Q-line decoder.

Q-line structure (ICAO Annex 15):

    FIR/QCODE/TRAFFIC/PURPOSE/SCOPE/LOWER/UPPER/CENTERRADIUS

Example: ``LFFF/QMRLC/IV/NBO/A/000/999/4901N00225E005``

- FIR: 4-letter flight information region
- QCODE: Q + subject (2 letters) + condition (2 letters), e.g. QMRLC =
  Runway (MR) + Closed (LC). XX in either slot means the subject or
  condition is given in plain language in item E.
- TRAFFIC/PURPOSE/SCOPE: strings of single-letter flags
- LOWER/UPPER: flight levels, kept as written
- CENTERRADIUS: DDMM[NS]DDDMM[EW]RRR, radius in nautical miles
"""

import logging
import re
from typing import List, Optional

from wx_explain.i18n.translator import Translator
from wx_explain.lexicon.tables import LexiconSet, load_default_lexicons
from wx_explain.models.explained import QLinePart

logger = logging.getLogger(__name__)

Q_LINE_PART_KEYS = (
    "fir", "q_code", "traffic", "purpose", "scope", "lower", "upper", "center",
)

CENTER_RADIUS_PATTERN = re.compile(r'^(\d{2})(\d{2})([NS])(\d{3})(\d{2})([EW])(\d{3})$')

PLAIN_LANGUAGE_CODE = "XX"
CHECKLIST_CODE = "QKKKK"


def clean_q_line(q_line: Optional[str]) -> str:
    """Strip whitespace and a leading ``Q)`` marker."""
    if not q_line:
        return ""
    text = q_line.strip()
    if text.upper().startswith("Q)"):
        text = text[2:].strip()
    return text


def split_q_line(q_line: Optional[str]) -> List[str]:
    """Split a Q-line into its slash-separated parts (any count)."""
    text = clean_q_line(q_line)
    if not text:
        return []
    return [part.strip() for part in text.split("/")]


class QLineDecoder:
    """
    Decode the eight Q-line parts into localized explanations.

    Example:
        decoder = QLineDecoder(Translator("en"))
        parts = decoder.decode("LFFF/QMRLC/IV/NBO/A/000/999/4901N00225E005")
        parts[1].explanation
        # "QMRLC: Runway (MR) - Closed (LC)"
    """

    def __init__(self, translator: Translator, lexicons: Optional[LexiconSet] = None):
        self.t = translator
        self.lexicons = lexicons if lexicons is not None else load_default_lexicons()

    @property
    def locale(self) -> str:
        return getattr(self.t, 'locale', '')

    def decode(self, q_line: Optional[str]) -> List[QLinePart]:
        """
        Decode a Q-line.

        Returns:
            Eight QLinePart entries, or an empty list when the line does
            not have exactly eight parts (treated as opaque by callers)
        """
        parts = split_q_line(q_line)
        if len(parts) != len(Q_LINE_PART_KEYS):
            if parts:
                logger.debug("Q-line has %d parts, treating as opaque: %s", len(parts), q_line)
            return []

        fir, q_code, traffic, purpose, scope, lower, upper, center = parts
        explanations = [
            self.explain_fir(fir),
            self.explain_q_code(q_code),
            self.explain_traffic(traffic),
            self.explain_flags("purpose", purpose),
            self.explain_flags("scope", scope),
            lower,
            upper,
            self.explain_center(center),
        ]
        return [
            QLinePart(key=key, raw=raw, explanation=explanation)
            for key, raw, explanation in zip(Q_LINE_PART_KEYS, parts, explanations)
        ]

    def explain_fir(self, fir: str) -> str:
        name = self.lexicons.fir.get(fir.upper(), self.locale)
        if name:
            return f"{fir} {name}"
        return fir

    def explain_q_code(self, q_code: str) -> str:
        code = q_code.upper()
        if code == CHECKLIST_CODE:
            return self.t("notam.q.q_code_checklist", code=code)
        if len(code) < 5 or not code.startswith("Q"):
            meaning = self.t("notam.q.q_code_unknown", code=code)
            return self.t("notam.q.q_code_simple", code=code, meaning=meaning)

        subject_code = code[1:3]
        condition_code = code[3:5]
        return self.t(
            "notam.q.q_code",
            code=code,
            subject_code=subject_code,
            subject=self._lookup_code("subject", subject_code),
            condition_code=condition_code,
            condition=self._lookup_code("condition", condition_code),
        )

    def _lookup_code(self, slot: str, code: str) -> str:
        if code == PLAIN_LANGUAGE_CODE:
            return self.t(f"notam.q.q_{slot}_plain", code=code)
        lexicon = self.lexicons.subject if slot == "subject" else self.lexicons.condition
        text = lexicon.get(code, self.locale)
        if text:
            return text
        return self.t(f"notam.q.q_{slot}_unknown", code=code)

    def _flag_meaning(self, kind: str, code: str) -> str:
        key = f"notam.q.{kind}_{code}"
        meaning = self.t(key)
        return code if meaning == key else meaning

    def explain_traffic(self, traffic: str) -> str:
        entries = []
        for code in traffic.upper():
            label = self._flag_meaning("traffic", code)
            desc_key = f"notam.q.traffic_{code}_desc"
            desc = self.t(desc_key)
            entries.append(label if desc == desc_key else f"{label} ({desc})")
        return self.t("notam.q.traffic", meaning=", ".join(entries))

    def explain_flags(self, kind: str, flags: str) -> str:
        meanings = [self._flag_meaning(kind, code) for code in flags.upper()]
        return self.t(f"notam.q.{kind}", meaning=", ".join(meanings))

    def explain_center(self, center: str) -> str:
        match = CENTER_RADIUS_PATTERN.match(center.upper())
        if not match:
            logger.debug("Unrecognised Q-line center/radius: %s", center)
            return self.t("notam.q.center", value=center)
        lat_deg, lat_min, lat_hem, lon_deg, lon_min, lon_hem, radius = match.groups()
        return self.t(
            "notam.q.center_parsed",
            lat=f"{lat_deg}°{lat_min}'{lat_hem}",
            lon=f"{lon_deg}°{lon_min}'{lon_hem}",
            radius=f"{int(radius)} NM",
        )
