"""
Decode-row analysis.

Joins the token classifier's output (which raw token belongs to which
field) with the field explainer's output (what the field means), and
flattens any record list to a pandas DataFrame.
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from wx_explain.decoders.remarks import explain_remark_token
from wx_explain.models.explained import DecodeRow, ExplainedField, TokenClassification
from wx_explain.models.message import MessageType

logger = logging.getLogger(__name__)

TREND_GLOSS_KEYS = {
    "BECMG": "explain.trend_becmg",
    "TEMPO": "explain.trend_tempo",
    "NOSIG": "explain.trend_nosig",
}

# Classifier keys whose explainer field may be stored under another key
FIELD_KEY_ALIASES = {
    "visibility": ("visibility_raw",),
}

# Q-line part rows of a line that did not decode fall back to the full line
Q_LINE_PART_PREFIX = "q_line"
Q_LINE_FULL_KEY = "q_line_full"

METAR_SHAPE = re.compile(r'^[A-Z0-9]{4}\s\d{6}Z')
NOTAM_ID_SHAPE = re.compile(r'^[A-Z]\d{4}/\d{2}')


def detect_message_type(raw: Optional[str]) -> MessageType:
    """
    Guess the message type from raw text.

    Checks the report keyword prefix first, then NOTAM markers, then the
    station + issue time shape of a bare METAR and the id shape of a bare
    NOTAM.
    """
    if not raw:
        return MessageType.UNKNOWN
    upper = raw.strip().upper()
    if upper.startswith("TAF "):
        return MessageType.TAF
    if upper.startswith("METAR ") or upper.startswith("SPECI "):
        return MessageType.METAR
    if "NOTAM" in upper or " Q)" in upper or upper.startswith("Q)"):
        return MessageType.NOTAM
    if METAR_SHAPE.match(upper):
        return MessageType.METAR
    if NOTAM_ID_SHAPE.match(upper):
        return MessageType.NOTAM
    return MessageType.UNKNOWN


def _index_fields(fields: Iterable[ExplainedField]) -> Dict[str, ExplainedField]:
    indexed: Dict[str, ExplainedField] = {}
    for field in fields:
        indexed.setdefault(field.key, field)
    return indexed


def _find_field(indexed: Mapping[str, ExplainedField], key: str) -> Optional[ExplainedField]:
    if key in indexed:
        return indexed[key]
    for alias in FIELD_KEY_ALIASES.get(key, ()):
        if alias in indexed:
            return indexed[alias]
    if key.startswith(Q_LINE_PART_PREFIX):
        return indexed.get(Q_LINE_FULL_KEY)
    return None


def explain_item(
    item: TokenClassification,
    field: Optional[ExplainedField],
    translator: Callable[..., str],
) -> str:
    """
    Pick the display explanation for one classified token.

    Falls back from the field explanation to the field value, the
    classification detail and finally the token itself.
    """
    if item.field_key == "rmk_item":
        return explain_remark_token(item.token, translator)

    if item.field_key in ("trend", "trends"):
        gloss_key = TREND_GLOSS_KEYS.get(item.token.upper())
        if gloss_key:
            return translator(gloss_key)

    if field is not None and item.field_key == "clouds" and field.meta:
        for cloud in field.meta.get("clouds") or ():
            if cloud.get("index") == item.cloud_index:
                return cloud.get("explanation") or cloud.get("value") or ""

    if field is not None:
        return field.explanation or field.raw_value or item.detail or item.token
    return item.detail or item.token


def build_decode_rows(
    classifications: Sequence[TokenClassification],
    fields: Sequence[ExplainedField],
    translator: Callable[..., str],
) -> List[DecodeRow]:
    """
    Join classified tokens with field explanations by key.

    Args:
        classifications: TokenClassifier output
        fields: FieldExplainer output for the same message
        translator: Localization capability

    Returns:
        One DecodeRow per classification, in token order
    """
    indexed = _index_fields(fields)
    rows: List[DecodeRow] = []
    for item in classifications:
        field = _find_field(indexed, item.field_key)
        if field is None and item.field_key not in ("raw", "report_type", "rmk", "rmk_item"):
            logger.debug("No explained field for %s (%s)", item.field_key, item.token)
        rows.append(DecodeRow(
            token=item.token,
            field_key=item.field_key,
            label=item.label,
            explanation=explain_item(item, field, translator),
            extra={'position': item.position},
        ))
    return rows


def to_dataframe(records: Iterable[Any]) -> pd.DataFrame:
    """
    Flatten records to a DataFrame.

    Accepts objects with ``to_dict()`` (ExplainedField, DecodeRow, ...)
    or plain dictionaries.
    """
    rows = [record.to_dict() if hasattr(record, 'to_dict') else dict(record) for record in records]
    return pd.DataFrame(rows)
