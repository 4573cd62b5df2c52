"""
Aviation weather token classification and explanation.

Takes the structured output of a METAR/TAF/NOTAM decoder and produces:
- per-token field identities (which raw token belongs to which field)
- localized explanations for every structured field, including the
  compact encodings inside them (NOTAM Q-line, weather codes, cloud
  layers, numeric remark groups, NOTAM body abbreviations)

Example usage:
    from wx_explain import StructuredMessage, Translator, explain_message

    message = StructuredMessage.from_dict(decoder_output)
    for row in explain_message(message, Translator("en")):
        print(row.token, row.label, row.explanation)

    # Or the parts separately
    from wx_explain import FieldExplainer, TokenClassifier

    fields = FieldExplainer(Translator("en")).explain(message)
    tokens = TokenClassifier(Translator("en")).classify(message)
"""

from typing import Any, Callable, List, Mapping, Optional

from wx_explain.analysis import build_decode_rows, detect_message_type, to_dataframe
from wx_explain.classify.classifier import TokenClassifier
from wx_explain.errors import WxExplainError, LexiconLoadError
from wx_explain.explain.fields import FieldExplainer
from wx_explain.explain.summary import build_summary
from wx_explain.i18n.translator import Translator
from wx_explain.lexicon.tables import LexiconSet, load_default_lexicons
from wx_explain.models.explained import DecodeRow, ExplainedField, TokenClassification
from wx_explain.models.message import MessageType, StructuredMessage

__version__ = '0.1.0'
__all__ = [
    # Models
    'StructuredMessage',
    'MessageType',
    'ExplainedField',
    'TokenClassification',
    'DecodeRow',
    # Engine
    'Translator',
    'LexiconSet',
    'load_default_lexicons',
    'FieldExplainer',
    'TokenClassifier',
    'build_summary',
    'build_decode_rows',
    'detect_message_type',
    'to_dataframe',
    'explain_message',
    # Errors
    'WxExplainError',
    'LexiconLoadError',
]


def explain_message(
    message: StructuredMessage,
    translator: Callable[..., str],
    lexicons: Optional[LexiconSet] = None,
    station: Optional[Mapping[str, Any]] = None,
) -> List[DecodeRow]:
    """
    Classify and explain a message, joined into decode rows.

    Args:
        message: Structured message
        translator: Localization capability
        lexicons: Lexicon tables, defaults to the bundled set
        station: Optional station info for the station display

    Returns:
        One DecodeRow per classified token
    """
    fields = FieldExplainer(translator, lexicons, station=station).explain(message)
    classifications = TokenClassifier(translator).classify(message)
    return build_decode_rows(classifications, fields, translator)
