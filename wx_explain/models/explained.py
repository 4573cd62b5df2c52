"""Output records produced by the explainer and the classifier."""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any


@dataclass
class ExplainedField:
    """
    Human explanation of one structured field.

    Attributes:
        key: Field key (e.g. "wind", "rvr_0", "trend_cloud_1_0")
        label: Localized field label
        raw_value: Display value of the field
        explanation: Localized sentence explaining the value
        meta: Nested detail for composite fields (cloud layers, Q-line part)
    """

    key: str
    label: str
    raw_value: str
    explanation: str = ""
    meta: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'key': self.key,
            'label': self.label,
            'raw_value': self.raw_value,
            'explanation': self.explanation,
        }
        if self.meta is not None:
            data['meta'] = self.meta
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ExplainedField':
        return cls(
            key=data.get('key', ''),
            label=data.get('label', ''),
            raw_value=data.get('raw_value', ''),
            explanation=data.get('explanation', ''),
            meta=data.get('meta'),
        )


@dataclass(frozen=True)
class QLinePart:
    """One of the eight positional NOTAM Q-line components."""

    key: str
    raw: str
    explanation: str

    def to_dict(self) -> Dict[str, Any]:
        return {'key': self.key, 'raw': self.raw, 'explanation': self.explanation}


@dataclass
class TokenClassification:
    """
    Semantic identity assigned to one raw token.

    Attributes:
        token: The raw token (or lettered-field text for NOTAM rows)
        field_key: Key compatible with ExplainedField.key
        label: Localized label of the field
        detail: Short decoded detail, may be empty
        position: Index of the token in the raw token stream
        cloud_index: Matching top-level cloud layer index, if any
    """

    token: str
    field_key: str
    label: str
    detail: str = ""
    position: int = 0
    cloud_index: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'token': self.token,
            'field_key': self.field_key,
            'label': self.label,
            'detail': self.detail,
            'position': self.position,
            'cloud_index': self.cloud_index,
        }


@dataclass
class DecodeRow:
    """A classified token joined to its field explanation."""

    token: str
    field_key: str
    label: str
    explanation: str
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'token': self.token,
            'field_key': self.field_key,
            'label': self.label,
            'explanation': self.explanation,
        }
        data.update(self.extra)
        return data
