"""Structured message model consumed from the decoder."""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


class MessageType(Enum):
    """Type of decoded aviation message."""

    METAR = "metar"
    TAF = "taf"
    NOTAM = "notam"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: Any) -> 'MessageType':
        """
        Resolve a message type from a string or enum value.

        SPECI is decoded with the METAR grammar. Anything unrecognised
        becomes UNKNOWN.
        """
        if isinstance(value, MessageType):
            return value
        if not value:
            return cls.UNKNOWN
        text = str(value).strip().lower()
        if text == "speci":
            return cls.METAR
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN


def _freeze(value: Any) -> Any:
    """Recursively convert dicts and lists to read-only equivalents."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


@dataclass(frozen=True)
class StructuredMessage:
    """
    Immutable decoded message.

    Wraps the decoder output: the raw text, its type, the parsed fields
    as found in the text and the normalized (SI unit) subset. Nested
    containers are frozen on construction.

    Attributes:
        raw: Original message text
        type: Message type
        parsed: Per-type parsed field mapping
        normalized: Normalized field mapping
        warnings: Decoder warnings
        errors: Decoder errors
        requested_type: Type requested by the caller, if known
        detected_type: Type detected from the text, if known
        final_type: Type the decoder settled on, if known
    """

    raw: str = ""
    type: MessageType = MessageType.UNKNOWN
    parsed: Mapping[str, Any] = field(default_factory=dict)
    normalized: Mapping[str, Any] = field(default_factory=dict)
    warnings: Tuple[Any, ...] = ()
    errors: Tuple[Any, ...] = ()
    requested_type: Optional[str] = None
    detected_type: Optional[str] = None
    final_type: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'type', MessageType.from_value(self.type))
        object.__setattr__(self, 'parsed', _freeze(self.parsed or {}))
        object.__setattr__(self, 'normalized', _freeze(self.normalized or {}))
        object.__setattr__(self, 'warnings', _freeze(list(self.warnings or ())))
        object.__setattr__(self, 'errors', _freeze(list(self.errors or ())))

    @property
    def tokens(self) -> List[str]:
        """Whitespace-delimited tokens of the raw text, in order."""
        return self.raw.split() if self.raw else []

    @property
    def station_code(self) -> Optional[str]:
        """Station code from normalized data, parsed data or the NOTAM A field."""
        return (
            self.normalized.get('station')
            or self.parsed.get('station')
            or self.parsed.get('a')
            or None
        )

    @property
    def is_empty(self) -> bool:
        return not self.raw and not self.parsed and not self.normalized

    def to_dict(self) -> Dict[str, Any]:
        """Convert back to a plain dictionary."""
        data: Dict[str, Any] = {
            'raw': self.raw,
            'type': self.type.value,
            'parsed': _thaw(self.parsed),
            'normalized': _thaw(self.normalized),
            'warnings': _thaw(self.warnings),
            'errors': _thaw(self.errors),
        }
        for name in ('requested_type', 'detected_type', 'final_type'):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        return data

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> 'StructuredMessage':
        """
        Create from a decoder response dictionary.

        The type is taken from ``final_type`` when present, then ``type``
        or ``message_type``. A missing or empty dictionary gives an empty
        message.
        """
        if not data:
            return cls()
        message_type = data.get('final_type') or data.get('type') or data.get('message_type')
        return cls(
            raw=(data.get('raw') or '').strip(),
            type=MessageType.from_value(message_type),
            parsed=data.get('parsed') or {},
            normalized=data.get('normalized') or {},
            warnings=tuple(data.get('warnings') or ()),
            errors=tuple(data.get('errors') or ()),
            requested_type=data.get('requested_type'),
            detected_type=data.get('detected_type'),
            final_type=data.get('final_type'),
        )
