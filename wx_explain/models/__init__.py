"""Data models for structured messages and explanation output."""

from wx_explain.models.message import StructuredMessage, MessageType
from wx_explain.models.explained import (
    ExplainedField,
    QLinePart,
    TokenClassification,
    DecodeRow,
)

__all__ = [
    'StructuredMessage',
    'MessageType',
    'ExplainedField',
    'QLinePart',
    'TokenClassification',
    'DecodeRow',
]
