"""Raw token classification."""

from wx_explain.classify.classifier import TokenClassifier
from wx_explain.classify.rules import RULES, Rule, RuleMatch, ScanState, TokenContext, TrendState

__all__ = [
    'TokenClassifier',
    'RULES',
    'Rule',
    'RuleMatch',
    'ScanState',
    'TokenContext',
    'TrendState',
]
