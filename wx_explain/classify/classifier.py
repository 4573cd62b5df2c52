"""Token classifier: assigns each raw token a field identity."""

import logging
from typing import Callable, List, Optional, Sequence, Union

from wx_explain.classify.rules import RULES, Rule, ScanState, TokenContext, evaluate
from wx_explain.decoders.q_line import Q_LINE_PART_KEYS, split_q_line
from wx_explain.models.explained import TokenClassification
from wx_explain.models.message import MessageType, StructuredMessage

logger = logging.getLogger(__name__)

NOTAM_LETTERED_FIELDS = ("a", "b", "c", "d", "e", "f", "g")


class TokenClassifier:
    """
    Classify raw message tokens.

    Field keys are the ones FieldExplainer emits, so the two outputs can
    be joined by key. Classification is a pure function of the message:
    the same input always gives the same output.

    Example:
        classifier = TokenClassifier(Translator("en"))
        for item in classifier.classify(message):
            print(item.token, item.field_key, item.label)
    """

    def __init__(self, translator: Callable[..., str], rules: Optional[Sequence[Rule]] = None):
        """
        Initialize classifier.

        Args:
            translator: Localization capability used for labels
            rules: Ordered rule table, defaults to rules.RULES
        """
        self.t = translator
        self.rules = list(rules) if rules is not None else RULES

    def classify(
        self,
        message: Optional[StructuredMessage],
        message_type: Union[MessageType, str, None] = None,
    ) -> List[TokenClassification]:
        """
        Classify a message.

        NOTAM messages with lettered fields yield one row per field;
        everything else yields one row per raw token.

        Returns:
            Classification list, empty for an empty message
        """
        if message is None or not message.raw:
            return []
        kind = MessageType.from_value(message_type) if message_type else message.type

        if kind is MessageType.NOTAM:
            rows = self.notam_field_rows(message)
            if rows:
                return rows

        return self.classify_tokens(message.tokens, message, kind)

    def classify_tokens(
        self,
        tokens: Sequence[str],
        message: StructuredMessage,
        message_type: MessageType,
    ) -> List[TokenClassification]:
        """Walk the token stream, threading the scan state from token to token."""
        results: List[TokenClassification] = []
        state = ScanState()
        for position, token in enumerate(tokens):
            state = state.advance(token, message_type)
            results.append(self.classify_token(token, position, message, message_type, state))
        return results

    def classify_token(
        self,
        token: str,
        position: int,
        message: StructuredMessage,
        message_type: MessageType,
        state: ScanState,
    ) -> TokenClassification:
        """Classify one token in the scan state in effect for it."""
        ctx = TokenContext(
            token=token,
            message_type=message_type,
            parsed=message.parsed,
            normalized=message.normalized,
            state=state,
        )
        match = evaluate(ctx, self.rules)
        return TokenClassification(
            token=token,
            field_key=match.field_key,
            label=self.t(match.label_key),
            detail=match.detail,
            position=position,
            cloud_index=match.cloud_index,
        )

    def notam_field_rows(self, message: StructuredMessage) -> List[TokenClassification]:
        """
        One row per present NOTAM field: the full Q-line, its parts, then A to G.

        A Q-line without a slash gives a single ``q_line`` row instead of parts.
        """
        t = self.t
        parsed = message.parsed
        rows: List[TokenClassification] = []

        def push(field_key: str, label: str, token: str, detail) -> None:
            if not detail:
                return
            rows.append(TokenClassification(
                token=token,
                field_key=field_key,
                label=label,
                detail=str(detail),
                position=len(rows),
            ))

        q_line = parsed.get("q_line")
        if q_line:
            push("q_line_full", f"{t('notam.q.tag_q')}{t('notam.q.part_full')}", f"{t('notam.q.tag_q')}{q_line}", q_line)
            parts = split_q_line(q_line)
            if len(parts) > 1:
                for index, part in enumerate(parts):
                    if index < len(Q_LINE_PART_KEYS):
                        part_label = t(f"notam.q.part_{Q_LINE_PART_KEYS[index]}")
                    else:
                        part_label = t("fields.notam_q_item")
                    push(f"q_line_{index}", f"{t('fields.notam_q_prefix')}{part_label}", part, part)
            else:
                push("q_line", f"{t('fields.notam_q_prefix')}{t('notam.q.part_q_code')}", q_line, q_line)

        for letter in NOTAM_LETTERED_FIELDS:
            value = parsed.get(letter)
            token = f"{t(f'notam.q.tag_{letter}')}{value or ''}".strip()
            push(letter, t(f"fields.notam_{letter}"), token, value)

        if not rows:
            logger.debug("NOTAM without lettered fields, classifying raw tokens")
        return rows
