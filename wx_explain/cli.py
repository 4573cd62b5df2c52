#!/usr/bin/env python3
"""
Command-line explainer for decoded METAR/TAF/NOTAM messages.

Reads a JSON document produced by the message decoder and prints the
decode rows (token, field, explanation), optionally preceded by summary
sentences.

    wx-explain message.json --locale en --summary
    cat message.json | wx-explain - --format json
"""

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from wx_explain import config
from wx_explain.analysis import build_decode_rows, detect_message_type, to_dataframe
from wx_explain.classify.classifier import TokenClassifier
from wx_explain.explain.fields import FieldExplainer
from wx_explain.explain.summary import DETAIL_FULL, DETAIL_NORMAL, build_summary
from wx_explain.i18n.translator import Translator, available_locales
from wx_explain.lexicon.tables import load_default_lexicons
from wx_explain.models.message import MessageType, StructuredMessage

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ('table', 'json', 'csv')


def load_message(path: str) -> Dict[str, Any]:
    """Load a decoder JSON document from a file, or stdin for ``-``."""
    if path == '-':
        return json.load(sys.stdin)
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def resolve_message(data: Dict[str, Any]) -> StructuredMessage:
    """Build the message, detecting the type from the raw text when the decoder gave none."""
    message = StructuredMessage.from_dict(data)
    if message.type is MessageType.UNKNOWN:
        detected = detect_message_type(message.raw)
        logger.info(f"No message type in input, detected {detected.value}")
        message = dataclasses.replace(message, type=detected)
    return message


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Explain a decoded METAR, TAF or NOTAM message')
    parser.add_argument('message', help='Decoder JSON file, or - for stdin')
    parser.add_argument('--locale', help='Output locale', choices=available_locales(), default=None)
    parser.add_argument('--format', help='Output format', choices=OUTPUT_FORMATS, default='table')
    parser.add_argument('--summary', help='Print summary sentences before the rows', action='store_true')
    parser.add_argument('--fields', help='Print explained fields instead of decode rows', action='store_true')
    parser.add_argument('--full', help='Include the decoder type notice in the summary', action='store_true')
    parser.add_argument('-v', '--verbose', help='Verbose output', action='store_true')
    return parser


def render(records: List[Any], output_format: str) -> str:
    if output_format == 'json':
        return json.dumps([record.to_dict() for record in records], ensure_ascii=False, indent=2)
    df = to_dataframe(records)
    if output_format == 'csv':
        return df.to_csv(index=False)
    if df.empty:
        return ''
    return df.to_string(index=False)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        data = load_message(args.message)
    except (OSError, ValueError) as e:
        logger.error(f"Unable to read message {args.message}: {e}")
        return 1
    if not isinstance(data, dict):
        logger.error("Message JSON must be an object")
        return 1

    message = resolve_message(data)
    translator = Translator(args.locale)
    lexicons = load_default_lexicons()

    if args.summary:
        detail = DETAIL_FULL if args.full else DETAIL_NORMAL
        for line in build_summary(message, translator, detail=detail):
            print(line)
        print()

    fields = FieldExplainer(translator, lexicons).explain(message)
    if args.fields:
        records: List[Any] = fields
    else:
        classifications = TokenClassifier(translator).classify(message)
        records = build_decode_rows(classifications, fields, translator)

    print(render(records, args.format))
    return 0


if __name__ == '__main__':
    sys.exit(main())
