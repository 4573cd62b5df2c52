"""
Token classification rules.

Rules are data: an ordered list of (name, predicate, classifier) entries
evaluated per token, first match wins. A predicate sees a TokenContext
(the token, the structured data and the scan state) and a classifier
turns it into a RuleMatch carrying the field key and label key.

The TAF trend state is a small value threaded through the scan:
Outside until the first BECMG/TEMPO, then InTrend(index), where index
counts the change groups seen so far.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence

from wx_explain.explain.formatting import format_utc_time
from wx_explain.models.message import MessageType

# Token shapes
WIND_PATTERN = re.compile(r'^(VRB|\d{3})\d{2,3}(G\d{2,3})?(KT|MPS)$')
WIND_VARIATION_PATTERN = re.compile(r'^\d{3}V\d{3}$')
RVR_PATTERN = re.compile(r'^R\d{2}[LRC]?/\d{4}(V\d{4})?[UDN]?$')
RVR_RUNWAY_PATTERN = re.compile(r'^R(\d{2}[LRC]?)')
VISIBILITY_PATTERN = re.compile(r'^\d{4}$')
VISIBILITY_SM_PATTERN = re.compile(r'^\d{1,2}SM$')
TEMPERATURE_PATTERN = re.compile(r'^(M?\d{2})/(M?\d{2})$')
QNH_PATTERN = re.compile(r'^Q\d{4}$')
ALTIMETER_PATTERN = re.compile(r'^A\d{4}$')
CLOUD_PATTERN = re.compile(r'^(FEW|SCT|BKN|OVC|VV)(\d{3})')
VALIDITY_PATTERN = re.compile(r'^\d{4}/\d{4}$')
TAF_TEMPERATURE_PREFIX = re.compile(r'^T[XN]')
NOTAM_FIELD_MARKER = re.compile(r'^[A-G]\)')
NOTAM_Q_MARKER = "Q)"

REPORT_TYPE_KEYWORDS = frozenset({"METAR", "SPECI", "TAF", "NOTAM"})
TREND_KEYWORDS = frozenset({"BECMG", "TEMPO"})
REMARK_MARKER = "RMK"
CAVOK = "CAVOK"


@dataclass(frozen=True)
class TrendState:
    """Outside any change group (index None) or inside change group ``index``."""

    index: Optional[int] = None

    @property
    def in_trend(self) -> bool:
        return self.index is not None

    def enter(self) -> 'TrendState':
        return TrendState(0 if self.index is None else self.index + 1)


OUTSIDE = TrendState()


@dataclass(frozen=True)
class ScanState:
    """
    State carried from one token to the next.

    Attributes:
        trend: TAF change group state
        temperatures: TAF temperature groups seen so far, current token included
    """

    trend: TrendState = OUTSIDE
    temperatures: int = 0

    def advance(self, token: str, message_type: MessageType) -> 'ScanState':
        """State in effect for ``token``; only TAF tokens change it."""
        if message_type is not MessageType.TAF:
            return self
        upper = token.upper()
        trend = self.trend.enter() if upper in TREND_KEYWORDS else self.trend
        temperatures = self.temperatures + 1 if TAF_TEMPERATURE_PREFIX.match(upper) else self.temperatures
        return ScanState(trend=trend, temperatures=temperatures)


@dataclass(frozen=True)
class TokenContext:
    """Everything a rule may look at for one token."""

    token: str
    message_type: MessageType
    parsed: Mapping[str, Any]
    normalized: Mapping[str, Any]
    state: ScanState = ScanState()

    @property
    def upper(self) -> str:
        return self.token.upper()

    @property
    def is_taf(self) -> bool:
        return self.message_type is MessageType.TAF

    @property
    def in_trend(self) -> bool:
        return self.is_taf and self.state.trend.in_trend

    @property
    def trend_index(self) -> Optional[int]:
        return self.state.trend.index

    @property
    def current_trend(self) -> Mapping[str, Any]:
        """Parsed sub-forecast of the current change group, empty when unknown."""
        trends = self.parsed.get("trends") or ()
        index = self.trend_index
        if index is None or index >= len(trends) or not trends[index]:
            return {}
        return trends[index]


@dataclass(frozen=True)
class RuleMatch:
    field_key: str
    label_key: str
    detail: str = ""
    cloud_index: Optional[int] = None


@dataclass(frozen=True)
class Rule:
    name: str
    predicate: Callable[[TokenContext], bool]
    classify: Callable[[TokenContext], RuleMatch]


def fixed(field_key: str, label_key: str) -> Callable[[TokenContext], RuleMatch]:
    """Classifier that always yields the same field."""
    result = RuleMatch(field_key=field_key, label_key=label_key)
    return lambda ctx: result


def match_cloud_layer(token: str, layers: Optional[Sequence[Mapping[str, Any]]]) -> Optional[int]:
    """
    Index of the first layer matching a cloud token, or None.

    A layer matches when its amount equals (or starts with) the token's
    amount code and its height in feet is within one foot of the token's
    height (given in hundreds of feet).
    """
    match = CLOUD_PATTERN.match(token.upper())
    if not match or not layers:
        return None
    amount = match.group(1)
    token_height = int(match.group(2)) * 100
    if not token_height:
        return None
    for index, layer in enumerate(layers):
        if not layer:
            continue
        layer_amount = layer.get("amount") or ""
        if layer_amount != amount and not layer_amount.startswith(amount):
            continue
        height = layer.get("height_ft")
        if isinstance(height, bool) or not isinstance(height, (int, float)) or not height:
            continue
        if abs(height - token_height) < 1:
            return index
    return None


def match_rvr_runway(token: str, rvr_list: Optional[Sequence[Mapping[str, Any]]]) -> Optional[int]:
    """Index of the normalized RVR entry for the token's runway, or None."""
    match = RVR_RUNWAY_PATTERN.match(token.upper())
    if not match or not rvr_list:
        return None
    runway = match.group(1)
    for index, item in enumerate(rvr_list):
        if item and item.get("runway") == runway:
            return index
    return None


def _is_visibility(upper: str) -> bool:
    return upper == CAVOK or bool(VISIBILITY_PATTERN.match(upper)) or bool(VISIBILITY_SM_PATTERN.match(upper))


# Classifiers with computed keys

def _classify_rvr(ctx: TokenContext) -> RuleMatch:
    index = match_rvr_runway(ctx.upper, ctx.normalized.get("rvr"))
    key = f"rvr_{index}" if index is not None else "rvr"
    return RuleMatch(key, "analysis.labels.rvr")


def _classify_taf_validity(ctx: TokenContext) -> RuleMatch:
    if ctx.in_trend:
        return RuleMatch(f"trend_period_{ctx.trend_index}", "analysis.labels.trend_period")
    return RuleMatch("validity", "analysis.labels.validity")


def _classify_taf_temperature(ctx: TokenContext) -> RuleMatch:
    return RuleMatch(f"temp_{ctx.state.temperatures - 1}", "fields.temperature")


def _classify_trend_cloud(ctx: TokenContext) -> RuleMatch:
    index = match_cloud_layer(ctx.upper, ctx.current_trend.get("clouds"))
    if index is None:
        return RuleMatch(f"trend_cloud_{ctx.trend_index}", "analysis.labels.trend_clouds")
    return RuleMatch(f"trend_cloud_{ctx.trend_index}_{index}", "analysis.labels.trend_clouds")


def _trend_weather_index(ctx: TokenContext) -> Optional[int]:
    weather = list(ctx.current_trend.get("weather") or ())
    if ctx.upper in weather:
        return weather.index(ctx.upper)
    return None


def _classify_trend_weather(ctx: TokenContext) -> RuleMatch:
    return RuleMatch(f"trend_weather_{ctx.trend_index}_{_trend_weather_index(ctx)}", "analysis.labels.trend_weather")


def _classify_issue_time(ctx: TokenContext) -> RuleMatch:
    return RuleMatch("issue", "analysis.labels.issue_time", detail=format_utc_time(ctx.parsed.get("issue_time")))


def _classify_cloud(ctx: TokenContext) -> RuleMatch:
    return RuleMatch("clouds", "analysis.labels.clouds", cloud_index=match_cloud_layer(ctx.upper, ctx.parsed.get("clouds")))


def _classify_remark_item(ctx: TokenContext) -> RuleMatch:
    return RuleMatch("rmk_item", "analysis.labels.remark", detail=ctx.token)


def _trend_kinds(ctx: TokenContext) -> List[str]:
    return [trend.get("kind") for trend in ctx.parsed.get("trends") or () if trend]


def _is_pressure_context(ctx: TokenContext) -> bool:
    return ctx.message_type is not MessageType.NOTAM


RULES: List[Rule] = [
    # Indexed and TAF-specific rules come first
    Rule("rvr", lambda ctx: bool(RVR_PATTERN.match(ctx.upper)), _classify_rvr),
    Rule("taf_validity", lambda ctx: ctx.is_taf and bool(VALIDITY_PATTERN.match(ctx.upper)), _classify_taf_validity),
    Rule(
        "taf_temperature",
        lambda ctx: ctx.is_taf and bool(TAF_TEMPERATURE_PREFIX.match(ctx.upper)),
        _classify_taf_temperature,
    ),
    Rule(
        "trend_wind",
        lambda ctx: ctx.in_trend and bool(WIND_PATTERN.match(ctx.upper)),
        lambda ctx: RuleMatch(f"trend_wind_{ctx.trend_index}", "analysis.labels.trend_wind"),
    ),
    Rule(
        "trend_visibility",
        lambda ctx: ctx.in_trend and _is_visibility(ctx.upper),
        lambda ctx: RuleMatch(f"trend_visibility_{ctx.trend_index}", "analysis.labels.trend_visibility"),
    ),
    Rule("trend_cloud", lambda ctx: ctx.in_trend and bool(CLOUD_PATTERN.match(ctx.upper)), _classify_trend_cloud),
    Rule(
        "trend_weather",
        lambda ctx: ctx.in_trend and _trend_weather_index(ctx) is not None,
        _classify_trend_weather,
    ),

    # General rules in priority order
    Rule("report_type", lambda ctx: ctx.upper in REPORT_TYPE_KEYWORDS, fixed("report_type", "analysis.labels.report_type")),
    Rule(
        "station",
        lambda ctx: bool(ctx.parsed.get("station")) and ctx.upper == ctx.parsed.get("station"),
        fixed("station", "analysis.labels.station"),
    ),
    Rule(
        "issue_time",
        lambda ctx: bool(ctx.parsed.get("issue_time")) and ctx.upper.endswith("Z") and len(ctx.upper) == 7,
        _classify_issue_time,
    ),
    Rule("wind", lambda ctx: bool(WIND_PATTERN.match(ctx.upper)), fixed("wind", "analysis.labels.wind")),
    Rule(
        "wind_variation",
        lambda ctx: bool(WIND_VARIATION_PATTERN.match(ctx.upper)),
        fixed("wind_variation", "analysis.labels.wind_variation"),
    ),
    Rule("visibility", lambda ctx: _is_visibility(ctx.upper), fixed("visibility", "analysis.labels.visibility")),
    Rule(
        "altimeter",
        lambda ctx: _is_pressure_context(ctx) and bool(ALTIMETER_PATTERN.match(ctx.upper)),
        fixed("altimeter", "fields.pressure_altimeter"),
    ),
    Rule(
        "pressure",
        lambda ctx: _is_pressure_context(ctx) and bool(QNH_PATTERN.match(ctx.upper)),
        fixed("pressure", "analysis.labels.pressure"),
    ),
    Rule("temperature", lambda ctx: bool(TEMPERATURE_PATTERN.match(ctx.upper)), fixed("temp", "analysis.labels.temperature")),
    Rule("clouds", lambda ctx: bool(CLOUD_PATTERN.match(ctx.upper)), _classify_cloud),
    Rule(
        "weather",
        lambda ctx: ctx.upper in (ctx.parsed.get("weather") or ()),
        fixed("weather", "analysis.labels.weather"),
    ),
    Rule("remark", lambda ctx: ctx.token == REMARK_MARKER, fixed("rmk", "analysis.labels.remark")),
    Rule("remark_item", lambda ctx: ctx.token in (ctx.parsed.get("rmk_tokens") or ()), _classify_remark_item),
    Rule(
        "trend",
        lambda ctx: (
            (bool(ctx.parsed.get("trend")) and ctx.parsed.get("trend") == ctx.upper)
            or (not ctx.is_taf and ctx.upper in _trend_kinds(ctx))
        ),
        fixed("trend", "analysis.labels.trend"),
    ),
    Rule("taf_trend", lambda ctx: ctx.is_taf and ctx.upper in _trend_kinds(ctx), fixed("trends", "analysis.labels.trend")),
    Rule(
        "notam_marker",
        lambda ctx: (
            ctx.message_type is MessageType.NOTAM
            and (bool(NOTAM_FIELD_MARKER.match(ctx.upper)) or ctx.upper.startswith(NOTAM_Q_MARKER))
        ),
        fixed("notam", "analysis.labels.notam"),
    ),
]

FALLBACK = RuleMatch("raw", "analysis.labels.unknown")


def evaluate(ctx: TokenContext, rules: Sequence[Rule] = RULES) -> RuleMatch:
    """Apply the first matching rule, or the unknown fallback."""
    for rule in rules:
        if rule.predicate(ctx):
            return rule.classify(ctx)
    return FALLBACK
