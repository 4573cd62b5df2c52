"""
Field explainer.

Builds the ordered list of ExplainedField records for a structured
message. Each message type has a fixed field order; a field whose
structured value is absent is left out rather than emitted empty.

Malformed sub-structures never raise: they are rendered as their raw
value or omitted.
"""

import logging
import re
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from wx_explain import config
from wx_explain.decoders.notam_body import NotamBodyMapper
from wx_explain.decoders.q_line import QLineDecoder
from wx_explain.decoders.weather import explain_weather_list, explain_weather_token
from wx_explain.explain.formatting import (
    clip_text,
    explain_notam_schedule,
    format_cloud_layer,
    format_clouds,
    format_notam_time,
    format_pressure,
    format_rvr,
    format_station_display,
    format_temperature,
    format_utc_time,
    format_validity,
    format_visibility,
    format_wind,
    rvr_tendency_text,
)
from wx_explain.i18n.translator import lookup_text
from wx_explain.lexicon.tables import LexiconSet, load_default_lexicons
from wx_explain.models.explained import ExplainedField
from wx_explain.models.message import MessageType, StructuredMessage

logger = logging.getLogger(__name__)

TAF_TEMPERATURE_PATTERN = re.compile(r'^T([XN])(M?)(\d{2})/(\d{2})(\d{2})Z$')


def _number(value: Any) -> Optional[float]:
    """Numeric value or None; booleans and strings are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def explain_cloud_layer(layer: Optional[Mapping[str, Any]], translator: Callable) -> str:
    """Render a cloud layer as ``BKN 2000ft (broken, 5-7 oktas)``."""
    if not layer or not layer.get("amount"):
        return ""
    base = format_cloud_layer(layer)
    meaning = lookup_text(translator, f"clouds.amount.{layer['amount']}")
    if not meaning:
        return base
    return f"{base} ({meaning})"


def explain_clouds(clouds: Optional[Sequence[Mapping[str, Any]]], translator: Callable) -> str:
    if not clouds:
        return ""
    return ", ".join(explain_cloud_layer(layer, translator) for layer in clouds)


class FieldExplainer:
    """
    Explain the structured fields of METAR, TAF and NOTAM messages.

    Example:
        explainer = FieldExplainer(Translator("en"))
        for field in explainer.explain(message):
            print(field.label, field.raw_value, field.explanation)
    """

    def __init__(
        self,
        translator: Callable[..., str],
        lexicons: Optional[LexiconSet] = None,
        station: Optional[Mapping[str, Any]] = None,
    ):
        """
        Initialize explainer.

        Args:
            translator: Localization capability ``t(key, **params)``
            lexicons: Lexicon tables, defaults to the bundled set
            station: Optional station info (``code``, ``name_en``,
                ``name_zh`` ...) used to display the station name
        """
        self.t = translator
        self.lexicons = lexicons if lexicons is not None else load_default_lexicons()
        self.station = station
        self.q_line_decoder = QLineDecoder(translator, self.lexicons)
        self.body_mapper = NotamBodyMapper(self.locale, self.lexicons)

    @property
    def locale(self) -> str:
        return getattr(self.t, 'locale', config.FALLBACK_LOCALE)

    def explain(
        self,
        message: Optional[StructuredMessage],
        message_type: Union[MessageType, str, None] = None,
    ) -> List[ExplainedField]:
        """
        Explain a message.

        Args:
            message: Structured message
            message_type: Type to explain the message as, defaults to
                the message's own type

        Returns:
            Ordered ExplainedField list, empty for an empty message or an
            unknown type
        """
        if message is None or message.is_empty:
            return []
        kind = MessageType.from_value(message_type) if message_type else message.type

        if kind is MessageType.METAR:
            return self._explain_metar(message)
        if kind is MessageType.TAF:
            return self._explain_taf(message)
        if kind is MessageType.NOTAM:
            return self._explain_notam(message)
        return []

    def station_display(self, message: StructuredMessage) -> str:
        code = message.station_code
        if self.station:
            return format_station_display(self.station.get("code") or code, self.station, self.locale)
        return code or ""

    @staticmethod
    def _push(
        items: List[ExplainedField],
        key: str,
        label: str,
        value: Any,
        explanation: str = "",
        meta: Optional[Dict[str, Any]] = None,
    ) -> None:
        if not value:
            return
        items.append(ExplainedField(key=key, label=label, raw_value=str(value), explanation=explanation, meta=meta))

    def _cloud_meta(self, clouds: Sequence[Mapping[str, Any]], template: str) -> Dict[str, Any]:
        details = []
        for index, layer in enumerate(clouds):
            value = explain_cloud_layer(layer, self.t) or format_cloud_layer(layer)
            details.append({
                'index': index,
                'value': value,
                'explanation': self.t(template, clouds=value),
            })
        return {'clouds': details}

    def _visibility(self, items: List[ExplainedField], parsed: Mapping, normalized: Mapping, template: str) -> None:
        distance = _number(normalized.get("visibility_m"))
        if distance:
            text = format_visibility(distance)
            self._push(items, "visibility", self.t("fields.visibility"), text, self.t(template, visibility=text))
            return
        raw = (parsed.get("visibility") or {}).get("raw")
        self._push(items, "visibility_raw", self.t("fields.visibility"), raw)

    def _weather(self, items: List[ExplainedField], parsed: Mapping, template: str) -> None:
        weather = parsed.get("weather")
        if not weather:
            return
        text = explain_weather_list(weather, self.t)
        self._push(items, "weather", self.t("fields.weather"), text, self.t(template, weather=text) if text else "")

    def _clouds(self, items: List[ExplainedField], parsed: Mapping, template: str) -> None:
        clouds = parsed.get("clouds")
        if not clouds:
            return
        text = explain_clouds(clouds, self.t) or format_clouds(clouds)
        self._push(
            items,
            "clouds",
            self.t("fields.clouds"),
            text,
            self.t(template, clouds=text) if text else "",
            self._cloud_meta(clouds, template),
        )

    # METAR

    def _metar_wind(self, items: List[ExplainedField], normalized: Mapping) -> None:
        wind = normalized.get("wind")
        text = format_wind(wind)
        if not text:
            return
        if wind.get("direction_deg") is None:
            explanation = self.t("explain.metar.wind_vrb", speed=f"{wind.get('speed_kt')}kt")
        elif wind.get("gust_kt"):
            explanation = self.t("explain.metar.wind_gust", wind=text, gust=f"{wind['gust_kt']}kt")
        else:
            explanation = self.t("explain.metar.wind", wind=text)
        self._push(items, "wind", self.t("fields.wind"), text, explanation)

        variation = normalized.get("wind_variation")
        if variation:
            start, end = variation.get("from_deg"), variation.get("to_deg")
            self._push(
                items,
                "wind_variation",
                self.t("fields.wind_variation"),
                f"{start}° - {end}°",
                self.t("explain.metar.wind_variation", **{"from": start, "to": end}),
            )

    def _metar_pressure(self, items: List[ExplainedField], parsed: Mapping, normalized: Mapping) -> None:
        hpa = _number(normalized.get("pressure_hpa"))
        if hpa:
            pressure = f"{hpa:.1f} hPa"
        else:
            pressure = format_pressure(parsed.get("pressure_qnh"))
        if pressure:
            self._push(
                items, "pressure", self.t("fields.pressure"), pressure,
                self.t("explain.metar.pressure", pressure=pressure),
            )

        inhg = _number(normalized.get("pressure_inhg"))
        altimeter = parsed.get("altimeter")
        if inhg:
            altimeter_text = f"{inhg:.2f} inHg"
        elif isinstance(altimeter, Mapping):
            altimeter_text = format_pressure(altimeter)
        else:
            altimeter_text = str(altimeter) if altimeter else ""
        if altimeter_text:
            self._push(
                items, "altimeter", self.t("fields.pressure_altimeter"), altimeter_text,
                self.t("explain.metar.altimeter", altimeter=altimeter_text),
            )

    def _explain_metar(self, message: StructuredMessage) -> List[ExplainedField]:
        parsed, normalized = message.parsed, message.normalized
        items: List[ExplainedField] = []
        t = self.t

        station = self.station_display(message)
        self._push(items, "station", t("fields.station"), station, t("explain.metar.station", station=station))

        issue = format_utc_time(parsed.get("issue_time"))
        self._push(items, "issue", t("fields.issue_time"), issue, t("explain.metar.issue_time", time=issue))

        self._metar_wind(items, normalized)
        self._visibility(items, parsed, normalized, "explain.metar.visibility")

        for index, rvr in enumerate(normalized.get("rvr") or ()):
            text = format_rvr(rvr, rvr_tendency_text(t, rvr.get("tendency")))
            runway = rvr.get("runway")
            self._push(
                items, f"rvr_{index}", f"{t('fields.rvr')} {runway}", text,
                t("explain.metar.rvr", runway=runway, rvr=text),
            )

        self._weather(items, parsed, "explain.metar.weather")
        self._clouds(items, parsed, "explain.metar.clouds")

        temp = format_temperature(parsed.get("temperature"))
        self._push(items, "temp", t("fields.temperature"), temp, t("explain.metar.temperature", temp=temp))

        self._metar_pressure(items, parsed, normalized)

        trend = parsed.get("trend")
        self._push(items, "trend", t("fields.trend"), trend, t("explain.metar.trend", trend=trend))

        remark = parsed.get("rmk_raw")
        if remark:
            clipped = clip_text(remark, config.REMARK_CLIP_LENGTH)
            self._push(items, "rmk", t("fields.rmk"), clipped, t("explain.metar.remark", remark=clipped))

        self._push(items, "raw", t("fields.raw_tokens"), " ".join(parsed.get("raw_tokens") or ()))
        return items

    # TAF

    def explain_taf_temperature(self, token: str) -> str:
        """Explain a ``TX12/0112Z`` temperature extreme, or return the token as written."""
        match = TAF_TEMPERATURE_PATTERN.match(token or "")
        if not match:
            logger.debug("Unrecognised TAF temperature group: %s", token)
            return token
        kind_code, minus, value, day, hour = match.groups()
        kind = self.t("taf.temp.max") if kind_code == "X" else self.t("taf.temp.min")
        temp = f"{'-' if minus else ''}{value}°C"
        return self.t("taf.temp.explain", kind=kind, temp=temp, time=f"{day} {hour}:00 UTC")

    def _taf_trend(self, items: List[ExplainedField], index: int, trend: Mapping, normalized_trend: Mapping) -> None:
        t = self.t
        period = format_validity(trend.get("period"))
        self._push(
            items, f"trend_period_{index}", t("analysis.labels.trend_period"), period,
            t("explain.taf.trend_period", period=period),
        )

        distance = _number(normalized_trend.get("visibility_m"))
        visibility = format_visibility(distance) if distance else (trend.get("visibility") or {}).get("raw")
        self._push(
            items, f"trend_visibility_{index}", t("analysis.labels.trend_visibility"), visibility,
            t("explain.taf.trend_visibility", visibility=visibility),
        )

        for weather_index, token in enumerate(trend.get("weather") or ()):
            text = explain_weather_token(token, t)
            self._push(
                items, f"trend_weather_{index}_{weather_index}", t("analysis.labels.trend_weather"), text,
                t("explain.taf.trend_weather", weather=text),
            )

        for cloud_index, layer in enumerate(trend.get("clouds") or ()):
            text = explain_cloud_layer(layer, t) or format_cloud_layer(layer)
            self._push(
                items, f"trend_cloud_{index}_{cloud_index}", t("analysis.labels.trend_clouds"), text,
                t("explain.taf.trend_clouds", clouds=text),
            )

    def _explain_taf(self, message: StructuredMessage) -> List[ExplainedField]:
        parsed, normalized = message.parsed, message.normalized
        items: List[ExplainedField] = []
        t = self.t

        station = self.station_display(message)
        self._push(items, "station", t("fields.station"), station, t("explain.taf.station", station=station))
        issue = format_utc_time(parsed.get("issue_time"))
        self._push(items, "issue", t("fields.issue_time"), issue, t("explain.taf.issue_time", time=issue))
        validity = format_validity(parsed.get("validity"))
        self._push(items, "validity", t("fields.validity"), validity, t("explain.taf.validity", validity=validity))

        wind = normalized.get("wind")
        wind_text = format_wind(wind)
        if wind_text:
            if wind.get("gust_kt"):
                explanation = t("explain.taf.wind_gust", wind=wind_text, gust=f"{wind['gust_kt']}kt")
            else:
                explanation = t("explain.taf.wind", wind=wind_text)
            self._push(items, "wind", t("fields.wind"), wind_text, explanation)

        self._visibility(items, parsed, normalized, "explain.taf.visibility")
        self._weather(items, parsed, "explain.taf.weather")
        self._clouds(items, parsed, "explain.taf.clouds")

        for index, token in enumerate(parsed.get("temperatures") or ()):
            self._push(items, f"temp_{index}", t("fields.temperature"), token, self.explain_taf_temperature(token))

        trends = parsed.get("trends") or ()
        if trends:
            summary = ", ".join(trend.get("kind") or "" for trend in trends)
            self._push(items, "trends", t("fields.trend"), summary, t("explain.taf.trends", trends=summary))

            normalized_trends = normalized.get("trends") or ()
            normalized_for = [
                normalized_trends[i] if i < len(normalized_trends) and normalized_trends[i] else {}
                for i in range(len(trends))
            ]
            for index, trend in enumerate(trends):
                wind_text = format_wind(normalized_for[index].get("wind") or trend.get("wind"))
                self._push(
                    items, f"trend_wind_{index}", t("analysis.labels.trend_wind"), wind_text,
                    t("explain.taf.trend_wind", wind=wind_text),
                )
            for index, trend in enumerate(trends):
                self._taf_trend(items, index, trend, normalized_for[index])

        self._push(items, "raw", t("fields.raw_tokens"), " ".join(parsed.get("raw_tokens") or ()))
        return items

    # NOTAM

    def _explain_notam(self, message: StructuredMessage) -> List[ExplainedField]:
        parsed = message.parsed
        items: List[ExplainedField] = []
        t = self.t

        q_line = parsed.get("q_line")
        if q_line:
            self._push(
                items, "q_line_full", f"{t('notam.q.tag_q')}{t('notam.q.part_full')}",
                f"{t('notam.q.tag_q')}{q_line}",
            )
            for index, part in enumerate(self.q_line_decoder.decode(q_line)):
                self._push(
                    items, f"q_line_{index}", f"{t('fields.notam_q_prefix')}{t(f'notam.q.part_{part.key}')}",
                    part.raw, part.explanation, {'q_part': part.key},
                )

        location = parsed.get("a")
        self._push(items, "a", t("fields.notam_a"), location, t("explain.notam.location", location=location))

        start = format_notam_time(parsed.get("b"))
        self._push(items, "b", t("fields.notam_b"), start, t("explain.notam.start", start=start))
        end = format_notam_time(parsed.get("c"))
        self._push(items, "c", t("fields.notam_c"), end, t("explain.notam.end", end=end))

        schedule = parsed.get("d")
        self._push(items, "d", t("fields.notam_d"), schedule, explain_notam_schedule(schedule, t))

        body = parsed.get("e")
        if body:
            mapped = self.body_mapper.map_body(body) or body
            self._push(items, "e", t("fields.notam_e"), body, t("explain.notam.body", body=mapped))

        self._push(items, "f", t("fields.notam_f"), parsed.get("f"))
        self._push(items, "g", t("fields.notam_g"), parsed.get("g"))
        return items
