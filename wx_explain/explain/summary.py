"""Prose summary lines for a structured message."""

from typing import Any, Callable, List, Mapping, Optional

from wx_explain import config
from wx_explain.explain.formatting import (
    clip_text,
    format_clouds,
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
from wx_explain.models.message import MessageType, StructuredMessage

DETAIL_NORMAL = "normal"
DETAIL_FULL = "full"


def type_notice(message: StructuredMessage, translator: Callable) -> Optional[str]:
    """Notice line when the requested, detected and final types are all known and disagree."""
    requested, detected, final = message.requested_type, message.detected_type, message.final_type
    if not (requested and detected and final):
        return None
    if requested == detected and requested == final:
        return None
    return translator("explain.type_notice", requested=requested, detected=detected, final=final)


def _metar_lines(message: StructuredMessage, t: Callable, station: str) -> List[str]:
    parsed, normalized = message.parsed, message.normalized
    lines = []
    if station:
        lines.append(t("explain.metar.station", station=station))
    if parsed.get("issue_time"):
        lines.append(t("explain.metar.issue_time", time=format_utc_time(parsed["issue_time"])))
    if normalized.get("wind"):
        lines.append(t("explain.metar.wind", wind=format_wind(normalized["wind"])))
    variation = normalized.get("wind_variation")
    if variation:
        lines.append(t("explain.metar.wind_variation", **{"from": variation.get("from_deg"), "to": variation.get("to_deg")}))
    if normalized.get("visibility_m"):
        lines.append(t("explain.metar.visibility", visibility=format_visibility(normalized["visibility_m"])))
    for rvr in normalized.get("rvr") or ():
        text = format_rvr(rvr, rvr_tendency_text(t, rvr.get("tendency")))
        lines.append(t("explain.metar.rvr", runway=rvr.get("runway"), rvr=text))
    if parsed.get("weather"):
        lines.append(t("explain.metar.weather", weather=", ".join(parsed["weather"])))
    if parsed.get("clouds"):
        lines.append(t("explain.metar.clouds", clouds=format_clouds(parsed["clouds"])))
    if parsed.get("temperature"):
        lines.append(t("explain.metar.temperature", temp=format_temperature(parsed["temperature"])))
    if normalized.get("pressure_hpa"):
        lines.append(t("explain.metar.pressure", pressure=f"{normalized['pressure_hpa']:.1f} hPa"))
    elif parsed.get("pressure_qnh"):
        lines.append(t("explain.metar.pressure", pressure=format_pressure(parsed["pressure_qnh"])))
    if parsed.get("rmk_raw"):
        lines.append(t("explain.metar.remark", remark=clip_text(parsed["rmk_raw"], config.REMARK_CLIP_LENGTH)))
    if parsed.get("trend"):
        lines.append(t("explain.metar.trend", trend=parsed["trend"]))
    return lines


def _taf_lines(message: StructuredMessage, t: Callable, station: str) -> List[str]:
    parsed, normalized = message.parsed, message.normalized
    lines = []
    if station:
        lines.append(t("explain.taf.station", station=station))
    if parsed.get("issue_time"):
        lines.append(t("explain.taf.issue_time", time=format_utc_time(parsed["issue_time"])))
    if parsed.get("validity"):
        lines.append(t("explain.taf.validity", validity=format_validity(parsed["validity"])))
    if normalized.get("wind"):
        lines.append(t("explain.taf.wind", wind=format_wind(normalized["wind"])))
    if normalized.get("visibility_m"):
        lines.append(t("explain.taf.visibility", visibility=format_visibility(normalized["visibility_m"])))
    if parsed.get("weather"):
        lines.append(t("explain.taf.weather", weather=", ".join(parsed["weather"])))
    if parsed.get("clouds"):
        lines.append(t("explain.taf.clouds", clouds=format_clouds(parsed["clouds"])))
    if parsed.get("temperatures"):
        lines.append(t("explain.taf.temperature", temp=", ".join(parsed["temperatures"])))
    if parsed.get("trends"):
        kinds = ", ".join(trend.get("kind") or "" for trend in parsed["trends"])
        lines.append(t("explain.taf.trends", trends=kinds))
    return lines


def _notam_lines(message: StructuredMessage, t: Callable, station: str) -> List[str]:
    parsed = message.parsed
    lines = []
    location = parsed.get("a") or station
    if location:
        lines.append(t("explain.notam.location", location=location))
    if parsed.get("b") or parsed.get("c"):
        lines.append(t("explain.notam.period", start=parsed.get("b") or "-", end=parsed.get("c") or "-"))
    if parsed.get("e"):
        lines.append(t("explain.notam.body", body=parsed["e"]))
    return lines


def build_summary(
    message: Optional[StructuredMessage],
    translator: Callable[..., str],
    station: Optional[Mapping[str, Any]] = None,
    detail: str = DETAIL_NORMAL,
) -> List[str]:
    """
    Build summary sentences for a message.

    Args:
        message: Structured message
        translator: Localization capability
        station: Optional station info for the ``CODE · Name`` display
        detail: ``"full"`` adds a type notice when the decoder changed
            the requested type

    Returns:
        Ordered list of sentences, empty for an empty message
    """
    if message is None or message.is_empty:
        return []

    lines: List[str] = []
    if detail == DETAIL_FULL:
        notice = type_notice(message, translator)
        if notice:
            lines.append(notice)

    locale = getattr(translator, 'locale', config.FALLBACK_LOCALE)
    code = message.station_code
    if station:
        station_text = format_station_display(station.get("code") or code, station, locale)
    else:
        station_text = code or ""

    if message.type is MessageType.METAR:
        lines.extend(_metar_lines(message, translator, station_text))
    elif message.type is MessageType.TAF:
        lines.extend(_taf_lines(message, translator, station_text))
    elif message.type is MessageType.NOTAM:
        lines.extend(_notam_lines(message, translator, station_text))
    return lines
