"""Display formatting for structured message values."""

import re
from typing import Any, Callable, Mapping, Optional, Sequence

from wx_explain import config

NOTAM_TIME_PATTERN = re.compile(r'^\d{10}$')
NOTAM_SCHEDULE_PATTERN = re.compile(r'^(\d{4})-(\d{4})\s*(DLY)?$', re.IGNORECASE)

# Visibility at or above this is reported as "10 km or more"
VISIBILITY_UNLIMITED_M = 10000


def pad_number(value: Any, length: int = 2) -> str:
    return str("" if value is None else value).rjust(length, "0")


def format_utc_time(utc: Optional[Mapping[str, Any]]) -> str:
    """Format ``{day, hour, minute}`` as ``DD HH:MM UTC``."""
    if not utc:
        return ""
    return f"{pad_number(utc.get('day'))} {pad_number(utc.get('hour'))}:{pad_number(utc.get('minute'))} UTC"


def format_validity(period: Optional[Mapping[str, Any]]) -> str:
    """Format a ``{from, to}`` period, empty if either end is missing."""
    if not period or not period.get("from") or not period.get("to"):
        return ""
    return f"{format_utc_time(period['from'])} - {format_utc_time(period['to'])}"


def format_wind(wind: Optional[Mapping[str, Any]]) -> str:
    """
    Format wind as ``240° 15kt`` or ``VRB 3kt``, with ``gust Nkt`` when gusting.

    Both the normalized (``speed_kt``/``gust_kt``) and the plain
    (``speed``/``gust``) shapes are accepted.
    """
    if not wind:
        return ""
    direction = wind.get("direction_deg")
    speed = wind.get("speed_kt", wind.get("speed"))
    gust = wind.get("gust_kt", wind.get("gust"))
    label = f"{direction}°" if direction is not None else "VRB"
    if gust:
        return f"{label} {speed}kt gust {gust}kt"
    return f"{label} {speed}kt"


def format_visibility(distance_m: Optional[float]) -> str:
    if distance_m is None:
        return ""
    if distance_m >= VISIBILITY_UNLIMITED_M:
        return ">= 10km"
    if distance_m >= 1000:
        return f"{distance_m / 1000:.1f} km"
    return f"{_plain_number(distance_m)} m"


def _plain_number(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_temperature(pair: Optional[Mapping[str, Any]]) -> str:
    if not pair:
        return ""
    return f"{pair.get('temperature_c')}°C / {pair.get('dewpoint_c')}°C"


def format_cloud_layer(layer: Optional[Mapping[str, Any]]) -> str:
    """Format a cloud layer as ``BKN 2000ft``, or just the amount without a height."""
    if not layer:
        return ""
    amount = layer.get("amount") or ""
    height = layer.get("height_ft")
    if height:
        return f"{amount} {height}ft"
    return amount


def format_clouds(clouds: Optional[Sequence[Mapping[str, Any]]]) -> str:
    if not clouds:
        return ""
    return ", ".join(format_cloud_layer(layer) for layer in clouds)


def format_pressure(pressure: Optional[Mapping[str, Any]]) -> str:
    """Format ``{value, unit}`` as ``1015 hPa``."""
    if not pressure:
        return ""
    return f"{pressure.get('value')} {pressure.get('unit')}"


def format_rvr(rvr: Optional[Mapping[str, Any]], tendency_text: str = "") -> str:
    """Format an RVR entry as ``550-800 m (increasing)``."""
    if not rvr:
        return ""
    if rvr.get("vis_vary_m"):
        base = f"{rvr.get('vis_m')}-{rvr.get('vis_vary_m')} m"
    else:
        base = f"{rvr.get('vis_m')} m"
    if tendency_text:
        return f"{base} ({tendency_text})"
    return base


def rvr_tendency_text(translator: Callable, tendency: Optional[str]) -> str:
    """Localized RVR tendency (``up``, ``down``, ``no_change``), empty otherwise."""
    if tendency in ("up", "down", "no_change"):
        return translator(f"analysis.tendency.{tendency}")
    return ""


def format_station_name(station: Optional[Mapping[str, Any]], locale: str) -> str:
    """Pick the station name for a locale; English prefers ``name_en``."""
    if not station:
        return ""
    if locale == config.FALLBACK_LOCALE:
        keys = ("name_en", "name_local", "name")
    else:
        keys = ("name_zh_hans", "name_zh", "name_en", "name_local", "name")
    for key in keys:
        if station.get(key):
            return station[key]
    return ""


def format_station_display(code: Optional[str], station: Optional[Mapping[str, Any]], locale: str) -> str:
    """Format a station as ``CODE · Name``, or just the code when no name is known."""
    name = format_station_name(station, locale)
    if not name:
        return code or ""
    return f"{code} · {name}"


def format_notam_time(raw: Optional[str]) -> str:
    """
    Format a NOTAM ``YYMMDDHHMM`` timestamp as ``20YY-MM-DD HH:MM UTC``.

    Other values (``PERM``, ``2406301200EST``) are returned as written.
    """
    if not raw or not isinstance(raw, str):
        return ""
    value = raw.strip()
    if not NOTAM_TIME_PATTERN.match(value):
        return raw
    return f"20{value[0:2]}-{value[2:4]}-{value[4:6]} {value[6:8]}:{value[8:10]} UTC"


def explain_notam_schedule(raw: Optional[str], translator: Callable) -> str:
    """Explain a ``HHMM-HHMM [DLY]`` item D schedule; other schedules are returned as written."""
    if not raw or not isinstance(raw, str):
        return ""
    value = raw.strip()
    match = NOTAM_SCHEDULE_PATTERN.match(value)
    if not match:
        return value
    start = f"{match.group(1)[:2]}:{match.group(1)[2:]} UTC"
    end = f"{match.group(2)[:2]}:{match.group(2)[2:]} UTC"
    if match.group(3):
        return translator("notam.schedule.daily", start=start, end=end)
    return translator("notam.schedule.range", start=start, end=end)


def clip_text(text: str, length: int = config.REMARK_CLIP_LENGTH) -> str:
    """Clip text to ``length`` characters, marking the cut with ``...``."""
    if len(text) > length:
        return f"{text[:length]}..."
    return text
