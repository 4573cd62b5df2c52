"""
Decoder for numeric METAR remark groups.

Supported groups:
    SLPnnn      sea level pressure, tenths of hPa with the leading 9/10 omitted
    TsTTTsDDD   temperature and dewpoint in tenths of a degree, s=1 negative
    Pnnnn       hourly precipitation in hundredths of an inch
    AO1 / AO2   automated station type
"""

import re
from typing import Callable, Optional

SLP_PATTERN = re.compile(r'^SLP(\d{3})$', re.IGNORECASE)
TEMP_DEW_PATTERN = re.compile(r'^T(?:([01])(\d{3}))?(?:([01])(\d{3}))?$', re.IGNORECASE)
PRECIP_1H_PATTERN = re.compile(r'^P(\d{4})$', re.IGNORECASE)

# SLP values at or above this select the 900 hPa range
SLP_LOW_RANGE_THRESHOLD = 500


def decode_sea_level_pressure(token: str) -> str:
    """
    Decode ``SLPnnn`` to hPa with one decimal place.

    Example: SLP998 -> "999.8", SLP134 -> "1013.4". Empty string on non-match.
    """
    match = SLP_PATTERN.match(token or "")
    if not match:
        return ""
    value = int(match.group(1))
    base = 900 if value >= SLP_LOW_RANGE_THRESHOLD else 1000
    return f"{base + value / 10:.1f}"


def _signed_tenths(sign: Optional[str], digits: Optional[str]) -> str:
    if sign is None or digits is None:
        return ""
    value = int(digits) / 10
    if sign == "1":
        value = -value
    return f"{value:.1f}"


def decode_temperature_dewpoint(token: str) -> tuple:
    """
    Decode ``TsTTTsDDD`` to (temperature, dewpoint) strings.

    Either half may be missing, in which case its string is empty.
    Returns ("", "") on non-match.
    """
    match = TEMP_DEW_PATTERN.match(token or "")
    if not match:
        return "", ""
    temp = _signed_tenths(match.group(1), match.group(2))
    dew = _signed_tenths(match.group(3), match.group(4))
    return temp, dew


def decode_hourly_precipitation(token: str) -> str:
    """Decode ``Pnnnn`` to inches with two decimals, e.g. P0125 -> "1.25"."""
    match = PRECIP_1H_PATTERN.match(token or "")
    if not match:
        return ""
    return f"{int(match.group(1)) / 100:.2f}"


def explain_remark_token(token: str, translator: Callable) -> str:
    """
    Explain one remark token.

    Unrecognised tokens are returned unchanged.
    """
    if not token:
        return ""
    upper = token.upper()

    if upper == "AO1":
        return translator("remark.ao1")
    if upper == "AO2":
        return translator("remark.ao2")

    pressure = decode_sea_level_pressure(upper)
    if pressure:
        return translator("remark.slp", pressure=pressure)

    temp, dew = decode_temperature_dewpoint(upper)
    if temp and dew:
        return translator("remark.temp_dewpoint", temp=temp, dew=dew)
    if temp:
        return translator("remark.temp_only", temp=temp)
    if dew:
        return translator("remark.dew_only", dew=dew)

    amount = decode_hourly_precipitation(upper)
    if amount:
        return translator("remark.precip_1h", amount=amount)

    return token
