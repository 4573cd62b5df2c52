"""Decoders for compact encoded substrings of aviation messages."""

from wx_explain.decoders.weather import (
    WeatherToken,
    Intensity,
    parse_weather_token,
    explain_weather_token,
    explain_weather_list,
)
from wx_explain.decoders.remarks import (
    decode_sea_level_pressure,
    decode_temperature_dewpoint,
    decode_hourly_precipitation,
    explain_remark_token,
)
from wx_explain.decoders.q_line import QLineDecoder, split_q_line
from wx_explain.decoders.notam_body import NotamBodyMapper

__all__ = [
    'WeatherToken',
    'Intensity',
    'parse_weather_token',
    'explain_weather_token',
    'explain_weather_list',
    'decode_sea_level_pressure',
    'decode_temperature_dewpoint',
    'decode_hourly_precipitation',
    'explain_remark_token',
    'QLineDecoder',
    'split_q_line',
    'NotamBodyMapper',
]
