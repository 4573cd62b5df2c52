"""Tests for display formatting helpers."""

import pytest

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
    pad_number,
    rvr_tendency_text,
)


class TestTimes:
    """Test time and period formatting."""

    def test_pad_number(self):
        assert pad_number(5) == "05"
        assert pad_number(None) == "00"

    def test_utc_time(self):
        assert format_utc_time({"day": 1, "hour": 9, "minute": 5}) == "01 09:05 UTC"
        assert format_utc_time(None) == ""

    def test_validity(self):
        period = {"from": {"day": 1, "hour": 6, "minute": 0}, "to": {"day": 2, "hour": 12, "minute": 0}}
        assert format_validity(period) == "01 06:00 UTC - 02 12:00 UTC"
        assert format_validity({"from": {"day": 1, "hour": 6, "minute": 0}}) == ""

    def test_notam_time(self):
        assert format_notam_time("2406010000") == "2024-06-01 00:00 UTC"
        assert format_notam_time("PERM") == "PERM"
        assert format_notam_time(None) == ""

    def test_notam_schedule(self, en):
        assert explain_notam_schedule("0000-0600 DLY", en) == "Active daily 00:00 UTC to 06:00 UTC"
        assert explain_notam_schedule("2200-0400", en) == "Active 22:00 UTC to 04:00 UTC"
        assert explain_notam_schedule("MON-FRI 0800-1600", en) == "MON-FRI 0800-1600"


class TestWeatherValues:
    """Test wind, visibility, temperature and pressure formatting."""

    def test_wind(self):
        assert format_wind({"direction_deg": 240, "speed_kt": 15, "gust_kt": None}) == "240° 15kt"
        assert format_wind({"direction_deg": 240, "speed_kt": 15, "gust_kt": 25}) == "240° 15kt gust 25kt"
        assert format_wind({"direction_deg": None, "speed_kt": 3}) == "VRB 3kt"
        assert format_wind({"direction_deg": 90, "speed": 5}) == "90° 5kt"
        assert format_wind(None) == ""

    @pytest.mark.parametrize("distance,expected", [
        (10000, ">= 10km"),
        (12000, ">= 10km"),
        (4000, "4.0 km"),
        (1500, "1.5 km"),
        (800, "800 m"),
        (800.0, "800 m"),
        (None, ""),
    ])
    def test_visibility(self, distance, expected):
        assert format_visibility(distance) == expected

    def test_temperature(self):
        assert format_temperature({"temperature_c": 15, "dewpoint_c": 10}) == "15°C / 10°C"
        assert format_temperature({"temperature_c": -2, "dewpoint_c": -5}) == "-2°C / -5°C"

    def test_pressure(self):
        assert format_pressure({"value": 1015, "unit": "hPa"}) == "1015 hPa"
        assert format_pressure(None) == ""

    def test_rvr(self, en):
        rvr = {"runway": "36L", "vis_m": 550, "vis_vary_m": 800, "tendency": "up"}
        assert format_rvr(rvr, rvr_tendency_text(en, rvr["tendency"])) == "550-800 m (increasing)"
        assert format_rvr({"vis_m": 1200}) == "1200 m"
        assert rvr_tendency_text(en, "sideways") == ""


class TestClouds:
    """Test cloud layer formatting."""

    def test_layer(self):
        assert format_cloud_layer({"amount": "BKN", "height_ft": 2000}) == "BKN 2000ft"
        assert format_cloud_layer({"amount": "NSC"}) == "NSC"

    def test_layers(self):
        clouds = [{"amount": "FEW", "height_ft": 1000}, {"amount": "BKN", "height_ft": 2500}]
        assert format_clouds(clouds) == "FEW 1000ft, BKN 2500ft"
        assert format_clouds([]) == ""


class TestStationDisplay:
    """Test station name selection."""

    station = {"code": "ZBAA", "name_en": "Beijing Capital", "name_zh": "北京首都"}

    def test_english(self):
        assert format_station_display("ZBAA", self.station, "en") == "ZBAA · Beijing Capital"

    def test_chinese(self):
        assert format_station_display("ZBAA", self.station, "zh-CN") == "ZBAA · 北京首都"

    def test_code_only(self):
        assert format_station_display("ZBAA", None, "en") == "ZBAA"
        assert format_station_display("ZBAA", {"code": "ZBAA"}, "en") == "ZBAA"


def test_clip_text():
    assert clip_text("abcdef", 3) == "abc..."
    assert clip_text("abc", 3) == "abc"
