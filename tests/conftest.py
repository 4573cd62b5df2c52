import pytest

from wx_explain.i18n.translator import Translator
from wx_explain.lexicon.tables import Lexicon, LexiconSet
from wx_explain.models.message import StructuredMessage


@pytest.fixture
def en() -> Translator:
    """English translator backed by the bundled dictionary."""
    return Translator("en")


@pytest.fixture
def zh() -> Translator:
    return Translator("zh-CN")


@pytest.fixture
def small_lexicons() -> LexiconSet:
    """A few entries per table, standing in for the bundled lexicons."""
    return LexiconSet(
        subject=Lexicon({"MR": {"en": "Runway", "zh-CN": "跑道"}}, name="subject"),
        condition=Lexicon({"LC": {"en": "Closed", "zh-CN": "关闭"}}, name="condition"),
        fir=Lexicon({"ZBPE": {"en": "Beijing FIR", "zh-CN": "北京飞行情报区"}}, name="fir"),
        body=Lexicon({
            "RWY": {"en": "runway", "zh-CN": "跑道"},
            "TWY": {"en": "taxiway", "zh-CN": "滑行道"},
            "CLSD": {"en": "closed", "zh-CN": "关闭"},
            "WIP": {"en": "work in progress", "zh-CN": "正在施工"},
            "DUE TO": {"en": "due to", "zh-CN": "由于"},
            "ACT ARE": {"en": "active area", "zh-CN": "活动区"},
            "AD": {"en": "aerodrome", "zh-CN": "机场"},
            "NR.": {"en": "number ", "zh-CN": "编号"},
        }, name="body"),
    )


@pytest.fixture
def metar_data() -> dict:
    """Decoder output for a METAR with gusts, RVR, weather, two cloud layers and remarks."""
    return {
        "raw": "METAR ZBAA 011200Z 24015G25KT 200V280 9999 R36L/0550V0800U -TSRA BKN020 OVC100 "
               "15/10 Q1015 NOSIG RMK AO2 SLP134 T01500100",
        "type": "metar",
        "parsed": {
            "station": "ZBAA",
            "issue_time": {"day": 1, "hour": 12, "minute": 0},
            "wind": {"direction_deg": 240, "speed_kt": 15, "gust_kt": 25},
            "visibility": {"raw": "9999"},
            "weather": ["-TSRA"],
            "clouds": [
                {"amount": "BKN", "height_ft": 2000},
                {"amount": "OVC", "height_ft": 10000},
            ],
            "temperature": {"temperature_c": 15, "dewpoint_c": 10},
            "pressure_qnh": {"value": 1015, "unit": "hPa"},
            "trend": "NOSIG",
            "rmk_raw": "AO2 SLP134 T01500100",
            "rmk_tokens": ["AO2", "SLP134", "T01500100"],
        },
        "normalized": {
            "station": "ZBAA",
            "wind": {"direction_deg": 240, "speed_kt": 15, "gust_kt": 25},
            "wind_variation": {"from_deg": 200, "to_deg": 280},
            "visibility_m": 10000,
            "rvr": [{"runway": "36L", "vis_m": 550, "vis_vary_m": 800, "tendency": "up"}],
            "pressure_hpa": 1015.0,
        },
    }


@pytest.fixture
def taf_data() -> dict:
    """Decoder output for a TAF with temperature extremes and two change groups."""
    return {
        "raw": "TAF ZSPD 010500Z 0106/0212 18008KT 9999 SCT030 TX25/0106Z TN18/0121Z "
               "BECMG 0110/0112 24012KT 4000 BR BKN015 TEMPO 0114/0118 -SHRA SCT020",
        "type": "taf",
        "parsed": {
            "station": "ZSPD",
            "issue_time": {"day": 1, "hour": 5, "minute": 0},
            "validity": {
                "from": {"day": 1, "hour": 6, "minute": 0},
                "to": {"day": 2, "hour": 12, "minute": 0},
            },
            "wind": {"direction_deg": 180, "speed_kt": 8, "gust_kt": None},
            "visibility": {"raw": "9999"},
            "clouds": [{"amount": "SCT", "height_ft": 3000}],
            "temperatures": ["TX25/0106Z", "TN18/0121Z"],
            "trends": [
                {
                    "kind": "BECMG",
                    "period": {
                        "from": {"day": 1, "hour": 10, "minute": 0},
                        "to": {"day": 1, "hour": 12, "minute": 0},
                    },
                    "wind": {"direction_deg": 240, "speed_kt": 12, "gust_kt": None},
                    "visibility": {"raw": "4000"},
                    "weather": ["BR"],
                    "clouds": [{"amount": "BKN", "height_ft": 1500}],
                },
                {
                    "kind": "TEMPO",
                    "period": {
                        "from": {"day": 1, "hour": 14, "minute": 0},
                        "to": {"day": 1, "hour": 18, "minute": 0},
                    },
                    "wind": None,
                    "visibility": None,
                    "weather": ["-SHRA"],
                    "clouds": [{"amount": "SCT", "height_ft": 2000}],
                },
            ],
        },
        "normalized": {
            "station": "ZSPD",
            "wind": {"direction_deg": 180, "speed_kt": 8, "gust_kt": None},
            "visibility_m": 10000,
            "trends": [
                {"visibility_m": 4000},
                {},
            ],
        },
    }


@pytest.fixture
def notam_data() -> dict:
    """Decoder output for a runway closure NOTAM."""
    return {
        "raw": "A1234/24 NOTAMN Q) ZBPE/QMRLC/IV/NBO/A/000/999/4004N11635E005 A) ZBAA "
               "B) 2406010000 C) 2406302359 D) 0000-0600 DLY E) RWY 18L/36R CLSD DUE TO WIP",
        "type": "notam",
        "parsed": {
            "q_line": "ZBPE/QMRLC/IV/NBO/A/000/999/4004N11635E005",
            "a": "ZBAA",
            "b": "2406010000",
            "c": "2406302359",
            "d": "0000-0600 DLY",
            "e": "RWY 18L/36R CLSD DUE TO WIP",
        },
        "normalized": {},
    }


@pytest.fixture
def metar_message(metar_data) -> StructuredMessage:
    return StructuredMessage.from_dict(metar_data)


@pytest.fixture
def taf_message(taf_data) -> StructuredMessage:
    return StructuredMessage.from_dict(taf_data)


@pytest.fixture
def notam_message(notam_data) -> StructuredMessage:
    return StructuredMessage.from_dict(notam_data)
