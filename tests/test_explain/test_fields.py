"""Tests for the field explainer."""

import pytest

from wx_explain.explain.fields import FieldExplainer, explain_cloud_layer
from wx_explain.i18n.translator import Translator
from wx_explain.models.message import StructuredMessage


@pytest.fixture
def explainer(en, small_lexicons):
    return FieldExplainer(en, small_lexicons)


def by_key(fields):
    return {field.key: field for field in fields}


class TestMetarFields:
    """Test METAR field explanations."""

    def test_field_order(self, explainer, metar_message):
        keys = [field.key for field in explainer.explain(metar_message)]
        assert keys == [
            "station", "issue", "wind", "wind_variation", "visibility", "rvr_0",
            "weather", "clouds", "temp", "pressure", "trend", "rmk",
        ]

    def test_values(self, explainer, metar_message):
        fields = by_key(explainer.explain(metar_message))
        assert fields["issue"].raw_value == "01 12:00 UTC"
        assert fields["wind"].raw_value == "240° 15kt gust 25kt"
        assert fields["wind"].explanation == "Wind 240° 15kt gust 25kt, gusting to 25kt"
        assert fields["wind_variation"].explanation == "Wind direction varying between 200° and 280°"
        assert fields["visibility"].raw_value == ">= 10km"
        assert fields["rvr_0"].label == "RVR 36L"
        assert fields["rvr_0"].raw_value == "550-800 m (increasing)"
        assert fields["weather"].raw_value == "-TSRA (light thunderstorm rain)"
        assert fields["temp"].raw_value == "15°C / 10°C"
        assert fields["pressure"].raw_value == "1015.0 hPa"
        assert fields["trend"].explanation == "Trend: NOSIG"

    def test_cloud_meta(self, explainer, metar_message):
        clouds = by_key(explainer.explain(metar_message))["clouds"]
        assert clouds.raw_value == "BKN 2000ft (broken, 5-7 oktas), OVC 10000ft (overcast, 8 oktas)"
        layers = clouds.meta["clouds"]
        assert [layer["index"] for layer in layers] == [0, 1]
        assert layers[0]["value"] == "BKN 2000ft (broken, 5-7 oktas)"
        assert layers[0]["explanation"] == "Clouds: BKN 2000ft (broken, 5-7 oktas)"

    def test_raw_visibility_without_normalized_value(self, explainer, metar_data):
        del metar_data["normalized"]["visibility_m"]
        fields = by_key(explainer.explain(StructuredMessage.from_dict(metar_data)))
        assert "visibility" not in fields
        assert fields["visibility_raw"].raw_value == "9999"
        assert fields["visibility_raw"].explanation == ""

    def test_variable_wind(self, explainer, metar_data):
        metar_data["normalized"]["wind"] = {"direction_deg": None, "speed_kt": 3, "gust_kt": None}
        fields = by_key(explainer.explain(StructuredMessage.from_dict(metar_data)))
        assert fields["wind"].raw_value == "VRB 3kt"
        assert fields["wind"].explanation == "Variable wind at 3kt"

    def test_altimeter_and_unparsed_tokens(self, explainer, metar_data):
        metar_data["normalized"]["pressure_inhg"] = 29.92
        metar_data["parsed"]["raw_tokens"] = ["XYZ", "123"]
        fields = explainer.explain(StructuredMessage.from_dict(metar_data))
        keyed = by_key(fields)
        assert keyed["altimeter"].raw_value == "29.92 inHg"
        assert fields[-1].key == "raw"
        assert fields[-1].raw_value == "XYZ 123"

    def test_remark_clipped(self, explainer, metar_data):
        metar_data["parsed"]["rmk_raw"] = "A" * 200
        rmk = by_key(explainer.explain(StructuredMessage.from_dict(metar_data)))["rmk"]
        assert rmk.raw_value.endswith("...")
        assert len(rmk.raw_value) == 123

    def test_station_name(self, en, small_lexicons, metar_message):
        station = {"code": "ZBAA", "name_en": "Beijing Capital"}
        fields = FieldExplainer(en, small_lexicons, station=station).explain(metar_message)
        assert fields[0].raw_value == "ZBAA · Beijing Capital"


class TestTafFields:
    """Test TAF field explanations."""

    def test_field_order(self, explainer, taf_message):
        keys = [field.key for field in explainer.explain(taf_message)]
        assert keys == [
            "station", "issue", "validity", "wind", "visibility", "clouds", "temp_0", "temp_1",
            "trends", "trend_wind_0",
            "trend_period_0", "trend_visibility_0", "trend_weather_0_0", "trend_cloud_0_0",
            "trend_period_1", "trend_weather_1_0", "trend_cloud_1_0",
        ]

    def test_values(self, explainer, taf_message):
        fields = by_key(explainer.explain(taf_message))
        assert fields["validity"].raw_value == "01 06:00 UTC - 02 12:00 UTC"
        assert fields["wind"].explanation == "Wind 180° 8kt"
        assert fields["trends"].raw_value == "BECMG, TEMPO"
        assert fields["trend_wind_0"].raw_value == "240° 12kt"
        assert fields["trend_period_0"].raw_value == "01 10:00 UTC - 01 12:00 UTC"
        assert fields["trend_visibility_0"].raw_value == "4.0 km"
        assert fields["trend_weather_0_0"].raw_value == "BR (mist)"
        assert fields["trend_cloud_0_0"].raw_value == "BKN 1500ft (broken, 5-7 oktas)"
        assert fields["trend_weather_1_0"].raw_value == "-SHRA (light showers rain)"

    def test_temperature_extremes(self, explainer, taf_message):
        fields = by_key(explainer.explain(taf_message))
        assert fields["temp_0"].raw_value == "TX25/0106Z"
        assert fields["temp_0"].explanation == "Maximum temperature 25°C at 01 06:00 UTC"
        assert fields["temp_1"].explanation == "Minimum temperature 18°C at 01 21:00 UTC"

    def test_negative_and_unrecognised_temperature(self, explainer):
        assert explainer.explain_taf_temperature("TNM03/0106Z") == "Minimum temperature -03°C at 01 06:00 UTC"
        assert explainer.explain_taf_temperature("TX25") == "TX25"

    def test_explain_as_other_type(self, explainer, taf_message):
        keys = [field.key for field in explainer.explain(taf_message, "metar")]
        assert "trends" not in keys
        assert "station" in keys


class TestNotamFields:
    """Test NOTAM field explanations."""

    def test_field_order(self, explainer, notam_message):
        keys = [field.key for field in explainer.explain(notam_message)]
        assert keys == ["q_line_full"] + [f"q_line_{i}" for i in range(8)] + ["a", "b", "c", "d", "e"]

    def test_q_line(self, explainer, notam_message):
        fields = by_key(explainer.explain(notam_message))
        assert fields["q_line_full"].raw_value == "Q) ZBPE/QMRLC/IV/NBO/A/000/999/4004N11635E005"
        assert fields["q_line_full"].explanation == ""
        assert fields["q_line_1"].label == "Q) NOTAM code"
        assert fields["q_line_1"].explanation == "QMRLC: Runway (MR) - Closed (LC)"
        assert fields["q_line_1"].meta == {"q_part": "q_code"}

    def test_items(self, explainer, notam_message):
        fields = by_key(explainer.explain(notam_message))
        assert fields["a"].explanation == "Affected location ZBAA"
        assert fields["b"].raw_value == "2024-06-01 00:00 UTC"
        assert fields["c"].raw_value == "2024-06-30 23:59 UTC"
        assert fields["d"].explanation == "Active daily 00:00 UTC to 06:00 UTC"
        assert fields["e"].raw_value == "RWY 18L/36R CLSD DUE TO WIP"
        assert fields["e"].explanation == "Text: runway 18L/36R closed due to work in progress"

    def test_locale_without_dictionary(self, small_lexicons, notam_message):
        fields = by_key(FieldExplainer(Translator("en-US"), small_lexicons).explain(notam_message))
        assert fields["q_line_1"].explanation == "QMRLC: Runway (MR) - Closed (LC)"
        assert fields["e"].explanation == "Text: runway 18L/36R closed due to work in progress"

    def test_opaque_q_line(self, explainer, notam_data):
        notam_data["parsed"]["q_line"] = "ZBPE/QMRLC"
        keys = [field.key for field in explainer.explain(StructuredMessage.from_dict(notam_data))]
        assert keys[:2] == ["q_line_full", "a"]

    def test_limits(self, explainer, notam_data):
        notam_data["parsed"].update({"f": "SFC", "g": "FL100"})
        fields = explainer.explain(StructuredMessage.from_dict(notam_data))
        assert [field.key for field in fields][-2:] == ["f", "g"]
        assert fields[-1].raw_value == "FL100"


class TestEdgeCases:
    """Test empty and unknown input."""

    def test_empty_message(self, explainer):
        assert explainer.explain(StructuredMessage()) == []
        assert explainer.explain(None) == []

    def test_unknown_type(self, explainer, metar_data):
        metar_data["type"] = "sigmet"
        assert explainer.explain(StructuredMessage.from_dict(metar_data)) == []

    def test_cloud_layer_without_gloss(self, en):
        assert explain_cloud_layer({"amount": "XXX", "height_ft": 1000}, en) == "XXX 1000ft"
        assert explain_cloud_layer({"height_ft": 1000}, en) == ""
