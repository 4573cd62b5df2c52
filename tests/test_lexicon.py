"""Tests for lexicon tables."""

import json

import pytest

from wx_explain.errors import LexiconLoadError
from wx_explain.lexicon import tables
from wx_explain.lexicon.tables import Lexicon, LexiconSet, load_default_lexicons, load_lexicon


class TestLexicon:
    """Test the read-only code table."""

    def test_get(self):
        lexicon = Lexicon({"MR": {"en": "Runway", "zh-CN": "跑道"}})
        assert lexicon.get("MR", "en") == "Runway"
        assert lexicon.get("MR", "zh-CN") == "跑道"
        assert lexicon.get("MR", "fr") is None
        assert lexicon.get("ZZ", "en") is None
        assert "MR" in lexicon
        assert len(lexicon) == 1

    def test_empty_text_is_a_miss(self):
        assert Lexicon({"MR": {"en": ""}}).get("MR", "en") is None

    def test_not_affected_by_source_changes(self):
        source = {"MR": {"en": "Runway"}}
        lexicon = Lexicon(source)
        source["MR"]["en"] = "Changed"
        assert lexicon.get("MR", "en") == "Runway"


class TestLoading:
    """Test lexicon file loading."""

    def test_load_lexicon(self, tmp_path):
        path = tmp_path / "notam_body.json"
        path.write_text(json.dumps({"RWY": {"en": "runway"}, "BAD": "not a mapping"}), encoding="utf-8")
        lexicon = load_lexicon(path)
        assert lexicon.get("RWY", "en") == "runway"
        assert "BAD" not in lexicon
        assert lexicon.name == "notam_body"

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(LexiconLoadError) as exc_info:
            load_lexicon(path)
        assert "broken.json" in str(exc_info.value)

    def test_not_an_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(LexiconLoadError):
            load_lexicon(path)

    def test_missing_files_give_empty_tables(self, tmp_path):
        (tmp_path / tables.FIR_FILE).write_text(json.dumps({"ZBPE": {"en": "Beijing FIR"}}), encoding="utf-8")
        lexicons = LexiconSet.from_directory(tmp_path)
        assert lexicons.fir.get("ZBPE", "en") == "Beijing FIR"
        assert len(lexicons.subject) == 0
        assert len(lexicons.body) == 0

    def test_bundled_lexicons(self):
        lexicons = load_default_lexicons()
        assert lexicons.subject.get("MR", "en") == "Runway"
        assert lexicons.condition.get("LC", "en") == "Closed"
        assert lexicons.fir.get("ZBPE", "en") == "Beijing FIR"
        assert lexicons.body.get("CLSD", "en") == "closed"
        assert "XX" not in lexicons.subject
        assert load_default_lexicons() is lexicons

    def test_empty_set(self):
        lexicons = LexiconSet.empty()
        assert lexicons.subject.get("MR", "en") is None
