"""
Tests for applying the picker to feature properties.
"""

import pytest

from labelpick.config import LabelsConfig
from labelpick.labels import format_label_lines, label_feature, label_records, name_candidates
from labelpick.models import TagScheme, Tier
from labelpick.picker import LanguagePicker


class TestNameCandidates:
    def test_colon_keys_rewritten(self, place_properties):
        pairs = name_candidates(place_properties[0], TagScheme(name_tag="name"))
        assert pairs == [("name", "Київ"), ("name_en", "Kyiv"), ("name_ru", "Киев")]

    def test_skips_blank_and_non_text(self):
        props = {"name": "  ", "name_en": None, "name_de": 5, "name_fr": "Kiev"}
        assert name_candidates(props, TagScheme(name_tag="name")) == [("name_fr", "Kiev")]

    def test_multi_tag_prefix(self):
        props = {"pref_en": "Kyiv", "name": "Київ", "pref_uk": "Київ"}
        pairs = name_candidates(props, TagScheme(multi_tag="pref_"))
        assert pairs == [("pref_en", "Kyiv"), ("pref_uk", "Київ")]

    def test_bare_codes_without_scheme(self):
        props = {"en": "Kyiv", "uk": "Київ", "rank": 3}
        assert name_candidates(props, TagScheme()) == [("en", "Kyiv"), ("uk", "Київ")]

    def test_excluded_keys(self):
        props = {"name": "Київ", "label": "old"}
        pairs = name_candidates(props, TagScheme(), exclude=("label",))
        assert pairs == [("name", "Київ")]


class TestLabelFeature:
    def test_keeps_source_tags(self, place_properties):
        picker = LanguagePicker("ru", {"nameTag": "name"})
        labeled, resolution = label_feature(place_properties[0], picker, LabelsConfig())
        assert labeled["label"] == "Киев"
        assert labeled["name:en"] == "Kyiv"
        assert resolution.tier is Tier.EXACT
        assert "label" not in place_properties[0]

    def test_drops_source_tags(self, place_properties):
        picker = LanguagePicker("de", {"nameTag": "name"})
        cfg = LabelsConfig(output_tag="display", keep_source_tags=False)
        labeled, resolution = label_feature(place_properties[0], picker, cfg)
        assert labeled == {"osm_id": 1, "population": 2952301, "display": "Kyiv"}
        assert resolution.tier is Tier.ENGLISH

    def test_previous_label_not_reused(self):
        picker = LanguagePicker("fr")
        labeled, _ = label_feature({"label": "stale", "de": "Köln"}, picker, LabelsConfig())
        assert labeled["label"] == "Köln"


class TestLabelRecords:
    def test_report(self, place_properties):
        picker = LanguagePicker("ru", {"nameTag": "name"})
        report = label_records(place_properties, picker, LabelsConfig())
        assert report.ok
        assert [rec["label"] for rec in report.records] == ["Киев", "ירושלים", None]
        assert report.unlabeled == 1
        counts = report.tier_counts
        assert counts["exact"] == 1
        assert counts["local"] == 1
        assert counts["none"] == 1
        assert counts["english"] == 0
        assert not report.warnings

    def test_warns_when_nothing_labeled(self):
        picker = LanguagePicker("en", {"nameTag": "name"})
        report = label_records([{"title": "x"}, {"title": "y"}], picker, LabelsConfig())
        assert report.unlabeled == 2
        assert len(report.warnings) == 1
        assert report.ok

    def test_report_dict_and_lines(self, place_properties):
        picker = LanguagePicker("he", {"nameTag": "name"})
        report = label_records(place_properties, picker, LabelsConfig())
        payload = report.to_dict()
        assert payload["target_language"] == "he"
        assert payload["features_total"] == 3
        assert payload["features"][1] == {"value": "ירושלים", "tier": "local", "tag": "name"}
        lines = format_label_lines(report)
        assert lines[0].startswith("[INFO] Labeled 3 features")
        assert any(line.startswith("[INFO] Label summary: exact=") for line in lines)
        assert lines[-1] == "[OK] Labeling completed with no errors."

    @pytest.mark.parametrize("lang,expected", [("en", "Jerusalem"), ("ar", "القدس"), ("yi", "ירושלים")])
    def test_languages(self, place_properties, lang, expected):
        picker = LanguagePicker(lang, {"nameTag": "name"})
        report = label_records(place_properties[1:2], picker, LabelsConfig())
        assert report.records[0]["label"] == expected
