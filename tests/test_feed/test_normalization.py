"""Tests for django_schedule.feed.normalization -- identifier derivation."""

import pytest

from django_schedule.feed.normalization import block_id, normalize, split_comma, translate_track_alias

# ---------------------------------------------------------------------------
# normalize()
# ---------------------------------------------------------------------------


class TestNormalize:
    """Tests for the normalize() identifier helper."""

    @pytest.mark.unit
    def test_lowercases_and_hyphenates_words(self):
        assert normalize("App Engine") == "app-engine"

    @pytest.mark.unit
    def test_existing_slug_is_unchanged(self):
        assert normalize("run-corp-apps") == "run-corp-apps"

    @pytest.mark.unit
    def test_collapses_punctuation_runs_and_trims(self):
        assert normalize("  Run corporate apps?  Yes -- we do!  ") == "run-corporate-apps-yes-we-do"

    @pytest.mark.unit
    def test_underscores_are_not_identifier_characters(self):
        assert normalize("room_6") == "room-6"

    @pytest.mark.unit
    def test_empty_input_yields_empty_id(self):
        assert normalize("") == ""
        assert normalize("?!") == ""

    @pytest.mark.unit
    def test_strip_parens_drops_parenthetical_asides(self):
        assert normalize("Ben Fried (Google)", strip_parens=True) == "ben-fried"

    @pytest.mark.unit
    def test_parens_are_kept_as_words_by_default(self):
        assert normalize("Ben Fried (Google)") == "ben-fried-google"

    @pytest.mark.unit
    def test_same_input_always_yields_same_id(self):
        assert normalize("Google Wave API") == normalize("Google Wave API")

    @pytest.mark.unit
    def test_none_is_rejected(self):
        with pytest.raises(TypeError, match="NoneType"):
            normalize(None)


# ---------------------------------------------------------------------------
# split_comma() / translate_track_alias() / block_id()
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_split_comma_trims_and_discards_empty_tokens():
    assert split_comma(" Enterprise, App Engine ,, ") == ["Enterprise", "App Engine"]


@pytest.mark.unit
def test_split_comma_of_empty_cell_is_empty():
    assert split_comma("") == []


@pytest.mark.unit
def test_translate_track_alias_maps_legacy_id():
    assert translate_track_alias("google-wave", {"google-wave": "wave"}) == "wave"


@pytest.mark.unit
def test_translate_track_alias_passes_unknown_ids_through():
    assert translate_track_alias("android", {"google-wave": "wave"}) == "android"


@pytest.mark.unit
def test_block_id_joins_whole_second_bounds():
    assert block_id(1274291100, 1274294700) == "1274291100-1274294700"
