"""
Tests for lore_engine/conflict_checker.py -- Near-duplicate name detection.

Validates:
    - normalize lowercases, strips non-alphanumerics and is idempotent
    - exact duplicates win over every other check for the same entry
    - edit-distance thresholds at the short/long name boundary
    - substring overlap and its per-name de-duplication
    - corpus-order output and truncation to the result cap
    - degenerate inputs yield empty results instead of errors
"""

import pytest

from lore_engine.config import ConflictSettings
from lore_engine.conflict_checker import NameConflictDetector, check_conflicts, normalize
from lore_engine.models.base import EntryRef


def _entry(name, category="characters", entry_id=None):
    """Build an EntryRef with a throwaway id."""
    return EntryRef(id=entry_id or name.lower(), name=name, category=category)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------

class TestNormalize:
    """Tests for normalize()."""

    @pytest.mark.parametrize("raw, expected", [
        ("Petronai", "petronai"),
        ("  Petronai  ", "petronai"),
        ("Kaelen's Rest!", "kaelens rest"),
        ("Shadowfen Marsh", "shadowfen marsh"),
        ("Éowyn", "owyn"),
        ("Crown of Ash 2", "crown of ash 2"),
        ("🔥 Ember 🔥", "ember"),
        ("???", ""),
    ])
    def test_examples(self, raw, expected):
        assert normalize(raw) == expected

    @pytest.mark.parametrize("raw", [
        "Kaelen !",
        "  ! Petronai ?  ",
        "Ember\tThrone",
        "Éowyn's Vale",
        "",
        "---",
    ])
    def test_idempotent(self, raw):
        once = normalize(raw)
        assert normalize(once) == once

    def test_keeps_inner_whitespace(self):
        assert normalize("Ember  Throne") == "ember  throne"


# ---------------------------------------------------------------------------
# Concrete scenarios
# ---------------------------------------------------------------------------

class TestScenarios:
    """End-to-end examples of the conflict rules."""

    def test_exact_duplicate(self):
        corpus = [_entry("Petronai", "characters", "1")]
        conflicts = check_conflicts("petronai", corpus)
        assert len(conflicts) == 1
        c = conflicts[0]
        assert c.kind == "exact_duplicate"
        assert c.severity == "error"
        assert c.is_blocking
        assert "Petronai" in c.message
        assert "characters" in c.message
        assert c.message == '"Petronai" already exists in characters'

    def test_near_duplicate_short_name(self):
        corpus = [_entry("Kaelen", "characters", "1")]
        conflicts = check_conflicts("Kaelan", corpus)
        assert len(conflicts) == 1
        assert conflicts[0].kind == "near_duplicate"
        assert conflicts[0].severity == "warning"
        assert conflicts[0].message == 'Similar to "Kaelen" in characters'

    def test_substring_overlap(self):
        corpus = [_entry("Shadowfen Marsh", "locations", "1")]
        conflicts = check_conflicts("Shadowfen", corpus)
        assert len(conflicts) == 1
        assert conflicts[0].kind == "near_duplicate"
        assert conflicts[0].message == 'Name overlaps with "Shadowfen Marsh" in locations'

    def test_two_char_name_is_checked_and_capped(self):
        corpus = [_entry(f"A{c}", "titles") for c in "bcdefghi"]
        conflicts = check_conflicts("Aa", corpus)
        assert len(conflicts) == 5
        assert [c.matched_name for c in conflicts] == ["Ab", "Ac", "Ad", "Ae", "Af"]

    def test_each_entry_evaluated_independently(self):
        corpus = [
            _entry("Ember Throne", "kingdoms", "1"),
            _entry("Ember Thorne", "kingdoms", "2"),
        ]
        conflicts = check_conflicts("Ember Thorn", corpus)
        assert [c.matched_name for c in conflicts] == ["Ember Throne", "Ember Thorne"]
        assert all(c.kind == "near_duplicate" for c in conflicts)


# ---------------------------------------------------------------------------
# Rule details
# ---------------------------------------------------------------------------

class TestExactPrecedence:
    """An exact match produces one error and nothing else for that entry."""

    def test_exact_not_also_near(self):
        corpus = [_entry("Petronai")]
        conflicts = check_conflicts("PETRONAI!", corpus)
        assert len(conflicts) == 1
        assert conflicts[0].kind == "exact_duplicate"

    def test_exact_not_also_overlap(self):
        corpus = [_entry("Shadowfen Marsh", "locations")]
        conflicts = check_conflicts("  shadowfen marsh ", corpus)
        assert [c.kind for c in conflicts] == ["exact_duplicate"]


class TestThresholds:
    """Edit-distance thresholds around the short/long boundary."""

    def test_short_name_distance_two_flagged(self):
        assert len(check_conflicts("Kaelen", [_entry("Kaxxen")])) == 1

    def test_short_name_distance_three_not_flagged(self):
        assert check_conflicts("Kaelen", [_entry("Kxxxen")]) == []

    def test_long_name_distance_three_flagged(self):
        conflicts = check_conflicts("Morningstar", [_entry("Morniwwwtar")])
        assert len(conflicts) == 1
        assert conflicts[0].message.startswith("Similar to")

    def test_long_name_distance_four_not_flagged(self):
        assert check_conflicts("Morningstar", [_entry("Morniwwwwar")]) == []

    def test_threshold_uses_proposed_length(self):
        """A 6-char proposal stays on the short threshold even against long entries."""
        assert check_conflicts("Valdri", [_entry("Vxxxris")]) == []


class TestOverlap:
    """Substring overlap rules."""

    def test_proposed_contains_entry(self):
        conflicts = check_conflicts("Greater Valdris", [_entry("Valdris", "kingdoms")])
        assert len(conflicts) == 1
        assert conflicts[0].message == 'Name overlaps with "Valdris" in kingdoms'

    def test_short_sides_do_not_overlap(self):
        """Both normalized names need at least 4 characters."""
        assert check_conflicts("Ash Reaches", [_entry("Ash", "relics")]) == []

    def test_near_and_overlap_yield_one_conflict(self):
        conflicts = check_conflicts("Shadowkins", [_entry("Shadowkin", "races")])
        assert len(conflicts) == 1
        assert conflicts[0].message == 'Similar to "Shadowkin" in races'

    def test_overlap_not_repeated_for_same_name(self):
        corpus = [
            _entry("Thornwall", "locations", "1"),
            _entry("Thornwall", "kingdoms", "2"),
        ]
        conflicts = check_conflicts("Thornwall Keep", corpus)
        assert len(conflicts) == 1
        assert conflicts[0].matched_category == "locations"

    def test_exact_duplicates_repeat_per_entry(self):
        corpus = [
            _entry("Thornwall", "locations", "1"),
            _entry("Thornwall", "kingdoms", "2"),
        ]
        conflicts = check_conflicts("Thornwall", corpus)
        assert [c.matched_category for c in conflicts] == ["locations", "kingdoms"]


class TestOrderingAndTruncation:
    """Output follows corpus order and is capped."""

    def test_corpus_order_preserved(self):
        corpus = [
            _entry("Kaelan", "characters", "1"),
            _entry("Kaelen", "characters", "2"),
            _entry("Kaelin", "races", "3"),
        ]
        conflicts = check_conflicts("Kaelen", corpus)
        assert [c.kind for c in conflicts] == [
            "near_duplicate", "exact_duplicate", "near_duplicate",
        ]

    def test_errors_not_sorted_first(self):
        corpus = [_entry(f"Kael{c}n") for c in "abcdfgh"] + [_entry("Kaelen")]
        conflicts = check_conflicts("Kaelen", corpus)
        assert len(conflicts) == 5
        assert all(c.kind == "near_duplicate" for c in conflicts)

    def test_deterministic(self, sample_corpus):
        first = check_conflicts("Shadowfen", sample_corpus)
        second = check_conflicts("Shadowfen", sample_corpus)
        assert first == second

    def test_unrelated_entries_ignored(self, sample_corpus):
        assert check_conflicts("Zzyzx Dominion", sample_corpus) == []


class TestDegenerateInputs:
    """Inputs that must degrade to an empty result."""

    @pytest.mark.parametrize("name", ["", "a", " a ", "   "])
    def test_below_length_floor(self, name, sample_corpus):
        assert check_conflicts(name, sample_corpus) == []

    def test_empty_corpus(self):
        assert check_conflicts("Anything", []) == []

    def test_no_normalizable_characters(self):
        corpus = [_entry("???"), _entry("!!!")]
        assert check_conflicts("?!?!", corpus) == []

    def test_very_long_name(self, sample_corpus):
        assert check_conflicts("x" * 500, sample_corpus) == []

    def test_corpus_not_mutated(self, sample_corpus):
        before = list(sample_corpus)
        check_conflicts("Kaelan", sample_corpus)
        assert sample_corpus == before


# ---------------------------------------------------------------------------
# Configurable detector
# ---------------------------------------------------------------------------

class TestNameConflictDetector:
    """Tests for the configurable class form."""

    def test_custom_result_cap(self):
        detector = NameConflictDetector(ConflictSettings(max_results=2))
        corpus = [_entry(f"A{c}") for c in "bcdef"]
        assert len(detector.check("Aa", corpus)) == 2

    def test_custom_distance_function(self):
        calls = []

        def always_far(a, b):
            calls.append((a, b))
            return 99

        detector = NameConflictDetector(distance=always_far)
        assert detector.check("Kaelan", [_entry("Kaelen")]) == []
        assert calls == [("kaelan", "kaelen")]

    def test_stricter_thresholds(self):
        settings = ConflictSettings(short_name_threshold=0, long_name_threshold=0)
        detector = NameConflictDetector(settings)
        assert detector.check("Kaelan", [_entry("Kaelen")]) == []
        assert len(detector.check("Kaelen", [_entry("Kaelen")])) == 1

    def test_default_settings(self):
        detector = NameConflictDetector()
        assert detector.settings.max_results == 5
        assert detector.settings.threshold_for(6) == 2
        assert detector.settings.threshold_for(7) == 3
