"""Tests for autocomplete ranking."""

from lift_logger.catalog.ranker import MAX_SUGGESTIONS, rank


def test_prefix_matches_before_contains_matches() -> None:
    catalog = ["Dumbbell Bench Press", "Bench", "Barbell Row"]
    assert rank("ben", catalog, 10) == ["Bench", "Dumbbell Bench Press"]


def test_matching_is_case_insensitive() -> None:
    catalog = ["Bench", "Incline BENCH", "Squat"]
    assert rank("BeNcH", catalog, 10) == ["Bench", "Incline BENCH"]


def test_groups_keep_catalog_order_not_alphabetical() -> None:
    catalog = ["Squat Pause", "Front Squat", "Squat", "Box Squat"]
    assert rank("squat", catalog, 10) == [
        "Squat Pause",
        "Squat",
        "Front Squat",
        "Box Squat",
    ]


def test_empty_query_returns_first_entries_unfiltered() -> None:
    catalog = [f"Exercise {i}" for i in range(26)]
    picks = rank("", catalog, 25)
    assert len(picks) == 25
    assert picks == catalog[:25]


def test_spaces_in_query_are_matched_as_typed() -> None:
    catalog = ["Bench", "Bench Press", "Squat"]
    assert rank(" ", catalog, 10) == ["Bench Press"]
    assert rank("bench ", catalog, 10) == ["Bench Press"]


def test_limit_truncates_after_concatenation() -> None:
    catalog = ["Row", "Barbell Row", "Rower", "Cable Row"]
    assert rank("row", catalog, 3) == ["Row", "Rower", "Barbell Row"]


def test_limit_clamped_to_platform_ceiling() -> None:
    catalog = [f"Lift {i}" for i in range(40)]
    assert len(rank("lift", catalog, 100)) == MAX_SUGGESTIONS
    assert rank("lift", catalog, -1) == []


def test_no_match_returns_empty_list() -> None:
    assert rank("curl", ["Bench", "Squat"], 10) == []
