"""Tests for match scoring and ranking."""

import copy
from collections.abc import Callable
from dataclasses import replace
from datetime import date

import pytest

from lfmatch.models import FoundItemRecord, LostItemRecord
from lfmatch.scoring import (
    MatchStrength,
    MatchWeights,
    candidate_id,
    compute_matches,
    score_pair,
    split_candidate_id,
)

LostFactory = Callable[..., LostItemRecord]
FoundFactory = Callable[..., FoundItemRecord]


@pytest.fixture
def phone_pair(make_lost: LostFactory, make_found: FoundFactory) -> tuple:
    """Lost phone and found smartphone from the same library, one day apart."""
    lost = make_lost(
        "L1",
        item_name="Phone",
        description="black phone",
        category="Electronics",
        lost_location="Library",
        lost_date=date(2025, 4, 1),
    )
    found = make_found(
        "F1",
        item_name="Smartphone",
        description="black smartphone found",
        category="Electronics",
        found_location="Library 2nd floor",
        found_date=date(2025, 4, 2),
        status="verified",
    )
    return lost, found


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_category_date_location_and_keywords_combine(phone_pair: tuple) -> None:
    """Test a pair matching on every signal is emitted with the summed score."""
    lost, found = phone_pair

    candidates = compute_matches([lost], [found])

    assert len(candidates) == 1
    candidate = candidates[0]
    assert candidate.lost_item is lost
    assert candidate.found_item is found
    assert candidate.id == "L1-F1"
    # category 3 + date 2 + location 2 + keywords (phone, black, phone) 3
    assert candidate.score == 10
    assert candidate.breakdown is not None
    assert candidate.breakdown.category == 3
    assert candidate.breakdown.date == 2
    assert candidate.breakdown.location == 2
    assert candidate.breakdown.matched_keywords == ("phone", "black", "phone")
    assert candidate.strength is MatchStrength.STRONG


@pytest.mark.unit
def test_claimed_found_item_is_never_paired(phone_pair: tuple) -> None:
    """Test a claimed found item yields no candidate whatever its score."""
    lost, found = phone_pair
    claimed = replace(found, status="claimed")

    assert compute_matches([lost], [claimed]) == []


@pytest.mark.unit
def test_unrelated_pair_below_threshold(make_lost: LostFactory, make_found: FoundFactory) -> None:
    """Test a pair sharing nothing scores 0 and is dropped."""
    lost = make_lost(category="Books", lost_location="Gym", lost_date=date(2025, 4, 1))
    found = make_found(
        category="Electronics", found_location="Cafeteria", found_date=date(2025, 4, 21)
    )

    assert score_pair(lost, found).total == 0
    assert compute_matches([lost], [found]) == []


@pytest.mark.unit
def test_candidates_ranked_by_descending_score(
    make_lost: LostFactory,
    make_found: FoundFactory,
) -> None:
    """Test higher-scoring found items come first regardless of input order."""
    lost = make_lost("L1", category="Books", lost_location="Gym", lost_date=date(2025, 3, 1))
    # category 3 + date(5 days) 1 = 4
    weaker = make_found("F2", category="Books", found_date=date(2025, 3, 6))
    # category 3 + date(1 day) 2 + location 2 = 7
    stronger = make_found(
        "F1", category="Books", found_location="Main Gym", found_date=date(2025, 3, 2)
    )

    candidates = compute_matches([lost], [weaker, stronger])

    assert [(c.id, c.score) for c in candidates] == [("L1-F1", 7), ("L1-F2", 4)]


@pytest.mark.unit
@pytest.mark.parametrize(
    ("lost_count", "found_count"),
    [(0, 0), (0, 2), (2, 0)],
    ids=["both_empty", "no_lost", "no_found"],
)
def test_empty_inputs_return_empty_list(
    make_lost: LostFactory,
    make_found: FoundFactory,
    lost_count: int,
    found_count: int,
) -> None:
    """Test empty collections yield an empty result."""
    lost = [make_lost(f"L{i}", category="Keys") for i in range(lost_count)]
    found = [make_found(f"F{i}", category="Keys") for i in range(found_count)]

    assert compute_matches(lost, found) == []


# ---------------------------------------------------------------------------
# Properties
# ---------------------------------------------------------------------------


@pytest.fixture
def mixed_collections(make_lost: LostFactory, make_found: FoundFactory) -> tuple:
    """Several lost and found items with a spread of scores and one claimed item."""
    lost = [
        make_lost("L1", category="Keys", lost_location="Parking", lost_date=date(2025, 5, 1)),
        make_lost(
            "L2",
            item_name="Blue bottle",
            description="steel water bottle",
            category="Accessories",
            lost_location="Library",
            lost_date=date(2025, 5, 3),
        ),
        make_lost("L3", category="Books", lost_location="Gym", lost_date=date(2025, 5, 10)),
    ]
    found = [
        make_found("F1", category="Keys", found_location="parking lot", found_date=date(2025, 5, 2)),
        make_found(
            "F2",
            item_name="Water bottle",
            description="steel bottle, dented",
            category="Accessories",
            found_location="Library",
            found_date=date(2025, 5, 4),
            status="claimed",
        ),
        make_found("F3", category="Books", found_date=date(2025, 5, 12)),
        make_found("F4", category="Accessories", found_date=date(2025, 5, 8)),
    ]
    return lost, found


@pytest.mark.unit
def test_every_candidate_clears_threshold(mixed_collections: tuple) -> None:
    """Test no emitted candidate scores below the admission threshold."""
    lost, found = mixed_collections

    candidates = compute_matches(lost, found)

    assert candidates
    assert all(c.score >= 3 for c in candidates)
    assert all(c.score == c.breakdown.total for c in candidates)


@pytest.mark.unit
def test_claimed_items_absent_from_output(mixed_collections: tuple) -> None:
    """Test no candidate references a claimed found item."""
    lost, found = mixed_collections

    candidates = compute_matches(lost, found)

    assert all(not c.found_item.is_claimed for c in candidates)
    assert "F2" not in {c.found_item.id for c in candidates}


@pytest.mark.unit
def test_output_sorted_descending(mixed_collections: tuple) -> None:
    """Test adjacent candidates never increase in score."""
    lost, found = mixed_collections

    candidates = compute_matches(lost, found)

    assert all(a.score >= b.score for a, b in zip(candidates, candidates[1:]))


@pytest.mark.unit
def test_repeated_calls_are_identical(mixed_collections: tuple) -> None:
    """Test identical inputs give identical pairs, scores and order."""
    lost, found = mixed_collections

    first = compute_matches(lost, found)
    second = compute_matches(lost, found)

    assert first == second


@pytest.mark.unit
def test_inputs_not_mutated(mixed_collections: tuple) -> None:
    """Test input lists and records are unchanged after scoring."""
    lost, found = mixed_collections
    lost_before = copy.deepcopy(lost)
    found_before = copy.deepcopy(found)

    compute_matches(lost, found)

    assert lost == lost_before
    assert found == found_before


@pytest.mark.unit
def test_ties_keep_generation_order(make_lost: LostFactory, make_found: FoundFactory) -> None:
    """Test equal scores keep lost-outer, found-inner input order."""
    lost = [make_lost("L1", category="Keys"), make_lost("L2", category="Keys")]
    found = [make_found("F1", category="Keys"), make_found("F2", category="Keys")]

    candidates = compute_matches(lost, found)

    assert [c.score for c in candidates] == [3, 3, 3, 3]
    assert [c.id for c in candidates] == ["L1-F1", "L1-F2", "L2-F1", "L2-F2"]


# ---------------------------------------------------------------------------
# Threshold edges
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_category_alone_reaches_threshold(
    make_lost: LostFactory,
    make_found: FoundFactory,
) -> None:
    """Test a bare category match (score 3) is admitted."""
    candidates = compute_matches([make_lost(category="Keys")], [make_found(category="Keys")])

    assert [c.score for c in candidates] == [3]
    assert candidates[0].strength is MatchStrength.POSSIBLE


@pytest.mark.unit
def test_date_alone_is_suppressed(make_lost: LostFactory, make_found: FoundFactory) -> None:
    """Test a bare date-proximity hit (score 2) is suppressed."""
    lost = make_lost(lost_date=date(2025, 4, 1))
    found = make_found(found_date=date(2025, 4, 1))

    assert score_pair(lost, found).total == 2
    assert compute_matches([lost], [found]) == []


@pytest.mark.unit
def test_date_and_location_reach_threshold(
    make_lost: LostFactory,
    make_found: FoundFactory,
) -> None:
    """Test weaker signals can combine to clear the threshold."""
    lost = make_lost(lost_location="Gym", lost_date=date(2025, 4, 1))
    found = make_found(found_location="gym", found_date=date(2025, 4, 6))

    candidates = compute_matches([lost], [found])

    assert [c.score for c in candidates] == [3]


@pytest.mark.unit
def test_custom_weights_raise_threshold(phone_pair: tuple) -> None:
    """Test the admission threshold is taken from the weights."""
    lost, found = phone_pair

    assert compute_matches([lost], [found], MatchWeights(threshold=11)) == []
    assert len(compute_matches([lost], [found], MatchWeights(threshold=10))) == 1


@pytest.mark.unit
def test_claimed_item_still_scored_by_score_pair(phone_pair: tuple) -> None:
    """Test score_pair ignores status; exclusion happens in compute_matches."""
    lost, found = phone_pair
    claimed = replace(found, status="claimed")

    assert score_pair(lost, claimed).total == 10


# ---------------------------------------------------------------------------
# Candidate ids
# ---------------------------------------------------------------------------


@pytest.mark.unit
def test_candidate_id_round_trip() -> None:
    """Test composite ids split back into their item ids."""
    assert candidate_id("66a1", "66b2") == "66a1-66b2"
    assert split_candidate_id("66a1-66b2") == ("66a1", "66b2")


@pytest.mark.unit
def test_split_candidate_id_keeps_dashes_in_found_id() -> None:
    """Test only the first separator splits the id."""
    assert split_candidate_id("L1-F-2") == ("L1", "F-2")


@pytest.mark.unit
@pytest.mark.parametrize("value", ["", "L1", "-F1", "L1-"], ids=["empty", "no_sep", "no_lost", "no_found"])
def test_split_candidate_id_rejects_malformed(value: str) -> None:
    """Test malformed candidate ids raise ValueError."""
    with pytest.raises(ValueError):
        split_candidate_id(value)


@pytest.mark.unit
def test_candidate_to_dict(phone_pair: tuple) -> None:
    """Test candidate serialization carries ids, score, strength and breakdown."""
    lost, found = phone_pair

    data = compute_matches([lost], [found])[0].to_dict()

    assert data["id"] == "L1-F1"
    assert data["score"] == 10
    assert data["strength"] == "strong"
    assert data["lost_item"]["lostDate"] == "2025-04-01"
    assert data["found_item"]["status"] == "verified"
    assert data["breakdown"]["total"] == 10
    assert data["breakdown"]["days_apart"] == 1
