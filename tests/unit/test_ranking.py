"""Unit tests for leaderboard ranking."""

from app.modules.leaderboard.ranking import apply_adjustment, compute_ranks
from app.modules.leaderboard.schemas import LeaderboardEntryResponse


def entry(entry_id, score, rank=None):
    return LeaderboardEntryResponse(
        id=entry_id, workshop_id="w1", group_id=f"g-{entry_id}", total_score=score, rank=rank
    )


class TestComputeRanks:

    def test_ranks_by_score_descending_with_stable_ties(self):
        entries = [entry("A", 30), entry("B", 50), entry("C", 50), entry("D", 10)]
        ranks = dict(compute_ranks(entries))
        assert ranks == {"B": 1, "C": 2, "A": 3, "D": 4}

    def test_tie_order_follows_input_order(self):
        entries = [entry("C", 50), entry("B", 50)]
        assert compute_ranks(entries) == [("C", 1), ("B", 2)]

    def test_negative_scores_rank_last(self):
        entries = [entry("A", -5), entry("B", 0)]
        assert dict(compute_ranks(entries)) == {"B": 1, "A": 2}

    def test_empty(self):
        assert compute_ranks([]) == []

    def test_input_not_mutated(self):
        entries = [entry("A", 10, rank=7), entry("B", 20, rank=3)]
        compute_ranks(entries)
        assert [e.rank for e in entries] == [7, 3]


class TestApplyAdjustment:

    def test_adds_delta(self):
        assert apply_adjustment(40, 10) == 50

    def test_no_lower_bound(self):
        assert apply_adjustment(5, -20) == -15
