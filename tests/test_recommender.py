"""
Related-content recommender tests

All recency bonuses are pinned with an explicit reference time.
"""

import pytest
from datetime import datetime, timedelta, timezone

from folio.config import AppSettings
from folio.lib.recommender import Recommender, recommend
from folio.models import CandidateContentItem, RecommendationTarget


NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def item_make(identifier, tags=(), categories=(), age_days=None):
    published = None if age_days is None else NOW - timedelta(days=age_days)
    return CandidateContentItem(
        identifier=identifier,
        tags=set(tags),
        categories=set(categories),
        publishedAt=published,
    )


def ids(items):
    return [item.identifier for item in items]


class TestScoring:
    """Test the per-candidate score"""

    def test_overlap_weights(self):
        """3 per shared tag, 5 per shared category"""
        target = RecommendationTarget(tags={"a", "b"}, categories={"x"})
        item = item_make("c", tags=["a", "b", "z"], categories=["x", "y"], age_days=400)

        assert Recommender().candidate_score(target, item, NOW) == 3 * 2 + 5 * 1

    @pytest.mark.parametrize("age_days,bonus", [
        (0, 3),
        (7, 3),
        (8, 2),
        (30, 2),
        (31, 0),
        (365, 0),
    ])
    def test_recency_bonus(self, age_days, bonus):
        """+2 within 30 days, another +1 within 7 days"""
        item = item_make("c", age_days=age_days)
        assert Recommender().candidate_score(RecommendationTarget(), item, NOW) == bonus

    def test_age_is_floored(self):
        """30 days and some hours still counts as 30 days"""
        item = CandidateContentItem("c", publishedAt=NOW - timedelta(days=30, hours=20))
        assert Recommender().candidate_score(RecommendationTarget(), item, NOW) == 2

    def test_undated_gets_no_bonus(self):
        """Missing publication time is simply not recent"""
        item = item_make("c", tags=["a"])
        assert Recommender().candidate_score(RecommendationTarget(tags={"a"}), item, NOW) == 3

    def test_naive_timestamps_are_utc(self):
        """Naive datetimes compare against an aware clock"""
        item = CandidateContentItem("c", publishedAt=datetime(2024, 5, 30))
        assert Recommender().candidate_score(RecommendationTarget(), item, NOW) == 3

    def test_duplicate_tags_count_once(self):
        """Tags are sets"""
        item = CandidateContentItem("c", tags=["a", "a", "a"])
        assert Recommender().candidate_score(RecommendationTarget(tags=["a"]), item, NOW) == 3

    def test_missing_labels_are_empty(self):
        """None tags and categories score nothing and do not fail"""
        item = CandidateContentItem("c", tags=None, categories=None)
        target = RecommendationTarget(tags=None, categories=None)
        assert Recommender().candidate_score(target, item, NOW) == 0

    def test_custom_weights(self):
        """Weights and bonuses come from settings"""
        settings = AppSettings(tag_weight=1, category_weight=10, recent_bonus=0, fresh_bonus=0)
        target = RecommendationTarget(tags={"a"}, categories={"x"})
        item = item_make("c", tags=["a"], categories=["x"], age_days=1)

        assert Recommender(settings).candidate_score(target, item, NOW) == 11


class TestRanking:
    """Test ordering and truncation"""

    @pytest.mark.parametrize("c1_age,c2_age,c3_age,expected", [
        # C1 = 8, C2 = 6, C3 = 0: plain overlap order
        (400, 400, 400, ["c1", "c2"]),
        # C3 fresh: 3, still below C2
        (400, 400, 2, ["c1", "c2"]),
        # C2 fresh: 6 + 3 = 9 beats C1 = 8
        (400, 3, 400, ["c2", "c1"]),
        # C1 recent: 8 + 2 = 10 beats C2 fresh = 9
        (20, 3, 400, ["c1", "c2"]),
        # C2 recent: 6 + 2 = 8 ties C1 = 8, pool order wins
        (400, 20, 400, ["c1", "c2"]),
    ])
    def test_ranking_with_recency(self, c1_age, c2_age, c3_age, expected):
        """Overlap plus pinned recency decides the top two"""
        target = RecommendationTarget(tags={"a", "b"}, categories={"x"})
        pool = [
            item_make("c1", tags=["a"], categories=["x"], age_days=c1_age),
            item_make("c2", tags=["a", "b"], age_days=c2_age),
            item_make("c3", age_days=c3_age),
        ]

        assert ids(recommend(target, pool, 2, now=NOW)) == expected

    def test_stable_tie_break(self):
        """Equal scores keep their pool order"""
        target = RecommendationTarget(tags={"t"})
        pool = [item_make(name, tags=["t"], age_days=400) for name in ["e", "b", "d", "a"]]

        assert ids(recommend(target, pool, 4, now=NOW)) == ["e", "b", "d", "a"]

    def test_zero_scores_fill_remaining_slots(self):
        """Unrelated candidates are still returned when slots are free"""
        target = RecommendationTarget(tags={"a"})
        pool = [item_make("unrelated", tags=["z"], age_days=400), item_make("match", tags=["a"], age_days=400)]

        assert ids(recommend(target, pool, 3, now=NOW)) == ["match", "unrelated"]

    def test_max_results_truncates(self):
        """No more than maxResults are returned"""
        pool = [item_make(str(n), age_days=400) for n in range(10)]
        assert len(recommend(RecommendationTarget(), pool, 4, now=NOW)) == 4

    def test_default_max_results(self):
        """maxResults defaults to max_related"""
        pool = [item_make(str(n), age_days=400) for n in range(10)]
        assert len(recommend(RecommendationTarget(), pool, now=NOW)) == 3

    @pytest.mark.parametrize("max_results", [0, -1])
    def test_non_positive_max_results(self, max_results):
        """Nothing is asked for, nothing is returned"""
        pool = [item_make("a", age_days=1)]
        assert recommend(RecommendationTarget(), pool, max_results, now=NOW) == []

    def test_empty_pool(self):
        """An empty pool yields an empty list"""
        assert recommend(RecommendationTarget(tags={"a"}), [], 3, now=NOW) == []

    def test_ranked_scores_are_exposed(self):
        """candidates_rank() keeps the scores"""
        target = RecommendationTarget(tags={"a"})
        pool = [item_make("x", age_days=400), item_make("y", tags=["a"], age_days=400)]
        ranked = Recommender().candidates_rank(target, pool, now=NOW)

        assert [(candidate.item.identifier, candidate.score) for candidate in ranked] == [("y", 3), ("x", 0)]

    def test_default_clock(self):
        """Without an explicit clock a brand new post gets both bonuses"""
        item = CandidateContentItem("new", publishedAt=datetime.now(timezone.utc) - timedelta(hours=1))
        ranked = Recommender().candidates_rank(RecommendationTarget(), [item])
        assert ranked[0].score == 3


class TestExclusion:
    """The target never recommends itself"""

    def test_self_is_excluded(self):
        """Identical tags would make it the top hit otherwise"""
        me = item_make("me", tags=["a", "b"], categories=["x"], age_days=1)
        other = item_make("other", age_days=400)
        target = RecommendationTarget.item_from(me)

        result = recommend(target, [me, other], 3, now=NOW)

        assert ids(result) == ["other"]

    def test_only_self_in_pool(self):
        """Excluding the only candidate leaves nothing"""
        me = item_make("me", tags=["a"])
        assert recommend(RecommendationTarget.item_from(me), [me], 3, now=NOW) == []

    def test_target_from_item(self):
        """item_from copies labels and excludes the item"""
        me = item_make("me", tags=["a"], categories=["x"])
        target = RecommendationTarget.item_from(me)

        assert target.tags == frozenset({"a"})
        assert target.categories == frozenset({"x"})
        assert target.excludeId == "me"
