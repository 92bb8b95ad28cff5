"""
Related-content recommender

Ranks blog posts and portfolio entries against a target by weighted
tag/category overlap plus a recency bonus.

Scoring (defaults, all configurable through AppSettings):
    score = 3 * shared tags
          + 5 * shared categories
          + 2 if published within 30 days
          + 1 if published within 7 days (on top of the 30-day bonus)

Ranking is a stable sort by descending score, so equal scores keep their
pool order. Zero-score candidates are returned when nothing better fills
the requested slots.

Example:
    >>> target = RecommendationTarget(tags={"python"}, excludeId="p1")
    >>> pool = [CandidateContentItem("p1", tags={"python"}),
    ...         CandidateContentItem("p2", tags={"python"})]
    >>> [item.identifier for item in recommend(target, pool, 3)]
    ['p2']
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from ..config import AppSettings, appsettings
from ..models.content import (
    CandidateContentItem,
    RecommendationTarget,
    ScoredCandidate,
    timestamp_normalize,
)
from .log import LOG


class Recommender:
    """
    Scores and ranks candidates for a target

    Holds only configuration; every call is independent and the clock is
    passed in explicitly.
    """

    def __init__(self, settings: Optional[AppSettings] = None) -> None:
        self.settings = settings or appsettings

    def age_days(self, item: CandidateContentItem, now: datetime) -> Optional[int]:
        """Whole days between publication and now (floored), None if undated"""
        if item.publishedAt is None:
            return None
        return (now - item.publishedAt).days

    def candidate_score(
        self,
        target: RecommendationTarget,
        item: CandidateContentItem,
        now: datetime,
    ) -> int:
        """
        Score one candidate against the target

        Args:
            target: Tags and categories to match
            item: Candidate being scored
            now: Reference time for the recency bonuses

        Returns:
            Non-negative integer score
        """
        settings = self.settings
        score = settings.tag_weight * len(item.tags & target.tags)
        score += settings.category_weight * len(item.categories & target.categories)

        age = self.age_days(item, now)
        if age is not None:
            if age <= settings.recent_window_days:
                score += settings.recent_bonus
            if age <= settings.fresh_window_days:
                score += settings.fresh_bonus

        return score

    def candidates_rank(
        self,
        target: RecommendationTarget,
        pool: Sequence[CandidateContentItem],
        now: Optional[datetime] = None,
    ) -> List[ScoredCandidate]:
        """
        Score the whole pool and sort it

        The candidate whose identifier equals target.excludeId is dropped
        before scoring.

        Returns:
            ScoredCandidate list, highest score first, ties in pool order
        """
        now = timestamp_normalize(now) or datetime.now(timezone.utc)

        scored = [
            ScoredCandidate(item=item, score=self.candidate_score(target, item, now))
            for item in pool
            if target.excludeId is None or item.identifier != target.excludeId
        ]
        scored.sort(key=lambda candidate: candidate.score, reverse=True)

        LOG(f"Ranked {len(scored)} candidates for '{target.excludeId}'", level=3)
        return scored

    def recommend(
        self,
        target: RecommendationTarget,
        pool: Sequence[CandidateContentItem],
        maxResults: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> List[CandidateContentItem]:
        """
        Return the top candidates for the target

        Args:
            target: Tags, categories and the identifier to exclude
            pool: Candidates in their original order
            maxResults: Maximum number of results (defaults to max_related)
            now: Reference time (defaults to the current UTC time)

        Returns:
            At most maxResults candidates, best first
        """
        if maxResults is None:
            maxResults = self.settings.max_related
        if maxResults <= 0 or not pool:
            return []

        ranked = self.candidates_rank(target, pool, now)
        return [candidate.item for candidate in ranked[:maxResults]]


def recommend(
    target: RecommendationTarget,
    pool: Sequence[CandidateContentItem],
    maxResults: Optional[int] = None,
    now: Optional[datetime] = None,
    settings: Optional[AppSettings] = None,
) -> List[CandidateContentItem]:
    """Return the top related candidates for the target"""
    return Recommender(settings).recommend(target, pool, maxResults, now)
