from dataclasses import dataclass
from typing import Iterable, List, Optional, Set

from ..core.config import Settings, settings as default_settings
from ..models.content import ContentItemDB, Importance
from ..models.recommendation import RecommendationType
from ..models.user_profile import UserProfileDB
from .interaction_recorder import ActivitySummary

@dataclass(frozen=True)
class ScoringWeights:
    base: float = 0.8
    weak_subject_bonus: float = 0.1
    strong_subject_penalty: float = 0.05
    high_importance_bonus: float = 0.05
    medium_importance_bonus: float = 0.02
    affinity_step: float = 0.01
    affinity_cap: float = 0.05

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ScoringWeights":
        config = config or default_settings
        return cls(
            base=config.RECOMMENDATION_BASE_SCORE,
            weak_subject_bonus=config.RECOMMENDATION_WEAK_SUBJECT_BONUS,
            strong_subject_penalty=config.RECOMMENDATION_STRONG_SUBJECT_PENALTY,
            high_importance_bonus=config.RECOMMENDATION_HIGH_IMPORTANCE_BONUS,
            medium_importance_bonus=config.RECOMMENDATION_MEDIUM_IMPORTANCE_BONUS,
            affinity_step=config.RECOMMENDATION_AFFINITY_STEP,
            affinity_cap=config.RECOMMENDATION_AFFINITY_CAP,
        )

@dataclass
class ScoredCandidate:
    item: ContentItemDB
    score: float
    recommendation_type: RecommendationType
    reason: str

def _normalise(values: Iterable[str]) -> Set[str]:
    return {str(v).strip().casefold() for v in values or [] if str(v).strip()}

def _subject_match(item: ContentItemDB, subjects: Iterable[str]) -> Optional[str]:
    """First subject, as the user spelled it, matching the article's category or tags."""
    topics = _normalise([item.category, *(item.tags or [])])
    for subject in subjects or []:
        if str(subject).strip().casefold() in topics:
            return str(subject).strip()
    return None

def _importance_bonus(item: ContentItemDB, weights: ScoringWeights) -> float:
    try:
        importance = Importance(item.importance)
    except ValueError:
        return 0.0
    if importance is Importance.HIGH:
        return weights.high_importance_bonus
    if importance is Importance.MEDIUM:
        return weights.medium_importance_bonus
    return 0.0

def _affinity_bonus(item: ContentItemDB, activity: ActivitySummary, weights: ScoringWeights) -> float:
    events = activity.by_category.get(item.category, 0)
    return min(events * weights.affinity_step, weights.affinity_cap)

def score_candidate(
    item: ContentItemDB,
    profile: UserProfileDB,
    activity: ActivitySummary,
    weights: ScoringWeights,
) -> ScoredCandidate:
    exam = profile.target_exam
    score = weights.base
    recommendation_type = RecommendationType.EXAM_RELEVANT
    reason = f"Relevant for {exam} preparation"

    weak = _subject_match(item, profile.weak_subjects)
    if weak:
        score += weights.weak_subject_bonus
        recommendation_type = RecommendationType.WEAK_SUBJECT
        reason = f"Strengthens your weak area {weak}; relevant for {exam} preparation"
    elif _subject_match(item, profile.strong_subjects):
        score -= weights.strong_subject_penalty

    score += _importance_bonus(item, weights)
    score += _affinity_bonus(item, activity, weights)

    score = round(min(max(score, 0.0), 1.0), 4)
    return ScoredCandidate(item=item, score=score, recommendation_type=recommendation_type, reason=reason)

def rank_candidates(candidates: Iterable[ScoredCandidate]) -> List[ScoredCandidate]:
    """Order by score, then publication date (both descending), then id ascending."""
    by_id = sorted(candidates, key=lambda c: c.item.id)
    # sorted() is stable under reverse=True, so id order survives for full ties
    return sorted(by_id, key=lambda c: (c.score, c.item.published_date), reverse=True)
