"""
Introduction Recommender

Scores every unconnected pair of contacts on shared attributes and mutual
connections.
"""

import logging
from typing import Optional

from konterra_insights.insights.graph import build_adjacency_map, edge_key
from konterra_insights.models.entities import Contact, ContactConnection
from konterra_insights.models.results import IntroductionSuggestion

logger = logging.getLogger(__name__)


DEFAULT_WEIGHTS = {
    "shared_tag": 15,
    "same_company": 25,
    "same_city": 20,
    "same_country": 10,
    "shared_interest": 10,
    "shared_goal": 12,
    "same_relationship_type": 5,
    "mutual_connection": 20,
}


def _shared(a: list[str], b: list[str]) -> list[str]:
    other = set(b)
    return [item for item in a if item in other]


class IntroductionScorer:
    """Scores a single pair of contacts.

    Pairing is O(n^2) over the contact list, which is fine for a personal
    address book of a few thousand people at most.
    """

    def __init__(
        self,
        weights: Optional[dict[str, int]] = None,
        min_reasons: int = 2,
        min_score: int = 25,
    ):
        """Initialize scorer with configuration.

        Args:
            weights: Custom points per signal (see DEFAULT_WEIGHTS)
            min_reasons: Distinct reasons that qualify a pair on their own
            min_score: Score that qualifies a pair on its own
        """
        self.weights = DEFAULT_WEIGHTS.copy()
        if weights:
            for key, value in weights.items():
                if key in self.weights:
                    self.weights[key] = value
                else:
                    logger.warning(f"Unknown introduction signal: {key}")
        self.min_reasons = min_reasons
        self.min_score = min_score

    def score_pair(
        self,
        a: Contact,
        b: Contact,
        mutual_count: int = 0,
    ) -> tuple[int, list[str]]:
        """Return the pair's score and the reasons behind it."""
        w = self.weights
        reasons: list[str] = []
        score = 0

        tags = _shared(a.tags, b.tags)
        if tags:
            reasons.append(f"Shared tags: {', '.join(tags)}")
            score += len(tags) * w["shared_tag"]

        if a.company and b.company and a.company == b.company:
            reasons.append(f"Same company: {a.company}")
            score += w["same_company"]

        # City beats country, never both
        if a.city and b.city and a.city == b.city:
            reasons.append(f"Same city: {a.city}")
            score += w["same_city"]
        elif a.country and b.country and a.country == b.country:
            reasons.append(f"Same country: {a.country}")
            score += w["same_country"]

        interests = _shared(a.personal_interests, b.personal_interests)
        if interests:
            reasons.append(f"Shared interests: {', '.join(interests)}")
            score += len(interests) * w["shared_interest"]

        goals = _shared(a.professional_goals, b.professional_goals)
        if goals:
            reasons.append(f"Aligned goals: {', '.join(goals)}")
            score += len(goals) * w["shared_goal"]

        if a.relationship_type and a.relationship_type == b.relationship_type:
            reasons.append(f"Same relationship type: {a.relationship_type.value}")
            score += w["same_relationship_type"]

        # Neighbors in common, counted by the caller
        if mutual_count > 0:
            plural = "s" if mutual_count > 1 else ""
            reasons.append(f"{mutual_count} mutual connection{plural}")
            score += mutual_count * w["mutual_connection"]

        return score, reasons

    def qualifies(self, score: int, reasons: list[str]) -> bool:
        return len(reasons) >= self.min_reasons or score >= self.min_score


def suggest_introductions(
    contacts: list[Contact],
    connections: list[ContactConnection],
    limit: int = 10,
    scorer: Optional[IntroductionScorer] = None,
) -> list[IntroductionSuggestion]:
    """Suggest introductions between contacts that are not yet connected.

    Args:
        contacts: All contacts in the network
        connections: All contact-to-contact connections
        limit: Maximum suggestions to return
        scorer: Configured scorer (defaults apply if omitted)

    Returns:
        Suggestions sorted by score, highest first
    """
    scorer = scorer or IntroductionScorer()
    # Pairs already connected in either direction are skipped
    existing = {
        edge_key(c.source_contact_id, c.target_contact_id) for c in connections
    }
    adjacency = build_adjacency_map(connections)

    suggestions: list[IntroductionSuggestion] = []
    for i, a in enumerate(contacts):
        a_neighbors = adjacency.get(a.id, set())
        for b in contacts[i + 1:]:
            if a.id == b.id or edge_key(a.id, b.id) in existing:
                continue

            # Mutual connections follow edge direction
            mutual = len(a_neighbors & adjacency.get(b.id, set()))
            score, reasons = scorer.score_pair(a, b, mutual)
            if scorer.qualifies(score, reasons):
                suggestions.append(IntroductionSuggestion(
                    contact_a=a,
                    contact_b=b,
                    reasons=reasons,
                    score=score,
                ))

    suggestions.sort(key=lambda s: s.score, reverse=True)

    logger.debug(
        f"Scored {len(contacts) * (len(contacts) - 1) // 2} pairs, "
        f"{len(suggestions)} qualified"
    )

    return suggestions[:limit]
