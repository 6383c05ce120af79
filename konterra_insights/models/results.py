"""
Analysis Result Models

Plain records returned by the insight analyzers.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from konterra_insights.models.entities import (
    Contact,
    ContactConnection,
    ConnectionType,
)


class WeakLinkIssue(str, Enum):
    """Why a connection was flagged as fragile."""
    NO_RECENT_INTERACTION = "no_recent_interaction"
    LOW_STRENGTH = "low_strength"
    ONE_DIRECTIONAL = "one_directional"


class RiskType(str, Enum):
    """Structural or behavioural risks in the network."""
    SINGLE_POINT_OF_FAILURE = "single_point_of_failure"
    COOLING_HUB = "cooling_hub"
    UNBALANCED_FAVOR = "unbalanced_favor"
    ISOLATED_HIGH_VALUE = "isolated_high_value"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class HealthTrend(str, Enum):
    IMPROVING = "improving"
    STABLE = "stable"
    DECLINING = "declining"


class NetworkMetrics(BaseModel):
    """Aggregate structure of the connection graph."""
    total_connections: int = 0
    network_density: float = 0.0
    average_strength: float = 0.0
    bidirectional_ratio: float = 0.0
    connected_contacts_ratio: float = 0.0


class ConnectionTypeStats(BaseModel):
    type: ConnectionType
    count: int
    avg_strength: float


class StrengthBucket(BaseModel):
    strength: int
    count: int


class Hub(BaseModel):
    """A contact ranked by how many relationships touch it."""
    contact: Contact
    degree: int
    avg_strength: float
    connection_types: list[ConnectionType] = Field(default_factory=list)


class Cluster(BaseModel):
    """A connected component of two or more contacts."""
    id: int
    contacts: list[Contact]
    internal_connections: int = 0
    avg_strength: float = 0.0
    dominant_type: Optional[ConnectionType] = None
    shared_tags: list[str] = Field(default_factory=list)
    shared_country: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.contacts)

    @property
    def member_ids(self) -> set[str]:
        return {c.id for c in self.contacts}


class BridgeContact(BaseModel):
    """A contact whose relationships span more than one cluster."""
    contact: Contact
    clusters_connected: int
    degree: int


class IntroductionSuggestion(BaseModel):
    """An unconnected pair that looks worth introducing."""
    contact_a: Contact
    contact_b: Contact
    reasons: list[str] = Field(default_factory=list)
    score: int = 0


class WeakConnectionAlert(BaseModel):
    connection: ContactConnection
    source: Contact
    target: Contact
    issue: WeakLinkIssue
    detail: str


class RiskAlert(BaseModel):
    type: RiskType
    severity: Severity
    contact: Contact
    description: str


class ReachAnalysis(BaseModel):
    """Number of contacts reachable at one, two and three hops."""
    direct_reach: int = 0
    second_degree: int = 0
    third_degree: int = 0

    @property
    def total(self) -> int:
        return self.direct_reach + self.second_degree + self.third_degree


class CountryDensity(BaseModel):
    country: str
    contacts: int
    connections: int
    density: float


class InsightsSummary(BaseModel):
    """One-glance roll-up for a dashboard widget."""
    metrics: NetworkMetrics
    top_insight: str
    actionable_count: int
    health_trend: HealthTrend


class InsightsReport(BaseModel):
    """Every insight computed for one snapshot."""
    generated_at: datetime = Field(default_factory=datetime.now)
    summary: InsightsSummary
    type_breakdown: list[ConnectionTypeStats] = Field(default_factory=list)
    strength_distribution: list[StrengthBucket] = Field(default_factory=list)
    hubs: list[Hub] = Field(default_factory=list)
    clusters: list[Cluster] = Field(default_factory=list)
    isolated_contacts: list[Contact] = Field(default_factory=list)
    bridges: list[BridgeContact] = Field(default_factory=list)
    introductions: list[IntroductionSuggestion] = Field(default_factory=list)
    weak_connections: list[WeakConnectionAlert] = Field(default_factory=list)
    risks: list[RiskAlert] = Field(default_factory=list)
    reach: ReachAnalysis = Field(default_factory=ReachAnalysis)
    geo_density: list[CountryDensity] = Field(default_factory=list)

    @property
    def metrics(self) -> NetworkMetrics:
        return self.summary.metrics
