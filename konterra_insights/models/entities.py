"""
Core Data Models

Pydantic snapshots of the entities owned by the storage layer. The analysis
core only ever reads these.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ConnectionType(str, Enum):
    """Kinds of contact-to-contact relationships."""
    KNOWS = "knows"
    INTRODUCED_BY = "introduced_by"
    WORKS_WITH = "works_with"
    REPORTS_TO = "reports_to"
    INVESTED_IN = "invested_in"
    REFERRED_BY = "referred_by"


class InteractionType(str, Enum):
    """Types of interactions logged against a contact."""
    MEETING = "meeting"
    CALL = "call"
    MESSAGE = "message"
    EMAIL = "email"
    EVENT = "event"
    INTRODUCTION = "introduction"
    DEAL = "deal"
    NOTE = "note"


class RelationshipType(str, Enum):
    """How the owner of the network knows a contact."""
    FRIEND = "friend"
    BUSINESS = "business"
    INVESTOR = "investor"
    CONFERENCE = "conference"
    MENTOR = "mentor"
    COLLEAGUE = "colleague"
    FAMILY = "family"
    DATING = "dating"
    PROFESSIONAL = "professional"
    ACQUAINTANCE = "acquaintance"


class FavorDirection(str, Enum):
    GIVEN = "given"
    RECEIVED = "received"


class FavorType(str, Enum):
    INTRODUCTION = "introduction"
    ADVICE = "advice"
    REFERRAL = "referral"
    MONEY = "money"
    OPPORTUNITY = "opportunity"
    RESOURCE = "resource"
    TIME = "time"


class FavorValue(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class FavorStatus(str, Enum):
    ACTIVE = "active"
    RESOLVED = "resolved"
    EXPIRED = "expired"
    REPAID = "repaid"


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Drop timezone info after converting to UTC."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _dedupe(values: Optional[list[str]]) -> list[str]:
    """Remove duplicates and blanks while keeping first-seen order."""
    if not values:
        return []
    return list(dict.fromkeys(v for v in values if v))


class Contact(BaseModel):
    """A person in the network."""
    id: str = Field(description="Unique contact identifier")
    name: str = ""
    company: Optional[str] = None
    role: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    personal_interests: list[str] = Field(default_factory=list)
    professional_goals: list[str] = Field(default_factory=list)
    relationship_type: Optional[RelationshipType] = None
    rating: Optional[int] = Field(default=None, ge=0, le=5)
    influence_level: Optional[int] = Field(default=None, ge=0, le=10)
    last_contacted_at: Optional[datetime] = None
    next_follow_up: Optional[datetime] = None

    @field_validator("tags", "personal_interests", "professional_goals", mode="before")
    @classmethod
    def _normalize_lists(cls, value):
        return _dedupe(value)

    @field_validator("last_contacted_at", "next_follow_up")
    @classmethod
    def _normalize_dates(cls, value):
        return to_naive_utc(value)

    @property
    def display_name(self) -> str:
        """Human-readable name for display."""
        return self.name or self.id


class ContactConnection(BaseModel):
    """A directed (optionally mutual) relationship between two contacts."""
    id: str = Field(default="", description="Unique connection identifier")
    source_contact_id: str
    target_contact_id: str
    connection_type: ConnectionType = ConnectionType.KNOWS
    strength: Optional[int] = Field(
        default=3,
        description="Raw 1-5 strength; missing or out-of-range values read as neutral",
    )
    bidirectional: bool = True
    notes: Optional[str] = None

    def model_post_init(self, __context) -> None:
        """Generate ID if not provided."""
        if not self.id:
            self.id = f"{self.source_contact_id}->{self.target_contact_id}"


class Interaction(BaseModel):
    """A timestamped touch with a contact."""
    id: str = Field(default="", description="Unique interaction identifier")
    contact_id: str
    type: InteractionType = InteractionType.NOTE
    date: datetime
    location: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value):
        return to_naive_utc(value)

    def model_post_init(self, __context) -> None:
        """Generate ID if not provided."""
        if not self.id:
            self.id = f"{self.contact_id}_{self.type.value}_{self.date.isoformat()}"


class Favor(BaseModel):
    """A favor exchanged with a contact."""
    id: str = Field(default="", description="Unique favor identifier")
    contact_id: str
    direction: FavorDirection
    type: FavorType = FavorType.ADVICE
    value: FavorValue = FavorValue.MEDIUM
    status: FavorStatus = FavorStatus.ACTIVE
    description: Optional[str] = None
    date: Optional[datetime] = None

    @field_validator("date")
    @classmethod
    def _normalize_date(cls, value):
        return to_naive_utc(value)


class NetworkSnapshot(BaseModel):
    """Everything one analysis call needs, captured at a point in time."""
    generated_at: datetime = Field(default_factory=datetime.now)
    source_files: list[str] = Field(default_factory=list)

    contacts: list[Contact] = Field(default_factory=list)
    connections: list[ContactConnection] = Field(default_factory=list)
    interactions: list[Interaction] = Field(default_factory=list)
    favors: list[Favor] = Field(default_factory=list)

    def get_contact(self, contact_id: str) -> Optional[Contact]:
        """Get a contact by ID."""
        for contact in self.contacts:
            if contact.id == contact_id:
                return contact
        return None

    def interactions_for(self, contact_id: str) -> list[Interaction]:
        """All interactions logged against a contact."""
        return [i for i in self.interactions if i.contact_id == contact_id]

    def favors_for(self, contact_id: str) -> list[Favor]:
        """All favors exchanged with a contact."""
        return [f for f in self.favors if f.contact_id == contact_id]
