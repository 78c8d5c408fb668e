"""
Safety module data models.

Pydantic models for crisis classification, assessment flags,
support resources, the session intervention record, and the
view models handed to renderers.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


# ==================================
# Enums
# ==================================

class CrisisLevel(str, Enum):
    """Severity tier of matched crisis language, in priority order."""
    SEVERE = "severe"
    MODERATE = "moderate"
    TRAUMA = "trauma"


class InterventionAction(str, Enum):
    """Kind of response a crisis level calls for."""
    IMMEDIATE = "immediate"
    SUPPORT = "support"
    TRAUMA_INFORMED = "trauma-informed"


class ResourcePriority(str, Enum):
    """Urgency attached to a resource bundle."""
    HIGH = "high"
    MEDIUM = "medium"


LEVEL_ACTIONS: dict[CrisisLevel, InterventionAction] = {
    CrisisLevel.SEVERE: InterventionAction.IMMEDIATE,
    CrisisLevel.MODERATE: InterventionAction.SUPPORT,
    CrisisLevel.TRAUMA: InterventionAction.TRAUMA_INFORMED,
}


# ==================================
# Resource Models
# ==================================

class Resource(BaseModel):
    """A support organization and the ways to reach it."""
    model_config = ConfigDict(frozen=True)

    name: str
    phone: Optional[str] = None
    text: Optional[str] = None
    email: Optional[str] = None
    web: Optional[str] = None
    description: Optional[str] = None
    items: tuple[str, ...] = ()


class CrisisResources(BaseModel):
    """Crisis bundle: hotline-class resources, region first."""
    model_config = ConfigDict(frozen=True)

    immediate: tuple[Resource, ...]
    message: str
    priority: ResourcePriority = ResourcePriority.HIGH


class ResourceGroup(BaseModel):
    """Grouped bundle of non-crisis resources keyed by role."""
    model_config = ConfigDict(frozen=True)

    entries: dict[str, Resource]
    message: str
    priority: ResourcePriority = ResourcePriority.MEDIUM


ResourceBundle = Union[CrisisResources, ResourceGroup]


# ==================================
# Classification Models
# ==================================

class CrisisResult(BaseModel):
    """Outcome of classifying a piece of free text."""
    model_config = ConfigDict(frozen=True)

    level: CrisisLevel
    action: InterventionAction
    resources: ResourceBundle
    matched_phrases: tuple[str, ...] = ()

    @property
    def category(self) -> str:
        return self.level.value

    @property
    def action_name(self) -> Optional[str]:
        return self.action.value


class AssessmentScoreSummary(BaseModel):
    """Score payload produced by the adaptive assessment engine.

    Every field is optional; a missing field never raises a flag.
    """
    model_config = ConfigDict(extra="ignore")

    adhd_probability: Optional[float] = None
    autism_probability: Optional[float] = None
    dyslexia_indicators: Optional[float] = None
    depression_score: Optional[float] = None
    anxiety_score: Optional[float] = None


class AssessmentFlag(BaseModel):
    """A single threshold crossing derived from assessment scores."""
    model_config = ConfigDict(frozen=True)

    type: str
    message: str
    resources: ResourceGroup
    confidence: Optional[float] = None
    severity: Optional[str] = None

    @property
    def category(self) -> str:
        return self.type

    @property
    def action_name(self) -> Optional[str]:
        # Flags inform; they carry no crisis action.
        return None


# ==================================
# Session Record
# ==================================

class InterventionRecord(BaseModel):
    """The most recent intervention shown in a session.

    Stored as JSON with the field names {timestamp, type, action, shown}.
    """
    model_config = ConfigDict(populate_by_name=True)

    timestamp: datetime
    category: str = Field(alias="type")
    action: Optional[str] = None
    shown: bool = True

    @field_validator("timestamp")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_serializer("timestamp")
    def _iso_utc(self, value: datetime) -> str:
        iso = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
        return iso.replace("+00:00", "Z")

    def to_json(self) -> str:
        """Serialize for session storage."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: Union[str, bytes]) -> "InterventionRecord":
        """Parse a stored record. Raises ValidationError on bad data."""
        return cls.model_validate_json(raw)


# ==================================
# View Models
# ==================================

class Affordance(BaseModel):
    """One contact control on a rendered resource."""
    kind: Literal["phone", "text", "email", "web"]
    label: str
    href: Optional[str] = None


class ResourceView(BaseModel):
    """A resource as it should appear on the intervention surface."""
    name: str
    description: Optional[str] = None
    affordances: list[Affordance] = Field(default_factory=list)
    items: list[str] = Field(default_factory=list)


class ActionView(BaseModel):
    """A button on the intervention surface. Every action dismisses it."""
    id: Literal["seek_help", "continue"]
    label: str
    dismisses: bool = True


class InterventionView(BaseModel):
    """Renderer-independent description of the intervention surface."""
    variant: Literal["crisis", "support"]
    title: str
    message: str
    priority: ResourcePriority
    category: str
    action: Optional[str] = None
    resources: list[ResourceView] = Field(default_factory=list)
    actions: list[ActionView] = Field(default_factory=list)


class FollowUpBanner(BaseModel):
    """Lightweight re-engagement prompt inserted at the top of the page."""
    message: str
    dismiss_label: str
    placement: Literal["top"] = "top"
