"""Canonical schemas for law records, the lawyer directory and analysis results.

These pydantic models replace the loosely-typed JSON entries of the law
database: records are validated once at load time so the analyzer can assume
well-formed input.
"""
from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    EMERGENCY = "Emergency"


class UrgencyLevel(str, Enum):
    NORMAL = "Normal"
    MEDIUM = "Medium"
    HIGH = "High"
    EMERGENCY = "Emergency"


class RelevanceReason(str, Enum):
    STRONG = "Strong match"
    GOOD = "Good match"
    PARTIAL = "Partial match"


class LawRecord(BaseModel):
    """One statutory provision / offense category from the law database.

    Only ``title``, ``category`` and ``severity`` drive analysis besides the
    matching text fields; everything else is payload carried to the caller.
    Unknown fields are kept as-is.
    """

    model_config = ConfigDict(extra="allow")

    id: Optional[str] = None
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    severity: Severity = Severity.MEDIUM
    keywords: List[str] = Field(default_factory=list)
    description: str = ""
    ipc_sections: List[str] = Field(default_factory=list)
    steps: List[str] = Field(default_factory=list)
    evidence_required: List[str] = Field(default_factory=list)
    penalty: Optional[str] = None
    time_limit: Optional[str] = None
    offense_type: Optional[str] = None
    templates: List[str] = Field(default_factory=list)
    state_specific: Dict[str, str] = Field(default_factory=dict)

    @field_validator(
        "severity", "keywords", "description", "ipc_sections", "steps",
        "evidence_required", "templates", "state_specific",
        mode="before",
    )
    @classmethod
    def _null_means_default(cls, value: Any, info: ValidationInfo) -> Any:
        # database exports write null for fields that were never filled in
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value

    def with_severity(self, severity: Severity) -> "LawRecord":
        return self.model_copy(update={"severity": severity})


class LawyerLocation(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lng: float = Field(ge=-180, le=180)
    address: Optional[str] = None


class LawyerContact(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None


class Lawyer(BaseModel):
    """Directory entry for an advocate users can be referred to."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: Optional[str] = None
    name: str = Field(min_length=1)
    specialization: str = Field(min_length=1)
    experience: int = Field(ge=0, description="Years of practice")
    location: LawyerLocation
    contact: LawyerContact = Field(default_factory=LawyerContact)
    rating: float = Field(default=0, ge=0, le=5)
    image_url: Optional[str] = Field(default=None, alias="imageUrl")


class EntitySignals(BaseModel):
    money_amount: Optional[str] = None
    has_danger: bool = False
    involves_child: bool = False
    time_urgent: bool = False


class ScoredMatch(BaseModel):
    record: LawRecord
    score: int = Field(gt=0)
    relevance_reason: RelevanceReason


class Analysis(BaseModel):
    primary_issue: str
    related_issues: List[str] = Field(default_factory=list)
    urgency_level: UrgencyLevel = UrgencyLevel.NORMAL
    entities_detected: EntitySignals = Field(default_factory=EntitySignals)
    contexts: List[str] = Field(default_factory=list)
    phrases_matched: List[str] = Field(default_factory=list)


class AnalysisResult(BaseModel):
    """Output of the fallback analyzer.

    ``analysis`` is None only for the empty-query sentinel; a well-formed query
    that matches nothing still carries a populated analysis bundle.
    """

    scored: List[ScoredMatch] = Field(default_factory=list)
    analysis: Optional[Analysis] = None

    @property
    def matches(self) -> List[LawRecord]:
        return [m.record for m in self.scored]

    @property
    def is_empty_query(self) -> bool:
        return self.analysis is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": [m.model_dump(mode="json") for m in self.matches],
            "analysis": self.analysis.model_dump(mode="json") if self.analysis else {},
        }


__all__ = [
    "Severity",
    "UrgencyLevel",
    "RelevanceReason",
    "LawRecord",
    "Lawyer",
    "LawyerLocation",
    "LawyerContact",
    "EntitySignals",
    "ScoredMatch",
    "Analysis",
    "AnalysisResult",
]
