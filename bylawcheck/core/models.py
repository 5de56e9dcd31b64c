"""
bylawcheck Data Model

Pydantic models shared by the normalizer, the resolvers and the evaluator:
- ProjectRecord: canonical building-project attributes
- SetbackRules / RuleSet: resolved regulatory limits with clause citations
- BylawAnswer: free-text bylaw answer with citation
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class ProjectRecord(BaseModel):
    """Canonical project attributes for a single compliance request."""
    project_name: str = ""
    plot_area_sqm: float = Field(default=0.0, ge=0)
    built_area_sqm: float = Field(default=0.0, ge=0)
    height_m: float = Field(default=0.0, ge=0)
    floors: int = Field(default=0, ge=0)
    front_setback_m: float = Field(default=0.0, ge=0)
    rear_setback_m: float = Field(default=0.0, ge=0)
    side_setback_m: float = Field(default=0.0, ge=0)
    parking_spots: int = Field(default=0, ge=0)
    far_utilized: float = Field(default=0.0, ge=0)
    building_type: str = ""
    location: str = ""

    class Config:
        frozen = True


class SetbackRules(BaseModel):
    """Minimum front/rear/side clearances (m) and their clauses."""
    front: float
    rear: float
    side: float
    front_clause: Optional[str] = None
    rear_clause: Optional[str] = None
    side_clause: Optional[str] = None

    class Config:
        frozen = True


class RuleSet(BaseModel):
    """
    Resolved regulatory limits.

    Every numeric limit is required; its clause may be null. A RuleSet is
    built either entirely from a knowledge-service reply or from the
    configured defaults, never by merging the two.
    """
    height_max: float
    height_clause: Optional[str] = None
    setback: SetbackRules
    parking_min: float
    parking_clause: Optional[str] = None
    far_max: float
    far_clause: Optional[str] = None

    class Config:
        frozen = True


class BylawAnswer(BaseModel):
    """Answer to a free-text bylaw question."""
    answer: str = Field(min_length=1)
    clause: Optional[str] = None
    page: Optional[str] = None

    class Config:
        frozen = True

    @field_validator("answer")
    @classmethod
    def _answer_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("answer must not be blank")
        return value

    @field_validator("clause", "page", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        # Services often send page numbers as ints and missing values as "".
        if value is None or value == "":
            return None
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
