"""Schemas de request para segmentos."""

from typing import Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class SegmentRule(BaseModel):
    """Regra de match por URL (``rule``: start, exact ou contains)."""
    rule: Literal["start", "exact", "contains"] = Field(
        validation_alias=AliasChoices("rule", "type")
    )
    value: str


class SegmentCriteria(BaseModel):
    include: Optional[list[SegmentRule]] = None
    exclude: Optional[list[SegmentRule]] = None


class CreateSegmentRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    segment_name: Optional[str] = None
    add_segment_on_page_load: Optional[int] = 0
    segment_criteria: Optional[SegmentCriteria] = None


class AddSubscribersRequest(BaseModel):
    subscriber_ids: list[str] = Field(default_factory=list)
