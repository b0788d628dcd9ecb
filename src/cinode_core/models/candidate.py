"""Candidate, pipeline and event models."""

from __future__ import annotations

from enum import IntEnum

from pydantic import AliasChoices, Field

from cinode_core.models.base import VendorModel


class CandidateState(IntEnum):
    """Ordinal-coded candidate status."""

    Open = 0
    Won = 10
    Paused = 20
    RejectedByCandidate = 30
    RejectedByUs = 40

    @classmethod
    def key_for(cls, value: int | None) -> str:
        """Return the member name for an ordinal, 'Open' when unmapped."""
        try:
            return cls(value or 0).name
        except ValueError:
            return cls.Open.name


class Stage(VendorModel):
    """A phase of a recruitment pipeline."""

    id: int
    title: str = ""
    description: str | None = ""
    order: int = 0
    probability: float | None = None

    @classmethod
    def unknown(cls) -> Stage:
        """Sentinel returned when a stage lookup misses."""
        return cls(id=-1, title="Unknown Stage", description="", order=0, probability=0)

    @property
    def is_known(self) -> bool:
        """False for the lookup-miss sentinel."""
        return self.id != -1


class Pipeline(VendorModel):
    """A recruitment workflow and its stages."""

    id: int
    title: str = ""
    description: str | None = ""
    stages: list[Stage] = Field(default_factory=list)

    @classmethod
    def unknown(cls) -> Pipeline:
        """Sentinel returned when a pipeline lookup misses."""
        return cls(id=-1, title="Unknown Pipeline", description="", stages=[])

    @property
    def is_known(self) -> bool:
        """False for the lookup-miss sentinel."""
        return self.id != -1


class RecruitmentSource(VendorModel):
    """Channel through which a candidate entered a pipeline."""

    id: int
    name: str = ""


class Candidate(VendorModel):
    """Candidate list row."""

    id: int
    first_name: str | None = Field(
        default=None, validation_alias=AliasChoices("firstName", "firstname", "first_name")
    )
    last_name: str | None = Field(
        default=None, validation_alias=AliasChoices("lastName", "lastname", "last_name")
    )
    company_id: int | str | None = None
    seo_id: int | str | None = None
    company_user_type: int | str | None = None


class CandidateRecord(Candidate):
    """Candidate detail as returned by the candidate endpoint."""

    pipeline_id: int | None = None
    pipeline_stage_id: int | None = None
    recruitment_source_id: int | None = None
    state: int | None = 0


class CandidateEvent(VendorModel):
    """Candidate event list row."""

    id: int | str
    company_candidate_id: int | None = None
    title: str | None = None
    description: str | None = None
    event_date: str | None = None


class CandidateSpecialEvent(CandidateEvent):
    """Extended event record carrying audit fields."""

    created_by_company_user_id: int | None = None
    updated_by_company_user_id: int | None = None
    created: str | None = None
    updated: str | None = None


class CandidateEventDetails(VendorModel):
    """Event with its acting company users resolved to display names."""

    title: str | None = None
    description: str | None = None
    event_date: str | None = None
    created_by: str = ""
    updated_by: str = ""
    created: str | None = None
    updated: str | None = None


class CandidateDetails(VendorModel):
    """Candidate with pipeline, stage, source, state and events resolved.

    Every other field the vendor returned for the candidate is kept as an
    extra and written to the snapshot unchanged.
    """

    id: int
    first_name: str | None = None
    last_name: str | None = None
    company_id: str = Field(description="Normalized to a string")
    seo_id: str = Field(description="Normalized to a string")
    company_user_type: int | str | None = None
    pipeline_id: int | None = None
    pipeline_stage_id: int | None = None
    recruitment_source_id: int | None = None
    pipeline: str = Field(description="'<title>: <description>' of the resolved pipeline")
    stage: str = Field(description="'<title>: <description>' of the resolved stage")
    recruitment_source: str | None = Field(default=None, description="Source name if resolved")
    state: str = Field(default=CandidateState.Open.name, description="CandidateState key")
    events: list[CandidateEventDetails] = Field(default_factory=list)
