"""Core data models for the candidate search engine."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

NOT_SPECIFIED = "Not specified"


class CandidateRecord(BaseModel):
    """A raw candidate row as exported by the candidate data service.

    Field names accept both snake_case and the service's camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    candidate_id: str = ""
    full_name: str
    email: str = ""
    phone: str | None = None
    company: str | None = None
    designation: str | None = None
    current_role: str | None = None
    position: str | None = None
    location: str | None = None
    experience: str | None = None
    skills: str | None = None
    education: str | None = None
    ctc: str | None = None
    ectc: str | None = None
    notice_period: str | None = None
    pedigree_level: str | None = None
    company_level: str | None = None
    company_sector: str | None = None
    product_service: str | None = None
    product_category: str | None = None
    product_domain: str | None = None
    employment_type: str | None = None
    profile_picture: str | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class Candidate(BaseModel):
    """Read-only search projection of a CandidateRecord.

    Frozen - ``saved`` is flipped by building a copy from session state.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str = ""
    phone: str = ""
    title: str = NOT_SPECIFIED
    location: str = NOT_SPECIFIED
    experience: float = Field(default=0.0, ge=0.0)
    education: str = NOT_SPECIFIED
    current_company: str = NOT_SPECIFIED
    last_active: str = "Today"
    skills: tuple[str, ...] = ()
    summary: str = ""
    profile_pic: str = ""
    ctc: str = NOT_SPECIFIED
    expected_ctc: str = NOT_SPECIFIED
    notice_period: str = NOT_SPECIFIED
    availability: str = NOT_SPECIFIED
    pedigree_level: str = ""
    company_level: str = ""
    company_sector: str = ""
    product_service: str = ""
    product_category: str = ""
    product_domain: str = ""
    employment_type: str = ""
    saved: bool = False


class FilterSpec(BaseModel):
    """Filter and query settings for one evaluation of the filter engine.

    Empty strings mean "no constraint" for the field they belong to.
    """

    model_config = ConfigDict(frozen=True)

    query: str = ""
    boolean_mode: bool = False
    location: str = ""
    role: str = ""
    company: str = ""
    pedigree_level: str = ""
    company_level: str = ""
    company_sector: str = ""
    product_service: str = ""
    product_category: str = ""
    product_domain: str = ""
    employment_type: str = ""
    notice_period: str = ""
    availability: str = ""
    experience_min: float = Field(default=0.0, ge=0.0)
    experience_max: float | None = Field(default=None, ge=0.0)
    ctc_min: str = ""
    ctc_max: str = ""
    skills: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def experience_range_ordered(self) -> "FilterSpec":
        if self.experience_max is not None and self.experience_min > self.experience_max:
            msg = (
                f"experience_min ({self.experience_min}) must not exceed "
                f"experience_max ({self.experience_max})"
            )
            raise ValueError(msg)
        return self

    def with_skill(self, skill: str) -> "FilterSpec":
        """Return a copy with ``skill`` added to the required skills."""
        skill = skill.strip()
        if not skill or skill in self.skills:
            return self
        return self.model_copy(update={"skills": [*self.skills, skill]})

    def without_skill(self, skill: str) -> "FilterSpec":
        """Return a copy with ``skill`` removed from the required skills."""
        return self.model_copy(update={"skills": [s for s in self.skills if s != skill]})


class Requirement(BaseModel):
    """An open job position tracked against a resume delivery target."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    position: str
    company: str = ""
    criticality: str
    toughness: str = "Medium"
    status: str = "open"
    talent_advisor: str | None = None
    talent_advisor_id: str | None = None
    is_archived: bool = False
    created_at: datetime = Field(default_factory=datetime.now)


class ResumeSubmission(BaseModel):
    """A resume delivered by a recruiter against a requirement."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    requirement_id: str
    recruiter_id: str = ""
    candidate_id: str = ""
    submitted_at: datetime = Field(default_factory=datetime.now)


class SearchRunResult(BaseModel):
    """Summary of a single search run."""

    view: str
    query: str
    total_count: int
    filtered_count: int
    page: int
    total_pages: int
    started_at: datetime
    finished_at: datetime
