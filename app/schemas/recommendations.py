from __future__ import annotations

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

SalaryPeriod = Literal["monthly", "annual"]

_PERCENT_RE = re.compile(r"-?\d+(?:\.\d+)?")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SalaryRange(CamelModel):
    """Structured salary range. Raw parser output may be unordered."""

    min: int
    max: int
    period: SalaryPeriod = "monthly"
    currency: str = ""

    @property
    def is_annual(self) -> bool:
        return self.period == "annual"

    def monthly_equivalent(self) -> tuple[float, float]:
        divisor = 12 if self.is_annual else 1
        return self.min / divisor, self.max / divisor


def _as_text(value: Any) -> Any:
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (list, tuple)):
        return "; ".join(str(item).strip() for item in value if str(item).strip())
    return str(value)


def _as_text_list(value: Any) -> Any:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]
    return [str(value)]


class JobRecommendation(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str = Field(min_length=1)
    industry: str = ""
    responsibilities: str = ""
    required_skills: list[str] = Field(default_factory=list)
    salary_range: str | None = None
    salary_data: SalaryRange | None = None
    growth_potential: str = ""
    match_reason: str = ""
    match_percentage: int = Field(default=0, ge=0, le=100)

    @field_validator("title", mode="before")
    @classmethod
    def _strip_title(cls, value: Any) -> Any:
        value = _as_text(value)
        return value.strip() if isinstance(value, str) else value

    @field_validator("industry", "responsibilities", "growth_potential", "match_reason", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        value = _as_text(value)
        return "" if value is None else value

    @field_validator("required_skills", mode="before")
    @classmethod
    def _coerce_skills(cls, value: Any) -> Any:
        return _as_text_list(value)

    @field_validator("salary_range", mode="before")
    @classmethod
    def _coerce_salary_range(cls, value: Any) -> Any:
        if isinstance(value, dict):
            low = value.get("min")
            high = value.get("max", low)
            if low is None:
                return None
            period = str(value.get("period") or "month")
            return f"{low}-{high} per {period}"
        if isinstance(value, (int, float)):
            return str(value)
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("match_percentage", mode="before")
    @classmethod
    def _clamp_percentage(cls, value: Any) -> int:
        if value is None:
            return 0
        if isinstance(value, str):
            found = _PERCENT_RE.search(value)
            if not found:
                return 0
            value = found.group(0)
        try:
            number = int(round(float(value)))
        except (TypeError, ValueError):
            return 0
        return max(0, min(100, number))


class UserProfile(CamelModel):
    """Open user profile; unknown fields are kept as extras."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    education_level: str | None = None
    work_types: list[str] = Field(default_factory=list)
    salary_expectation: str | None = None
    work_motivation: str | None = None
    strengths: list[str] = Field(default_factory=list)
    experience_level: str | None = None
    technical_skills: list[str] = Field(default_factory=list)
    work_setting: str | None = None
    stress_handling: str | None = None
    collaboration: str | None = None

    @field_validator("work_types", "strengths", "technical_skills", mode="before")
    @classmethod
    def _coerce_lists(cls, value: Any) -> Any:
        return _as_text_list(value)

    @field_validator(
        "education_level",
        "salary_expectation",
        "work_motivation",
        "experience_level",
        "work_setting",
        "stress_handling",
        "collaboration",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        return _as_text(value)

    def is_empty(self) -> bool:
        return not self.model_fields_set and not self.model_extra


class RecommendationResponse(CamelModel):
    success: bool
    recommendations: list[JobRecommendation] = Field(default_factory=list)
    analysis: str | None = None
    job_links: list[str] = Field(default_factory=list)
    education_level: str = ""
    is_below_bachelors: bool = False
    error: str | None = None
    note: str | None = None
