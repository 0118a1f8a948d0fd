"""Pydantic schemas for decision report responses."""

from typing import Any

from pydantic import BaseModel


class DecisionProviderSchema(BaseModel):
    decision_provider_id: int | None = None
    provider_id: int | None
    service_provider: str | None


class ProjectedDecisionSchema(BaseModel):
    """A decision with its reference names resolved for display."""

    decision_id: int | str
    case_reference_number: str
    file_path: str | None = None
    file_id: int | str | None = None
    language: str | None = None
    complainant: str | None = None
    sector_id: int | None = None
    sector: str | None = None
    complaint_category_issue_id: int | None = None
    complaint_category_issue: str | None = None
    complaint_category_issue_code: str | None = None
    complaint_category_product_id: int | None = None
    complaint_category_product: str | None = None
    complaint_category_product_code: str | None = None
    year_of_decision: int | None = None
    year_of_decision_formatted: str | None = None
    outcome_id: int | None = None
    outcome: str | None = None
    not_upheld_reason_id: int | None = None
    published_date: int | None = None
    published_date_formatted: str | None = None
    published: bool | int | None = None
    court_appeal: str
    providers: dict[str, DecisionProviderSchema] = {}
    provider_names: str = ""
    provider_ids: list[int] = []


class DecisionFiltersMetaSchema(BaseModel):
    """Filter values seen on the returned page."""

    years: list[int] = []
    providers_load: dict[str, dict[str, Any]] = {}


class DecisionPageSchema(BaseModel):
    page: int
    pages: int
    filters: DecisionFiltersMetaSchema
    decisions: dict[str, ProjectedDecisionSchema] = {}


class FilterOptionsSchema(BaseModel):
    sectors: list[dict[str, Any]] = []
    outcomes: list[dict[str, Any]] = []
    reasons: list[dict[str, Any]] = []
