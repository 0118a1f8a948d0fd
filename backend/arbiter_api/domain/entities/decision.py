"""Domain entities for published decision reports."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class DecisionFilters:
    """Facet filters for a decision report. ``None`` means "not filtered"."""

    year: int | None = None
    outcome: int | None = None
    sector: int | None = None
    issue: int | None = None
    product: int | None = None
    provider: int | None = None
    language: str | None = None
    case_reference: str | None = None


@dataclass
class DecisionProvider:
    """A provider named on a decision, as shown in the report."""

    provider_id: int
    service_provider: str | None
    decision_provider_id: int | None = None


@dataclass
class ProjectedDecision:
    """A decision enriched with resolved reference names, ready for display.

    Name/code fields are ``None`` when the foreign key does not resolve.
    """

    decision_id: int | str
    case_reference_number: str
    file_path: str | None
    file_id: int | str | None
    language: str | None
    complainant: str | None
    sector_id: int | None
    sector: str | None
    complaint_category_issue_id: int | None
    complaint_category_issue: str | None
    complaint_category_issue_code: str | None
    complaint_category_product_id: int | None
    complaint_category_product: str | None
    complaint_category_product_code: str | None
    year_of_decision: int | None
    year_of_decision_formatted: str | None
    outcome_id: int | None
    outcome: str | None
    not_upheld_reason_id: int | None
    published_date: int | None
    published_date_formatted: str | None
    published: bool | int | None
    court_appeal: str
    providers: dict[str, DecisionProvider] = field(default_factory=dict)
    provider_names: str = ""
    provider_ids: list[int] = field(default_factory=list)


@dataclass
class DecisionPage:
    """One page of a decision report plus page-scoped filter metadata."""

    page: int
    pages: int
    total: int
    years: set[int] = field(default_factory=set)
    providers_load: dict[str, dict[str, Any]] = field(default_factory=dict)
    decisions: dict[str, ProjectedDecision] = field(default_factory=dict)
