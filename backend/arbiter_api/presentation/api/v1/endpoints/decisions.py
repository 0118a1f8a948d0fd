"""Decision report endpoints — faceted search over published decisions."""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Query

from arbiter_api.application.schemas.decision import (
    DecisionFiltersMetaSchema,
    DecisionPageSchema,
    FilterOptionsSchema,
    ProjectedDecisionSchema,
)
from arbiter_api.application.services import DecisionQueryService
from arbiter_api.application.services.reference_resolver import as_int
from arbiter_api.config import get_settings
from arbiter_api.domain.entities import DecisionFilters, DecisionPage
from arbiter_api.domain.exceptions import FieldValidationError
from arbiter_api.infrastructure.dependencies import get_decision_query_service

router = APIRouter(prefix="/decisions", tags=["Decisions"])


# ── Helpers ──────────────────────────────────────────────────────────


def _numeric_facets(**raw: str | None) -> dict[str, int | None]:
    """Coerce numeric query strings; blank values mean "no filter"."""
    values: dict[str, int | None] = {}
    errors: dict[str, str] = {}
    for name, value in raw.items():
        if value is None or not value.strip():
            values[name] = None
            continue
        number = as_int(value.strip())
        if number is None:
            errors[name] = f"{name} must be a number"
        values[name] = number
    if errors:
        raise FieldValidationError(errors)
    return values


def _to_page_schema(result: DecisionPage) -> DecisionPageSchema:
    """Map domain DecisionPage to response schema."""
    return DecisionPageSchema(
        page=result.page,
        pages=result.pages,
        filters=DecisionFiltersMetaSchema(
            years=sorted(result.years),
            providers_load=result.providers_load,
        ),
        decisions={
            key: ProjectedDecisionSchema.model_validate(asdict(decision))
            for key, decision in result.decisions.items()
        },
    )


# ── Endpoints ────────────────────────────────────────────────────────


@router.get("", response_model=DecisionPageSchema)
async def list_decisions(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, description="Page size; defaults to the configured size"),
    year: str | None = Query(None, description="Calendar year of the decision"),
    outcome: str | None = Query(None, description="Outcome id"),
    sector: str | None = Query(None, description="Sector id"),
    issue: str | None = Query(None, description="Complaint category issue id"),
    product: str | None = Query(None, description="Complaint category product id"),
    provider: str | None = Query(None, description="Service provider id"),
    language: str | None = Query(None, max_length=10),
    case_reference: str | None = Query(None, description="Substring of the case reference"),
    service: DecisionQueryService = Depends(get_decision_query_service),
) -> DecisionPageSchema:
    """Retrieve one page of published decisions matching every supplied filter."""
    facets = _numeric_facets(
        year=year,
        outcome=outcome,
        sector=sector,
        issue=issue,
        product=product,
        provider=provider,
    )
    filters = DecisionFilters(language=language, case_reference=case_reference, **facets)
    if limit is None:
        limit = get_settings().decisions_default_limit
    result = await service.query_decisions(filters, page=page, limit=limit)
    return _to_page_schema(result)


@router.get("/filters", response_model=FilterOptionsSchema)
async def filter_options(
    service: DecisionQueryService = Depends(get_decision_query_service),
) -> FilterOptionsSchema:
    """Sectors, outcomes and not-upheld reasons for the report filters."""
    return FilterOptionsSchema(**await service.filter_options())


@router.get("/issues")
async def list_issues(
    sector_id: int = Query(..., description="Sector whose issues to list"),
    service: DecisionQueryService = Depends(get_decision_query_service),
) -> list[dict]:
    return await service.issues_for_sector(sector_id)


@router.get("/products")
async def list_products(
    sector_id: int = Query(..., description="Sector whose products to list"),
    service: DecisionQueryService = Depends(get_decision_query_service),
) -> list[dict]:
    return await service.products_for_sector(sector_id)
