"""Decision report service — faceted filtering, joins and pagination.

Flow for one report:
  1. Snapshot the decisions and every reference collection in one read.
  2. Keep published decisions matching all supplied facet filters.
  3. Slice the requested page.
  4. Join each decision on the page to its reference rows and build the
     display projection, collecting page-scoped filter metadata on the way.
"""

import logging
import math
from datetime import datetime, tzinfo
from typing import Any

from arbiter_api.application.interfaces import Record, RecordStore
from arbiter_api.application.services.reference_resolver import ReferenceResolver, as_int
from arbiter_api.domain.entities import (
    Collection,
    DecisionFilters,
    DecisionPage,
    DecisionProvider,
    ProjectedDecision,
)
from arbiter_api.domain.exceptions import FieldValidationError
from arbiter_api.infrastructure.logging.workflow_logger import WorkflowLogger, WorkflowStage

logger = logging.getLogger(__name__)
wlog = WorkflowLogger("DecisionQueryService")

PROVIDER_NAME_SEPARATOR = ",<br/>"

_REPORT_COLLECTIONS = (
    Collection.DECISIONS,
    Collection.SECTORS,
    Collection.ISSUES,
    Collection.PRODUCTS,
    Collection.OUTCOMES,
    Collection.PROVIDERS,
    Collection.COMPLAINT_CLASSIFICATION,
    Collection.DECISION_PROVIDERS,
)

# Facet filter → decision field compared as integers.
_ID_FACETS = {
    "outcome": "outcome_id",
    "sector": "sector_id",
    "issue": "issue_id",
    "product": "product_id",
}


class DecisionQueryService:
    """Read-only report engine over the published decisions collection."""

    def __init__(
        self,
        store: RecordStore,
        *,
        date_format: str = "%d/%m/%Y",
        tz: tzinfo | None = None,
    ):
        self._store = store
        self._date_format = date_format
        self._tz = tz  # None → server local time

    # ── Reports ──────────────────────────────────────────────────────

    async def query_decisions(
        self,
        filters: DecisionFilters | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> DecisionPage:
        """Filter, paginate and project published decisions."""
        filters = filters or DecisionFilters()
        errors: dict[str, str] = {}
        if page < 1:
            errors["page"] = "page must be at least 1"
        if limit < 1:
            errors["limit"] = "limit must be at least 1"
        if errors:
            raise FieldValidationError(errors)

        with wlog.timed_step(WorkflowStage.REPORT, "Decision report", page=page, limit=limit) as stats:
            snapshot = await self._store.snapshot(*_REPORT_COLLECTIONS)
            refs = ReferenceResolver(snapshot)

            matching = self.apply_filters(snapshot[Collection.DECISIONS], filters)
            total = len(matching)
            pages = max(1, math.ceil(total / limit))
            offset = (page - 1) * limit
            window = matching[offset : offset + limit]

            result = DecisionPage(page=page, pages=pages, total=total)
            for decision in window:
                projected = self._project(decision, refs, result)
                result.decisions[str(projected.decision_id)] = projected

            stats.update(total=total, returned=len(result.decisions))
        return result

    def apply_filters(
        self, decisions: list[Record], filters: DecisionFilters
    ) -> list[Record]:
        """Published decisions matching every supplied facet (AND semantics)."""
        matching = [d for d in decisions if d.get("published")]

        if filters.year is not None:
            matching = [
                d for d in matching if self._year_of(d.get("year_of_decision")) == filters.year
            ]
        for facet, field_name in _ID_FACETS.items():
            wanted = getattr(filters, facet)
            if wanted is not None:
                matching = [d for d in matching if as_int(d.get(field_name)) == wanted]
        if filters.language:
            matching = [d for d in matching if d.get("language") == filters.language]
        if filters.case_reference:
            matching = [
                d
                for d in matching
                if filters.case_reference in (d.get("case_reference_number") or "")
            ]
        if filters.provider is not None:
            matching = [
                d
                for d in matching
                if filters.provider in {as_int(p) for p in d.get("provider_ids") or []}
            ]
        return matching

    # ── Filter metadata ──────────────────────────────────────────────

    async def filter_options(self) -> dict[str, list[Record]]:
        """Reference lists used to populate the report's filter controls."""
        snapshot = await self._store.snapshot(
            Collection.SECTORS, Collection.OUTCOMES, Collection.NOT_UPHELD_REASONS
        )
        return {
            "sectors": snapshot[Collection.SECTORS],
            "outcomes": snapshot[Collection.OUTCOMES],
            "reasons": snapshot[Collection.NOT_UPHELD_REASONS],
        }

    async def issues_for_sector(self, sector_id: int) -> list[Record]:
        return await self._for_sector(Collection.ISSUES, sector_id)

    async def products_for_sector(self, sector_id: int) -> list[Record]:
        return await self._for_sector(Collection.PRODUCTS, sector_id)

    async def _for_sector(self, collection: str, sector_id: int) -> list[Record]:
        rows = await self._store.all(collection)
        return [r for r in rows if as_int(r.get("sector_id")) == sector_id]

    # ── Projection ───────────────────────────────────────────────────

    def _project(
        self, decision: Record, refs: ReferenceResolver, page: DecisionPage
    ) -> ProjectedDecision:
        decision_date = self._effective_decision_date(decision, refs)
        year = self._year_of(decision_date)
        if year is not None:
            page.years.add(year)

        sector = refs.resolve(Collection.SECTORS, decision.get("sector_id")) or {}
        issue = refs.resolve(Collection.ISSUES, decision.get("issue_id")) or {}
        product = refs.resolve(Collection.PRODUCTS, decision.get("product_id")) or {}
        outcome = refs.resolve(Collection.OUTCOMES, decision.get("outcome_id")) or {}

        providers: dict[str, DecisionProvider] = {}
        names: list[str] = []
        provider_ids = list(decision.get("provider_ids") or [])
        for provider_id in provider_ids:
            provider = refs.resolve(Collection.PROVIDERS, provider_id)
            if provider is None:
                continue
            page.providers_load[str(provider_id)] = provider
            name = provider.get("name")
            names.append("" if name is None else str(name))
            link = refs.find(
                Collection.DECISION_PROVIDERS,
                decision_id=decision.get("decision_id"),
                provider_id=provider_id,
            )
            providers[str(provider_id)] = DecisionProvider(
                provider_id=as_int(provider_id),
                service_provider=name,
                decision_provider_id=(link or {}).get("decision_provider_id"),
            )

        published_date = decision.get("published_date")
        return ProjectedDecision(
            decision_id=decision.get("decision_id"),
            case_reference_number=decision.get("case_reference_number") or "",
            file_path=decision.get("file_path"),
            file_id=decision.get("file_id"),
            language=decision.get("language"),
            complainant=decision.get("complainant"),
            sector_id=decision.get("sector_id"),
            sector=sector.get("name"),
            complaint_category_issue_id=decision.get("issue_id"),
            complaint_category_issue=issue.get("name"),
            complaint_category_issue_code=issue.get("code"),
            complaint_category_product_id=decision.get("product_id"),
            complaint_category_product=product.get("name"),
            complaint_category_product_code=product.get("code"),
            year_of_decision=decision_date,
            year_of_decision_formatted=self._format_date(decision_date),
            outcome_id=decision.get("outcome_id"),
            outcome=outcome.get("name"),
            not_upheld_reason_id=decision.get("not_upheld_reason_id"),
            published_date=published_date,
            published_date_formatted=self._format_date(published_date),
            published=decision.get("published"),
            court_appeal="Appealed" if decision.get("court_appeal") else "Not Appealed",
            providers=providers,
            provider_names=PROVIDER_NAME_SEPARATOR.join(names),
            provider_ids=provider_ids,
        )

    def _effective_decision_date(self, decision: Record, refs: ReferenceResolver) -> Any:
        """Closure date of the linked classification, else the decision date."""
        closure = refs.find(
            Collection.COMPLAINT_CLASSIFICATION,
            complaint_id=decision.get("complaint_id"),
        )
        if closure and closure.get("closure_date"):
            return closure["closure_date"]
        return decision.get("year_of_decision")

    # ── Dates ────────────────────────────────────────────────────────

    def _to_datetime(self, epoch: Any) -> datetime | None:
        seconds = as_int(epoch)
        if seconds is None:
            return None
        try:
            return datetime.fromtimestamp(seconds, tz=self._tz)
        except (OverflowError, OSError, ValueError):
            logger.warning("Ignoring out-of-range timestamp %r", epoch)
            return None

    def _year_of(self, epoch: Any) -> int | None:
        moment = self._to_datetime(epoch)
        return moment.year if moment else None

    def _format_date(self, epoch: Any) -> str | None:
        moment = self._to_datetime(epoch)
        return moment.strftime(self._date_format) if moment else None
