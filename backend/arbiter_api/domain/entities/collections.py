"""Names of the record collections held by the record store."""


class Collection:
    """Every named collection the API reads or writes (plain strings)."""

    # Published decisions and their reference tables (read-only here)
    DECISIONS = "decisions"
    SECTORS = "sectors"
    ISSUES = "issues"
    PRODUCTS = "products"
    OUTCOMES = "outcomes"
    PROVIDERS = "providers"
    NOT_UPHELD_REASONS = "not_upheld_reasons"
    COMPLAINT_CLASSIFICATION = "complaint_classification"
    DECISION_PROVIDERS = "decision_providers"

    # Written by the enquiry and complaint workflows
    ENQUIRIES = "enquiries"
    FILES = "files"
    COMPLAINTS = "complaints"
    DIRECTORS = "directors"
