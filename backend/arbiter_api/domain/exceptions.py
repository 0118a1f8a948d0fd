"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class DuplicateEntityError(Exception):
    """Raised when attempting to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: str):
        self.entity_type = entity_type
        self.field = field
        self.value = value
        super().__init__(f"{entity_type} with {field}='{value}' already exists")


class FieldValidationError(Exception):
    """Raised when a command is missing or carries malformed required fields.

    ``errors`` maps each offending field to a user-facing message.
    """

    def __init__(self, errors: dict[str, str], message: str = "Validation failed"):
        self.errors = errors
        self.message = message
        super().__init__(f"{message}: {', '.join(sorted(errors))}")


class InvalidSectionError(Exception):
    """Raised when a complaint section number is not part of the form."""

    def __init__(self, section: int | str):
        self.section = section
        super().__init__(f"Invalid section '{section}'")


class ComplaintStateError(Exception):
    """Raised when a transition is not allowed in the complaint's current state."""

    def __init__(self, complaint_id: int, message: str):
        self.complaint_id = complaint_id
        self.message = message
        super().__init__(f"Complaint {complaint_id}: {message}")
