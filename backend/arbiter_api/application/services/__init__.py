from .complaint_service import ComplaintService
from .decision_query_service import DecisionQueryService
from .director_service import DirectorService
from .enquiry_service import EnquiryService
from .lock_registry import LockRegistry
from .reference_resolver import ReferenceResolver
from .seed_loader import SeedLoader
from .sequence_service import IdentifierKind, SequenceService

__all__ = [
    "ComplaintService",
    "DecisionQueryService",
    "DirectorService",
    "EnquiryService",
    "LockRegistry",
    "ReferenceResolver",
    "SeedLoader",
    "IdentifierKind",
    "SequenceService",
]
