from .collections import Collection
from .complaint import Complaint, ComplaintStatus, SECTION_KEYS, section_key
from .decision import (
    DecisionFilters,
    DecisionPage,
    DecisionProvider,
    ProjectedDecision,
)
from .director import Director
from .enquiry import Enquiry, EnquiryFile

__all__ = [
    "Collection",
    "Complaint",
    "ComplaintStatus",
    "SECTION_KEYS",
    "section_key",
    "DecisionFilters",
    "DecisionPage",
    "DecisionProvider",
    "ProjectedDecision",
    "Director",
    "Enquiry",
    "EnquiryFile",
]
