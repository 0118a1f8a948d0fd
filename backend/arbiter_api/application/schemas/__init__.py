from .complaint import ComplaintInit, ComplaintResponse, SubmitResponse
from .decision import (
    DecisionFiltersMetaSchema,
    DecisionPageSchema,
    DecisionProviderSchema,
    FilterOptionsSchema,
    ProjectedDecisionSchema,
)
from .director import (
    DirectorCreate,
    DirectorCreatedResponse,
    DirectorDeletedResponse,
    DirectorResponse,
)
from .enquiry import (
    EnquiryCreate,
    EnquiryCreatedResponse,
    EnquiryFileCreate,
    EnquiryFileResponse,
    FileAttachedResponse,
    NextUidResponse,
)

__all__ = [
    "ComplaintInit",
    "ComplaintResponse",
    "SubmitResponse",
    "DecisionFiltersMetaSchema",
    "DecisionPageSchema",
    "DecisionProviderSchema",
    "FilterOptionsSchema",
    "ProjectedDecisionSchema",
    "DirectorCreate",
    "DirectorCreatedResponse",
    "DirectorDeletedResponse",
    "DirectorResponse",
    "EnquiryCreate",
    "EnquiryCreatedResponse",
    "EnquiryFileCreate",
    "EnquiryFileResponse",
    "FileAttachedResponse",
    "NextUidResponse",
]
