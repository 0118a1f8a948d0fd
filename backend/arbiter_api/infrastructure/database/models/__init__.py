from .record import RecordModel, RecordSequenceModel

__all__ = [
    "RecordModel",
    "RecordSequenceModel",
]
