from .record_store import Record, RecordMutator, RecordStore, record_matches

__all__ = [
    "Record",
    "RecordMutator",
    "RecordStore",
    "record_matches",
]
