"""
Storage module - Task persistence backends and the flat-file record codec
"""

from .record_codec import (
    decode_line,
    decode_records,
    encode_line,
    encode_records,
    escape_field,
    split_fields,
)
from .task_store import (
    TaskStore,
    FlatFileTaskStore,
    InMemoryTaskStore,
    STORE_BACKENDS,
    create_store,
)

__all__ = [
    'decode_line',
    'decode_records',
    'encode_line',
    'encode_records',
    'escape_field',
    'split_fields',
    'TaskStore',
    'FlatFileTaskStore',
    'InMemoryTaskStore',
    'STORE_BACKENDS',
    'create_store',
]
