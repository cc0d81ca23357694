from .field import FieldCreate, FieldResponse, FieldUpdate
from .value import DiagnosticsResponse, ValueResponse, ValueUpdate

__all__ = [
    "DiagnosticsResponse",
    "FieldCreate",
    "FieldResponse",
    "FieldUpdate",
    "ValueResponse",
    "ValueUpdate",
]
