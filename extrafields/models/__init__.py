from .field import Field
from .value import FieldValue

__all__ = [
    "Field",
    "FieldValue",
]
