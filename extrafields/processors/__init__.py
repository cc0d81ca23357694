from .base import CreateProcessor, Processor, RemoveProcessor, UpdateProcessor
from .diagnostics import DiagnosticsRunProcessor
from .field import (
    FieldCreateProcessor,
    FieldGetListProcessor,
    FieldGetProcessor,
    FieldRemoveProcessor,
    FieldUpdateProcessor,
)
from .registry import ProcessorRegistry, is_valid_action
from .result import ProcessorResult, ResultStatus
from .value import ValueGetListProcessor, ValueGetProcessor, ValueSetProcessor

processor_registry = ProcessorRegistry()
processor_registry.register("mgr/field/create", FieldCreateProcessor)
processor_registry.register("mgr/field/update", FieldUpdateProcessor)
processor_registry.register("mgr/field/delete", FieldRemoveProcessor)
processor_registry.register("mgr/field/get", FieldGetProcessor)
processor_registry.register("mgr/field/getlist", FieldGetListProcessor)
processor_registry.register("mgr/value/get", ValueGetProcessor)
processor_registry.register("mgr/value/set", ValueSetProcessor)
processor_registry.register("mgr/value/getlist", ValueGetListProcessor)
processor_registry.register("mgr/diagnostics/run", DiagnosticsRunProcessor)

__all__ = [
    "CreateProcessor",
    "DiagnosticsRunProcessor",
    "FieldCreateProcessor",
    "FieldGetListProcessor",
    "FieldGetProcessor",
    "FieldRemoveProcessor",
    "FieldUpdateProcessor",
    "Processor",
    "ProcessorRegistry",
    "ProcessorResult",
    "RemoveProcessor",
    "ResultStatus",
    "UpdateProcessor",
    "ValueGetListProcessor",
    "ValueGetProcessor",
    "ValueSetProcessor",
    "is_valid_action",
    "processor_registry",
]
