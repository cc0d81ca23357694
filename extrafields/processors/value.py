"""Value processors: read and write the text of a field for a resource."""

from extrafields.processors.base import Processor
from extrafields.processors.result import ProcessorResult, ResultStatus
from extrafields.services import value_service


class ValueProcessor(Processor):
    object_type = "extrafields.value"
    error_key = "extrafields.value_err_save"

    def require_int(self, key: str, lexicon_key: str) -> int | None:
        value = self.get_int_property(key)
        if value is None and not any(error["id"] == key for error in self.field_errors):
            self.add_field_error(key, self.host.lexicon(lexicon_key))
        return value

    def read_keys(self, require_field: bool = True) -> tuple[int | None, int | None]:
        field_id = None
        if require_field:
            field_id = self.require_int("field_id", "extrafields.field_err_ns")
        resource_id = self.require_int("resource_id", "extrafields.value_err_ns_resource")
        return field_id, resource_id


class ValueGetProcessor(ValueProcessor):
    async def process(self) -> ProcessorResult:
        field_id, resource_id = self.read_keys()
        if self.has_errors():
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.VALIDATION_FAILURE)

        value = await value_service.get_value(self.db, field_id, resource_id)
        return self.success("", {"field_id": field_id, "resource_id": resource_id, "value": value})


class ValueSetProcessor(ValueProcessor):
    async def process(self) -> ProcessorResult:
        field_id, resource_id = self.read_keys()
        if self.has_errors():
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.VALIDATION_FAILURE)

        value = self.get_property("value")
        value = "" if value is None else str(value)
        await value_service.set_value(self.db, field_id, resource_id, value)
        return self.success("", {"field_id": field_id, "resource_id": resource_id, "value": value})


class ValueGetListProcessor(ValueProcessor):
    async def process(self) -> ProcessorResult:
        _, resource_id = self.read_keys(require_field=False)
        if self.has_errors():
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.VALIDATION_FAILURE)

        values = await value_service.get_values_for_resource(self.db, resource_id)
        data = [{"name": name, "value": value} for name, value in values.items()]
        return self.success("", data=data)
