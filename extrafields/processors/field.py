"""Field processors: create, update, remove, get and list field definitions."""

from extrafields.models.field import Field
from extrafields.processors.base import (
    CreateProcessor,
    ObjectProcessor,
    Processor,
    RemoveProcessor,
    UpdateProcessor,
)
from extrafields.processors.result import ProcessorResult
from extrafields.services import field_service


class FieldSaveMixin:
    """Validation and persistence shared by create and update."""

    object_type = "extrafields.field"

    def exclude_id(self) -> int | None:
        return None

    async def before_set(self) -> bool:
        rank = self.get_int_property("rank")
        if rank is not None:
            self.set_property("rank", rank)
        elif not any(error["id"] == "rank" for error in self.field_errors):
            # Blank rank from a form means "not given"
            self.properties.pop("rank", None)

        errors = await field_service.validate_field_name(
            self.db,
            self.get_property("name"),
            exclude_id=self.exclude_id(),
            lexicon=self.host.lexicon,
        )
        for error in errors:
            self.add_field_error(error.field, error.message)
        return not self.has_errors()

    async def save_object(self) -> bool:
        self.object = await field_service.save_field(self.db, self.object, lexicon=self.host.lexicon)
        return self.object.id is not None


class FieldCreateProcessor(FieldSaveMixin, CreateProcessor):
    def new_object(self) -> Field:
        return Field()

    def set_object_fields(self) -> None:
        default_rank = self.host.get_option("default_rank", 0)
        self.object.name = field_service.normalize_name(self.get_property("name"))
        self.object.description = self.get_property("description") or ""
        self.object.rank = self.get_property("rank", default_rank) or 0


class FieldUpdateProcessor(FieldSaveMixin, UpdateProcessor):
    async def load_object(self, object_id: int) -> Field | None:
        return await field_service.get_field(self.db, object_id)

    def exclude_id(self) -> int | None:
        return self.object.id

    def set_object_fields(self) -> None:
        self.object.name = field_service.normalize_name(self.get_property("name"))
        if "description" in self.properties:
            self.object.description = self.get_property("description") or ""
        if self.get_property("rank") is not None:
            self.object.rank = self.get_property("rank")


class FieldRemoveProcessor(RemoveProcessor):
    object_type = "extrafields.field"
    permission = "extrafields.delete"

    async def load_object(self, object_id: int) -> Field | None:
        return await field_service.get_field(self.db, object_id)

    async def remove_object(self) -> bool:
        await field_service.remove_field(self.db, self.object)
        return True


class FieldGetProcessor(ObjectProcessor):
    object_type = "extrafields.field"

    async def load_object(self, object_id: int) -> Field | None:
        return await field_service.get_field(self.db, object_id)

    async def process(self) -> ProcessorResult:
        return self.success("", self.object_snapshot())


class FieldGetListProcessor(Processor):
    object_type = "extrafields.field"
    default_limit = 20

    async def process(self) -> ProcessorResult:
        start = self.get_int_property("start", 0)
        limit = self.get_int_property("limit", self.default_limit)
        search = self.get_property("query") or None
        if self.has_errors():
            return self.failure(self.host.lexicon(self.error_key))

        # limit=0 means "no limit", as in the admin grids
        fields = await field_service.get_fields(self.db, search=search, skip=start, limit=limit or None)
        total = await field_service.count_fields(self.db, search=search)
        return self.success("", data=[field.to_dict() for field in fields], total=total)
