"""
Processor Base Classes

Processor:        request-handling entry point invoked by the connector.
CreateProcessor:  before_set -> before_save -> save -> after_save.
UpdateProcessor:  same phases on an object resolved from the ``id`` property.
RemoveProcessor:  existence -> permission -> before_remove -> remove -> after_remove.

The validation phase (before_set) is separate from before_save: a failed
validation returns before before_save or persistence is reached.

Exceptions never propagate past run(): storage failures and unexpected
errors are logged with their traceback and returned as failure results.
"""

from __future__ import annotations

import logging
import traceback
from abc import ABC, abstractmethod
from typing import Any

from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from extrafields.exceptions import NotFoundError, PersistenceError, ValidationError
from extrafields.host import Host
from extrafields.processors.result import ProcessorResult, ResultStatus

logger = logging.getLogger(__name__)


def sql_error_code(exc: SQLAlchemyError) -> str:
    """Best-effort driver error code (SQLSTATE where the driver exposes one)."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        orig = exc.orig
        for attr in ("sqlstate", "pgcode", "sqlite_errorname"):
            code = getattr(orig, attr, None)
            if code:
                return str(code)
        if orig.args and isinstance(orig.args[0], int):
            return str(orig.args[0])
    return exc.code or "unknown"


def exception_location(exc: BaseException) -> str:
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return "unknown:0"
    return f"{frames[-1].filename}:{frames[-1].lineno}"


class Processor(ABC):
    """Base class for all processors."""

    object_type = "extrafields"
    # Lexicon key used as the prefix of storage/unexpected failure messages
    error_key = "extrafields.field_err_save"

    def __init__(self, host: Host, properties: dict[str, Any] | None = None):
        self.host = host
        self.db = host.db
        self.properties: dict[str, Any] = dict(properties or {})
        self.field_errors: list[dict[str, str]] = []

    # ── Properties ────────────────────────────────────────────────────────────

    def get_property(self, key: str, default: Any = None) -> Any:
        return self.properties.get(key, default)

    def set_property(self, key: str, value: Any) -> None:
        self.properties[key] = value

    def get_int_property(self, key: str, default: int | None = None) -> int | None:
        """Coerce a request property to int; record a field error if it is not one."""
        raw = self.properties.get(key)
        if raw is None or raw == "":
            return default
        try:
            return int(raw)
        except (TypeError, ValueError):
            self.add_field_error(key, f"{key} must be an integer")
            return default

    # ── Errors ────────────────────────────────────────────────────────────────

    def add_field_error(self, key: str, message: str) -> None:
        self.field_errors.append({"id": key, "msg": message})

    def has_errors(self) -> bool:
        return bool(self.field_errors)

    # ── Responses ─────────────────────────────────────────────────────────────

    def success(self, message: str = "", obj: dict[str, Any] | None = None, **kwargs) -> ProcessorResult:
        return ProcessorResult(status=ResultStatus.SUCCESS, message=message, object=obj, **kwargs)

    def failure(
        self,
        message: str = "",
        status: ResultStatus = ResultStatus.VALIDATION_FAILURE,
        code: str | None = None,
    ) -> ProcessorResult:
        return ProcessorResult(status=status, message=message, errors=list(self.field_errors), code=code)

    # ── Lifecycle ─────────────────────────────────────────────────────────────

    async def initialize(self) -> bool | str:
        """Return True to continue, or a failure message."""
        return True

    @abstractmethod
    async def process(self) -> ProcessorResult:
        """Do the work. Subclasses return success() or failure()."""
        ...

    async def run(self) -> ProcessorResult:
        """Run the processor; never raises."""
        context = f"{type(self).__name__}.run"
        try:
            initialized = await self.initialize()
            if initialized is not True:
                return self.failure(str(initialized), status=ResultStatus.NOT_FOUND)
            return await self.process()
        except ValidationError as e:
            self.add_field_error(e.field or "name", e.message)
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.VALIDATION_FAILURE)
        except NotFoundError as e:
            self.host.log(logging.WARNING, e.message, context)
            return self.failure(e.message, status=ResultStatus.NOT_FOUND)
        except PersistenceError as e:
            self.host.log(logging.ERROR, f"PersistenceError in {type(self).__name__}: {e.message}", context)
            return self.failure(
                f"{self.host.lexicon(self.error_key)} {e.message}",
                status=ResultStatus.PERSISTENCE_FAILURE,
            )
        except SQLAlchemyError as e:
            await self._rollback()
            code = sql_error_code(e)
            logger.error(
                f"SQLAlchemyError in {type(self).__name__}: {e} | Code: {code}",
                exc_info=True,
                extra={"context": context},
            )
            return self.failure(
                f"{self.host.lexicon(self.error_key)} SQL Error ({code}): {e}",
                status=ResultStatus.STORAGE_FAILURE,
                code=code,
            )
        except Exception as e:
            await self._rollback()
            location = exception_location(e)
            logger.error(
                f"Exception in {type(self).__name__}: {e} | Location: {location}",
                exc_info=True,
                extra={"context": context},
            )
            return self.failure(
                f"{self.host.lexicon(self.error_key)} Exception: {e}",
                status=ResultStatus.UNEXPECTED_FAILURE,
                code=location,
            )

    async def _rollback(self) -> None:
        if self.db is None:
            return
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback failed in {type(self).__name__}: {e}")


class ObjectProcessor(Processor):
    """Processor bound to a single model object."""

    error_not_found_key = "extrafields.field_err_nf"
    error_not_specified_key = "extrafields.field_err_ns"
    primary_key = "id"

    def __init__(self, host: Host, properties: dict[str, Any] | None = None):
        super().__init__(host, properties)
        self.object = None

    async def load_object(self, object_id: int):
        """Fetch the object for ``object_id`` or return None."""
        raise NotImplementedError

    async def initialize(self) -> bool | str:
        object_id = self.get_property(self.primary_key)
        if object_id is None or object_id == "":
            return self.host.lexicon(self.error_not_specified_key)
        try:
            object_id = int(object_id)
        except (TypeError, ValueError):
            return self.host.lexicon(self.error_not_found_key)
        self.object = await self.load_object(object_id)
        if self.object is None:
            return self.host.lexicon(self.error_not_found_key)
        return True

    def object_snapshot(self) -> dict[str, Any]:
        if self.object is None:
            return {}
        return self.object.to_dict()


class SaveProcessor(ObjectProcessor):
    """Shared phases of create and update."""

    error_key = "extrafields.field_err_save"

    async def before_set(self) -> bool:
        """Validation phase; record field errors and return False to abort."""
        return not self.has_errors()

    def set_object_fields(self) -> None:
        raise NotImplementedError

    async def before_save(self) -> bool:
        return not self.has_errors()

    async def save_object(self) -> bool:
        raise NotImplementedError

    async def after_save(self) -> bool:
        return True

    async def process(self) -> ProcessorResult:
        context = f"{type(self).__name__}.process"

        if not await self.before_set():
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.VALIDATION_FAILURE)

        self.set_object_fields()

        if not await self.before_save():
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.VALIDATION_FAILURE)

        if not await self.save_object():
            snapshot = self.object_snapshot()
            self.host.log(
                logging.ERROR,
                f"Failed to save {self.object_type}: {self.field_errors} | Object data: {snapshot}",
                context,
            )
            message = self.host.lexicon(self.error_key)
            if self.field_errors:
                message += " Validation errors: " + ", ".join(error["msg"] for error in self.field_errors)
            else:
                message += " No validation errors reported; check the server log."
            return self.failure(message, status=ResultStatus.PERSISTENCE_FAILURE)

        if await self.after_save() is not True:
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.PERSISTENCE_FAILURE)

        return self.success("", self.object_snapshot())


class CreateProcessor(SaveProcessor):
    """Creates a new object; there is nothing to resolve up front."""

    def new_object(self):
        raise NotImplementedError

    async def initialize(self) -> bool | str:
        self.object = self.new_object()
        return True


class UpdateProcessor(SaveProcessor):
    """Updates the object resolved from the ``id`` property."""


class RemoveProcessor(ObjectProcessor):
    """Removes the object resolved from the ``id`` property."""

    error_key = "extrafields.field_err_remove"
    permission = ""

    async def check_permissions(self) -> bool:
        return not self.permission or self.host.has_permission(self.permission)

    async def before_remove(self) -> bool:
        return True

    async def remove_object(self) -> bool:
        raise NotImplementedError

    async def after_remove(self) -> bool:
        return True

    async def process(self) -> ProcessorResult:
        context = f"{type(self).__name__}.process"

        if self.object is None:
            return self.failure(self.host.lexicon(self.error_not_found_key), status=ResultStatus.NOT_FOUND)

        if not await self.check_permissions():
            return self.failure(self.host.lexicon("access_denied"), status=ResultStatus.ACCESS_DENIED)

        if not await self.before_remove():
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.VALIDATION_FAILURE)

        snapshot = self.object_snapshot()
        if not await self.remove_object():
            self.host.log(logging.ERROR, f"Failed to delete {self.object_type}: Object data: {snapshot}", context)
            message = self.host.lexicon(self.error_key) + " No specific error details available; check the server log."
            return self.failure(message, status=ResultStatus.PERSISTENCE_FAILURE)

        if await self.after_remove() is not True:
            return self.failure(self.host.lexicon(self.error_key), status=ResultStatus.PERSISTENCE_FAILURE)

        return self.success("", snapshot)
