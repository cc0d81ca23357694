"""
Diagnostics Service

Runtime self-check of the extension: model registration, table presence,
basic reads and processor availability. Every check appends one or more
lines to the log and may flip the overall status; no check is skipped
because an earlier one failed, and run() never raises.
"""

import importlib
import logging
import platform
from dataclasses import dataclass, field
from pathlib import Path

import sqlalchemy
from sqlalchemy import func, inspect, select
from sqlalchemy.exc import SQLAlchemyError

from extrafields.host import Host

logger = logging.getLogger(__name__)

PASS_MARK = "✅"
FAIL_MARK = "❌"

MODELS_PACKAGE = "extrafields.models"
MODEL_CLASSES = {
    "Field": ("extrafields.models.field", "Field"),
    "Value": ("extrafields.models.value", "FieldValue"),
}
FIELD_PROCESSOR_ACTIONS = {
    "Create": "mgr/field/create",
    "Update": "mgr/field/update",
    "Delete": "mgr/field/delete",
}


@dataclass
class DiagnosticsReport:
    """Outcome of a diagnostics run."""

    ok: bool = True
    log: list[str] = field(default_factory=list)
    header: list[str] = field(default_factory=list)

    def add(self, message: str, success: bool = True) -> None:
        self.log.append(f"{PASS_MARK if success else FAIL_MARK} {message}")
        if not success:
            self.ok = False

    def as_text(self) -> str:
        status = "PASSED" if self.ok else "FAILED"
        lines = [f"[diagnostics] {line}" for line in self.header]
        lines.append("")
        lines.extend(f"[diagnostics] {line}" for line in self.log)
        lines.append("")
        lines.append(f"[diagnostics] Overall status: {status}")
        return "\n".join(lines)

    def to_dict(self) -> dict:
        return {"ok": self.ok, "log": list(self.log)}


class Diagnostics:
    """Runs the ordered health checks against a host context."""

    def __init__(self, host: Host | None, registry=None):
        self.host = host
        self._registry = registry
        self.report = DiagnosticsReport()
        self._models: dict[str, type] = {}

    async def run(self) -> DiagnosticsReport:
        self.report = DiagnosticsReport(header=self._header())

        checks = [
            self.check_host,
            self.check_model_package,
            self.check_model_classes,
            self.check_object_creation,
            self.check_tables,
            self.check_basic_operations,
            self.check_processors,
        ]
        for check in checks:
            try:
                await check()
            except Exception as e:
                logger.error(f"Diagnostics check {check.__name__} raised: {e}", exc_info=True)
                self.report.add(f"{check.__name__} raised an unexpected error: {e}", False)

        level = logging.INFO if self.report.ok else logging.WARNING
        logger.log(level, f"Diagnostics finished: {'PASSED' if self.report.ok else 'FAILED'}")
        return self.report

    def _header(self) -> list[str]:
        version = self.host.settings.app_version if self.host else "unknown"
        return [
            "Starting Extra Fields diagnostics",
            f"Extra Fields version: {version}",
            f"SQLAlchemy version: {sqlalchemy.__version__}",
            f"Python version: {platform.python_version()}",
        ]

    @property
    def db(self):
        return self.host.db if self.host else None

    # ── Checks ────────────────────────────────────────────────────────────────

    async def check_host(self) -> None:
        initialized = self.host is not None and self.db is not None
        self.report.add(f"Host context initialized: {'yes' if initialized else 'no'}", initialized)

    async def check_model_package(self) -> None:
        package_path = Path(__file__).resolve().parent.parent / "models"
        exists = package_path.is_dir()
        self.report.add(
            f"Model package directory exists: {package_path} - {'found' if exists else 'not found'}",
            exists,
        )

        if not exists:
            self.report.add("Skipped model registration check - package directory not found", False)
            return

        try:
            importlib.import_module(MODELS_PACKAGE)
            registered = True
        except ImportError as e:
            logger.error(f"Could not register models: {e}")
            registered = False
        self.report.add(f"Models registered: {'yes' if registered else 'no'}", registered)

    async def check_model_classes(self) -> None:
        for label, (module_name, class_name) in MODEL_CLASSES.items():
            try:
                module = importlib.import_module(module_name)
                self._models[label] = getattr(module, class_name)
                found = True
            except (ImportError, AttributeError) as e:
                logger.error(f"Could not load {module_name}.{class_name}: {e}")
                found = False
            self.report.add(
                f"{label} model class loadable: {module_name}.{class_name} - {'found' if found else 'not found'}",
                found,
            )

    async def check_object_creation(self) -> None:
        for label in MODEL_CLASSES:
            model = self._models.get(label)
            created = False
            if model is not None:
                try:
                    created = model() is not None
                except Exception as e:
                    logger.error(f"Could not instantiate {model.__name__}: {e}")
            name = model.__name__ if model is not None else label
            self.report.add(f"{name}() instantiated: {'yes' if created else 'no'}", created)

    async def check_tables(self) -> None:
        for label in MODEL_CLASSES:
            model = self._models.get(label)
            table_name = model.__tablename__ if model is not None else label.lower()
            exists = await self._has_table(table_name)
            self.report.add(f"Table {table_name} exists: {'yes' if exists else 'no'}", exists)

    async def check_basic_operations(self) -> None:
        for label in MODEL_CLASSES:
            model = self._models.get(label)
            name = model.__name__ if model is not None else label
            if model is None or self.db is None:
                self.report.add(f"count({name}) failed: model or session unavailable", False)
                continue
            try:
                result = await self.db.execute(select(func.count()).select_from(model))
                count = result.scalar_one()
                self.report.add(f"count({name}) successful: yes ({count} rows)")
            except SQLAlchemyError as e:
                await self._rollback()
                self.report.add(f"count({name}) failed: {getattr(e, 'orig', None) or e}", False)

    async def check_processors(self) -> None:
        registry = self._get_registry()
        available = registry is not None and len(registry) > 0
        self.report.add(f"Processor registry available: {'yes' if available else 'no'}", available)

        if not available:
            return

        for label, action in FIELD_PROCESSOR_ACTIONS.items():
            found = registry.has(action)
            self.report.add(
                f"{label} field processor registered ({action}): {'found' if found else 'not found'}",
                found,
            )

    # ── Helpers ───────────────────────────────────────────────────────────────

    def _get_registry(self):
        if self._registry is not None:
            return self._registry
        try:
            from extrafields.processors import processor_registry
        except ImportError as e:
            logger.error(f"Could not import processors: {e}")
            return None
        return processor_registry

    async def _has_table(self, table_name: str) -> bool:
        if self.db is None:
            return False
        try:
            connection = await self.db.connection()
            return await connection.run_sync(lambda sync_conn: inspect(sync_conn).has_table(table_name))
        except SQLAlchemyError as e:
            logger.error(f"Could not inspect table {table_name}: {e}")
            await self._rollback()
            return False

    async def _rollback(self) -> None:
        try:
            await self.db.rollback()
        except SQLAlchemyError as e:
            logger.warning(f"Rollback after failed diagnostics query failed: {e}")
