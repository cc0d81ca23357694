"""Diagnostics processor: runs the self-check for the admin UI."""

from extrafields.processors.base import Processor
from extrafields.processors.result import ProcessorResult
from extrafields.services.diagnostics_service import Diagnostics


class DiagnosticsRunProcessor(Processor):
    object_type = "extrafields.diagnostics"
    error_key = "extrafields.diagnostics_err"

    async def process(self) -> ProcessorResult:
        report = await Diagnostics(self.host).run()
        message = "" if report.ok else self.host.lexicon(self.error_key)
        obj = report.to_dict()
        obj["text"] = report.as_text()
        return self.success(message, obj)
