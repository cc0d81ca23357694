from pydantic import BaseModel


class ValueUpdate(BaseModel):
    value: str = ""


class ValueResponse(BaseModel):
    field_id: int
    resource_id: int
    value: str


class DiagnosticsResponse(BaseModel):
    ok: bool
    log: list[str]
