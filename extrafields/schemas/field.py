from pydantic import BaseModel, Field


class FieldCreate(BaseModel):
    name: str = Field(..., max_length=100)
    description: str = ""
    rank: int = 0


class FieldUpdate(BaseModel):
    name: str = Field(..., max_length=100)
    description: str | None = None
    rank: int | None = None


class FieldResponse(BaseModel):
    id: int
    name: str
    description: str
    rank: int

    model_config = {"from_attributes": True}
