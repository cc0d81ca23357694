"""Custom field definitions."""

from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import relationship

from extrafields.database import Base

FIELDS_TABLE = "extrafields_fields"


class Field(Base):
    """Administrator-defined text slot that holds one value per resource."""

    __tablename__ = FIELDS_TABLE

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    rank = Column(Integer, nullable=False, default=0)

    values = relationship(
        "FieldValue",
        back_populates="field",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "rank": self.rank,
        }

    def __repr__(self):
        return f"<Field {self.id}: {self.name!r} (rank {self.rank})>"
