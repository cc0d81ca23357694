"""Per-resource values of custom fields."""

from sqlalchemy import Column, ForeignKey, Integer, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from extrafields.database import Base

VALUES_TABLE = "extrafields_values"


class FieldValue(Base):
    """Text stored for one (field, resource) pair."""

    __tablename__ = VALUES_TABLE
    __table_args__ = (UniqueConstraint("field_id", "resource_id", name="uq_extrafields_values_field_resource"),)

    id = Column(Integer, primary_key=True, index=True)
    field_id = Column(
        Integer,
        ForeignKey("extrafields_fields.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    resource_id = Column(Integer, nullable=False, index=True)
    value = Column(Text, nullable=False, default="")

    field = relationship("Field", back_populates="values")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "field_id": self.field_id,
            "resource_id": self.resource_id,
            "value": self.value,
        }

    def __repr__(self):
        return f"<FieldValue field={self.field_id} resource={self.resource_id}>"
