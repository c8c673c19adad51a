#app/models/custom_field.py
import enum
from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.models.base import Base

class CustomFieldType(str, enum.Enum):
    TEXT = "TEXT"
    NUMBER = "NUMBER"
    DATE = "DATE"
    DROPDOWN = "DROPDOWN"
    CHECKBOX = "CHECKBOX"

class CustomField(Base):
    """
    CustomField — определение дополнительного поля задач в рамках проекта.
    """
    __tablename__ = "custom_fields"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    project_id: int = Column(Integer, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name: str = Column(String(128), nullable=False, doc="Название поля")
    type: str = Column(String(16), nullable=False, doc="TEXT, NUMBER, DATE, DROPDOWN, CHECKBOX")
    options: str = Column(Text, nullable=True, doc="Варианты для DROPDOWN через запятую")
    required: bool = Column(Boolean, default=False, nullable=False)

    project = relationship("Project", back_populates="custom_fields")
    values = relationship("CustomFieldValue", back_populates="field", cascade="all, delete-orphan")

    @property
    def option_list(self):
        if not self.options:
            return []
        return [o.strip() for o in self.options.split(",") if o.strip()]

class CustomFieldValue(Base):
    """
    CustomFieldValue — значение кастомного поля для конкретной задачи (строкой).
    """
    __tablename__ = "custom_field_values"

    id: int = Column(Integer, primary_key=True, autoincrement=True)
    task_id: int = Column(Integer, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    field_id: int = Column(Integer, ForeignKey("custom_fields.id", ondelete="CASCADE"), nullable=False, index=True)
    value: str = Column(Text, nullable=False, default="")

    task = relationship("Task", back_populates="custom_field_values")
    field = relationship("CustomField", back_populates="values")

    __table_args__ = (
        UniqueConstraint("task_id", "field_id", name="uq_custom_field_values_task_field"),
    )
