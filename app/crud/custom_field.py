#app/crud/custom_field.py
import logging
from datetime import date
from typing import List
from sqlalchemy.orm import Session
from app.models.custom_field import CustomField, CustomFieldValue, CustomFieldType
from app.models.project import Project
from app.models.task import Task
from app.core.exceptions import CustomFieldNotFound, CustomFieldValidationError

logger = logging.getLogger("Taskboard.CustomFields")

def _is_number(value: str) -> bool:
    try:
        float(value)
        return True
    except ValueError:
        return False

def _is_date(value: str) -> bool:
    try:
        date.fromisoformat(value[:10])
        return True
    except ValueError:
        return False

VALUE_VALIDATORS = {
    CustomFieldType.TEXT.value: lambda field, v: True,
    CustomFieldType.NUMBER.value: lambda field, v: _is_number(v),
    CustomFieldType.DATE.value: lambda field, v: _is_date(v),
    CustomFieldType.CHECKBOX.value: lambda field, v: v.lower() in ("true", "false"),
    CustomFieldType.DROPDOWN.value: lambda field, v: v in field.option_list,
}

def get_custom_fields(db: Session, project_id: int) -> List[CustomField]:
    return db.query(CustomField).filter(CustomField.project_id == project_id).order_by(CustomField.id).all()

def create_custom_field(db: Session, project: Project, data: dict) -> CustomField:
    """
    Создать кастомное поле проекта. DROPDOWN требует непустой список вариантов.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise CustomFieldValidationError("Field name is required.")
    field_type = getattr(data.get("type"), "value", data.get("type"))
    if field_type not in VALUE_VALIDATORS:
        raise CustomFieldValidationError(f"Unknown field type: {field_type}")

    field = CustomField(
        project_id=project.id,
        name=name,
        type=field_type,
        options=data.get("options"),
        required=bool(data.get("required", False)),
    )
    if field_type == CustomFieldType.DROPDOWN.value and not field.option_list:
        raise CustomFieldValidationError("Dropdown field requires options.")
    db.add(field)
    db.commit()
    logger.info(f"Created custom field {field.id} ({field_type}) in project {project.id}")
    return field

def get_project_field(db: Session, task: Task, field_id: int) -> CustomField:
    """
    Поле должно принадлежать проекту задачи.
    """
    field = (
        db.query(CustomField)
        .filter(CustomField.id == field_id, CustomField.project_id == task.project_id)
        .first()
    )
    if not field:
        raise CustomFieldNotFound()
    return field

def get_value(db: Session, task: Task, field_id: int) -> CustomFieldValue:
    get_project_field(db, task, field_id)
    value = (
        db.query(CustomFieldValue)
        .filter(CustomFieldValue.task_id == task.id, CustomFieldValue.field_id == field_id)
        .first()
    )
    if not value:
        raise CustomFieldNotFound("Custom field value not found")
    return value

def set_value(db: Session, task: Task, field_id: int, raw_value: str) -> CustomFieldValue:
    """
    Upsert значения поля для задачи (одна запись на пару задача/поле).
    """
    field = get_project_field(db, task, field_id)
    value = "" if raw_value is None else str(raw_value)
    if value and not VALUE_VALIDATORS[field.type](field, value):
        raise CustomFieldValidationError(f"Invalid value for {field.type} field '{field.name}': {value}")
    if field.required and not value:
        raise CustomFieldValidationError(f"Field '{field.name}' is required.")

    record = (
        db.query(CustomFieldValue)
        .filter(CustomFieldValue.task_id == task.id, CustomFieldValue.field_id == field.id)
        .first()
    )
    if record:
        record.value = value
    else:
        record = CustomFieldValue(task_id=task.id, field_id=field.id, value=value)
        db.add(record)
    db.commit()
    logger.info(f"Set custom field {field.id} on task {task.id}")
    return record

def delete_value(db: Session, task: Task, field_id: int) -> None:
    record = get_value(db, task, field_id)
    db.delete(record)
    db.commit()
    logger.info(f"Deleted custom field {field_id} value on task {task.id}")
