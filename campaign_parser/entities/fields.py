"""Per-kind field configuration derived from the entity models."""

from enum import Enum
from functools import lru_cache
from typing import Any, Optional, Union, get_args, get_origin

from pydantic import BaseModel

from campaign_parser.entities.schema import ENTITY_MODELS, EntityKind


class FieldType(str, Enum):
    """How a field is edited."""

    TEXT = "text"
    TEXTAREA = "textarea"
    SELECT = "select"  # Enumerated, pick one of `options`
    CHECKBOX = "checkbox"
    NUMBER = "number"
    LIST = "list"  # Comma separated when typed by hand


class FieldConfig(BaseModel):
    """Editing metadata for one entity field."""

    key: str
    label: str
    type: FieldType
    options: Optional[list[str]] = None

    @property
    def allows_custom(self) -> bool:
        """Whether a free-form value may be typed for this field."""
        return self.type not in (FieldType.SELECT, FieldType.CHECKBOX)


# Never editable
SKIPPED_FIELDS = {"id", "kind"}

TEXTAREA_FIELDS = {"brief_synopsis", "full_summary", "prep_notes"}

# Plain string fields that still have a fixed set of options
SELECT_OVERRIDES: dict[tuple[EntityKind, str], list[str]] = {
    (EntityKind.QUEST, "status"): ["active", "completed", "failed", "available"],
}

LABEL_OVERRIDES: dict[str, str] = {
    "character_class": "Class",
    "cr": "CR",
    "attunement": "Requires Attunement",
}

KIND_LABEL_OVERRIDES: dict[tuple[EntityKind, str], str] = {
    (EntityKind.QUEST, "owner"): "Quest Giver",
}


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) is Union:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def _infer_field(kind: EntityKind, key: str, annotation: Any) -> FieldConfig:
    label = KIND_LABEL_OVERRIDES.get(
        (kind, key), LABEL_OVERRIDES.get(key, key.replace("_", " ").title())
    )

    if (kind, key) in SELECT_OVERRIDES:
        return FieldConfig(
            key=key,
            label=label,
            type=FieldType.SELECT,
            options=SELECT_OVERRIDES[(kind, key)],
        )

    inner = _unwrap_optional(annotation)

    if isinstance(inner, type) and issubclass(inner, Enum):
        return FieldConfig(
            key=key,
            label=label,
            type=FieldType.SELECT,
            options=[member.value for member in inner],
        )
    if inner is bool:
        return FieldConfig(key=key, label=label, type=FieldType.CHECKBOX)
    if inner is int:
        return FieldConfig(key=key, label=label, type=FieldType.NUMBER)
    if get_origin(inner) is list:
        return FieldConfig(key=key, label=label, type=FieldType.LIST)
    if key in TEXTAREA_FIELDS:
        return FieldConfig(key=key, label=label, type=FieldType.TEXTAREA)
    return FieldConfig(key=key, label=label, type=FieldType.TEXT)


@lru_cache
def fields_for_kind(kind: EntityKind) -> tuple[FieldConfig, ...]:
    """Get the editable fields for an entity kind, in model order."""
    model = ENTITY_MODELS[kind]
    return tuple(
        _infer_field(kind, key, info.annotation)
        for key, info in model.model_fields.items()
        if key not in SKIPPED_FIELDS
    )


def get_field(kind: EntityKind, key: str) -> Optional[FieldConfig]:
    for field in fields_for_kind(kind):
        if field.key == key:
            return field
    return None


def is_enum_field(kind: EntityKind, key: str) -> bool:
    """Check whether a field only accepts one of a fixed set of values.

    ``kind`` itself always counts as enumerated.
    """
    if key == "kind":
        return True
    field = get_field(kind, key)
    return field is not None and not field.allows_custom


def has_value(value: Any) -> bool:
    """Check whether a field value counts as present."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple, set)) and len(value) == 0:
        return False
    return True


def coerce_field_value(kind: EntityKind, key: str, raw: Any) -> Any:
    """Convert a hand-typed value to the field's storage form.

    Raises:
        ValueError: If the value cannot be converted.
    """
    field = get_field(kind, key)
    if field is None or not isinstance(raw, str):
        return raw

    if field.type == FieldType.LIST:
        return [part.strip() for part in raw.split(",") if part.strip()]
    if field.type == FieldType.NUMBER:
        return int(raw.strip())
    return raw
