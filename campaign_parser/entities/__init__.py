"""Campaign entity models and field metadata."""

from campaign_parser.entities.fields import (
    FieldConfig,
    FieldType,
    fields_for_kind,
    is_enum_field,
)
from campaign_parser.entities.schema import (
    NPC,
    AnyEntity,
    BaseEntity,
    EntityKind,
    Importance,
    Item,
    ItemRarity,
    ItemType,
    Location,
    LocationType,
    Player,
    Quest,
    QuestType,
    SessionPrep,
    SessionSummary,
)
from campaign_parser.entities.validation import is_entity_complete, missing_fields

__all__ = [
    # Models
    "AnyEntity",
    "BaseEntity",
    "NPC",
    "Location",
    "Item",
    "Quest",
    "Player",
    "SessionSummary",
    "SessionPrep",
    # Enums
    "EntityKind",
    "Importance",
    "ItemRarity",
    "ItemType",
    "LocationType",
    "QuestType",
    # Field metadata
    "FieldConfig",
    "FieldType",
    "fields_for_kind",
    "is_enum_field",
    # Validation
    "is_entity_complete",
    "missing_fields",
]
