"""Completeness checks for campaign entities."""

from campaign_parser.entities.fields import has_value
from campaign_parser.entities.schema import BaseEntity, EntityKind

REQUIRED_FIELDS: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.NPC: ("title", "role"),
    EntityKind.LOCATION: ("title", "type"),
    EntityKind.ITEM: ("title", "type"),
    EntityKind.QUEST: ("title", "status"),
    EntityKind.PLAYER: ("title", "character_name"),
    EntityKind.SESSION_SUMMARY: ("title", "session_number"),
    EntityKind.SESSION_PREP: ("title",),
}


def is_field_required(kind: EntityKind, key: str) -> bool:
    return key in REQUIRED_FIELDS.get(kind, ("title",))


def missing_fields(entity: BaseEntity) -> list[str]:
    """List the required fields an entity has no value for.

    Extracted candidates are usually incomplete (an NPC found by name alone
    has no role yet); callers use this to flag entities for review.
    """
    return [
        key
        for key in REQUIRED_FIELDS.get(entity.kind, ("title",))
        if not has_value(getattr(entity, key, None))
    ]


def is_entity_complete(entity: BaseEntity) -> bool:
    return not missing_fields(entity)
