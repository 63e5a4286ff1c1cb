"""Duplicate detection by kind and normalized title."""

from campaign_parser.entities.schema import BaseEntity


def duplicate_key(entity: BaseEntity) -> str:
    """Grouping key: kind plus trimmed, lowercased title."""
    return f"{entity.kind.value}-{entity.normalized_title}"


def group_by_key(entities: list[BaseEntity]) -> dict[str, list[BaseEntity]]:
    """Partition entities by duplicate key, keeping first-seen order."""
    groups: dict[str, list[BaseEntity]] = {}
    for entity in entities:
        groups.setdefault(duplicate_key(entity), []).append(entity)
    return groups


def find_duplicate_groups(entities: list[BaseEntity]) -> list[list[BaseEntity]]:
    """Get every group of two or more entities sharing kind and title.

    Only exact matches on the normalized title count; "Durnan" and
    " durnan " are duplicates, "Durnan" and "Durnan the Barkeep" are not.

    Args:
        entities: Entities to check, usually with ids assigned.

    Returns:
        Duplicate groups in order of each group's first member.
    """
    return [group for group in group_by_key(entities).values() if len(group) > 1]


def duplicate_entities(entities: list[BaseEntity]) -> list[BaseEntity]:
    """All members of all duplicate groups, flattened."""
    return [entity for group in find_duplicate_groups(entities) for entity in group]


def duplicate_ids(entities: list[BaseEntity]) -> set[str]:
    """Ids of every entity that has at least one duplicate."""
    return {entity.id for entity in duplicate_entities(entities) if entity.id is not None}
