"""Field-level merging of duplicate entities.

A merge session is an immutable value: every transition returns a new
session, so a caller can keep the previous one around (for undo) and no two
callers ever share mutable merge state.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from campaign_parser.entities.fields import coerce_field_value, has_value, is_enum_field
from campaign_parser.entities.schema import BaseEntity, EntityKind
from campaign_parser.ner.errors import InsufficientEntitiesError, MergeError

logger = logging.getLogger(__name__)

# Identity fields are always taken from the primary entity
IDENTITY_FIELDS = {"id", "kind"}


class MergeState(str, Enum):
    """Lifecycle of a merge session."""

    SELECTING_PRIMARY = "selecting_primary"
    EDITING_FIELDS = "editing_fields"
    PREVIEWING = "previewing"
    APPLIED = "applied"
    CANCELLED = "cancelled"


class FieldCandidate(BaseModel):
    """One group member's value for a field under merge."""

    entity_id: str
    entity_title: str
    value: Any


class CandidateChoice(BaseModel):
    """Use the value contributed by a specific group member."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["candidate"] = "candidate"
    entity_id: str


class CustomValue(BaseModel):
    """Use a value typed by the user."""

    model_config = ConfigDict(frozen=True)

    mode: Literal["custom"] = "custom"
    value: Any


FieldResolution = Union[CandidateChoice, CustomValue]


class MergeSession(BaseModel):
    """Resolution state for merging one group of duplicates."""

    model_config = ConfigDict(frozen=True)

    entities: tuple[BaseEntity, ...]
    primary_id: str
    resolutions: dict[str, FieldResolution] = Field(default_factory=dict)
    state: MergeState = MergeState.SELECTING_PRIMARY

    # Queries

    @property
    def kind(self) -> EntityKind:
        return self.primary.kind

    @property
    def is_active(self) -> bool:
        return self.state not in (MergeState.APPLIED, MergeState.CANCELLED)

    @property
    def primary(self) -> BaseEntity:
        return self.get_entity(self.primary_id)

    def get_entity(self, entity_id: str) -> BaseEntity:
        for entity in self.entities:
            if entity.id == entity_id:
                return entity
        raise MergeError(f"entity {entity_id!r} is not part of this merge")

    def mergeable_fields(self) -> list[str]:
        """Fields with a value on at least one member, in model order."""
        fields: dict[str, None] = {}
        for entity in self.entities:
            for name in type(entity).model_fields:
                if name not in IDENTITY_FIELDS and has_value(getattr(entity, name, None)):
                    fields.setdefault(name)
        return list(fields)

    def field_candidates(self, field: str) -> list[FieldCandidate]:
        """Values for a field from every member that has one."""
        return [
            FieldCandidate(
                entity_id=entity.id,
                entity_title=entity.title,
                value=getattr(entity, field),
            )
            for entity in self.entities
            if has_value(getattr(entity, field, None))
        ]

    def conflicting_fields(self) -> list[str]:
        """Fields offered to the user: two or more distinct present values.

        Any other field keeps the primary entity's own value.
        """
        conflicting = []
        for field in self.mergeable_fields():
            distinct: list[Any] = []
            for candidate in self.field_candidates(field):
                if candidate.value not in distinct:
                    distinct.append(candidate.value)
            if len(distinct) > 1:
                conflicting.append(field)
        return conflicting

    def allows_custom(self, field: str) -> bool:
        """Whether a custom value may be typed for the field."""
        return not is_enum_field(self.kind, field)

    def removable_ids(self) -> list[str]:
        """Ids of every member other than the primary, in group order."""
        return [entity.id for entity in self.entities if entity.id != self.primary_id]

    def merged_entity(self) -> BaseEntity:
        """The primary entity with every field resolution applied."""
        primary = self.primary
        data = primary.model_dump()

        for field, resolution in self.resolutions.items():
            if isinstance(resolution, CandidateChoice):
                data[field] = getattr(self.get_entity(resolution.entity_id), field)
            else:
                data[field] = resolution.value

        data["id"] = primary.id
        data["kind"] = primary.kind

        try:
            return type(primary).model_validate(data)
        except ValidationError as e:
            raise MergeError(f"merged entity is invalid: {e}") from e

    # Transitions

    def select_primary(self, entity_id: str) -> "MergeSession":
        """Choose the member that survives the merge.

        Field resolutions made so far are kept.
        """
        self._require_active()
        self.get_entity(entity_id)
        state = (
            MergeState.SELECTING_PRIMARY
            if self.state == MergeState.SELECTING_PRIMARY
            else MergeState.EDITING_FIELDS
        )
        return self.model_copy(update={"primary_id": entity_id, "state": state})

    def choose_candidate(self, field: str, entity_id: str) -> "MergeSession":
        """Resolve a conflicting field with one member's value.

        Only fields listed by ``conflicting_fields`` can be chosen; any other
        field keeps the primary's value. Replaces any custom value typed for
        this field.
        """
        self._require_active()
        self._require_conflicting(field)
        if not has_value(getattr(self.get_entity(entity_id), field, None)):
            raise MergeError(f"entity {entity_id!r} has no value for {field!r}")
        return self._with_resolution(field, CandidateChoice(entity_id=entity_id))

    def set_custom_value(self, field: str, value: Any) -> "MergeSession":
        """Resolve a field with a user-supplied value.

        Raises:
            MergeError: If the field is enumerated, or the value cannot be
                stored in the field.
        """
        self._require_active()
        if field in IDENTITY_FIELDS or not self.allows_custom(field):
            raise MergeError(f"field {field!r} only accepts one of its options")

        try:
            coerced = coerce_field_value(self.kind, field, value)
        except ValueError as e:
            raise MergeError(f"invalid value for {field!r}: {e}") from e

        session = self._with_resolution(field, CustomValue(value=coerced))
        # Fail here rather than at apply time
        session.merged_entity()
        return session

    def clear_resolution(self, field: str) -> "MergeSession":
        """Drop the resolution for a field, falling back to the primary's value."""
        self._require_active()
        resolutions = {k: v for k, v in self.resolutions.items() if k != field}
        return self.model_copy(
            update={"resolutions": resolutions, "state": MergeState.EDITING_FIELDS}
        )

    def preview(self) -> "MergeSession":
        """Move to the preview step; see ``merged_entity`` for the result."""
        self._require_active()
        self.merged_entity()
        return self.model_copy(update={"state": MergeState.PREVIEWING})

    def apply(self) -> "MergeResult":
        """Finish the merge.

        Returns:
            MergeResult with the merged entity and the ids the caller may
            now remove. Nothing outside the session is changed.
        """
        self._require_active()
        merged = self.merged_entity()
        removable = self.removable_ids()
        logger.info(
            "Merged %d %s entities into %r (%s)",
            len(self.entities),
            self.kind.value,
            merged.title,
            merged.id,
        )
        return MergeResult(
            merged_entity=merged,
            removable_ids=removable,
            session=self.model_copy(update={"state": MergeState.APPLIED}),
        )

    def cancel(self) -> "MergeSession":
        """Abandon the merge and discard every resolution."""
        self._require_active()
        return self.model_copy(
            update={"resolutions": {}, "state": MergeState.CANCELLED}
        )

    def _with_resolution(self, field: str, resolution: FieldResolution) -> "MergeSession":
        resolutions = {**self.resolutions, field: resolution}
        return self.model_copy(
            update={"resolutions": resolutions, "state": MergeState.EDITING_FIELDS}
        )

    def _require_active(self) -> None:
        if not self.is_active:
            raise MergeError(f"merge session is already {self.state.value}")

    def _require_conflicting(self, field: str) -> None:
        if field in IDENTITY_FIELDS or field not in self.conflicting_fields():
            raise MergeError(f"field {field!r} has no conflicting values to choose from")


@dataclass(frozen=True)
class MergeResult:
    """Outcome of an applied merge."""

    merged_entity: BaseEntity
    removable_ids: list[str]
    session: MergeSession


def begin_merge(group: list[BaseEntity], primary_id: Optional[str] = None) -> MergeSession:
    """Start merging a group of entities believed to be the same.

    Args:
        group: Entities with ids, all of one kind.
        primary_id: Member to keep. Defaults to the first member.

    Raises:
        InsufficientEntitiesError: If fewer than two entities are given.
        MergeError: If entities lack ids, repeat an id, or mix kinds.
    """
    if len(group) < 2:
        raise InsufficientEntitiesError(len(group))

    ids = [entity.id for entity in group]
    if any(entity_id is None for entity_id in ids):
        raise MergeError("every entity needs an id before merging")
    if len(set(ids)) != len(ids):
        raise MergeError("entity ids in a merge group must be unique")
    if len({entity.kind for entity in group}) > 1:
        raise MergeError("cannot merge entities of different kinds")

    session = MergeSession(entities=tuple(group), primary_id=ids[0])
    if primary_id is not None:
        session = session.select_primary(primary_id)
    return session


def apply_merge(session: MergeSession) -> MergeResult:
    return session.apply()


def apply_merge_to_entities(
    entities: list[BaseEntity], result: MergeResult
) -> list[BaseEntity]:
    """Update a working entity list with a merge result.

    Removable entities are dropped and the primary is replaced in place
    (appended if it is no longer in the list). The input list is not
    modified.
    """
    removable = set(result.removable_ids)
    merged = result.merged_entity

    updated = [entity for entity in entities if entity.id not in removable]
    for index, entity in enumerate(updated):
        if entity.id == merged.id:
            updated[index] = merged
            break
    else:
        updated.append(merged)
    return updated
