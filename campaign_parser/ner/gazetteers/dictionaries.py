"""Immutable term dictionaries consumed by the extractors."""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from campaign_parser.entities.schema import ItemType, LocationType


class RoleOverride(BaseModel):
    """A hand-authored role for a specific NPC."""

    model_config = ConfigDict(frozen=True)

    name: str
    role: str


class LocationKeyword(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword: str
    type: LocationType


class ItemKeyword(BaseModel):
    model_config = ConfigDict(frozen=True)

    keyword: str
    type: ItemType


class TermDictionaries(BaseModel):
    """Known names and keyword vocabularies.

    Sequences are tuples so a loaded instance cannot be changed by the
    extractors that share it. Order is significant for every first-match
    lookup.
    """

    model_config = ConfigDict(frozen=True)

    npcs: tuple[str, ...] = ()
    npc_roles: tuple[RoleOverride, ...] = ()
    locations: tuple[str, ...] = ()
    roles: tuple[str, ...] = ()
    location_types: tuple[LocationKeyword, ...] = ()
    item_types: tuple[ItemKeyword, ...] = ()
    item_keywords: tuple[tuple[str, ...], ...] = ()
    quest_verbs: tuple[str, ...] = ()
    common_words: frozenset[str] = frozenset()
    non_person_words: frozenset[str] = frozenset()
    item_stop_words: frozenset[str] = frozenset()

    def known_role(self, name: str) -> Optional[str]:
        for override in self.npc_roles:
            if override.name == name:
                return override.role
        return None

    def is_common_word(self, word: str) -> bool:
        return word.lower() in self.common_words
