"""Campaign entity schema definitions."""

from enum import Enum
from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EntityKind(str, Enum):
    """Kinds of campaign entities."""

    NPC = "npc"  # Non-player characters
    LOCATION = "location"  # Places and venues
    ITEM = "item"  # Equipment, weapons, magic items
    QUEST = "quest"  # Missions and objectives
    PLAYER = "player"  # Player characters
    SESSION_SUMMARY = "session_summary"  # Record of a played session
    SESSION_PREP = "session_prep"  # Notes for an upcoming session


class LocationType(str, Enum):
    """Types of locations."""

    CITY = "city"
    TOWN = "town"
    VILLAGE = "village"
    DUNGEON = "dungeon"
    TAVERN = "tavern"
    SHOP = "shop"
    TEMPLE = "temple"
    LANDMARK = "landmark"
    WILDERNESS = "wilderness"


class ItemType(str, Enum):
    """Types of items."""

    WEAPON = "weapon"
    ARMOR = "armor"
    SHIELD = "shield"
    CONSUMABLE = "consumable"
    TOOL = "tool"
    ADVENTURING_GEAR = "adventuring_gear"
    TREASURE = "treasure"
    MAGIC_ITEM = "magic_item"


class ItemRarity(str, Enum):
    """Item rarity tiers."""

    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    VERY_RARE = "very_rare"
    LEGENDARY = "legendary"
    ARTIFACT = "artifact"


class QuestType(str, Enum):
    """Types of quests."""

    MAIN = "main"
    SIDE = "side"
    PERSONAL = "personal"


class Importance(str, Enum):
    """How central an NPC is to the campaign."""

    MINOR = "minor"
    SUPPORTING = "supporting"
    MAJOR = "major"


class BaseEntity(BaseModel):
    """Fields shared by every campaign entity."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None  # Assigned per extraction run, e.g. "npc-0"
    kind: EntityKind
    title: str
    tags: Optional[list[str]] = None
    source_sessions: Optional[list[int]] = Field(default=None, alias="sourceSessions")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("title must not be empty")
        return value

    @property
    def normalized_title(self) -> str:
        return self.title.strip().lower()


class NPC(BaseEntity):
    """Non-player character."""

    kind: Literal[EntityKind.NPC] = EntityKind.NPC
    role: Optional[str] = None
    faction: Optional[str] = None
    status: Optional[str] = None
    importance: Optional[Importance] = None
    aliases: Optional[list[str]] = None
    location: Optional[str] = None
    character_class: Optional[str] = Field(default=None, alias="class")
    race: Optional[str] = None
    cr: Optional[str] = Field(default=None, alias="CR")


class Location(BaseEntity):
    """A place in the campaign world."""

    kind: Literal[EntityKind.LOCATION] = EntityKind.LOCATION
    region: Optional[str] = None
    type: Optional[LocationType] = None
    faction_presence: Optional[list[str]] = None
    status: Optional[str] = None


class Item(BaseEntity):
    """An object, weapon, or piece of treasure."""

    kind: Literal[EntityKind.ITEM] = EntityKind.ITEM
    type: Optional[ItemType] = None
    rarity: Optional[ItemRarity] = None
    attunement: Optional[bool] = None
    owner: Optional[str] = None
    status: Optional[str] = None


class Quest(BaseEntity):
    """A quest or storyline objective."""

    kind: Literal[EntityKind.QUEST] = EntityKind.QUEST
    status: Optional[str] = None  # active, completed, failed, available
    owner: Optional[str] = None  # Quest giver
    faction: Optional[str] = None
    arc: Optional[str] = None
    type: Optional[QuestType] = None


class Player(BaseEntity):
    """A player character."""

    kind: Literal[EntityKind.PLAYER] = EntityKind.PLAYER
    status: Optional[str] = None
    player_name: Optional[str] = None
    character_name: Optional[str] = None
    race: Optional[str] = None
    character_class: Optional[str] = Field(default=None, alias="class")
    level: Optional[int] = None
    background: Optional[str] = None
    affiliations: Optional[list[str]] = None
    aliases: Optional[list[str]] = None


class SessionSummary(BaseEntity):
    """Record of a played session."""

    kind: Literal[EntityKind.SESSION_SUMMARY] = EntityKind.SESSION_SUMMARY
    session_date: Optional[str] = None
    session_number: Optional[int] = None
    arc: Optional[str] = None
    status: Optional[str] = None  # complete, draft
    brief_synopsis: Optional[str] = None
    full_summary: Optional[str] = None
    consequences: Optional[list[str]] = None
    foreshadowing: Optional[list[str]] = None
    threads_updated: Optional[list[str]] = None


class SessionPrep(BaseEntity):
    """Preparation notes for an upcoming session."""

    kind: Literal[EntityKind.SESSION_PREP] = EntityKind.SESSION_PREP
    session_date: Optional[str] = None
    status: Optional[str] = None
    arc: Optional[str] = None
    objectives: Optional[list[str]] = None
    prep_notes: Optional[str] = None


AnyEntity = Union[NPC, Location, Item, Quest, Player, SessionSummary, SessionPrep]

ENTITY_MODELS: dict[EntityKind, type[BaseEntity]] = {
    EntityKind.NPC: NPC,
    EntityKind.LOCATION: Location,
    EntityKind.ITEM: Item,
    EntityKind.QUEST: Quest,
    EntityKind.PLAYER: Player,
    EntityKind.SESSION_SUMMARY: SessionSummary,
    EntityKind.SESSION_PREP: SessionPrep,
}

