"""Tests for the candidate extractors."""

import pytest

from campaign_parser.entities.schema import EntityKind, ItemType, LocationType
from campaign_parser.ner.config import ExtractionConfig
from campaign_parser.ner.extractors import (
    ItemExtractor,
    LocationExtractor,
    MentionDetector,
    NPCExtractor,
    QuestExtractor,
)
from campaign_parser.ner.extractors.mentions import plain_analysis, split_sentences
from campaign_parser.ner.gazetteers import TermDictionaries
from campaign_parser.ner.models import TextAnalysis


def analysis_with(text, people=(), places=()):
    return TextAnalysis(
        sentences=split_sentences(text),
        people=list(people),
        places=list(places),
    )


class TestMentionDetector:
    """Test SpaCy mention detection."""

    def test_adds_sentencizer(self, nlp):
        detector = MentionDetector(nlp=nlp)
        assert detector.nlp.has_pipe("sentencizer")

    def test_people_and_places(self, nlp):
        detector = MentionDetector(nlp=nlp)
        text = "Mirt met us.\nWe rode to Neverwinter. Mirt waved from the Yawning Portal."

        analysis = detector.analyze(text)

        assert analysis.people == ["Mirt"]
        assert analysis.places == ["Neverwinter", "Yawning Portal"]
        assert analysis.sentences == [
            "Mirt met us.",
            "We rode to Neverwinter.",
            "Mirt waved from the Yawning Portal.",
        ]

    def test_plain_analysis(self):
        analysis = plain_analysis("# Heading\nFirst one. Second one!")
        assert analysis.sentences == ["# Heading", "First one.", "Second one!"]
        assert analysis.people == []
        assert analysis.places == []


class TestNPCExtractor:
    """Test NPC extraction."""

    @pytest.fixture
    def extractor(self):
        return NPCExtractor()

    def test_known_npc_with_override_role(self, extractor, dictionaries):
        text = "Durnan the barkeep poured ale."
        npcs = extractor.extract(text, plain_analysis(text), dictionaries)

        assert len(npcs) == 1
        assert npcs[0].kind == EntityKind.NPC
        assert npcs[0].title == "Durnan"
        assert npcs[0].role == "barkeep"

    def test_override_beats_context(self, extractor, dictionaries):
        text = "Volo the guard laughed."
        npcs = extractor.extract(text, plain_analysis(text), dictionaries)
        assert npcs[0].role == "merchant"

    def test_role_from_context(self, extractor, dictionaries):
        text = "Teddy, the proprietor of the stall, waved."
        npcs = extractor.extract(text, plain_analysis(text), dictionaries)
        assert npcs[0].title == "Teddy"
        assert npcs[0].role == "proprietor"

    def test_no_role(self, extractor, dictionaries):
        text = "Hastur watched silently."
        npcs = extractor.extract(text, plain_analysis(text), dictionaries)
        assert npcs[0].role is None

    def test_session_reference(self, extractor, dictionaries):
        text = "Durnan nodded."
        with_session = extractor.extract(text, plain_analysis(text), dictionaries, 3)
        without_session = extractor.extract(text, plain_analysis(text), dictionaries)

        assert with_session[0].source_sessions == [3]
        assert without_session[0].source_sessions is None

    def test_discovery_gates(self, extractor, dictionaries):
        text = (
            "Mirt the noble spoke with Volothamp Geddarm. "
            "Volothamp Geddarn laughed. Jo left. Detailed Notes follow. Synopsis"
        )
        analysis = analysis_with(
            text,
            people=["Mirt,", "Synopsis", "Volothamp Geddarn", "Jo", "Detailed Notes", "Ghost"],
        )

        npcs = extractor.extract(text, analysis, dictionaries)

        assert [npc.title for npc in npcs] == ["Volothamp Geddarm", "Mirt"]
        assert npcs[0].role == "merchant"
        assert npcs[1].role == "noble"

    def test_discovered_duplicate_of_known(self, extractor, dictionaries):
        text = "Durnan poured. Durnan smiled."
        analysis = analysis_with(text, people=["Durnan"])
        npcs = extractor.extract(text, analysis, dictionaries)
        assert [npc.title for npc in npcs] == ["Durnan"]

    def test_similarity_threshold_configurable(self, dictionaries):
        text = "Volothamp Geddarm met Volothamp Geddarn."
        analysis = analysis_with(text, people=["Volothamp Geddarn"])

        strict = NPCExtractor(ExtractionConfig(discovery_similarity_threshold=100))
        npcs = strict.extract(text, analysis, dictionaries)

        assert [npc.title for npc in npcs] == ["Volothamp Geddarm", "Volothamp Geddarn"]

    def test_no_dictionaries(self, extractor):
        text = "Durnan poured ale."
        assert extractor.extract(text, plain_analysis(text), TermDictionaries()) == []


class TestLocationExtractor:
    """Test location extraction."""

    @pytest.fixture
    def extractor(self):
        return LocationExtractor()

    def test_known_location_type(self, extractor, dictionaries):
        text = "They drank at the Yawning Portal, a famous tavern."
        locations = extractor.extract(text, plain_analysis(text), dictionaries)

        assert len(locations) == 1
        assert locations[0].kind == EntityKind.LOCATION
        assert locations[0].title == "Yawning Portal"
        assert locations[0].type == LocationType.TAVERN

    def test_keyword_at_word_start(self, extractor, dictionaries):
        # "inn" inside "beginning" does not make a tavern
        text = "The Dock Ward at the beginning of the night."
        locations = extractor.extract(text, plain_analysis(text), dictionaries)
        assert locations[0].type == LocationType.VILLAGE

    def test_known_location_needs_word_boundary(self, extractor, dictionaries):
        text = "Seats in the VIP sections were taken."
        assert extractor.extract(text, plain_analysis(text), dictionaries) == []

    def test_discovered_places(self, extractor, dictionaries):
        text = "We rode to Neverwinter."
        analysis = analysis_with(text, places=["Neverwinter", "the", "Waterdeep", "Ne"])

        locations = extractor.extract(text, analysis, dictionaries)

        assert [loc.title for loc in locations] == ["Neverwinter"]
        assert locations[0].type is None

    def test_known_and_discovered_deduplicated(self, extractor, dictionaries):
        text = "Back at the Yawning Portal."
        analysis = analysis_with(text, places=["Yawning Portal"])
        locations = extractor.extract(text, analysis, dictionaries, 2)

        assert [loc.title for loc in locations] == ["Yawning Portal"]
        assert locations[0].source_sessions == [2]


class TestItemExtractor:
    """Test item extraction."""

    @pytest.fixture
    def extractor(self):
        return ItemExtractor()

    def test_modifier_and_type(self, extractor, dictionaries):
        text = "Bonnie handed him a flaming sword and a potion."
        items = extractor.extract(text, plain_analysis(text), dictionaries)

        assert [item.title for item in items] == ["flaming sword", "potion"]
        assert items[0].type == ItemType.WEAPON
        assert items[1].type == ItemType.CONSUMABLE
        assert all(item.kind == EntityKind.ITEM for item in items)

    def test_at_most_two_modifiers(self, extractor, dictionaries):
        text = "He drew the ancient rusty iron sword."
        items = extractor.extract(text, plain_analysis(text), dictionaries)
        assert [item.title for item in items] == ["rusty iron sword"]

    def test_punctuation_ends_modifiers(self, extractor, dictionaries):
        text = "Armor, shield."
        items = extractor.extract(text, plain_analysis(text), dictionaries)

        assert [item.title for item in items] == ["Armor", "shield"]
        assert items[0].type == ItemType.ARMOR
        assert items[1].type == ItemType.SHIELD

    def test_crossbow_not_bow(self, extractor, dictionaries):
        text = "She cocked her crossbow."
        items = extractor.extract(text, plain_analysis(text), dictionaries)
        assert [item.title for item in items] == ["crossbow"]
        assert items[0].type == ItemType.WEAPON

    def test_deduplicated_case_insensitively(self, extractor, dictionaries):
        text = "A sword lay there. The Sword was cursed."
        items = extractor.extract(text, plain_analysis(text), dictionaries)
        assert [item.title for item in items] == ["sword"]

    def test_no_type_keyword(self, extractor, dictionaries):
        text = "He wore a cloak."
        items = extractor.extract(text, plain_analysis(text), dictionaries)
        assert items[0].title == "cloak"
        assert items[0].type is None


class TestQuestExtractor:
    """Test quest extraction."""

    @pytest.fixture
    def extractor(self):
        return QuestExtractor()

    def test_verb_pattern(self, extractor, dictionaries):
        text = "We must rescue Floon Blagmaar before dawn."
        quests = extractor.extract(text, plain_analysis(text), dictionaries, 1)

        assert [quest.title for quest in quests] == ["rescue Floon Blagmaar"]
        assert quests[0].status == "active"
        assert quests[0].source_sessions == [1]

    def test_capitalized_verb(self, extractor, dictionaries):
        text = "Find Durnan."
        quests = extractor.extract(text, plain_analysis(text), dictionaries)
        assert [quest.title for quest in quests] == ["Find Durnan"]

    def test_mission_pattern(self, extractor, dictionaries):
        text = "Their mission to find Volo began."
        quests = extractor.extract(text, plain_analysis(text), dictionaries)
        assert [quest.title for quest in quests] == ["find Volo", "mission to find Volo"]

    def test_requires_proper_noun(self, extractor, dictionaries):
        text = "We need to find the key."
        assert extractor.extract(text, plain_analysis(text), dictionaries) == []

    def test_not_deduplicated(self, extractor, dictionaries):
        text = "rescue Floon. Later, rescue Floon."
        quests = extractor.extract(text, plain_analysis(text), dictionaries)
        assert [quest.title for quest in quests] == ["rescue Floon", "rescue Floon"]

    def test_min_length_configurable(self, dictionaries):
        extractor = QuestExtractor(ExtractionConfig(quest_min_length=10))
        text = "save Jo and rescue Floon."
        quests = extractor.extract(text, plain_analysis(text), dictionaries)
        assert [quest.title for quest in quests] == ["rescue Floon"]
