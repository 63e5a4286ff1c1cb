"""Tests for the extraction pipeline."""

import pytest

from campaign_parser.core.config import settings
from campaign_parser.entities.schema import EntityKind, ItemType
from campaign_parser.ner import EntityExtractionPipeline, ExtractionConfig, assign_ids
from campaign_parser.ner.document import document_from_markdown
from campaign_parser.ner.extractors import MentionDetector
from campaign_parser.ner.gazetteers import TermDictionaries, default_dictionaries
from campaign_parser.ner.models import DocumentContent

NOTES = """# 1. Into the Yawning Portal

## Synopsis
Durnan the barkeep greeted the party at the Yawning Portal.

## Events
Volo asked the party to rescue Floon Blagmaar. Bonnie handed over a healing potion.
"""


class FailingExtractor:
    kind = EntityKind.ITEM

    def extract(self, text, analysis, dictionaries, session_number=None):
        raise RuntimeError("boom")


class FailingDetector:
    def analyze(self, text):
        raise RuntimeError("model crashed")


class TestEntityExtractionPipeline:
    """Test end-to-end extraction over a note."""

    @pytest.fixture
    def pipeline(self, dictionaries):
        return EntityExtractionPipeline(
            config=ExtractionConfig(use_spacy=False),
            dictionaries=dictionaries,
        )

    def test_extract_session_notes(self, pipeline):
        entities = pipeline.extract(document_from_markdown(NOTES), "session_1.md")

        assert [e.kind for e in entities] == [
            EntityKind.SESSION_SUMMARY,
            EntityKind.NPC,
            EntityKind.NPC,
            EntityKind.NPC,
            EntityKind.NPC,
            EntityKind.LOCATION,
            EntityKind.ITEM,
            EntityKind.QUEST,
        ]
        assert [e.title for e in entities] == [
            "Into the Yawning Portal",
            "Durnan",
            "Bonnie",
            "Volo",
            "Floon Blagmaar",
            "Yawning Portal",
            "healing potion",
            "rescue Floon Blagmaar",
        ]

    def test_candidates_reference_session(self, pipeline):
        entities = pipeline.extract(document_from_markdown(NOTES), "session_1.md")

        session, candidates = entities[0], entities[1:]
        assert session.session_number == 1
        assert session.brief_synopsis == (
            "Durnan the barkeep greeted the party at the Yawning Portal."
        )
        assert all(e.source_sessions == [1] for e in candidates)

    def test_roles_and_types(self, pipeline):
        entities = pipeline.extract(document_from_markdown(NOTES), "session_1.md")
        by_title = {e.title: e for e in entities}

        assert by_title["Durnan"].role == "barkeep"
        assert by_title["Bonnie"].role == "barmaid"
        assert by_title["Volo"].role == "merchant"
        assert by_title["Floon Blagmaar"].role is None
        assert by_title["healing potion"].type == ItemType.CONSUMABLE
        assert by_title["rescue Floon Blagmaar"].status == "active"

    def test_no_session_hint(self, pipeline):
        content = document_from_markdown("Durnan poured ale at the Yawning Portal.")
        entities = pipeline.extract(content, "notes.md")

        assert [e.kind for e in entities] == [EntityKind.NPC, EntityKind.LOCATION]
        assert all(e.source_sessions is None for e in entities)

    def test_empty_document(self, pipeline):
        result = pipeline.run(document_from_markdown(""), "empty.md")

        assert result.entities == []
        assert result.errors == []
        assert result.session_number is None

    def test_all_titles_non_empty(self, pipeline):
        entities = pipeline.extract(document_from_markdown(NOTES), "session_1.md")
        assert all(e.title.strip() for e in entities)

    def test_failing_extractor_isolated(self, pipeline):
        pipeline.extractors = (FailingExtractor(), *pipeline.extractors)

        result = pipeline.run(document_from_markdown(NOTES), "session_1.md")

        assert result.errors == ["item: boom"]
        assert result.entity_counts()["npc"] == 4
        assert result.entity_count == 8

    def test_failing_mention_detector_falls_back(self, dictionaries):
        pipeline = EntityExtractionPipeline(
            dictionaries=dictionaries,
            mention_detector=FailingDetector(),
        )
        text = "Durnan the barkeep poured ale."
        entities = pipeline.extract(document_from_markdown(text), "notes.md")

        assert [(e.title, e.role) for e in entities] == [("Durnan", "barkeep")]

    def test_discovery_with_spacy(self, dictionaries, nlp):
        pipeline = EntityExtractionPipeline(
            dictionaries=dictionaries,
            mention_detector=MentionDetector(nlp=nlp),
        )
        content = document_from_markdown("Mirt the noble joined Durnan in Neverwinter.")

        entities = pipeline.extract(content, "notes.md")

        assert [(e.kind, e.title) for e in entities] == [
            (EntityKind.NPC, "Durnan"),
            (EntityKind.NPC, "Mirt"),
            (EntityKind.LOCATION, "Neverwinter"),
        ]
        assert entities[1].role == "noble"


class TestAssignIds:
    """Test id assignment."""

    def test_ids_by_global_index(self, dictionaries):
        pipeline = EntityExtractionPipeline(
            config=ExtractionConfig(use_spacy=False),
            dictionaries=dictionaries,
        )
        entities = assign_ids(pipeline.extract(document_from_markdown(NOTES), "session_1.md"))

        assert [e.id for e in entities] == [
            "session_summary-0",
            "npc-1",
            "npc-2",
            "npc-3",
            "npc-4",
            "location-5",
            "item-6",
            "quest-7",
        ]

    def test_returns_copies(self, dictionaries):
        pipeline = EntityExtractionPipeline(
            config=ExtractionConfig(use_spacy=False),
            dictionaries=dictionaries,
        )
        entities = pipeline.extract(document_from_markdown("Durnan waved."), "notes.md")

        with_ids = assign_ids(entities)

        assert with_ids[0].id == "npc-0"
        assert entities[0].id is None


class TestDefaultDictionaries:
    """Test extraction through the packaged dictionary file."""

    @pytest.fixture(autouse=True)
    def clear_dictionary_cache(self):
        default_dictionaries.cache_clear()
        yield
        default_dictionaries.cache_clear()

    def test_packaged_dictionaries_loaded(self):
        pipeline = EntityExtractionPipeline(config=ExtractionConfig(use_spacy=False))

        assert "Durnan" in pipeline.dictionaries.npcs
        assert pipeline.dictionaries.quest_verbs

    def test_known_npc_with_role(self):
        pipeline = EntityExtractionPipeline(config=ExtractionConfig(use_spacy=False))

        entities = pipeline.extract(
            DocumentContent(plain_text="Durnan the barkeep poured ale."), "notes.md"
        )

        assert [(e.kind, e.title, e.role) for e in entities] == [
            (EntityKind.NPC, "Durnan", "barkeep")
        ]

    def test_unreadable_dictionary_falls_back(self, monkeypatch, tmp_path):
        path = tmp_path / "terms.yaml"
        path.write_bytes(b"npcs:\n  - Dur\xffnan\n")
        monkeypatch.setattr(settings, "term_dictionary_path", path)
        pipeline = EntityExtractionPipeline(config=ExtractionConfig(use_spacy=False))

        entities = pipeline.extract(
            DocumentContent(plain_text="Durnan the barkeep poured ale."), "notes.md"
        )

        assert entities == []
        assert pipeline.dictionaries == TermDictionaries()

    def test_dictionary_directory_falls_back(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "term_dictionary_path", tmp_path)
        pipeline = EntityExtractionPipeline(config=ExtractionConfig(use_spacy=False))

        assert pipeline.extract(DocumentContent(plain_text="Durnan waved."), "notes.md") == []
