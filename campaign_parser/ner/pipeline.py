"""Main extraction pipeline orchestrating all extractors."""

import logging
import time
from functools import lru_cache
from typing import Optional

from campaign_parser.entities.schema import BaseEntity
from campaign_parser.ner.config import ExtractionConfig, default_config
from campaign_parser.ner.errors import CampaignParserError
from campaign_parser.ner.extractors.base import CandidateExtractor
from campaign_parser.ner.extractors.item_extractor import ItemExtractor
from campaign_parser.ner.extractors.location_extractor import LocationExtractor
from campaign_parser.ner.extractors.mentions import MentionDetector, plain_analysis
from campaign_parser.ner.extractors.npc_extractor import NPCExtractor
from campaign_parser.ner.extractors.quest_extractor import QuestExtractor
from campaign_parser.ner.extractors.session_extractor import SessionExtractor
from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries
from campaign_parser.ner.gazetteers.loader import default_dictionaries
from campaign_parser.ner.models import DocumentContent, ExtractionResult, TextAnalysis

logger = logging.getLogger(__name__)


class EntityExtractionPipeline:
    """Run the session extractor and every candidate extractor over a document.

    Extraction never raises: a failing stage is logged and contributes no
    entities.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        dictionaries: Optional[TermDictionaries] = None,
        mention_detector: Optional[MentionDetector] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Extraction configuration. Uses defaults if None.
            dictionaries: Term dictionaries. Loads the configured file if None.
            mention_detector: SpaCy mention detector. Created on first use if
                None and ``config.use_spacy`` is set.
        """
        self.config = config or default_config
        self._dictionaries = dictionaries
        self._mention_detector = mention_detector
        self._spacy_unavailable = False

        self.session_extractor = SessionExtractor(self.config)
        # Fixed order keeps id assignment reproducible
        self.extractors: tuple[CandidateExtractor, ...] = (
            NPCExtractor(self.config),
            LocationExtractor(self.config),
            ItemExtractor(self.config),
            QuestExtractor(self.config),
        )

    @property
    def dictionaries(self) -> TermDictionaries:
        if self._dictionaries is None:
            try:
                self._dictionaries = default_dictionaries()
            except CampaignParserError as e:
                logger.error("Falling back to empty term dictionaries: %s", e)
                self._dictionaries = TermDictionaries()
        return self._dictionaries

    def extract(self, content: DocumentContent, filename: str = "") -> list[BaseEntity]:
        """Extract entities from a converted document.

        Args:
            content: Converted document.
            filename: Originating filename, used for the session number.

        Returns:
            Session record (if any) followed by NPCs, locations, items and
            quests.
        """
        return self.run(content, filename).entities

    def run(self, content: DocumentContent, filename: str = "") -> ExtractionResult:
        """Extract entities and report timing and per-stage errors."""
        start_time = time.time()
        result = ExtractionResult(filename=filename)
        text = content.text

        try:
            session = self.session_extractor.extract(content, filename)
        except Exception as e:
            logger.warning("Session extraction failed for %r: %s", filename, e, exc_info=True)
            result.errors.append(f"session: {e}")
            session = None

        if session is not None:
            result.entities.append(session)
            result.session_number = session.session_number

        analysis = self._analyze(text)
        dictionaries = self.dictionaries

        for extractor in self.extractors:
            try:
                candidates = extractor.extract(
                    text, analysis, dictionaries, result.session_number
                )
            except Exception as e:
                logger.warning(
                    "%s extraction failed for %r: %s",
                    extractor.kind.value,
                    filename,
                    e,
                    exc_info=True,
                )
                result.errors.append(f"{extractor.kind.value}: {e}")
                continue
            result.entities.extend(candidates)

        result.processing_time_ms = (time.time() - start_time) * 1000
        logger.info(
            "Extracted %d entities from %r in %.1fms",
            result.entity_count,
            filename,
            result.processing_time_ms,
        )
        return result

    def _analyze(self, text: str) -> TextAnalysis:
        detector = self._get_mention_detector()
        if detector is None:
            return plain_analysis(text)

        try:
            return detector.analyze(text)
        except Exception as e:
            logger.warning("Mention detection failed, using plain sentences: %s", e)
            return plain_analysis(text)

    def _get_mention_detector(self) -> Optional[MentionDetector]:
        if self._mention_detector is not None:
            return self._mention_detector
        if not self.config.use_spacy or self._spacy_unavailable:
            return None

        try:
            self._mention_detector = MentionDetector(model_name=self.config.spacy_model)
        except (Exception, SystemExit) as e:  # spacy.cli.download exits on failure
            logger.warning(
                "SpaCy model %s unavailable, discovery disabled: %s",
                self.config.spacy_model,
                e,
            )
            self._spacy_unavailable = True
            return None
        return self._mention_detector


def assign_ids(entities: list[BaseEntity]) -> list[BaseEntity]:
    """Give each entity an id of the form ``"{kind}-{index}"``.

    The index is the entity's position in the list, so ids are unique and
    reproducible for the same extraction output. Returns copies.
    """
    return [
        entity.model_copy(update={"id": f"{entity.kind.value}-{index}"})
        for index, entity in enumerate(entities)
    ]


@lru_cache
def get_default_pipeline() -> EntityExtractionPipeline:
    return EntityExtractionPipeline()


def extract(content: DocumentContent, filename: str = "") -> list[BaseEntity]:
    """Extract entities with the default pipeline."""
    return get_default_pipeline().extract(content, filename)
