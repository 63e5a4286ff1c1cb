"""SpaCy-based sentence splitting and person/place detection."""

import logging
import re
from typing import Optional

import spacy
from spacy.language import Language

from campaign_parser.ner.config import default_config
from campaign_parser.ner.models import TextAnalysis

logger = logging.getLogger(__name__)

SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+|\n+")


def split_sentences(text: str) -> list[str]:
    """Split text on sentence punctuation and line breaks."""
    return [s.strip() for s in SENTENCE_BOUNDARY.split(text) if s.strip()]


def plain_analysis(text: str) -> TextAnalysis:
    """Analysis with sentences only, used when no NLP pipeline is available."""
    return TextAnalysis(sentences=split_sentences(text))


class MentionDetector:
    """Detect sentences and person/place mentions with SpaCy."""

    PERSON_LABELS = {"PERSON"}
    PLACE_LABELS = {"GPE", "LOC", "FAC"}  # Geopolitical, non-GPE, facilities
    SENTENCE_PIPES = ("parser", "senter", "sentencizer")

    def __init__(self, nlp: Optional[Language] = None, model_name: Optional[str] = None):
        """Initialize the detector.

        Args:
            nlp: A ready SpaCy pipeline. If None, loads ``model_name``.
            model_name: SpaCy model to load. Defaults to config value.
        """
        self.nlp = nlp if nlp is not None else self._load_model(
            model_name or default_config.spacy_model
        )
        if not any(self.nlp.has_pipe(name) for name in self.SENTENCE_PIPES):
            self.nlp.add_pipe("sentencizer", first=True)

    def _load_model(self, model_name: str) -> Language:
        """Load SpaCy model, downloading if necessary."""
        try:
            return spacy.load(model_name)
        except OSError:
            from spacy.cli import download

            logger.info("Downloading SpaCy model %s", model_name)
            download(model_name)
            return spacy.load(model_name)

    def analyze(self, text: str) -> TextAnalysis:
        """Split sentences and collect person and place mentions.

        Args:
            text: The text to process.

        Returns:
            TextAnalysis with mentions in order of first appearance.
        """
        doc = self.nlp(text)

        sentences = []
        for sent in doc.sents:
            # Headings and list items share a SpaCy sentence with the next line
            sentences.extend(split_sentences(sent.text))

        people: dict[str, None] = {}
        places: dict[str, None] = {}
        for ent in doc.ents:
            mention = ent.text.strip()
            if not mention:
                continue
            if ent.label_ in self.PERSON_LABELS:
                people.setdefault(mention)
            elif ent.label_ in self.PLACE_LABELS:
                places.setdefault(mention)

        return TextAnalysis(
            sentences=sentences,
            people=list(people),
            places=list(places),
        )
