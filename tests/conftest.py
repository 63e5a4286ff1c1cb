"""Shared fixtures."""

import pytest
import spacy

from campaign_parser.ner.gazetteers.loader import default_dictionaries


@pytest.fixture
def dictionaries():
    """Packaged term dictionaries."""
    return default_dictionaries()


@pytest.fixture
def nlp():
    """Blank English pipeline with a rule-based entity recognizer."""
    nlp = spacy.blank("en")
    ruler = nlp.add_pipe("entity_ruler")
    ruler.add_patterns(
        [
            {"label": "PERSON", "pattern": "Mirt"},
            {"label": "PERSON", "pattern": "Synopsis"},
            {"label": "GPE", "pattern": "Neverwinter"},
            {"label": "FAC", "pattern": "Yawning Portal"},
        ]
    )
    return nlp
