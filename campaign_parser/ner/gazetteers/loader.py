"""Term dictionary loading from YAML files."""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError

from campaign_parser.core.config import settings
from campaign_parser.ner.errors import DictionaryLoadError
from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries

logger = logging.getLogger(__name__)

DEFAULT_TERMS_PATH = Path(__file__).parent / "data" / "terms.yaml"


class TermDictionaryLoader:
    """Load term dictionaries from a YAML file."""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or settings.term_dictionary_path or DEFAULT_TERMS_PATH)

    def load(self) -> TermDictionaries:
        """Load and validate the dictionary file.

        Raises:
            DictionaryLoadError: If the file is missing or unreadable, is not
                valid UTF-8 YAML, or does not match the dictionary schema.
        """
        if not self.path.exists():
            raise DictionaryLoadError(f"Term dictionary not found: {self.path}")

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DictionaryLoadError(f"Invalid YAML in {self.path}: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise DictionaryLoadError(f"Cannot read term dictionary {self.path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DictionaryLoadError(
                f"Expected a mapping at the top of {self.path}, got {type(data).__name__}"
            )

        try:
            dictionaries = TermDictionaries.model_validate(data)
        except ValidationError as e:
            raise DictionaryLoadError(f"Invalid term dictionary {self.path}: {e}") from e

        logger.debug(
            "Loaded term dictionaries from %s (%d NPCs, %d locations)",
            self.path,
            len(dictionaries.npcs),
            len(dictionaries.locations),
        )
        return dictionaries


@lru_cache
def default_dictionaries() -> TermDictionaries:
    """Get the dictionaries from the configured (or packaged) file."""
    return TermDictionaryLoader().load()
