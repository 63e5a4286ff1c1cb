"""Term dictionaries and known-term matching."""

from campaign_parser.ner.gazetteers.dictionaries import TermDictionaries
from campaign_parser.ner.gazetteers.loader import TermDictionaryLoader, default_dictionaries
from campaign_parser.ner.gazetteers.matcher import KnownTermMatcher

__all__ = [
    "KnownTermMatcher",
    "TermDictionaries",
    "TermDictionaryLoader",
    "default_dictionaries",
]
