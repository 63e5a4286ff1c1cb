"""Candidate extractors for each entity kind."""

from campaign_parser.ner.extractors.base import CandidateExtractor
from campaign_parser.ner.extractors.item_extractor import ItemExtractor
from campaign_parser.ner.extractors.location_extractor import LocationExtractor
from campaign_parser.ner.extractors.mentions import MentionDetector
from campaign_parser.ner.extractors.npc_extractor import NPCExtractor
from campaign_parser.ner.extractors.quest_extractor import QuestExtractor
from campaign_parser.ner.extractors.session_extractor import SessionExtractor

__all__ = [
    "CandidateExtractor",
    "ItemExtractor",
    "LocationExtractor",
    "MentionDetector",
    "NPCExtractor",
    "QuestExtractor",
    "SessionExtractor",
]
