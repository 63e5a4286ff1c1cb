"""Exceptions raised by the extraction and merge layers."""


class CampaignParserError(Exception):
    """Base class for errors raised to callers."""


class DictionaryLoadError(CampaignParserError):
    """A term dictionary file is missing or malformed."""


class MergeError(CampaignParserError):
    """A merge operation was used incorrectly."""


class InsufficientEntitiesError(MergeError):
    """Fewer than two entities were offered for merging."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(
            f"at least 2 entities are required to merge, got {count}"
        )
