"""Data models for extraction input and text analysis."""

from typing import Optional

from pydantic import BaseModel, Field

from campaign_parser.entities.schema import AnyEntity


class Heading(BaseModel):
    """A document heading."""

    level: int
    text: str


class DocumentContent(BaseModel):
    """Structured text handed over by the document converter."""

    raw_text: str = ""  # Markdown source, headings included
    plain_text: str = ""  # Text with markup stripped
    headings: list[Heading] = Field(default_factory=list)
    frontmatter: dict[str, str] = Field(default_factory=dict)
    links: list[str] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """Text the extractors scan (plain text, raw as fallback)."""
        return self.plain_text or self.raw_text


class TextAnalysis(BaseModel):
    """Sentence and mention hints computed once per document."""

    sentences: list[str] = Field(default_factory=list)
    people: list[str] = Field(default_factory=list)  # Detected person mentions
    places: list[str] = Field(default_factory=list)  # Detected place mentions

    def sentences_mentioning(self, name: str) -> str:
        """Join every sentence containing ``name`` (case-sensitive)."""
        return " ".join(s for s in self.sentences if name in s)


class ExtractionResult(BaseModel):
    """Entities from one document plus bookkeeping."""

    entities: list[AnyEntity] = Field(default_factory=list)
    session_number: Optional[int] = None
    filename: str = ""
    errors: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def entity_count(self) -> int:
        return len(self.entities)

    def entity_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for entity in self.entities:
            counts[entity.kind.value] = counts.get(entity.kind.value, 0) + 1
        return counts
