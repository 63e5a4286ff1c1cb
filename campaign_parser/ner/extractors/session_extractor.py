"""Session record extraction from filename and heading structure."""

import re
from typing import Optional

from campaign_parser.entities.schema import SessionSummary
from campaign_parser.ner.config import ExtractionConfig, default_config
from campaign_parser.ner.models import DocumentContent, Heading


class SessionExtractor:
    """Derive a single session record from a document."""

    FILENAME_PATTERN = re.compile(r"session[_\s-]*(?:summary[_\s-]*)?(\d+)", re.IGNORECASE)
    TEXT_PATTERN = re.compile(r"session[_\s]*(\d+)", re.IGNORECASE)
    ORDINAL_PREFIX = re.compile(r"^\d+\.\s*")
    MARKDOWN_HEADING = re.compile(r"^#{1,6}\s")

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or default_config

    def find_session_number(self, content: DocumentContent, filename: str) -> Optional[int]:
        """Get the session number, preferring the filename over the text."""
        match = self.FILENAME_PATTERN.search(filename or "")
        if match is None:
            match = self.TEXT_PATTERN.search(content.raw_text or content.text)
        return int(match.group(1)) if match else None

    def extract(self, content: DocumentContent, filename: str) -> Optional[SessionSummary]:
        """Build the session record, or None if no session number is found.

        Args:
            content: Converted document.
            filename: Name of the originating file.

        Returns:
            SessionSummary or None.
        """
        session_number = self.find_session_number(content, filename)
        if session_number is None:
            return None

        return SessionSummary(
            title=self._title(content.headings, session_number),
            session_number=session_number,
            brief_synopsis=self._synopsis(content),
            full_summary=content.raw_text or content.text,
            status="complete",
        )

    def _title(self, headings: list[Heading], session_number: int) -> str:
        main_heading = next((h for h in headings if h.level <= 2), None)
        if main_heading is not None:
            title = self.ORDINAL_PREFIX.sub("", main_heading.text).strip()
            if title:
                return title
        return f"Session {session_number}"

    def _synopsis(self, content: DocumentContent) -> Optional[str]:
        synopsis_heading = next(
            (h for h in content.headings if "synopsis" in h.text.lower()),
            None,
        )
        if synopsis_heading is None:
            return None

        synopsis = self._section_after(content.raw_text, synopsis_heading.text)
        if synopsis is None:
            synopsis = self._section_after(content.plain_text, synopsis_heading.text)
        return synopsis

    def _section_after(self, text: str, heading_text: str) -> Optional[str]:
        """Text between the heading's line and the next markdown heading."""
        lines = text.split("\n")
        heading_idx = next(
            (i for i, line in enumerate(lines) if heading_text in line),
            None,
        )
        if heading_idx is None:
            return None

        next_heading_idx = next(
            (
                i
                for i in range(heading_idx + 1, len(lines))
                if self.MARKDOWN_HEADING.match(lines[i])
            ),
            None,
        )
        end = (
            next_heading_idx
            if next_heading_idx is not None
            else heading_idx + 1 + self.config.synopsis_fallback_lines
        )

        section = " ".join(
            line.strip()
            for line in lines[heading_idx + 1 : end]
            if line.strip() and not line.startswith("#")
        ).strip()
        return section[: self.config.synopsis_max_chars] or None
