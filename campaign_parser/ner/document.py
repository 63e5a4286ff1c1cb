"""Conversion of markdown notes into DocumentContent."""

import logging
import re

import yaml

from campaign_parser.ner.models import DocumentContent, Heading

logger = logging.getLogger(__name__)

FRONTMATTER_PATTERN = re.compile(r"^---\n(.*?)\n---", re.DOTALL)
HEADING_PATTERN = re.compile(r"^(#{1,6})\s+(.+)$", re.MULTILINE)
INLINE_LINK_PATTERN = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")


def parse_frontmatter(markdown: str) -> tuple[dict[str, str], str]:
    """Split a leading YAML block from the body.

    Returns:
        Tuple of (frontmatter values as strings, remaining text). A block
        that is not a valid YAML mapping is ignored and left in the text.
    """
    match = FRONTMATTER_PATTERN.match(markdown)
    if match is None:
        return {}, markdown

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.debug("Ignoring unparseable frontmatter: %s", e)
        return {}, markdown

    if not isinstance(data, dict):
        return {}, markdown

    frontmatter = {str(k): "" if v is None else str(v) for k, v in data.items()}
    return frontmatter, markdown[match.end() :].strip()


def extract_headings(markdown: str) -> list[Heading]:
    return [
        Heading(level=len(m.group(1)), text=m.group(2).strip())
        for m in HEADING_PATTERN.finditer(markdown)
    ]


def extract_links(markdown: str) -> list[str]:
    return [m.group(2) for m in INLINE_LINK_PATTERN.finditer(markdown)]


def document_from_markdown(markdown: str) -> DocumentContent:
    """Build the extractor input for a markdown or plain text note.

    The plain text is the note without its frontmatter; heading lines are
    kept so sentence splitting still sees them as separate lines.
    """
    markdown = markdown.replace("\r\n", "\n")
    frontmatter, body = parse_frontmatter(markdown)
    return DocumentContent(
        raw_text=markdown,
        plain_text=body,
        headings=extract_headings(markdown),
        frontmatter=frontmatter,
        links=extract_links(markdown),
    )
