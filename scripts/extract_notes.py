#!/usr/bin/env python3
"""CLI script for extracting campaign entities from session notes."""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from campaign_parser.core import configure_logging
from campaign_parser.ner import (
    EntityExtractionPipeline,
    ExtractionConfig,
    assign_ids,
    find_duplicate_groups,
)
from campaign_parser.ner.document import document_from_markdown


def extract_notes(filepath: Path, use_spacy: bool, as_json: bool, verbose: bool) -> None:
    """Extract entities from a notes file and print them."""
    content = document_from_markdown(filepath.read_text(encoding="utf-8"))

    pipeline = EntityExtractionPipeline(config=ExtractionConfig(use_spacy=use_spacy))
    result = pipeline.run(content, filepath.name)
    entities = assign_ids(result.entities)
    groups = find_duplicate_groups(entities)

    if as_json:
        payload = {
            "filename": filepath.name,
            "session_number": result.session_number,
            "entities": [e.model_dump(mode="json", exclude_none=True) for e in entities],
            "duplicate_groups": [[e.id for e in group] for group in groups],
            "errors": result.errors,
        }
        print(json.dumps(payload, indent=2))
        return

    print("=== Note Extraction ===")
    print(f"File: {filepath.name}")
    print(f"Session: {result.session_number or 'Not found'}")
    print(f"Entities extracted: {len(entities)}")
    print(f"Processing time: {result.processing_time_ms:.2f}ms")
    print()

    if entities:
        print("Entity breakdown:")
        for kind, count in sorted(result.entity_counts().items()):
            print(f"  {kind}: {count}")
        print()

    if verbose and entities:
        print("Extracted entities:")
        for entity in entities:
            print(f"  [{entity.id}] {entity.title}")
        print()

    if groups:
        print("Possible duplicates:")
        for group in groups:
            print(f"  {group[0].title}: {', '.join(e.id for e in group)}")
        print()

    if result.errors:
        print("Errors:")
        for error in result.errors:
            print(f"  - {error}")
        print()


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Extract NPCs, locations, items and quests from campaign notes"
    )
    parser.add_argument(
        "notes",
        type=str,
        help="Path to notes file (.md or .txt)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print entities and duplicate groups as JSON",
    )
    parser.add_argument(
        "--no-spacy",
        action="store_true",
        help="Skip SpaCy mention detection (known terms only)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (defaults to LOG_LEVEL setting)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="List every extracted entity",
    )

    args = parser.parse_args()
    configure_logging(args.log_level)

    path = Path(args.notes)
    if not path.exists():
        print(f"Error: File does not exist: {path}")
        sys.exit(1)

    try:
        extract_notes(path, use_spacy=not args.no_spacy, as_json=args.json, verbose=args.verbose)
    except KeyboardInterrupt:
        print("\nExtraction cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
