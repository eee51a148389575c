#!/usr/bin/env python3
"""
Index Rebuild Utility
Embeds every markdown note in a vault directory and optionally prints the
notes most similar to a query.
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from second_brain.core.config import SUGGESTION_COUNT, get_embedding_provider, validate_config
from second_brain.core.search_service import format_results, semantic_search
from second_brain.core.vault import FileSystemVault
from second_brain.vector.builder import IndexBuilder


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Rebuild the note embedding index for a vault")
    parser.add_argument("vault", help="Path to the vault directory")
    parser.add_argument("--query", help="Print notes similar to this text after rebuilding")
    parser.add_argument("--top-n", type=int, default=SUGGESTION_COUNT, help="Number of suggestions to print")
    return parser.parse_args(argv)


def main(argv=None):
    """Rebuild the note index from a vault directory."""
    args = parse_args(argv)

    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}")
        sys.exit(1)

    if args.top_n < 0:
        print("ERROR: --top-n must be >= 0")
        sys.exit(1)

    vault = FileSystemVault(args.vault)
    notes = vault.get_markdown_files()
    print(f"Found {len(notes)} markdown notes in {args.vault}")

    embedding_provider = get_embedding_provider()

    print("Starting note index rebuild...")
    index = IndexBuilder(embedding_provider).rebuild_all(
        (note.path, vault.read(note)) for note in notes
    )

    embedded_count = sum(1 for record in index if record.has_embedding)
    print(f"✓ Rebuilt index with {len(index)} notes ({embedded_count} embedded)")
    if embedded_count < len(index):
        print(f"WARNING: {len(index) - embedded_count} notes have no embedding and will not match")

    if args.query is not None:
        results = semantic_search(args.query, args.top_n, index, _embedding_provider=embedding_provider)
        print(f"Top {len(results)} notes for query:")
        for item in format_results(results):
            print(f"  {item['score']:.4f}  {item['filePath']}")

    print("Index rebuild complete!")
    return index


if __name__ == "__main__":
    main()
