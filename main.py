"""Main entry point for the health-record export reader."""

import sys
import json
import argparse
from pathlib import Path
from typing import List, Optional

from eir_export import EirExportError, parse_file, read_export, repaired_text
from eir_export.config import Settings
from eir_export.context import build_context_prompt
from eir_export.logging_config import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Decode a health-record export (YAML) and summarize its contents"
    )
    parser.add_argument(
        "export_path",
        help="Path to the exported YAML file"
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the decoded document as JSON instead of a summary"
    )
    parser.add_argument(
        "--show-repair",
        action="store_true",
        help="Print the text the repair pass would produce and exit"
    )
    parser.add_argument(
        "--context",
        action="store_true",
        help="Print the assistant context prompt built from the document"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main function to run the export reader."""
    settings = Settings.from_env()
    configure_logging(settings.log_level, structured=settings.log_structured)

    args = build_parser().parse_args(argv)
    export_path = args.export_path

    if not Path(export_path).exists():
        print(f"Error: Export not found at {export_path}")
        return 1

    if args.show_repair:
        try:
            data = read_export(export_path)
        except EirExportError as e:
            print(f"✗ {e}")
            return 1
        print(repaired_text(data.decode("utf-8-sig", errors="replace")))
        return 0

    try:
        document = parse_file(export_path, preview_chars=settings.preview_chars)
    except EirExportError as e:
        print(f"✗ {e}")
        return 1

    if args.json:
        print(json.dumps(document.model_dump(), ensure_ascii=False, indent=2))
        return 0

    if args.context:
        print(build_context_prompt(document, limit=settings.context_entry_limit))
        return 0

    metadata = document.metadata
    print(f"✓ Decoded {export_path}")
    print("-" * 50)
    if metadata.source:
        print(f"  - Source: {metadata.source}")
    if metadata.patient and metadata.patient.name:
        print(f"  - Patient: {metadata.patient.name}")
    declared = metadata.export_info.total_entries if metadata.export_info else None
    print(f"  - Entries decoded: {len(document.entries)}")
    if declared is not None and declared != len(document.entries):
        print(f"  - Entries declared by export: {declared}")

    print("\nCategories:")
    for category, count in document.categories().items():
        print(f"  - {category}: {count}")

    print("\nSample Entries:")
    for entry in document.entries[:5]:
        summary = entry.content.summary if entry.content else None
        print(f"  - [{entry.display_date or '?'}] {entry.category or '?'} (ID: {entry.id})")
        if summary:
            print(f"    Summary: {summary}")
    if len(document.entries) > 5:
        print(f"  ... and {len(document.entries) - 5} more entries")

    return 0


if __name__ == "__main__":
    sys.exit(main())
