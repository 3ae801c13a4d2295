"""
Command-line interface for email classification.

Classifies records from a JSON/JSONL file, stdin, or a single record given on
the command line, and prints results with their score breakdown and reasons.

Usage:
    # JSON array (or {"records": [...]}) of records
    python -m email_sorter.cli.classify inbox.json

    # JSON Lines from stdin, results to a file
    cat inbox.jsonl | python -m email_sorter.cli.classify - --output results.jsonl

    # Single record
    python -m email_sorter.cli.classify --sender billing@vendor.com \\
        --subject "Invoice #4821 due" --preview "Payment is due Friday."

    # Custom rules, only finance results, per-category summary
    python -m email_sorter.cli.classify inbox.json --rules rules.json --category finance --summary
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, TextIO

import structlog
from pydantic import ValidationError

from email_sorter.classification.categories import Category, categories, category_info
from email_sorter.classification.classifier import EmailSorter
from email_sorter.classification.rules import RuleConfigError, default_rule_set, load_rule_set
from email_sorter.classification.schemas import ClassificationResult
from email_sorter.config import settings
from email_sorter.logging_config import setup_logging
from email_sorter.models.record import EmailRecord
from email_sorter.version import ENGINE_VERSION, get_version_info


logger = structlog.get_logger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_RULES_ERROR = 2


# ============================================================================
# INPUT
# ============================================================================

def parse_records(text: str, jsonl: bool = False) -> List[Dict[str, Any]]:
    """
    Parse raw input into record dicts.

    Args:
        text: File or stdin contents
        jsonl: Treat input as JSON Lines (one record per line)

    Returns:
        List of record dicts

    Raises:
        ValueError: If the input is not valid JSON or not a list of objects
    """
    if jsonl:
        items = []
        for line_number, line in enumerate(text.splitlines(), 1):
            if not line.strip():
                continue
            try:
                items.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise ValueError(f"Line {line_number} is not valid JSON: {e}") from e
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Input is not valid JSON: {e}") from e
        items = data.get("records") if isinstance(data, dict) else data

    if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
        raise ValueError("Input must be a list of record objects")

    return items


def read_records(source: str) -> List[EmailRecord]:
    """
    Read records from a file path or "-" for stdin.

    JSON Lines is assumed for ``.jsonl`` files. Stdin is read as a JSON
    document first and as JSON Lines when that fails.

    Args:
        source: Path to a .json/.jsonl file, or "-"

    Returns:
        List of EmailRecords
    """
    if source == "-":
        text = sys.stdin.read()
        try:
            items = parse_records(text)
        except ValueError:
            items = parse_records(text, jsonl=True)
    else:
        path = Path(source)
        text = path.read_text(encoding="utf-8")
        items = parse_records(text, jsonl=path.suffix.lower() == ".jsonl")

    return [EmailRecord.model_validate(item) for item in items]


def record_from_args(sender: str, subject: str, preview: str) -> EmailRecord:
    """
    Build a single record from command-line values.

    All three fields are required and must be non-empty after trimming.

    Raises:
        ValueError: If a field is empty
    """
    values = {
        "sender": (sender or "").strip(),
        "subject": (subject or "").strip(),
        "preview": (preview or "").strip(),
    }
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"Missing required field(s): {', '.join(missing)}")
    return EmailRecord(**values)


# ============================================================================
# OUTPUT
# ============================================================================

def write_output(
    results: Sequence[ClassificationResult],
    output_path: Optional[Path] = None,
    format: str = "jsonl",
    stream: Optional[TextIO] = None,
):
    """
    Write results to a file or stream.

    Args:
        results: Classification results
        output_path: Output file path (default: stream)
        format: Output format ("json" or "jsonl")
        stream: Stream used when no path is given (default: stdout)
    """
    payload = [result.model_dump(mode="json") for result in results]

    if output_path is None:
        stream = stream or sys.stdout
        _dump(payload, stream, format)
        return

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        _dump(payload, f, format)

    logger.info("output_written", path=str(output_path), count=len(payload))


def _dump(payload: List[dict], stream: TextIO, format: str):
    if format == "jsonl":
        for item in payload:
            stream.write(json.dumps(item, ensure_ascii=False) + "\n")
    else:
        json.dump(payload, stream, ensure_ascii=False, indent=2)
        stream.write("\n")


def format_summary(results: Sequence[ClassificationResult]) -> str:
    """
    Render per-category counts, in registry order, with display labels.

    Args:
        results: Classification results

    Returns:
        Multi-line summary text
    """
    counts = {category: 0 for category in categories()}
    for result in results:
        counts[result.category] += 1

    lines = []
    for category, count in counts.items():
        label = category_info(category).label
        plural = "" if count == 1 else "s"
        lines.append(f"{label:<12} {count:02d} email{plural}")
    lines.append(f"{'Total':<12} {len(results):02d}")
    return "\n".join(lines)


# ============================================================================
# MAIN CLI
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="email-sorter",
        description="Email Sorter CLI - explainable rule-based email classification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Classify a JSON file of records
  %(prog)s inbox.json

  # Classify JSON Lines from stdin
  cat inbox.jsonl | %(prog)s -

  # Single record
  %(prog)s --sender alex@company.com --subject "Urgent: contract" --preview "Please review today"

  # Custom rule file, finance only, JSON output file
  %(prog)s inbox.json --rules rules.json --category finance --output finance.json
        """
    )

    parser.add_argument(
        "input",
        nargs="?",
        default=None,
        help="Path to .json/.jsonl records, or '-' for stdin"
    )
    parser.add_argument("--sender", type=str, default=None, help="Sender of a single record")
    parser.add_argument("--subject", type=str, default=None, help="Subject of a single record")
    parser.add_argument("--preview", type=str, default=None, help="Body preview of a single record")

    parser.add_argument(
        "--rules",
        "-r",
        type=str,
        default=None,
        help="JSON rule file (default: RULES_FILE setting, then the starter rules)"
    )
    parser.add_argument(
        "--category",
        "-c",
        type=str,
        choices=[category.value for category in categories()],
        default=None,
        help="Only output results of this category"
    )
    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=None,
        help=f"Worker threads for batch classification (default: {settings.batch_workers})"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default=None,
        help="Output file path (default: stdout). Format auto-detected from extension (.json or .jsonl)"
    )
    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["json", "jsonl"],
        default="jsonl",
        help="Output format (default: jsonl)"
    )
    parser.add_argument(
        "--summary",
        "-s",
        action="store_true",
        help="Print per-category counts to stderr"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {ENGINE_VERSION}"
    )

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level="DEBUG" if args.verbose else None)

    single = any(value is not None for value in (args.sender, args.subject, args.preview))
    if single == (args.input is not None):
        parser.error("give either an input path or --sender/--subject/--preview")

    try:
        rule_set = load_rule_set(args.rules) if args.rules else default_rule_set()
    except RuleConfigError as e:
        logger.error("rules_invalid", error=str(e), source=e.source)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RULES_ERROR

    try:
        if single:
            records = [record_from_args(args.sender, args.subject, args.preview)]
        else:
            records = read_records(args.input)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("input_unreadable", source=args.input, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    logger.info("classification_started", records=len(records), **get_version_info(rule_set.version))

    sorter = EmailSorter(rule_set=rule_set, workers=args.workers)
    results = sorter.classify_batch(records)

    if args.summary:
        print(format_summary(results), file=sys.stderr)

    if args.category:
        wanted = Category(args.category)
        results = [result for result in results if result.category is wanted]

    output_path = Path(args.output) if args.output else None

    # Auto-detect format from file extension
    format = args.format
    if output_path and args.format == "jsonl" and output_path.suffix == ".json":
        format = "json"

    write_output(results, output_path, format)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
