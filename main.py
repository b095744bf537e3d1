"""
TriageLens - Feedback Triage Agent

CLI entry point for ingesting, triaging and summarizing feedback.
"""

import argparse
import json
import logging
import sys

from src.agents.aggregation import AggregationEngine
from src.agents.assistant import AssistantOrchestrator
from src.agents.export import export_recent
from src.agents.ingestion import CsvFeedbackImporter
from src.agents.triage import TriageInvoker
from src.errors import TriageLensError
from src.orchestrator import TriageOrchestrator
from src.utils.llm import build_text_model
from src.utils.storage import FeedbackStore
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="TriageLens - LLM triage and summaries for product feedback",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Store and triage one feedback item
  python main.py ingest --source GitHub --text "Login returns 500 for most users"

  # Re-run triage for an existing item
  python main.py retriage 42

  # Ask a question over the 120 most recent items
  python main.py ask "What should we fix first?"

  # Bulk import a CSV with source,text columns
  python main.py import feedback.csv

Note: Set GOOGLE_API_KEY environment variable before triaging or asking.
        """
    )

    parser.add_argument(
        "--db",
        default=settings.DATABASE_PATH,
        help=f"SQLite database path (default: {settings.DATABASE_PATH})"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    ingest = commands.add_parser("ingest", help="Store and triage a feedback item")
    ingest.add_argument("--source", required=True, help="Origin label (e.g., GitHub, Discord)")
    ingest.add_argument("--text", required=True, help="Feedback body")

    retriage = commands.add_parser("retriage", help="Re-run triage for an existing item")
    retriage.add_argument("id", type=int, help="Feedback id")

    get = commands.add_parser("get", help="Show one feedback item")
    get.add_argument("id", type=int, help="Feedback id")

    listing = commands.add_parser("list", help="List recent feedback, newest first")
    listing.add_argument(
        "--limit",
        type=int,
        default=settings.DEFAULT_LIST_LIMIT,
        help=f"Number of items (1-{settings.MAX_LIST_LIMIT}, default: {settings.DEFAULT_LIST_LIMIT})"
    )

    summary = commands.add_parser("summary", help="Print the dataset digest")
    summary.add_argument(
        "--limit",
        type=int,
        default=settings.ASSISTANT_WINDOW,
        help=f"Number of recent items to scan (default: {settings.ASSISTANT_WINDOW})"
    )

    ask = commands.add_parser("ask", help="Ask a summary-only question about the dataset")
    ask.add_argument("question", help="Question text")

    importer = commands.add_parser("import", help="Ingest feedback from a CSV with source,text columns")
    importer.add_argument("path", help="CSV file path")

    export = commands.add_parser("export", help="Export recent feedback to CSV")
    export.add_argument(
        "--limit",
        type=int,
        default=settings.MAX_LIST_LIMIT,
        help=f"Number of recent items (default: {settings.MAX_LIST_LIMIT})"
    )
    export.add_argument(
        "--output",
        default=str(settings.OUTPUT_ROOT / "feedback.csv"),
        help="Output CSV path"
    )

    return parser


def run_command(args, store: FeedbackStore) -> dict:
    """Dispatch a parsed command and return its JSON-serializable result."""
    model = None
    if args.command in ("ingest", "retriage", "import", "ask"):
        model = build_text_model(
            api_key=settings.GOOGLE_API_KEY,
            model_name=settings.ASSISTANT_MODEL if args.command == "ask" else settings.TRIAGE_MODEL,
            temperature=settings.LLM_TEMPERATURE
        )

    orchestrator = TriageOrchestrator(store=store, invoker=TriageInvoker(model))
    engine = AggregationEngine(store)

    if args.command == "ingest":
        result = orchestrator.ingest(args.source, args.text)
        return {"ok": True, "message": "Feedback stored and triaged", **result.to_dict()}

    if args.command == "retriage":
        return {"ok": True, **orchestrator.reingest_existing(args.id).to_dict()}

    if args.command == "get":
        return {"ok": True, "result": orchestrator.get(args.id).to_dict()}

    if args.command == "list":
        items = orchestrator.list_recent(args.limit)
        return {"ok": True, "count": len(items), "results": [item.to_dict() for item in items]}

    if args.command == "summary":
        return {"ok": True, "digest": engine.summarize(args.limit).to_dict()}

    if args.command == "ask":
        assistant = AssistantOrchestrator(engine=engine, model=model)
        return {"ok": True, "answer": assistant.answer(args.question)}

    if args.command == "import":
        report = CsvFeedbackImporter(orchestrator).import_file(args.path)
        return {"ok": True, **report.to_dict()}

    if args.command == "export":
        path = export_recent(store, max(1, args.limit), args.output)
        return {"ok": True, "path": path}

    raise ValueError(f"Unknown command: {args.command}")


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    store = None
    try:
        store = FeedbackStore(args.db)
        result = run_command(args, store)
        print(json.dumps(result, indent=2))
        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        sys.exit(1)

    except (TriageLensError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(json.dumps({"ok": False, "error": str(e)}, indent=2))
        sys.exit(1)

    finally:
        if store is not None:
            store.close()


if __name__ == "__main__":
    main()


# Design Rationale and Trade-offs:
#
# 1. Output is JSON on stdout, logs go to stderr.
#    - Results can be piped into other tools
#
# 2. Exit code 1 for any TriageLensError, ValueError or OSError.
#    - The message is logged; no traceback is printed
