"""CLI entry point for the marketplace matchmaker backend."""

import argparse
import logging
import sys
from pathlib import Path

from src.core.config import Settings
from src.core.schemas import ConversationTurn
from src.core.store import MemoryStore
from src.oracle import OracleProvider, get_provider

DEFAULT_CONFIG = "config/settings.yaml"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Marketplace backend with LLM business matching and chat",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- serve subcommand (default) ---
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API server")
    serve_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    serve_parser.add_argument("--host", help="Override server.host from settings")
    serve_parser.add_argument("--port", type=int, help="Override server.port from settings")
    serve_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- match subcommand ---
    match_parser = subparsers.add_parser(
        "match",
        help="Rank the sample businesses against a query and print the result",
    )
    match_parser.add_argument("--query", required=True, help="Free-text search query")
    match_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    match_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- chat subcommand ---
    chat_parser = subparsers.add_parser("chat", help="Send one message to the assistant")
    chat_parser.add_argument("--message", required=True, help="Message for the assistant")
    chat_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG,
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG})",
    )
    chat_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- backward compat: top-level flags for serve ---
    parser.add_argument("--config", default=DEFAULT_CONFIG, help=argparse.SUPPRESS)
    parser.add_argument("--host", help=argparse.SUPPRESS)
    parser.add_argument("--port", type=int, help=argparse.SUPPRESS)
    parser.add_argument("--verbose", "-v", action="store_true", help=argparse.SUPPRESS)

    args = parser.parse_args(argv)

    # Default to serve when no subcommand given
    if args.command is None:
        args.command = "serve"

    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(config_path: str) -> Settings:
    """Load settings, using defaults only when the default file is absent."""
    if config_path == DEFAULT_CONFIG and not Path(config_path).exists():
        logging.getLogger(__name__).info("No %s found - using default settings", config_path)
        return Settings()
    return Settings.from_yaml(config_path)


def build_provider(settings: Settings) -> OracleProvider:
    """Create the configured oracle provider and fail fast if it cannot run."""
    provider = get_provider(settings.oracle.provider, timeout=settings.oracle.timeout_seconds)
    provider.ensure_ready()
    return provider


def build_store(settings: Settings) -> MemoryStore:
    store = MemoryStore()
    if settings.store.seed_sample_data:
        store.seed()
    return store


def cmd_serve(args: argparse.Namespace, settings: Settings, provider: OracleProvider) -> None:
    """Handle serve subcommand."""
    import uvicorn

    from src.api.app import create_app

    app = create_app(settings, build_store(settings), provider)
    uvicorn.run(
        app,
        host=args.host or settings.server.host,
        port=args.port or settings.server.port,
        log_level="debug" if args.verbose else "info",
    )


def cmd_match(args: argparse.Namespace, settings: Settings, provider: OracleProvider) -> None:
    """Handle match subcommand."""
    from src.pipeline.matcher import BusinessMatcher

    store = MemoryStore()
    store.seed()
    matcher = BusinessMatcher(provider, settings.matching)

    results = matcher.match_query(args.query, store.search_businesses(args.query))
    print(f"Results for '{args.query}':")
    for rank, business in enumerate(results, start=1):
        print(f"  {rank}. [{business.id}] {business.category}: {business.description}")


def cmd_chat(args: argparse.Namespace, settings: Settings, provider: OracleProvider) -> None:
    """Handle chat subcommand."""
    from src.pipeline.assistant import Assistant

    assistant = Assistant(provider, settings.assistant)
    print(assistant.respond([ConversationTurn(role="user", content=args.message)]))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        provider = build_provider(settings)
    except (ImportError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.command == "match":
        cmd_match(args, settings, provider)
    elif args.command == "chat":
        cmd_chat(args, settings, provider)
    else:
        cmd_serve(args, settings, provider)


if __name__ == "__main__":
    main()
