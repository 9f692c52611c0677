"""
CLI entry point for the ATM MCP server.
"""

import argparse
import asyncio
import logging
import sys

from atm_mcp.core.cash_dispenser import INITIAL_BILL_COUNT
from atm_mcp.server import run_server


def main() -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="ATM MCP Server - Simulate an ATM session through MCP"
    )
    parser.add_argument(
        "--bills",
        type=int,
        default=INITIAL_BILL_COUNT,
        help=f"Number of $20 bills loaded at startup (default: {INITIAL_BILL_COUNT})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()
    if args.bills < 0:
        parser.error("--bills must be non-negative")

    # Configure logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # MCP uses stdout for protocol, so log to stderr
    )

    # Run the server
    try:
        asyncio.run(run_server(bill_count=args.bills))
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
