#!/usr/bin/env python3
"""
pyutquery command line - query game servers and print their status
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from .config import ConfigValidationError, QueryConfig
from .query import QueryResponse, query_servers
from .utils.logging_config import ModuleLogger, configure_logging

logger = ModuleLogger.get_logger(__name__, logging.WARNING)


def format_response(address: str, response: QueryResponse) -> str:
    """Human readable summary of one query"""
    if not response.success:
        return f"{address}: query failed - {response.error}"

    server = response.server
    lines = [
        f"{address}: {server.name}",
        f"  Map:      {server.map}",
        f"  Game:     {server.game_type}",
        f"  Players:  {server.players}/{server.max_players}",
        f"  Game port: {server.port} (query {server.query_port})",
    ]
    for key, value in sorted(server.game_info.items()):
        lines.append(f"  {key} = {value}")
    if server.player_list:
        lines.append("  Roster:")
        for player in server.player_list:
            lines.append(f"    {player.name:<24} score {player.score:>5}  ping {player.ping:>4}")
    if not response.complete:
        lines.append("  (incomplete reply set)")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query UT2004-style game servers for their status")
    parser.add_argument("addresses", nargs="+", metavar="ADDRESS",
                        help="Server query address as host:port")
    parser.add_argument("--timeout", type=float, default=QueryConfig.timeout,
                        help="Seconds to wait for each reply")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = QueryConfig(timeout=args.timeout, log_packets=args.verbose).validate()
    except ConfigValidationError as e:
        logger.error(f"Invalid settings: {e}")
        return 2

    results = query_servers(args.addresses, config)

    if args.json:
        output = {
            address: {
                'success': response.success,
                'error': response.error,
                'server': response.server.to_dict(),
            }
            for address, response in results.items()
        }
        print(json.dumps(output, indent=2))
    else:
        print("\n\n".join(format_response(address, response) for address, response in results.items()))

    return 0 if all(response.success for response in results.values()) else 1


if __name__ == "__main__":
    sys.exit(main())
