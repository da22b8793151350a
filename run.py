#!/usr/bin/env python3
"""
Command line entry point for inspecting an InfluxDB V3 cluster.

Configures the provider from the environment and prints the requested
databases or tokens as JSON:
    python run.py databases
    python run.py database <name>
    python run.py tokens
    python run.py token <id>

Environment variables:
    INFLUXDB3_ACCOUNT_ID: Account ID (UUID)
    INFLUXDB3_CLUSTER_ID: Cluster ID (UUID)
    INFLUXDB3_TOKEN: Management token
    INFLUXDB3_URL: Management API host (default: https://console.influxdata.com)
    INFLUXDB3_LOG_LEVEL: Log level (default: INFO)
"""
import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from common.config.config import LOG_FORMAT, LOG_LEVEL
from common.utils.log_masking import install_masking_filter
from influxdb3_provider.models.database_model import DatabaseModel
from influxdb3_provider.models.token_model import TokenModel
from influxdb3_provider.provider import InfluxDBProvider


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Inspect InfluxDB V3 cluster databases and tokens"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("databases", help="List all databases")
    database_parser = subparsers.add_parser("database", help="Show one database")
    database_parser.add_argument("name", help="Database name")

    subparsers.add_parser("tokens", help="List all tokens")
    token_parser = subparsers.add_parser("token", help="Show one token")
    token_parser.add_argument("id", help="Token ID (UUID)")
    return parser


async def run_command(args: argparse.Namespace, provider: InfluxDBProvider) -> int:
    configured = provider.configure()
    diagnostics = configured.diagnostics
    if not diagnostics.has_error():
        try:
            if args.command == "databases":
                result = await provider.data_source("influxdb3_databases").read()
            elif args.command == "database":
                result = await provider.data_source("influxdb3_database").read(
                    DatabaseModel(name=args.name)
                )
            elif args.command == "tokens":
                result = await provider.data_source("influxdb3_tokens").read()
            else:
                result = await provider.data_source("influxdb3_token").read(
                    TokenModel(id=args.id)
                )
        finally:
            await provider.close()
        diagnostics = result.diagnostics

    for diagnostic in diagnostics:
        print(f"{diagnostic.severity.value}: {diagnostic.summary}", file=sys.stderr)
        print(f"  {diagnostic.detail}", file=sys.stderr)
    if diagnostics.has_error():
        return 1

    print(json.dumps(result.state.model_dump(), indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, stream=sys.stderr)
    install_masking_filter(logging.getLogger())

    args = build_parser().parse_args(argv)
    return asyncio.run(run_command(args, InfluxDBProvider()))


if __name__ == "__main__":
    sys.exit(main())
