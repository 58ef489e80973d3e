"""Command line entry point for NDC lookups by drug name or ATC class."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence, Tuple

from .config import Settings
from .openfda import OpenFDAClient
from .output import format_table, resolve_output_path, write_csv
from .records import NDCRecord
from .remote import RemoteClient
from .resolvers import ClassResolver, DrugResolver
from .rxnav import RxNavClient

EMPTY_RESULT_MESSAGE = "No concepts identified, nothing to report."


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="List National Drug Codes for a drug name or ATC class")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--atc-class", "--ATCClass", dest="atc_class", help="ATC class name (levels 1-4), e.g. 'Beta blocking agents, selective'")
    target.add_argument("--drug-name", "--DrugName", dest="drug_name", help="Generic or brand drug name")
    parser.add_argument("--csv-out", "--CSVOut", dest="csv_out", help="Write the results to this CSV file instead of printing a table")
    parser.add_argument("--quiet", action="store_true", help="Do not log each remote request")
    parser.add_argument("--log-level", help="Logging level (defaults to NDC_LOOKUP_LOG_LEVEL or INFO)")
    return parser


def build_clients(settings: Settings, quiet: bool = False) -> Tuple[RxNavClient, OpenFDAClient]:
    remote = RemoteClient(timeout=settings.timeout, quiet=quiet)
    return (
        RxNavClient(remote, base_url=settings.rxnav_url),
        OpenFDAClient(remote, base_url=settings.openfda_url, limit=settings.fda_limit),
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    settings = Settings.from_env()

    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    rxnav, openfda = build_clients(settings, quiet=args.quiet)
    records: List[NDCRecord] = []
    if args.atc_class:
        records = ClassResolver(rxnav, openfda).resolve(args.atc_class)
    elif args.drug_name:
        records = DrugResolver(rxnav, openfda).resolve(args.drug_name)

    if not records:
        print(EMPTY_RESULT_MESSAGE)
        return 0

    if args.csv_out:
        output_path = write_csv(records, resolve_output_path(args.csv_out))
        print(f"{len(records)} NDC records written to {output_path}")
    else:
        print(format_table(records))
    return 0


__all__ = ["build_argument_parser", "build_clients", "main"]
