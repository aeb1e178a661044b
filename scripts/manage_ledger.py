#!/usr/bin/env python3
"""Command-line front end for the rent ledger.

Examples::

    python scripts/manage_ledger.py init
    python scripts/manage_ledger.py show
    python scripts/manage_ledger.py units --occupied
    python scripts/manage_ledger.py pay house1 2500 --method BANK_TRANSFER
    python scripts/manage_ledger.py request-lease house3 "Jane Doe" 1029384756 2600 sig-001
    python scripts/manage_ledger.py approve req-0123abcd4567
    python scripts/manage_ledger.py generate --locations 5 --units 6 --seed 42
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from rent_ledger.config import LedgerConfig, build_store
from rent_ledger.exceptions import RentLedgerError
from rent_ledger.generators import PortfolioGenerator
from rent_ledger.identity import CredentialTable
from rent_ledger.logging import setup_logging
from rent_ledger.models import PaymentMethod
from rent_ledger.service import LedgerService
from rent_ledger.store.serialization import serialize_value

logger = logging.getLogger("manage_ledger")


def emit(data: Any) -> None:
    """Print a result as JSON on stdout."""
    print(json.dumps(serialize_value(data), indent=2, ensure_ascii=False))


def build_service(config: LedgerConfig) -> LedgerService:
    """Wire the service from configuration."""
    credentials = (
        CredentialTable.from_file(config.credentials_file)
        if config.credentials_file
        else CredentialTable()
    )
    return LedgerService(
        build_store(config),
        credentials=credentials,
        collector_id=config.collector_id,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage the rent-collection ledger")
    parser.add_argument(
        "--store",
        choices=["memory", "json", "postgres"],
        help="Store backend (default: RENT_LEDGER_STORE or json)",
    )
    parser.add_argument(
        "--path",
        type=Path,
        help="Ledger file for the json backend (default: RENT_LEDGER_PATH or ledger.json)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Log level (default: LOG_LEVEL or INFO)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("init", help="Install the demo ledger if none exists")
    sub.add_parser("show", help="Print the portfolio summary")

    units = sub.add_parser("units", help="List units")
    units.add_argument("--location", help="Only units at this location id")
    occupancy = units.add_mutually_exclusive_group()
    occupancy.add_argument("--occupied", action="store_true", help="Only occupied units")
    occupancy.add_argument("--vacant", action="store_true", help="Only vacant units")
    units.add_argument("--search", help="Substring of unit or tenant name")

    pay = sub.add_parser("pay", help="Record a rent payment")
    pay.add_argument("unit_id")
    pay.add_argument("amount")
    pay.add_argument(
        "--method",
        choices=[m.value for m in PaymentMethod],
        default=PaymentMethod.CASH.value,
    )
    pay.add_argument("--receipt", help="Receipt reference")

    request = sub.add_parser("request-lease", help="Submit a lease request for a vacant unit")
    request.add_argument("unit_id")
    request.add_argument("tenant_name")
    request.add_argument("tenant_id_number")
    request.add_argument("rent_amount")
    request.add_argument("signature")

    approve = sub.add_parser("approve", help="Approve a pending lease request")
    approve.add_argument("request_id")

    reject = sub.add_parser("reject", help="Reject a pending lease request")
    reject.add_argument("request_id")

    vacate = sub.add_parser("vacate", help="Move the tenant out of a unit")
    vacate.add_argument("unit_id")

    handover = sub.add_parser("handover", help="Record cash handed to the manager")
    handover.add_argument("amount")

    add_location = sub.add_parser("add-location", help="Create a location")
    add_location.add_argument("name")

    add_unit = sub.add_parser("add-unit", help="Create a vacant unit")
    add_unit.add_argument("location_id")
    add_unit.add_argument("name")
    add_unit.add_argument("rent_amount")

    generate = sub.add_parser("generate", help="Replace the ledger with a synthetic portfolio")
    generate.add_argument("--locations", type=int, default=3, help="Number of locations (default: 3)")
    generate.add_argument("--units", type=int, default=4, help="Units per location (default: 4)")
    generate.add_argument(
        "--occupancy", type=float, default=0.7, help="Occupancy rate (default: 0.7)"
    )
    generate.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")

    return parser


def run(args: argparse.Namespace, service: LedgerService) -> Any:
    """Dispatch one subcommand and return its result."""
    if args.command == "init":
        installed = service.store.seed_if_absent()
        return {"seeded": installed}
    if args.command == "show":
        return service.summary()
    if args.command == "units":
        occupied = True if args.occupied else False if args.vacant else None
        return service.list_units(location_id=args.location, occupied=occupied, search=args.search)
    if args.command == "pay":
        return service.record_payment(
            args.unit_id, args.amount, PaymentMethod(args.method), receipt_reference=args.receipt
        )
    if args.command == "request-lease":
        return service.submit_lease_request(
            args.unit_id, args.tenant_name, args.tenant_id_number, args.rent_amount, args.signature
        )
    if args.command == "approve":
        return service.approve_lease_request(args.request_id)
    if args.command == "reject":
        return service.reject_lease_request(args.request_id)
    if args.command == "vacate":
        return service.vacate_unit(args.unit_id)
    if args.command == "handover":
        return service.record_cash_handover(args.amount)
    if args.command == "add-location":
        return service.add_location(args.name)
    if args.command == "add-unit":
        return service.add_unit(args.location_id, args.name, args.rent_amount)
    if args.command == "generate":
        generator = PortfolioGenerator(seed=args.seed)
        ledger = generator.generate(
            num_locations=args.locations,
            units_per_location=args.units,
            occupancy_rate=args.occupancy,
            now=service.clock.now(),
        )
        service.store.save(ledger)
        return ledger.summary()
    raise ValueError(f"Unknown command {args.command!r}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    config = LedgerConfig.from_env()
    if args.store:
        config.store.backend = args.store
    if args.path:
        config.store.json_path = args.path
    if args.log_level:
        config.log_level = args.log_level
    setup_logging(config.log_level, config.log_format)

    try:
        service = build_service(config)
        emit(run(args, service))
    except RentLedgerError as e:
        logger.error("%s: %s", type(e).__name__, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
