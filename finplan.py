"""
finplan — Main CLI

Flow per command:
1. Load the stored collection
2. Build (add) or look up (analyze) the target record
3. Run the analyzers against the collection
4. Print the formatted result

Usage:
    finplan purchase add -n "Laptop" -p 1500 -c electronics -l 4 -f daily
    finplan purchase analyze <id>
    finplan investment add -n "Index fund" -a 10000 -t stocks -r 8 --risk medium --horizon 10
    finplan investment list --type crypto
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, TypeVar

import bias_detector
import investment_analyzer
import purchase_analyzer
from config import DATA_FILE, LOG_FORMAT, LOG_LEVEL, LOGS_DIR, VERSION
from display import Display
from models import Investment, InvestmentType, Purchase, UsageFrequency
from storage import Storage, StorageError, new_id
from validator import (
    ValidationError, check_investment_sanity, check_purchase_sanity,
    parse_investment_type, parse_risk_level, parse_usage_frequency,
    validate_investment, validate_purchase,
)

logger = logging.getLogger(__name__)

R = TypeVar("R", Purchase, Investment)


class RecordNotFound(LookupError):
    pass


def setup_logging(log_dir: Path):
    root = logging.getLogger()
    if root.handlers:
        return
    log_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=LOG_LEVEL,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_dir / f"finplan_{datetime.now().strftime('%Y%m%d')}.log"),
        ],
    )


def find_record(records: Sequence[R], record_id: str) -> R:
    """Exact id match, else a unique id prefix (lists show the first 8 chars)."""
    if not record_id:
        raise RecordNotFound("Record id cannot be empty")
    for r in records:
        if r.id == record_id:
            return r
    matches = [r for r in records if r.id.startswith(record_id)]
    if len(matches) == 1:
        return matches[0]
    if matches:
        raise RecordNotFound(f"Id prefix '{record_id}' is ambiguous ({len(matches)} matches)")
    raise RecordNotFound(f"No record with id '{record_id}'")


# ── Purchase commands ───────────────────────────────────────────────────────

def cmd_purchase_add(args, storage: Storage, display: Display):
    purchase = Purchase(
        id=new_id(),
        name=args.name,
        price=args.price,
        category=args.category,
        expected_lifespan_years=args.lifespan,
        maintenance_cost_per_year=args.maintenance,
        alternative_cost=args.alternative,
        usage_frequency=parse_usage_frequency(args.frequency),
        notes=args.notes,
    )
    validate_purchase(purchase)

    sanity = check_purchase_sanity(purchase)
    if sanity:
        print(display.format_sanity_warnings(sanity))

    storage.add_purchase(purchase)
    print(display.success(f"Purchase added! ID: {purchase.id}"))

    data = storage.load()
    print(display.format_purchase_analysis(purchase_analyzer.analyze(purchase, data.purchases)))


def cmd_purchase_analyze(args, storage: Storage, display: Display):
    data = storage.load()
    purchase = find_record(data.purchases, args.id)
    print(f"📦 {purchase.name}")
    print(f"Price: {purchase.price:.2f}")
    print(f"Category: {purchase.category}")
    print(display.format_purchase_analysis(purchase_analyzer.analyze(purchase, data.purchases)))


def cmd_purchase_list(args, storage: Storage, display: Display):
    purchases = storage.load().purchases
    if args.category:
        purchases = [p for p in purchases if p.category == args.category]
    print(display.format_purchase_list(purchases))


# ── Investment commands ─────────────────────────────────────────────────────

def _show_investment(investment: Investment, history: List[Investment], display: Display):
    analysis = investment_analyzer.analyze(investment)
    biases = bias_detector.detect_for_investment(investment, history)
    print(display.format_investment_analysis(analysis, investment))
    if biases:
        print(display.format_bias_warnings(biases))


def cmd_investment_add(args, storage: Storage, display: Display):
    investment = Investment(
        id=new_id(),
        name=args.name,
        type=parse_investment_type(args.type),
        initial_amount=args.amount,
        current_value=args.current,
        expected_return_percent=args.expected_return,
        risk_level=parse_risk_level(args.risk),
        time_horizon_years=args.horizon,
        notes=args.notes,
    )
    validate_investment(investment)

    sanity = check_investment_sanity(investment)
    if sanity:
        print(display.format_sanity_warnings(sanity))

    storage.add_investment(investment)
    print(display.success(f"Investment added! ID: {investment.id}"))

    _show_investment(investment, storage.load().investments, display)


def cmd_investment_analyze(args, storage: Storage, display: Display):
    investments = storage.load().investments
    investment = find_record(investments, args.id)
    print(f"💰 {investment.name}")
    _show_investment(investment, investments, display)


def cmd_investment_list(args, storage: Storage, display: Display):
    investments = storage.load().investments
    if args.type:
        wanted = parse_investment_type(args.type)
        investments = [i for i in investments if i.type is wanted]
    print(display.format_investment_list(investments))


# ── Parser ──────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="finplan",
        description="Financial planner for rational purchase and investment decisions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--data-file", type=Path, default=DATA_FILE,
                        help=f"JSON data file (default: {DATA_FILE})")
    parser.add_argument("--no-color", action="store_true", help="Disable ANSI colors")
    groups = parser.add_subparsers(dest="group", required=True)

    # purchase
    purchase = groups.add_parser("purchase", help="Purchases")
    pcmds = purchase.add_subparsers(dest="command", required=True)

    add = pcmds.add_parser("add", help="Add a purchase")
    add.add_argument("-n", "--name", required=True)
    add.add_argument("-p", "--price", type=float, required=True)
    add.add_argument("-c", "--category", required=True)
    add.add_argument("-l", "--lifespan", type=float, help="Expected lifespan in years")
    add.add_argument("-m", "--maintenance", type=float, help="Maintenance cost per year")
    add.add_argument("-a", "--alternative", type=float, help="Price of a foregone alternative")
    add.add_argument("-f", "--frequency", help=f"Usage frequency ({'/'.join(f.value for f in UsageFrequency)})")
    add.add_argument("--notes")
    add.set_defaults(handler=cmd_purchase_add)

    analyze = pcmds.add_parser("analyze", help="Analyze a purchase by id")
    analyze.add_argument("id")
    analyze.set_defaults(handler=cmd_purchase_analyze)

    lst = pcmds.add_parser("list", help="List purchases")
    lst.add_argument("-c", "--category", help="Filter by category")
    lst.set_defaults(handler=cmd_purchase_list)

    # investment
    investment = groups.add_parser("investment", help="Investments")
    icmds = investment.add_subparsers(dest="command", required=True)

    add = icmds.add_parser("add", help="Add an investment")
    add.add_argument("-n", "--name", required=True)
    add.add_argument("-a", "--amount", type=float, required=True, help="Initial amount")
    add.add_argument("-t", "--type", required=True, help=f"Type ({'/'.join(t.value for t in InvestmentType)})")
    add.add_argument("-r", "--return", dest="expected_return", type=float, required=True,
                     help="Expected annual return (%%)")
    add.add_argument("--risk", required=True, help="Risk level (low/medium/high)")
    add.add_argument("--horizon", type=float, required=True, help="Time horizon in years")
    add.add_argument("-c", "--current", type=float, help="Current value")
    add.add_argument("--notes")
    add.set_defaults(handler=cmd_investment_add)

    analyze = icmds.add_parser("analyze", help="Analyze an investment by id")
    analyze.add_argument("id")
    analyze.set_defaults(handler=cmd_investment_analyze)

    lst = icmds.add_parser("list", help="List investments")
    lst.add_argument("-t", "--type", help="Filter by type")
    lst.set_defaults(handler=cmd_investment_list)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_dir = LOGS_DIR if args.data_file == DATA_FILE else args.data_file.parent / "logs"
    setup_logging(log_dir)

    storage = Storage(args.data_file)
    display = Display(color=not args.no_color)
    try:
        args.handler(args, storage, display)
    except ValidationError as e:
        print(display.error(f"Validation error: {e}"), file=sys.stderr)
        return 1
    except (RecordNotFound, StorageError) as e:
        print(display.error(str(e)), file=sys.stderr)
        return 1
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        print(display.error(f"Error: {e}"), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
