# ==============================================
# decider: Command Line Interface
# ==============================================
#
# PURPOSE:
#   Command-line interface to the recommendation engine.
#
# COMMANDS:
# ---------
# 1. Recommend for one endpoint, from flags or a JSON/YAML facts file:
#    decider recommend --endpoint "POST /orders" --entities 3 --services 3 \
#        --write-shape ValidationRules \
#        --entity Order --entity Inventory:stock --entity Payment:billing:ComplexInvariants:external
#    decider recommend --file facts.yaml --format yaml --save "POST /orders"
#
# 2. Recommend for a list of endpoints in one file:
#    decider batch endpoints.yaml
#
# 3. List / show saved reports:
#    decider history
#    decider show post-orders
#
# 4. Delete saved reports:
#    decider reset --confirm
#
#   Also runnable as: python -m pattern_decider.cli ...
#
# EXIT CODES:
# -----------
#   0 success, 1 missing report / refused reset, 2 invalid facts
#
# ==============================================

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

import yaml

from pattern_decider.config import get_config
from pattern_decider.engine import RecommendationEngine
from pattern_decider.errors import InvalidFacts
from pattern_decider.facts.endpoint_facts import EndpointFacts, EntityRef, WriteShape
from pattern_decider.facts.normalizer import FactNormalizer
from pattern_decider.persistence.report_store import ReportStore
from pattern_decider.report.recommendation import Recommendation


def parse_entity(spec: str) -> EntityRef:
    """
    Parse NAME[:SERVICE[:WRITE_SHAPE[:external]]].

    Empty parts keep their default, e.g. "Payment::ComplexInvariants".
    """
    parts = spec.split(":")
    if not parts[0]:
        raise argparse.ArgumentTypeError(f"entity '{spec}' has no name")
    if len(parts) > 4:
        raise argparse.ArgumentTypeError(f"entity '{spec}' has too many ':' parts")

    name = parts[0]
    service = parts[1] if len(parts) > 1 and parts[1] else None
    write_shape = None
    if len(parts) > 2 and parts[2]:
        try:
            write_shape = FactNormalizer().parse_enum(WriteShape, parts[2])
        except ValueError as e:
            raise argparse.ArgumentTypeError(str(e)) from None
    external = False
    if len(parts) > 3:
        if parts[3] != "external":
            raise argparse.ArgumentTypeError(f"entity '{spec}': last part must be 'external'")
        external = True

    return EntityRef(name=name, service=service, write_shape=write_shape, external=external)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="decider",
        description="Recommend a consistency pattern (ACID / CQRS / saga) for an API endpoint.",
    )
    parser.add_argument("--report-dir", help="Directory for saved reports (default: DECIDER_REPORT_DIR)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    rec = subparsers.add_parser("recommend", help="Recommend for one endpoint")
    rec.add_argument("--file", help="JSON or YAML facts document")
    rec.add_argument("--endpoint", default="", help='Display name, e.g. "POST /orders"')
    rec.add_argument("--entities", type=int, help="Number of entities affected")
    rec.add_argument("--services", type=int, default=1, help="Number of services involved")
    rec.add_argument("--ratio", help='Reads per write, e.g. 20, "10:1" or "inf"')
    rec.add_argument("--query-shape", help="SingleById, FilteredList, MultiJoin, ...")
    rec.add_argument("--write-shape", help="SimpleCrud, ValidationRules, ComplexInvariants, ...")
    rec.add_argument("--audit-critical", action="store_true")
    rec.add_argument("--long-running", action="store_true")
    rec.add_argument("--origin-service", default="origin")
    rec.add_argument(
        "--entity", action="append", type=parse_entity, default=[],
        metavar="NAME[:SERVICE[:WRITE_SHAPE[:external]]]",
        help="Named entity, root first; repeat for each entity",
    )
    rec.add_argument("--format", choices=("text", "json", "yaml"), default="text")
    rec.add_argument("--save", metavar="NAME", help="Save the report under this name")

    batch = subparsers.add_parser("batch", help="Recommend for every endpoint in a file")
    batch.add_argument("file", help="JSON or YAML list of facts documents")
    batch.add_argument("--format", choices=("text", "json", "yaml"), default="text")

    subparsers.add_parser("history", help="List saved reports")

    show = subparsers.add_parser("show", help="Show a saved report")
    show.add_argument("name")
    show.add_argument("--format", choices=("text", "json", "yaml"), default="text")

    reset = subparsers.add_parser("reset", help="Delete all saved reports")
    reset.add_argument("--confirm", action="store_true", help="Required to actually delete")

    return parser


def load_document(path: str) -> Any:
    """Read a JSON or YAML file (YAML is a superset of JSON)."""
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def facts_from_args(args: argparse.Namespace) -> EndpointFacts:
    if args.file:
        document = load_document(args.file)
        if not isinstance(document, dict):
            raise InvalidFacts([f"{args.file} must contain one facts mapping"])
        return EndpointFacts.from_dict(document)

    if args.entities is None:
        raise InvalidFacts(["--entities is required when --file is not given"])

    document: Dict[str, Any] = {
        "endpoint": args.endpoint,
        "entities_affected": args.entities,
        "services_involved": args.services,
        "read_write_ratio": args.ratio,
        "query_shape": args.query_shape,
        "write_shape": args.write_shape,
        "audit_critical": args.audit_critical,
        "long_running": args.long_running,
        "origin_service": args.origin_service,
        "entities": args.entity,
    }
    return EndpointFacts.from_dict(document)


def render_text(recommendation: Recommendation) -> str:
    """Short human-readable rendering."""
    intent = recommendation.intent
    lines = []
    if recommendation.facts is not None and recommendation.facts.endpoint:
        lines.append(f"Endpoint:   {recommendation.facts.endpoint}")
    lines.append(f"Intent:     {intent.label or intent.category.value} ({intent.confidence:.2f})")
    factors = ", ".join(f"{f.name}+{f.points}" for f in recommendation.complexity.factors) or "base"
    lines.append(f"Complexity: {recommendation.complexity.value}/10 [{factors}]")
    boundary = recommendation.boundary
    if boundary.fits_single_aggregate:
        lines.append("Boundary:   single aggregate")
    else:
        refs = ", ".join(boundary.cross_aggregate_references) or "none named"
        lines.append(f"Boundary:   crosses aggregates (by ID: {refs})")
    lines.append(f"Strategy:   {recommendation.strategy.chosen.value}")
    for number, step in enumerate(recommendation.strategy.saga_steps, start=1):
        pivot = " [pivot]" if step.is_pivot else ""
        undo = f" / undo: {step.compensation}" if step.compensation else ""
        lines.append(f"  {number}. {step.service}: {step.action} ({step.timeout_seconds:g}s){undo}{pivot}")
    lines.append(f"Rationale:  {recommendation.rationale}")
    for note in recommendation.notes:
        lines.append(f"  - {note}")
    return "\n".join(lines)


def render(recommendations: List[Recommendation], fmt: str, single: bool) -> str:
    if fmt == "json":
        if single:
            return recommendations[0].to_json()
        return json.dumps([r.to_dict() for r in recommendations], indent=2, allow_nan=False)
    if fmt == "yaml":
        if single:
            return recommendations[0].to_yaml()
        return yaml.safe_dump([r.to_dict() for r in recommendations], sort_keys=False)
    return "\n\n".join(render_text(r) for r in recommendations)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config()
    logging.basicConfig(level=config.log_level, format="%(levelname)s %(name)s: %(message)s")

    report_dir = args.report_dir or config.report_dir

    try:
        if args.command == "recommend":
            engine = RecommendationEngine(config)
            recommendation = engine.recommend(facts_from_args(args))
            print(render([recommendation], args.format, single=True))
            if args.save:
                path = ReportStore(report_dir).save(args.save, recommendation)
                print(f"✓ Saved report to {path}", file=sys.stderr)

        elif args.command == "batch":
            document = load_document(args.file)
            if not isinstance(document, list):
                raise InvalidFacts([f"{args.file} must contain a list of facts mappings"])
            recommendations = RecommendationEngine(config).recommend_batch(document)
            print(render(recommendations, args.format, single=False))

        elif args.command == "history":
            names = ReportStore(report_dir).list_names()
            if not names:
                print("No saved reports.")
            for name in names:
                print(name)

        elif args.command == "show":
            recommendation = ReportStore(report_dir).load(args.name)
            print(render([recommendation], args.format, single=True))

        elif args.command == "reset":
            if not args.confirm:
                print("Refusing to delete reports without --confirm.", file=sys.stderr)
                return 1
            deleted = ReportStore(report_dir).clear()
            print(f"🗑️  Deleted {deleted} report(s)")

    except InvalidFacts as e:
        print(f"✗ {e}", file=sys.stderr)
        return 2
    except FileNotFoundError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
