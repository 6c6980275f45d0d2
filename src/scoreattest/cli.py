#!/usr/bin/env python3
"""
scoreattest CLI — Attest scoring-service scores on-chain.

Configuration comes from the environment (see scoreattest.config).

Commands:
    run    - Fetch, encode and attest every address in an input file
    score  - Fetch one address's score and show the encoded payload
"""

import argparse
import json
import logging
import sys
from typing import Optional

from scoreattest.addresses import canonical, is_address, read_addresses
from scoreattest.config import AttestConfig
from scoreattest.errors import AttestError, ConfigError
from scoreattest.log import setup_logging
from scoreattest.pipeline import PipelineOrchestrator
from scoreattest.report import summarize, write_report

logger = logging.getLogger("scoreattest.cli")

DEFAULT_INPUT = "inputs/score_addresses.csv"
DEFAULT_OUTPUT = "outputs/scored_addresses.csv"


def _output(data: dict, args: argparse.Namespace, human_fn=None):
    """Output data as JSON or pretty-printed."""
    if getattr(args, 'json', False):
        print(json.dumps(data, indent=2, default=str))
    elif human_fn:
        human_fn(data)
    else:
        print(json.dumps(data, indent=2, default=str))


def _build_pipeline(config: AttestConfig) -> PipelineOrchestrator:
    return PipelineOrchestrator.from_config(config)


# ─── Commands ──────────────────────────────────────────────────────

def cmd_run(args):
    """Attest every address listed in the input file."""
    config = AttestConfig.from_env().with_overrides(
        batch_size=args.batch_size, request_delay=args.delay,
    )

    addresses = read_addresses(args.input)
    logger.info("Found %d addresses to process", len(addresses))
    if not addresses:
        result = {"input": args.input, "total": 0, "output": None}
        _output(result, args, lambda d: print(f"⚠ No valid addresses found in {d['input']}"))
        return result

    with _build_pipeline(config) as pipeline:
        outcomes = pipeline.run(addresses)

    write_report(outcomes, args.output)
    result = summarize(outcomes).summary()
    result["output"] = args.output

    def human(d):
        print(f"\nProcessing complete:")
        print(f"✓ Successful: {d['succeeded']}")
        print(f"✗ Failed:     {d['failed']} ({d['zero_scores']} zero score)")
        print(f"📊 Total:     {d['total']}")
        print(f"   Results written to {d['output']}")

    _output(result, args, human)
    return result


def cmd_score(args):
    """Fetch a score and show the payload that would be attested."""
    from scoreattest.encoder import attestable_stamps, encode
    from scoreattest.score_client import ScoreClient

    if not is_address(args.address):
        raise AttestError(f"not a valid address: {args.address}")
    address = canonical(args.address)
    config = AttestConfig.from_env()

    with ScoreClient(config.scorer_endpoint, config.scorer_api_key) as client:
        record = client.fetch_score(address, config.scorer_id)

    result = {
        "address": address,
        "score": record.score,
        "threshold": record.threshold,
        "passing_score": record.passing_score,
        "expiration_timestamp": record.expiration_timestamp,
        "error": record.error,
    }
    if not record.is_zero_score:
        result["stamps"] = [
            {"provider": p, "scaled_score": s} for p, s in attestable_stamps(record)
        ]
        result["payload"] = "0x" + encode(record, config.scorer_id).hex()

    def human(d):
        if d['error']:
            print(f"⚠ {d['address']}: {d['error']}")
            return
        status = "passing" if d['passing_score'] else "not passing"
        print(f"📊 Score for {d['address']}")
        print(f"   Score:     {d['score']} ({status}, threshold {d['threshold']})")
        print(f"   Expires:   {d['expiration_timestamp']}")
        print(f"   Stamps:    {len(d['stamps'])} attestable")
        print(f"   Payload:   {d['payload']}")

    _output(result, args, human)
    return result


# ─── Parser ────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scoreattest",
        description="scoreattest — attest scores on-chain",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    parser.add_argument("--log-level", default="INFO", help="Log level (default INFO)")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")

    sub = parser.add_subparsers(dest="command", help="Available commands")

    # run
    p = sub.add_parser("run", help="Attest all addresses in a file")
    p.add_argument("-i", "--input", default=DEFAULT_INPUT, help="Newline-delimited address file")
    p.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="CSV report path")
    p.add_argument("-b", "--batch-size", type=int, help="Addresses per batch (overrides BATCH_SIZE)")
    p.add_argument("-d", "--delay", type=float, help="Seconds between addresses (overrides REQUEST_DELAY)")

    # score
    p = sub.add_parser("score", help="Show the score payload for one address")
    p.add_argument("address", help="Address to look up")

    return parser


def main(argv: Optional[list[str]] = None) -> Optional[dict]:
    """CLI entry point. Returns result dict for testing."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.log_level, json_format=args.log_json)

    commands = {
        "run": cmd_run,
        "score": cmd_score,
    }

    try:
        return commands[args.command](args)
    except ConfigError as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        sys.exit(1)
    except FileNotFoundError as e:
        print(f"❌ File not found: {e}", file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
