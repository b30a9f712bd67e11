"""CLI entry point for the SPN self-test.

Usage:
    python scripts/run_selftest.py                          # vectors + roundtrip + S-boxes
    python scripts/run_selftest.py --exhaustive             # every 16-bit block
    python scripts/run_selftest.py --avalanche-trials 500   # also measure avalanche
    python scripts/run_selftest.py --key-schedule ks.wide_shift --no-vectors

Exit status is 0 when every vector and roundtrip check passes, 1 otherwise.

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

# Ensure project root is on path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from spnlab.config import load_settings
from spnlab.cipher.cryptanalysis import evaluate_cipher
from spnlab.cipher.spec import default_spec
from spnlab.errors import ConfigurationError
from spnlab.evaluation import (
    EvaluationReport,
    analyze_all_sboxes,
    check_vectors,
    run_roundtrip_tests,
)
from spnlab.utils.repro import make_run_dir, set_global_seed

logger = logging.getLogger("spnlab.selftest")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="SPN self-test - reference vectors, roundtrip and S-box analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python scripts/run_selftest.py --exhaustive\n"
            "  python scripts/run_selftest.py --rounds 2 --sbox sbox.present --no-vectors\n"
            "  python scripts/run_selftest.py --rounds 6 --master-key 0011101010010100110101100011111100111010\n"
        ),
    )

    parser.add_argument("--rounds", type=int, default=None, help="Override SPN_ROUNDS")
    parser.add_argument("--sbox", type=str, default=None, help="S-box component id")
    parser.add_argument("--perm", type=str, default=None, help="Permutation component id")
    parser.add_argument("--key-schedule", type=str, default=None, help="Key schedule component id")
    parser.add_argument("--master-key", type=str, default=None, help="Override SPN_MASTER_KEY (0/1 string)")
    parser.add_argument(
        "--vectors", type=int, default=1000,
        help="Random roundtrip vectors (default: 1000)",
    )
    parser.add_argument(
        "--exhaustive", action="store_true",
        help="Roundtrip every block of the block width",
    )
    parser.add_argument(
        "--avalanche-trials", type=int, default=0,
        help="Avalanche trials; 0 skips the avalanche measurement (default: 0)",
    )
    parser.add_argument(
        "--no-vectors", action="store_true",
        help="Skip the published reference vectors",
    )
    parser.add_argument(
        "--output-dir", type=str, default=None,
        help="Write report.json and summary.txt under this directory",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    # Configure logging
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        settings = load_settings()
    except ValidationError as exc:
        logger.error("invalid settings: %s", exc)
        return 2
    set_global_seed(settings.global_seed)

    components = {
        "sbox": args.sbox or settings.sbox_id,
        "perm": args.perm or settings.perm_id,
        "key_schedule": args.key_schedule or settings.key_schedule_id,
    }
    overrides = {"components": components}
    if args.rounds is not None:
        overrides["rounds"] = args.rounds
    if args.master_key is not None:
        overrides["master_key"] = args.master_key

    report = EvaluationReport()

    try:
        spec = default_spec(settings, **overrides)

        if not args.no_vectors:
            report.vector_checks = check_vectors()

        report.roundtrip_results.append(run_roundtrip_tests(
            spec,
            num_vectors=args.vectors,
            seed=settings.global_seed,
            exhaustive=args.exhaustive,
        ))

        if args.avalanche_trials > 0:
            report.avalanche = evaluate_cipher(spec, trials=args.avalanche_trials)
    except (ConfigurationError, ValidationError) as exc:
        logger.error("invalid cipher configuration: %s", exc)
        return 2

    report.sbox_results = analyze_all_sboxes()

    print(report.to_summary())

    if args.output_dir:
        paths = make_run_dir(args.output_dir, spec.name)
        paths.save(spec.model_dump(), report.to_dict(), report.to_summary())
        print(f"\nResults saved to: {paths.run_dir}")

    return 0 if report.all_pass else 1


if __name__ == "__main__":
    sys.exit(main())
