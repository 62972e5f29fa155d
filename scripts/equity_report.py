# scripts/equity_report.py
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from icmkit.helpers.equity import hand_vs_hand_equity, range_vs_range_equity
from icmkit.helpers.evaluator import evaluate_hand
from icmkit.helpers.ranges import combo_count, hands_to_range_string, parse_range_string, positional_range
from icmkit.settings import Settings

logger = logging.getLogger("equity_report")

MODES = ("evaluate", "hand", "range", "parse", "position")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Hand evaluation and Monte Carlo equity (JSON)")
    ap.add_argument("--mode", choices=MODES, default="hand")
    ap.add_argument("--cards", type=str, help='5-7 cards, e.g. "AsKsQsJsTs" (evaluate)')
    ap.add_argument("--hand1", type=str, help='e.g. "AhAd"')
    ap.add_argument("--hand2", type=str, help='e.g. "KcKd"')
    ap.add_argument("--range1", type=str, help='e.g. "QQ+, AKs"')
    ap.add_argument("--range2", type=str)
    ap.add_argument("--range", dest="range_spec", type=str, help="range string (parse)")
    ap.add_argument("--position", type=str, default="BTN")
    ap.add_argument("--action", type=str, default="open")
    ap.add_argument("--board", type=str, default="")
    ap.add_argument("--iters", type=int, default=None)
    ap.add_argument("--seed", type=int, default=None)
    ap.add_argument("--log_level", type=str, default=None)
    return ap


def run(args: argparse.Namespace, settings: Settings) -> Dict[str, Any]:
    seed = args.seed if args.seed is not None else settings.seed

    if args.mode == "evaluate":
        if not args.cards:
            raise ValueError("--mode evaluate needs --cards")
        return evaluate_hand(args.cards).to_dict()

    if args.mode == "parse":
        if not args.range_spec:
            raise ValueError("--mode parse needs --range")
        hands = parse_range_string(args.range_spec)
        return {
            "hands": hands,
            "compressed": hands_to_range_string(hands),
            "combos": combo_count(hands),
        }

    if args.mode == "position":
        return positional_range(args.position, args.action)

    if args.mode == "range":
        if not (args.range1 and args.range2):
            raise ValueError("--mode range needs --range1 and --range2")
        iters = args.iters or settings.range_iterations
        return range_vs_range_equity(args.range1, args.range2, args.board, iterations=iters, seed=seed).to_dict()

    if not (args.hand1 and args.hand2):
        raise ValueError("--mode hand needs --hand1 and --hand2")
    iters = args.iters or settings.equity_iterations
    return hand_vs_hand_equity(args.hand1, args.hand2, args.board, iterations=iters, seed=seed).to_dict()


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    t0 = time.time()
    try:
        settings = Settings.from_env()
        logging.basicConfig(level=(args.log_level or settings.log_level).upper(), format="%(message)s")
        out = run(args, settings)
    except ValueError as e:
        logger.debug("rejected input: %s", e)
        print("error: invalid input", file=sys.stderr)
        return 2
    logger.info("%s done in %.2fs", args.mode, time.time() - t0)

    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
