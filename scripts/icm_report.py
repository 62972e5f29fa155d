# scripts/icm_report.py
from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from icmkit.engine.errors import ICMError
from icmkit.engine.pushfold import calculate_optimal_pushing_range, push_range_tier
from icmkit.engine.report import (
    COMMON_SCENARIOS,
    TIPS,
    bubble_analysis,
    field_analysis,
    icm_analysis,
    push_fold_analysis,
    push_fold_decision,
    solve_scenario,
)
from icmkit.settings import Settings

logger = logging.getLogger("icm_report")

MODES = ("field", "icm", "bubble", "pushfold", "decide", "solve", "scenarios")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="ICM equity / bubble factor / push-fold reports (JSON)")
    ap.add_argument("--mode", choices=MODES, default="field")
    ap.add_argument("--stacks", type=float, nargs="+", help="chip stacks, seat order")
    ap.add_argument("--payouts", type=float, nargs="+", help="prizes, 1st place first")
    ap.add_argument("--player", type=int, default=0, help="seat index for icm/bubble/solve")

    # push/fold
    ap.add_argument("--hero", type=float, help="hero stack (pushfold/decide)")
    ap.add_argument("--villain", type=float, nargs="+", help="villain stack(s) (pushfold/decide)")
    ap.add_argument("--blinds", type=float, help="SB + BB in the pot (pushfold)")
    ap.add_argument("--antes", type=float, default=0.0, help="total antes (pushfold), per player (decide/solve)")
    ap.add_argument("--calling_range", type=float, default=0.3)
    ap.add_argument("--fold_equity", type=float, default=0.7)

    # decide / solve
    ap.add_argument("--small_blind", type=float)
    ap.add_argument("--big_blind", type=float)
    ap.add_argument("--position", type=str, default="BTN")
    ap.add_argument("--hero_cards", type=str, help='e.g. "AhKd"')

    ap.add_argument("--log_level", type=str, default=None)
    ap.add_argument("--indent", type=int, default=2)
    return ap


def _need(args: argparse.Namespace, *names: str) -> None:
    missing = [n for n in names if getattr(args, n) is None]
    if missing:
        raise ValueError(f"--mode {args.mode} needs: " + ", ".join("--" + m for m in missing))


def run(args: argparse.Namespace, settings: Settings) -> Dict[str, Any]:
    if args.mode == "scenarios":
        scenarios: List[Dict[str, Any]] = []
        for sc in COMMON_SCENARIOS:
            field = field_analysis(sc["stacks"], sc["payouts"], memo_capacity=settings.memo_capacity)
            scenarios.append({**sc, "bubbleFactors": [p["bubbleFactor"] for p in field["players"]]})
        return {"scenarios": scenarios, "tips": TIPS}

    if args.mode == "pushfold":
        _need(args, "hero", "villain", "blinds")
        data = push_fold_analysis(
            args.hero, max(args.villain), args.blinds, args.antes, args.calling_range, args.fold_equity,
            settings.call_equity,
        )
        big_blind = args.blinds / 1.5
        data["pushTier"] = push_range_tier(args.hero / big_blind)
        data["optimalRange"] = calculate_optimal_pushing_range(
            args.hero, args.villain, big_blind, args.antes, args.position, args.payouts or [],
        )
        return data

    if args.mode == "decide":
        _need(args, "hero", "villain", "small_blind", "big_blind", "payouts")
        return push_fold_decision(
            args.hero, args.villain, args.small_blind, args.big_blind, args.antes,
            args.position, args.payouts, args.hero_cards, call_equity=settings.call_equity,
        )

    _need(args, "stacks", "payouts")
    if args.mode == "solve":
        _need(args, "small_blind", "big_blind")
        return solve_scenario(
            args.stacks, args.payouts, args.player, args.small_blind, args.big_blind, args.antes,
            args.position, args.hero_cards, call_equity=settings.call_equity,
        )
    if args.mode == "icm":
        return icm_analysis(args.stacks, args.payouts, args.player)
    if args.mode == "bubble":
        return bubble_analysis(args.stacks, args.payouts, args.player)
    return field_analysis(args.stacks, args.payouts, memo_capacity=settings.memo_capacity)


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
        logging.basicConfig(level=(args.log_level or settings.log_level).upper(), format="%(message)s")
        out = run(args, settings)
    except (ICMError, ValueError) as e:
        logger.debug("rejected input: %s", e)
        print(f"error: invalid input ({e.__class__.__name__})", file=sys.stderr)
        return 2

    print(json.dumps(out, indent=args.indent))
    return 0


if __name__ == "__main__":
    sys.exit(main())
