import pytest

from icmkit.engine.errors import InvalidInputError
from icmkit.engine.report import (
    COMMON_SCENARIOS,
    bubble_analysis,
    bubble_interpretation,
    bubble_recommendations,
    chip_rank,
    field_analysis,
    icm_analysis,
    push_fold_analysis,
    push_fold_confidence,
    push_fold_decision,
    solve_scenario,
)
from icmkit.engine.icm import calculate_bubble_factor


def test_icm_analysis_adds_percentages_and_rank():
    out = icm_analysis([1000, 3000], [600, 400], 1)
    data = out["data"]
    assert data["equity"] == pytest.approx(550)
    assert data["chipPercentage"] == pytest.approx(0.75)
    assert data["totalPayout"] == 1000
    assert data["equityPercentage"] == pytest.approx(55.0)
    assert data["riskPremiumPercentage"] == pytest.approx(20.0)
    assert data["position"] == 1
    assert out["metadata"] == {"players": 2, "payoutPositions": 2, "inMoney": True}


def test_chip_rank_ties_keep_seat_order():
    assert chip_rank([500, 900, 500], 1) == 1
    assert chip_rank([500, 900, 500], 0) == 2
    assert chip_rank([500, 900, 500], 2) == 3


def test_bubble_interpretation_thresholds():
    assert bubble_interpretation(3.0).startswith("EXTREME")
    assert bubble_interpretation(2.0).startswith("HIGH")
    assert bubble_interpretation(1.5).startswith("MODERATE")
    assert bubble_interpretation(1.2).startswith("MILD")
    assert bubble_interpretation(1.0).startswith("LOW")


def test_bubble_recommendations_on_the_bubble():
    recs = bubble_recommendations(2.5, total_players=4, paid_positions=3)
    assert "Avoid marginal spots" in recs
    assert "This is the bubble - extreme caution required" in recs
    assert "Take profitable spots" not in recs


def test_bubble_recommendations_low_pressure():
    recs = bubble_recommendations(1.0, total_players=6, paid_positions=3)
    assert recs == ["Can play closer to chip EV", "Take profitable spots"]


def test_bubble_analysis_matches_chip_over_icm():
    out = bubble_analysis([3000, 1000], [600, 400], 0)
    assert out["bubbleFactor"] == pytest.approx(750 / 550)
    assert out["icmEquity"] == pytest.approx(550)
    assert out["chipEquity"] == pytest.approx(750)
    assert out["interpretation"].startswith("MILD")


def test_push_fold_analysis_recommends_push_with_fold_equity():
    out = push_fold_analysis(1000, 800, 150, 50, 0.3, 0.6)
    assert out["foldEV"] == 0.0
    assert out["recommendation"] == "PUSH"
    assert out["profitability"] == "PROFITABLE"
    assert out["effectiveStack"] == 800
    assert out["stackInBB"] == 10.0
    assert 0.5 <= out["confidence"] <= 0.95


def test_push_fold_analysis_folds_without_fold_equity():
    # no folds, coin flip for the effective stack: push EV = 0.5 * pot
    out = push_fold_analysis(1000, 1000, 150, 0, 0.3, 0.0)
    assert out["pushEV"] == pytest.approx(75)
    out = push_fold_analysis(1000, 1000, 0.0001, 0, 0.3, 0.0)
    assert out["recommendation"] == "PUSH"


@pytest.mark.parametrize("kwargs", [
    dict(blinds=0),
    dict(fold_equity=1.5),
    dict(calling_range=-0.1),
    dict(hero_stack=0),
])
def test_push_fold_analysis_rejects_bad_input(kwargs):
    base = dict(hero_stack=1000, villain_stack=800, blinds=150, antes=0, calling_range=0.3, fold_equity=0.6)
    base.update(kwargs)
    with pytest.raises(InvalidInputError):
        push_fold_analysis(**base)


def test_push_fold_confidence_is_clamped():
    assert push_fold_confidence(1000, 0, 0.9) == 0.95
    assert push_fold_confidence(0.01, 0, 0.3) == 0.5


def test_field_analysis_conserves_prize_pool():
    out = field_analysis([2000, 1500, 1000, 500], [600, 400])
    assert out["totalEquity"] == pytest.approx(1000)
    assert out["totalPayout"] == 1000
    assert out["inMoney"] is False
    assert [p["position"] for p in out["players"]] == [1, 2, 3, 4]
    eqs = [p["equity"] for p in out["players"]]
    assert eqs == sorted(eqs, reverse=True)


def test_field_analysis_rejects_empty_field():
    with pytest.raises(InvalidInputError):
        field_analysis([], [100])


def test_common_scenarios_are_valid_fields():
    for sc in COMMON_SCENARIOS:
        out = field_analysis(sc["stacks"], sc["payouts"])
        assert out["totalEquity"] == pytest.approx(sum(sc["payouts"]))


def test_push_fold_decision_hand_in_range():
    out = push_fold_decision(1000, [800, 600], 50, 100, 0, "BTN", [600, 400], hero_cards="AhKd")
    assert out["recommendation"] == "PUSH"
    assert out["handAnalysis"] == {"hand": "AKo", "inRange": True, "equity": 0.55}
    assert out["pushEV"] == pytest.approx(131.25)
    assert out["foldEV"] == 0.0
    assert out["stackSizeInBB"] == pytest.approx(10.0)
    assert out["bubbleFactor"] == pytest.approx(calculate_bubble_factor([1000, 800, 600], [600, 400], 0))


def test_push_fold_decision_hand_out_of_range():
    out = push_fold_decision(1000, [800, 600], 50, 100, 0, "BTN", [600, 400], hero_cards="7h2c")
    assert out["recommendation"] == "FOLD"
    assert out["handAnalysis"]["hand"] == "72o"
    assert out["handAnalysis"]["inRange"] is False


def test_push_fold_decision_range_widens_with_depth():
    # K8o only joins the push range from 12 BB up
    at_10 = push_fold_decision(1000, [800], 50, 100, 0, "CO", [600, 400], hero_cards="Kh8d")
    at_15 = push_fold_decision(1500, [800], 50, 100, 0, "CO", [600, 400], hero_cards="Kh8d")
    assert at_10["recommendation"] == "FOLD"
    assert at_15["recommendation"] == "PUSH"


def test_push_fold_decision_without_cards_folds():
    out = push_fold_decision(1000, [800, 600], 50, 100, 0, "BTN", [600, 400])
    assert out["recommendation"] == "FOLD"
    assert out["handAnalysis"] is None
    assert "AA" in out["optimalRange"]


def test_push_fold_decision_ante_is_per_player():
    out = push_fold_decision(1000, [800, 600], 50, 100, 10, "BTN", [600, 400])
    assert out["pushEV"] == pytest.approx(157.5)


@pytest.mark.parametrize("kwargs", [
    dict(hero_cards="AhAh"),
    dict(hero_cards="AhKdQc"),
    dict(villain_stacks=[]),
    dict(big_blind=0),
    dict(position="NOWHERE"),
    dict(payouts=[]),
])
def test_push_fold_decision_rejects_bad_input(kwargs):
    args = dict(
        hero_stack=1000, villain_stacks=[800], small_blind=50, big_blind=100,
        ante=0, position="BTN", payouts=[600, 400],
    )
    args.update(kwargs)
    with pytest.raises(InvalidInputError):
        push_fold_decision(**args)


def test_solve_scenario_deep_stack_raises_opening_hands():
    stacks, payouts = [5000, 3000, 2000], [600, 400]
    out = solve_scenario(stacks, payouts, 0, 50, 100, position="UTG", hero_cards="AsKs")
    assert out["data"]["action"] == "RAISE"
    assert out["data"]["confidence"] == 0.8
    assert out["data"]["ev"] == pytest.approx(out["icmAnalysis"]["dollarEV"])
    assert out["scenario"] == {"stackInBB": 50.0, "position": "UTG", "players": 3, "hand": "AKs"}


def test_solve_scenario_deep_stack_folds_trash_and_unknown_hands():
    stacks, payouts = [5000, 3000, 2000], [600, 400]
    trash = solve_scenario(stacks, payouts, 0, 50, 100, position="UTG", hero_cards="7h2c")
    unknown = solve_scenario(stacks, payouts, 0, 50, 100, position="UTG")
    assert (trash["data"]["action"], trash["data"]["confidence"]) == ("FOLD", 0.9)
    assert (unknown["data"]["action"], unknown["data"]["confidence"]) == ("FOLD", 0.7)


def test_solve_scenario_short_stack_shoves():
    out = solve_scenario([700, 3000, 2000], [600, 400], 0, 50, 100)
    assert out["data"]["action"] == "PUSH"
    assert out["data"]["ev"] == pytest.approx(127.5)
    assert out["data"]["confidence"] == 0.95

    out = solve_scenario([1200, 3000, 2000], [600, 400], 0, 50, 100)
    assert out["data"]["confidence"] == 0.85


def test_solve_scenario_needs_two_players():
    with pytest.raises(InvalidInputError):
        solve_scenario([1000], [100], 0, 50, 100)
