import math

import pytest

from icmkit.engine.errors import (
    DegenerateStackError,
    IndexOutOfRangeError,
    InvalidInputError,
)
from icmkit.engine.icm import (
    bubble_factor,
    calculate_all_equities,
    calculate_bubble_factor,
    calculate_elimination_probabilities,
    calculate_icm,
    calculate_player_equity,
    new_memo,
)


def _equities(stacks, payouts):
    return [calculate_player_equity(stacks, payouts, i) for i in range(len(stacks))]


@pytest.mark.parametrize("stacks,payouts", [
    ([3000, 1000], [600, 400]),
    ([2000, 1500, 500], [500, 300, 200]),
    ([2000, 1500, 1000, 500], [600, 400]),
    ([2000, 1500, 1000, 500], [5000, 3000, 2000, 1000]),
    ([5000, 4000, 3500, 3000, 2500, 2000, 1500], [4500, 2700, 1800]),
    ([100, 80, 60, 40], [50, 30, 20]),
])
def test_equities_sum_to_prize_pool(stacks, payouts):
    total = sum(_equities(stacks, payouts))
    assert total == pytest.approx(sum(payouts), rel=1e-9)


def test_single_player_takes_first_prize():
    assert calculate_player_equity([1234], [700, 300], 0) == 700
    assert calculate_player_equity([1234], [], 0) == 0


def test_heads_up_closed_form():
    assert calculate_player_equity([3000, 1000], [600, 400], 0) == pytest.approx(550)
    assert calculate_player_equity([3000, 1000], [600, 400], 1) == pytest.approx(450)


def test_equal_stacks_are_symmetric():
    eqs = _equities([1000, 1000, 1000, 1000], [400, 300, 200, 100])
    for e in eqs:
        assert e == pytest.approx(250)

    bubble = _equities([1000, 1000, 1000, 1000], [600, 400])
    for e in bubble:
        assert e == pytest.approx(250)


@pytest.mark.parametrize("payouts", [[60, 40], [50, 30, 20]])
def test_more_chips_never_means_less_equity(payouts):
    prev = -1.0
    for x in [200, 500, 1000, 2000, 5000, 20000]:
        e = calculate_player_equity([x, 1000, 1000], payouts, 0)
        assert e >= prev
        prev = e


def test_four_handed_ladder_scenario():
    stacks = [2000, 1500, 1000, 500]
    payouts = [5000, 3000, 2000, 1000]
    eqs = _equities(stacks, payouts)
    assert eqs[0] > eqs[3]
    assert sum(eqs) == pytest.approx(11000)
    # ICM compresses: leader below chip share, short stack above
    assert eqs[0] < 0.4 * 11000
    assert eqs[3] > 0.05 * 11000


def test_every_paid_player_gets_at_least_min_cash():
    eqs = _equities([5000, 300, 200], [50, 30, 20])
    assert all(e >= 20 for e in eqs)


def test_zero_stack_does_not_produce_nan():
    stacks = [1000, 0, 500]
    payouts = [1000, 600]
    eqs = _equities(stacks, payouts)
    assert not any(math.isnan(e) or math.isinf(e) for e in eqs)
    assert eqs[0] == pytest.approx(1000 * 2 / 3 + 600 / 3)
    assert eqs[1] == 0
    assert eqs[2] == pytest.approx(1000 / 3 + 600 * 2 / 3)
    assert sum(eqs) == pytest.approx(1600)


def test_zero_stack_in_the_money_takes_lowest_prize():
    eqs = _equities([1000, 0, 500], [50, 30, 20])
    assert eqs[1] == pytest.approx(20)
    assert sum(eqs) == pytest.approx(100)


def test_elimination_probabilities_normalised():
    probs = calculate_elimination_probabilities([4000, 2500, 1000, 500])
    assert sum(probs) == pytest.approx(1.0)
    assert all(p >= 0 for p in probs)
    # short stack busts first most often
    assert probs == sorted(probs)


def test_elimination_probabilities_busted_players_go_first():
    assert calculate_elimination_probabilities([1000, 0, 500]) == [0.0, 1.0, 0.0]
    assert calculate_elimination_probabilities([0, 300, 0]) == [0.5, 0.0, 0.5]
    assert calculate_elimination_probabilities([700]) == [1.0]
    assert calculate_elimination_probabilities([]) == []


def test_calculate_icm_fields():
    r = calculate_icm([3000, 1000], [600, 400], 0)
    assert r.equity == pytest.approx(550)
    assert r.dollar_ev == r.equity
    assert r.chip_ev == pytest.approx(750)
    assert r.risk_premium == pytest.approx(200)
    assert set(r.to_dict()) == {"equity", "chipEV", "dollarEV", "riskPremium"}


def test_short_stack_has_negative_risk_premium():
    r = calculate_icm([4000, 500, 500], [6000, 4000], 1)
    assert r.risk_premium < 0


def test_calculate_icm_default_player_is_seat_zero():
    assert calculate_icm([3000, 1000], [600, 400]).equity == pytest.approx(550)


def test_bubble_factor_is_chip_share_over_icm():
    bf = calculate_bubble_factor([3000, 1000], [600, 400], 0)
    assert bf == pytest.approx(750 / 550)


def test_bubble_factor_leader_vs_short_stack():
    stacks, payouts = [4000, 500, 500], [6000, 4000]
    leader = calculate_bubble_factor(stacks, payouts, 0)
    short = calculate_bubble_factor(stacks, payouts, 1)
    # chip share / ICM: the leader's chips are worth less than their share
    assert leader > 1 > short


def test_bubble_factor_is_one_when_icm_equity_is_zero():
    assert calculate_bubble_factor([1000, 0, 500], [1000, 600], 1) == 1.0


@pytest.mark.parametrize("stacks,payouts", [([], [100]), ([100], [])])
def test_calculate_icm_rejects_empty_input(stacks, payouts):
    with pytest.raises(InvalidInputError):
        calculate_icm(stacks, payouts)


def test_player_index_out_of_range():
    with pytest.raises(IndexOutOfRangeError):
        calculate_icm([100, 200], [50], 2)
    with pytest.raises(IndexError):
        calculate_player_equity([100, 200], [50], -1)


def test_negative_and_non_finite_stacks_rejected():
    with pytest.raises(InvalidInputError):
        calculate_icm([1000, -500], [600, 400])
    with pytest.raises(InvalidInputError):
        calculate_icm([1000, float("nan")], [600, 400])


def test_all_zero_stacks_are_degenerate():
    with pytest.raises(DegenerateStackError):
        calculate_icm([0, 0, 0], [100, 50])
    # still a ValueError for callers that only know the builtin
    with pytest.raises(ValueError):
        calculate_bubble_factor([0, 0], [100])


def test_all_equities_match_single_calls_and_share_memo():
    stacks = [5000, 4000, 3000, 2000, 1000]
    payouts = [500, 300, 200]
    memo = new_memo()
    batch = calculate_all_equities(stacks, payouts, memo=memo)
    assert batch == pytest.approx(_equities(stacks, payouts))
    assert memo.stats.hits > 0


def test_nine_handed_final_table_conserves():
    stacks = [5000, 4000, 3500, 3000, 2500, 2000, 1500, 1000, 500]
    payouts = [4500, 2700, 1800, 1350, 1080, 900, 720, 450, 0]
    eqs = calculate_all_equities(stacks, payouts)
    assert sum(eqs) == pytest.approx(sum(payouts))
    assert eqs[0] > eqs[-1]


def test_bubble_factor_helper():
    assert bubble_factor(750, 550) == pytest.approx(750 / 550)
    assert bubble_factor(0, 0) == 1.0


def test_repeat_call_is_one_memo_hit_even_for_zero_equity():
    memo = new_memo()
    stacks, payouts = [1000, 0, 500, 800], [1000, 600]
    assert calculate_player_equity(stacks, payouts, 1, memo=memo) == 0.0
    misses, hits = memo.stats.misses, memo.stats.hits
    assert calculate_player_equity(stacks, payouts, 1, memo=memo) == 0.0
    assert memo.stats.misses == misses
    assert memo.stats.hits == hits + 1
