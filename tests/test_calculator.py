# This project was developed with assistance from AI tools.
"""Tests for the savings and mortgage projection engine."""

import math

import pytest

from kvartplan.services.calculator import (
    INFEASIBLE,
    MAX_SEARCH_MONTHS,
    MAX_YEARLY_ROWS,
    accumulate_savings,
    calculate_all,
    future_price,
    generate_projection,
    months_to_target,
    mortgage_payment,
    recommended_savings,
    yearly_milestones,
)
from tests.factories import make_inputs

# ---------------------------------------------------------------------------
# future_price
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("months", [0, 1, 12, 120, 600])
def test_future_price_zero_growth_is_identity(months):
    assert future_price(7_500_000, 0, months) == 7_500_000


@pytest.mark.parametrize("rate", [-5, 0, 8, 24])
def test_future_price_zero_months_is_identity(rate):
    assert future_price(7_500_000, rate, 0) == 7_500_000


def test_future_price_uses_annual_rate_divided_by_twelve():
    """12% a year is exactly 1% a month, not the geometric monthly root."""
    assert future_price(1_000_000, 12, 12) == pytest.approx(1_000_000 * 1.01**12)


def test_future_price_strictly_increasing_for_positive_growth():
    prices = [future_price(5_000_000, 8, n) for n in range(0, 61)]
    assert all(b > a for a, b in zip(prices, prices[1:]))


def test_future_price_declines_with_negative_growth():
    assert future_price(5_000_000, -6, 12) < 5_000_000


# ---------------------------------------------------------------------------
# accumulate_savings
# ---------------------------------------------------------------------------


def test_accumulate_zero_months_returns_initial_balance():
    assert accumulate_savings(50_000, 5, 0, 300_000, 10) == 300_000


def test_accumulate_flat_contributions_without_growth():
    assert accumulate_savings(10_000, 0, 12) == pytest.approx(120_000)


def test_accumulate_interest_not_earned_on_current_contribution():
    """Interest is credited before the month's contribution is added."""
    assert accumulate_savings(1_000, 0, 1, 0, 12) == pytest.approx(1_000)
    assert accumulate_savings(1_000, 0, 3, 0, 12) == pytest.approx(3_030.1)


def test_accumulate_contribution_grows_after_deposit():
    """First deposit is the initial contribution; the second is grown by one month."""
    result = accumulate_savings(1_000, 12, 2)
    assert result == pytest.approx(1_000 + 1_010)


def test_accumulate_non_decreasing_in_months():
    balances = [accumulate_savings(20_000, 5, n, 100_000, 10) for n in range(0, 121)]
    assert all(b >= a for a, b in zip(balances, balances[1:]))


# ---------------------------------------------------------------------------
# months_to_target
# ---------------------------------------------------------------------------


def test_months_to_target_exact_hit_counts():
    """Reaching exactly the target is success (>=, not >)."""
    assert months_to_target(1_200_000, 1_200_000, 0, 100_000, 0) == 12


def test_months_to_target_immediate_success():
    """Initial savings that already cover the month-0 target return 0."""
    result = months_to_target(2_000_000, 10_000_000, 8, 50_000, 5, 20, 2_000_000)
    assert result == 0


def test_months_to_target_infeasible_with_no_savings():
    """Zero savings never catch a growing price."""
    result = months_to_target(10_000_000, 10_000_000, 8, 0, 5, 100, 0, 0)
    assert result == INFEASIBLE == -1


def test_months_to_target_infeasible_when_price_outruns_savings():
    result = months_to_target(50_000_000, 50_000_000, 30, 10_000, 0)
    assert result == INFEASIBLE


def test_months_to_target_target_tracks_growing_price():
    """With price growth the goal takes longer than the static arithmetic suggests."""
    static = months_to_target(1_200_000, 1_200_000, 0, 100_000, 0)
    moving = months_to_target(1_200_000, 1_200_000, 10, 100_000, 0)
    assert moving > static


def test_months_to_target_interest_shortens_the_wait():
    without = months_to_target(0, 10_000_000, 8, 50_000, 5, 20, 0, 0)
    with_interest = months_to_target(0, 10_000_000, 8, 50_000, 5, 20, 0, 10)
    assert 0 < with_interest < without


def test_months_to_target_matches_accumulation():
    """The month found is the first where accumulated savings meet the grown target."""
    months = months_to_target(0, 10_000_000, 8, 50_000, 5, 20, 0, 10)
    assert 0 < months < MAX_SEARCH_MONTHS

    def gap(n):
        savings = accumulate_savings(50_000, 5, n, 0, 10)
        return savings - future_price(10_000_000, 8, n) * 0.2

    assert gap(months) >= 0
    assert gap(months - 1) < 0


def test_months_to_target_declining_price_not_a_crash():
    result = months_to_target(0, 10_000_000, -5, 10_000, 0, 20)
    assert 0 < result < MAX_SEARCH_MONTHS


# ---------------------------------------------------------------------------
# mortgage_payment
# ---------------------------------------------------------------------------


def test_mortgage_payment_satisfies_annuity_identity():
    payment = mortgage_payment(1_000_000, 12, 20)
    r, n = 0.01, 240
    assert payment * ((1 + r) ** n - 1) / r == pytest.approx(1_000_000 * (1 + r) ** n)
    assert payment == pytest.approx(11_010.86, abs=0.01)


def test_mortgage_payment_zero_rate():
    assert mortgage_payment(1_200_000, 0, 10) == 10_000


def test_mortgage_payment_zero_principal():
    assert mortgage_payment(0, 18, 20) == 0


def test_mortgage_payment_long_term_does_not_overflow():
    """A term long enough to overflow (1+r)^n pays interest only."""
    assert mortgage_payment(1_000_000, 18, 5000) == pytest.approx(15_000)


def test_mortgage_payment_large_inputs_stay_finite():
    payment = mortgage_payment(1e170, 1000, 50)
    assert math.isfinite(payment)
    assert payment == pytest.approx(1e170 * 1000 / 1200)


# ---------------------------------------------------------------------------
# recommended_savings
# ---------------------------------------------------------------------------


def test_recommended_savings_without_growth_is_even_split():
    assert recommended_savings(10_000_000, 0, 0, 24, 20) == pytest.approx(2_000_000 / 24)


def test_recommended_savings_reaches_target_with_salary_growth():
    """Growing the recommended contribution with salary hits the future down payment."""
    monthly = recommended_savings(10_000_000, 8, 5, 24, 20)
    target = future_price(10_000_000, 8, 24) * 0.2
    assert accumulate_savings(monthly, 5, 24) == pytest.approx(target)


def test_recommended_savings_ignores_savings_interest():
    """Interest is not part of the solve, so earning it overshoots the target."""
    monthly = recommended_savings(10_000_000, 8, 5, 24, 20)
    assert accumulate_savings(monthly, 5, 24, 0, 10) > future_price(10_000_000, 8, 24) * 0.2


def test_recommended_savings_zero_horizon_returns_full_target():
    assert recommended_savings(10_000_000, 8, 5, 0, 20) == pytest.approx(2_000_000)


# ---------------------------------------------------------------------------
# generate_projection
# ---------------------------------------------------------------------------


def test_projection_has_one_point_per_month_inclusive():
    points = generate_projection(make_inputs(), max_months=120)
    assert len(points) == 121
    assert [p.month for p in points] == list(range(121))


def test_projection_first_point_reproduces_inputs():
    first = generate_projection(make_inputs())[0]
    assert first.apartment_price == 10_000_000
    assert first.monthly_saving == 50_000
    assert first.total_savings == 0
    assert first.down_payment_target == 2_000_000
    assert first.surplus == -2_000_000


def test_projection_custom_horizon():
    assert len(generate_projection(make_inputs(), max_months=12)) == 13


def test_projection_matches_primitives():
    """Each point agrees with future_price and accumulate_savings for the same month."""
    inputs = make_inputs(initial_savings=250_000)
    points = generate_projection(inputs, max_months=36)
    for p in (points[1], points[17], points[36]):
        expected_price = future_price(10_000_000, 8, p.month)
        expected_savings = accumulate_savings(50_000, 5, p.month, 250_000, 10)
        assert p.apartment_price == pytest.approx(expected_price, abs=1)
        assert p.total_savings == math.floor(expected_savings + 0.5)


def test_projection_runs_full_horizon_after_target_reached():
    """The table keeps going once surplus turns positive."""
    points = generate_projection(make_inputs(initial_savings=5_000_000))
    assert len(points) == 121
    assert all(p.surplus > 0 for p in points)


def test_yearly_milestones_include_highlighted_month():
    points = generate_projection(make_inputs(), max_months=36)
    months = [p.month for p in yearly_milestones(points, highlight_month=17)]
    assert months == [0, 12, 17, 24, 36]


def test_yearly_milestones_ignore_infeasible_highlight():
    points = generate_projection(make_inputs(), max_months=24)
    assert [p.month for p in yearly_milestones(points, -1)] == [0, 12, 24]


def test_yearly_milestones_capped_at_eleven_rows():
    points = generate_projection(make_inputs(), max_months=120)
    rows = yearly_milestones(points, highlight_month=30)
    assert len(rows) == MAX_YEARLY_ROWS == 11
    assert [p.month for p in rows] == [0, 12, 24, 30, 36, 48, 60, 72, 84, 96, 108]


# ---------------------------------------------------------------------------
# calculate_all
# ---------------------------------------------------------------------------


def test_calculate_all_default_scenario():
    result = calculate_all(make_inputs())

    assert 0 < result.months_to_down_payment < MAX_SEARCH_MONTHS
    assert result.loan_amount > 0
    assert result.monthly_mortgage_payment > result.loan_amount / 240
    assert result.mortgage_overpayment > 0
    assert result.future_apartment_price > 10_000_000
    assert len(result.monthly_projection) == 121


def test_calculate_all_full_price_takes_at_least_as_long():
    result = calculate_all(make_inputs())
    assert (
        result.months_to_full_price == INFEASIBLE
        or result.months_to_full_price >= result.months_to_down_payment
    )


def test_calculate_all_consistent_totals():
    result = calculate_all(make_inputs())
    # Each figure is rounded separately, so allow a ruble of drift.
    assert result.required_down_payment + result.loan_amount == pytest.approx(
        result.future_apartment_price, abs=1
    )
    assert result.total_mortgage_payment - result.loan_amount == pytest.approx(
        result.mortgage_overpayment, abs=1
    )


def test_calculate_all_projected_savings_cover_down_payment():
    result = calculate_all(make_inputs())
    assert result.projected_savings >= result.required_down_payment


def test_calculate_all_infeasible_uses_current_price():
    inputs = make_inputs(monthly_savings=0, initial_savings=0)
    result = calculate_all(inputs)

    assert result.months_to_down_payment == INFEASIBLE
    assert result.months_to_full_price == INFEASIBLE
    assert result.future_apartment_price == 10_000_000
    assert result.required_down_payment == 2_000_000
    assert result.loan_amount == 8_000_000
    assert result.projected_savings == 0
    assert [p.month for p in result.yearly_projection] == list(range(0, 121, 12))


def test_calculate_all_down_payment_already_saved():
    inputs = make_inputs(initial_savings=3_000_000)
    result = calculate_all(inputs)

    assert result.months_to_down_payment == 0
    assert result.future_apartment_price == 10_000_000
    assert result.projected_savings == 3_000_000


def test_calculate_all_full_down_payment_means_no_loan():
    result = calculate_all(make_inputs(down_payment_percent=100, initial_savings=20_000_000))
    assert result.loan_amount == 0
    assert result.monthly_mortgage_payment == 0
    assert result.mortgage_overpayment == 0
    assert result.overpayment_percent == 0


def test_calculate_all_zero_mortgage_rate_has_no_overpayment():
    result = calculate_all(make_inputs(mortgage_rate=0))
    assert result.mortgage_overpayment == pytest.approx(0, abs=1)


def test_calculate_all_recommended_savings_uses_two_year_horizon():
    result = calculate_all(make_inputs())
    expected = recommended_savings(10_000_000, 8, 5, 24, 20)
    assert result.recommended_monthly_savings == math.floor(expected + 0.5)


def test_calculate_all_savings_share():
    assert calculate_all(make_inputs()).savings_share_percent == 33
    assert calculate_all(make_inputs(salary=0)).savings_share_percent == 0


def test_calculate_all_yearly_projection_marks_down_payment_month():
    result = calculate_all(make_inputs())
    months = [p.month for p in result.yearly_projection]
    assert len(months) <= MAX_YEARLY_ROWS
    assert months[:2] == [0, 12]
    assert result.months_to_down_payment in months


def test_calculate_all_reports_waits_as_text():
    result = calculate_all(make_inputs(initial_savings=3_000_000))
    assert result.down_payment_wait == "0 мес."

    infeasible = calculate_all(make_inputs(monthly_savings=0))
    assert infeasible.down_payment_wait == "Невозможно"
    assert infeasible.full_price_wait == "Невозможно"


def test_calculate_all_sub_ruble_salary_has_no_share():
    assert calculate_all(make_inputs(salary=1e-300)).savings_share_percent == 0
