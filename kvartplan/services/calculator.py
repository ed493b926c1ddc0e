# This project was developed with assistance from AI tools.
"""Savings and mortgage projection engine.

Pure math, no I/O. Every annual percentage is turned into a monthly rate by
simple division (annual / 100 / 12), and all recurrences run in unrounded
floats. Rounding to whole rubles happens only when results are assembled.
"""

import logging
import math

from ..schemas.calculator import CalculationResults, CalculatorInputs, MonthlyProjectionPoint
from .formatting import format_months

logger = logging.getLogger(__name__)

# Search ceiling for months_to_target: 50 years
MAX_SEARCH_MONTHS = 600

# Returned by months_to_target when the goal is out of reach within the ceiling
INFEASIBLE = -1

# Horizon used for the recommended monthly savings figure
RECOMMENDED_SAVINGS_HORIZON = 24

DEFAULT_PROJECTION_MONTHS = 120

# Rows kept in the yearly summary table
MAX_YEARLY_ROWS = 11


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100 / 12


def _to_rubles(value: float) -> int:
    """Round to the nearest whole ruble, halves rounding up."""
    return math.floor(value + 0.5)


def _percent(part: float, whole: float) -> int:
    """``part`` as a whole-number percentage of ``whole``; 0 below one ruble."""
    if abs(whole) < 1:
        return 0
    return _to_rubles(part / whole * 100)


def future_price(price: float, annual_rate_pct: float, months: int) -> float:
    """Compound ``price`` monthly for ``months`` months.

    FV = PV * (1 + r)^n with r = annual / 12.
    """
    return price * (1 + _monthly_rate(annual_rate_pct)) ** months


def accumulate_savings(
    initial_monthly_contribution: float,
    annual_salary_growth_pct: float,
    months: int,
    initial_balance: float = 0.0,
    annual_interest_pct: float = 0.0,
) -> float:
    """Balance after ``months`` of contributions that grow with salary.

    Each month interest is credited on the existing balance first, then the
    contribution is added, then the contribution grows for the next month.
    """
    growth = _monthly_rate(annual_salary_growth_pct)
    interest = _monthly_rate(annual_interest_pct)

    balance = initial_balance
    contribution = initial_monthly_contribution
    for _ in range(months):
        balance *= 1 + interest
        balance += contribution
        contribution *= 1 + growth
    return balance


def months_to_target(
    target_amount: float,
    current_price: float,
    price_growth_pct: float,
    monthly_savings: float,
    salary_growth_pct: float,
    target_pct: float = 100,
    initial_savings: float = 0.0,
    savings_interest_pct: float = 0.0,
) -> int:
    """Smallest number of months after which savings reach a moving target.

    The target is ``target_pct`` percent of a price that keeps growing, so it
    is recomputed every month from the compounded price; ``target_amount`` is
    only the month-0 figure the caller had in mind and does not drive the
    search.

    Returns:
        0 if ``initial_savings`` already cover the month-0 target, the first
        month where savings >= target, or ``INFEASIBLE`` if that does not
        happen within ``MAX_SEARCH_MONTHS``.
    """
    price_growth = _monthly_rate(price_growth_pct)
    salary_growth = _monthly_rate(salary_growth_pct)
    interest = _monthly_rate(savings_interest_pct)
    fraction = target_pct / 100

    balance = initial_savings
    contribution = monthly_savings
    price = current_price

    if balance >= price * fraction:
        return 0

    for month in range(1, MAX_SEARCH_MONTHS + 1):
        balance *= 1 + interest
        balance += contribution
        contribution *= 1 + salary_growth
        price *= 1 + price_growth

        if balance >= price * fraction:
            return month

    return INFEASIBLE


def mortgage_payment(principal: float, annual_rate_pct: float, term_years: int) -> float:
    """Fixed annuity payment:

      M = P * [ r(1+r)^n / ((1+r)^n - 1) ]

    where r = annual_rate/12 and n = years*12. A zero rate splits the
    principal evenly. When (1+r)^n is too large for a float the payment is
    its limit, P * r.
    """
    r = _monthly_rate(annual_rate_pct)
    n = term_years * 12
    if r == 0:
        return principal / n
    try:
        compound = (1 + r) ** n
    except OverflowError:
        return principal * r
    return principal * r / (1 - 1 / compound)


def recommended_savings(
    current_price: float,
    price_growth_pct: float,
    salary_growth_pct: float,
    target_months: int,
    down_payment_pct: float,
) -> float:
    """Starting monthly contribution that reaches the down payment in ``target_months``.

    The contribution grows with salary; interest on savings is not counted.
    The answer is the future down payment divided by sum(g^i, i < target_months).
    """
    target = future_price(current_price, price_growth_pct, target_months) * (down_payment_pct / 100)
    if target_months < 1:
        return target

    g = 1 + _monthly_rate(salary_growth_pct)
    multiplier = 0.0
    factor = 1.0
    for _ in range(target_months):
        multiplier += factor
        factor *= g
    return target / multiplier


def generate_projection(
    inputs: CalculatorInputs,
    max_months: int = DEFAULT_PROJECTION_MONTHS,
) -> list[MonthlyProjectionPoint]:
    """Month-by-month savings trajectory for months 0..max_months inclusive.

    Always covers the full horizon, whether or not the down payment is
    reached earlier.
    """
    price_growth = _monthly_rate(inputs.price_growth_rate)
    salary_growth = _monthly_rate(inputs.salary_growth_rate)
    interest = _monthly_rate(inputs.savings_interest_rate)
    fraction = inputs.down_payment_percent / 100

    balance = inputs.initial_savings
    contribution = inputs.monthly_savings
    price = inputs.apartment_price

    points = []
    for month in range(max_months + 1):
        target = price * fraction
        points.append(MonthlyProjectionPoint(
            month=month,
            apartment_price=_to_rubles(price),
            total_savings=_to_rubles(balance),
            monthly_saving=_to_rubles(contribution),
            down_payment_target=_to_rubles(target),
            surplus=_to_rubles(balance - target),
        ))

        balance *= 1 + interest
        balance += contribution
        contribution *= 1 + salary_growth
        price *= 1 + price_growth

    return points


def yearly_milestones(
    points: list[MonthlyProjectionPoint],
    highlight_month: int = INFEASIBLE,
) -> list[MonthlyProjectionPoint]:
    """Projection rows at each full year, plus the row for ``highlight_month``.

    Only the first ``MAX_YEARLY_ROWS`` matching rows are returned.
    """
    rows = [p for p in points if p.month % 12 == 0 or p.month == highlight_month]
    return rows[:MAX_YEARLY_ROWS]


def calculate_all(inputs: CalculatorInputs) -> CalculationResults:
    """Run the full projection for one set of inputs."""
    months_to_down_payment = months_to_target(
        inputs.apartment_price * (inputs.down_payment_percent / 100),
        inputs.apartment_price,
        inputs.price_growth_rate,
        inputs.monthly_savings,
        inputs.salary_growth_rate,
        inputs.down_payment_percent,
        inputs.initial_savings,
        inputs.savings_interest_rate,
    )
    months_to_full_price = months_to_target(
        inputs.apartment_price,
        inputs.apartment_price,
        inputs.price_growth_rate,
        inputs.monthly_savings,
        inputs.salary_growth_rate,
        100,
        inputs.initial_savings,
        inputs.savings_interest_rate,
    )

    # Price when the down payment is in hand; today's price if already there
    # or never reachable.
    if months_to_down_payment > 0:
        future_apartment_price = future_price(
            inputs.apartment_price, inputs.price_growth_rate, months_to_down_payment
        )
    else:
        future_apartment_price = inputs.apartment_price

    required_down_payment = future_apartment_price * (inputs.down_payment_percent / 100)
    loan_amount = future_apartment_price - required_down_payment

    monthly_payment = mortgage_payment(loan_amount, inputs.mortgage_rate, inputs.mortgage_term)
    total_payment = monthly_payment * inputs.mortgage_term * 12
    overpayment = total_payment - loan_amount

    recommended = recommended_savings(
        inputs.apartment_price,
        inputs.price_growth_rate,
        inputs.salary_growth_rate,
        RECOMMENDED_SAVINGS_HORIZON,
        inputs.down_payment_percent,
    )

    if months_to_down_payment > 0:
        projected = accumulate_savings(
            inputs.monthly_savings,
            inputs.salary_growth_rate,
            months_to_down_payment,
            inputs.initial_savings,
            inputs.savings_interest_rate,
        )
    else:
        projected = inputs.initial_savings

    projection = generate_projection(inputs)

    logger.debug(
        "Projection: down payment in %d months, full price in %d months, payment %.2f",
        months_to_down_payment,
        months_to_full_price,
        monthly_payment,
    )

    return CalculationResults(
        future_apartment_price=_to_rubles(future_apartment_price),
        required_down_payment=_to_rubles(required_down_payment),
        loan_amount=_to_rubles(loan_amount),
        months_to_down_payment=months_to_down_payment,
        months_to_full_price=months_to_full_price,
        down_payment_wait=format_months(months_to_down_payment),
        full_price_wait=format_months(months_to_full_price),
        monthly_mortgage_payment=_to_rubles(monthly_payment),
        total_mortgage_payment=_to_rubles(total_payment),
        mortgage_overpayment=_to_rubles(overpayment),
        overpayment_percent=_percent(overpayment, loan_amount),
        recommended_monthly_savings=_to_rubles(recommended),
        projected_savings=_to_rubles(projected),
        savings_share_percent=_percent(inputs.monthly_savings, inputs.salary),
        monthly_projection=projection,
        yearly_projection=yearly_milestones(projection, months_to_down_payment),
    )
