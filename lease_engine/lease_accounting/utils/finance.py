"""
Financial calculation utilities
Decimal money handling and discounting for lease calculations
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Sequence, Union


Number = Union[Decimal, float, int, str]

CENT = Decimal('0.01')
ZERO = Decimal('0')
MONTHS_PER_YEAR = 12


def to_decimal(value: Optional[Number]) -> Decimal:
    """
    Convert an input number to Decimal
    Floats go through str() so 0.06 stays exactly 0.06; None becomes 0
    """
    if value is None or value == '':
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def round_money(value: Number) -> Decimal:
    """Round to the cent, half away from zero"""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def sum_money(values: Iterable[Decimal]) -> Decimal:
    """Sum already-rounded amounts, returning a cent-quantized Decimal"""
    return round_money(sum(values, ZERO))


def monthly_rate(annual_rate: Number) -> Decimal:
    """
    Periodic rate for monthly discounting
    Simple division of the annual rate, not a compounded equivalent
    """
    return to_decimal(annual_rate) / MONTHS_PER_YEAR


def present_value(rate: Number, nper: int, pmt: Number, fv: Number = 0, due: bool = False) -> Decimal:
    """
    Calculate present value of a level payment stream
    Follows Excel PV() but returns the value with a positive sign

    Args:
        rate: Interest rate per period
        nper: Number of periods
        pmt: Payment per period
        fv: Future value (residual)
        due: True if payments at beginning of period
    Returns:
        Present value (unrounded)
    """
    rate = to_decimal(rate)
    pmt = to_decimal(pmt)
    fv = to_decimal(fv)

    if rate == 0:
        return pmt * nper + fv

    growth = (1 + rate) ** nper
    factor = (1 - 1 / growth) / rate
    if due:
        factor *= (1 + rate)

    return pmt * factor + fv / growth


def net_present_value(rate: Number, values: Sequence[Number]) -> Decimal:
    """
    Discount an arbitrary payment stream
    Ports Excel NPV(): value i (0-based) is discounted by (1 + rate) ** (i + 1)

    Args:
        rate: Discount rate per period
        values: Payments, one per period, paid at period end
    Returns:
        Net present value (unrounded)
    """
    rate = to_decimal(rate)
    if not values:
        return ZERO

    npv = ZERO
    discount = Decimal('1')
    for value in values:
        discount *= (1 + rate)
        npv += to_decimal(value) / discount

    return npv


def calculate_rou_asset_value(present_value_lease_liability: Number, initial_direct_costs: Number = 0,
                              prepaid_rentals: Number = 0, lease_incentives: Number = 0) -> Decimal:
    """
    Calculate Right-of-Use asset value
    ROU Asset = PV of Lease Liability + Initial Direct Costs + Prepaid Rentals
                - Lease Incentives
    """
    return round_money(to_decimal(present_value_lease_liability) + to_decimal(initial_direct_costs)
                       + to_decimal(prepaid_rentals) - to_decimal(lease_incentives))
