"""
Utility functions for lease accounting
"""

from .date_utils import (
    parse_date,
    month_start,
    add_months,
    months_between,
    iter_months,
    period_date,
)

from .finance import (
    to_decimal,
    round_money,
    sum_money,
    monthly_rate,
    present_value,
    net_present_value,
    calculate_rou_asset_value,
)

__all__ = [
    # Date utilities
    'parse_date',
    'month_start',
    'add_months',
    'months_between',
    'iter_months',
    'period_date',

    # Finance utilities
    'to_decimal',
    'round_money',
    'sum_money',
    'monthly_rate',
    'present_value',
    'net_present_value',
    'calculate_rou_asset_value',
]
