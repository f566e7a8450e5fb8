"""
Escalation expansion
Turns stored escalation rules into dated rent steps

A rule first applies in the month of its effective_date. Annual rules then
repeat every 12 months and biennial rules every 24 months, until the end of
the schedule; at_renewal rules apply exactly once.

A rule dated before the first schedule month is not rebased: every
occurrence that already passed compounds into the opening rent. An annual
3% rule dated 2021-01-01 on a lease starting 2024-01 has stepped four
times (2021 through 2024), so 1,000 opens at 1,125.51.

CPI rules are stepped with their percentage_increase, which is only a
placeholder for an index value that is not known when the schedule is built.
Once the actual index is published, update the rule and regenerate the
schedule to true it up.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional

from lease_engine.lease_accounting.core.models import (
    EscalationRule,
    EscalationType,
    EscalationFrequency,
)
from lease_engine.lease_accounting.utils.date_utils import month_start, add_months

logger = logging.getLogger(__name__)

RECURRENCE_MONTHS = {
    EscalationFrequency.ANNUAL: 12,
    EscalationFrequency.BIENNIAL: 24,
    EscalationFrequency.AT_RENEWAL: None,
}


@dataclass(frozen=True)
class RentStep:
    """One application of an escalation rule"""
    month: date  # first day of the month the step takes effect
    order: int  # position of the rule after sorting, breaks ties within a month
    rule: EscalationRule

    def apply(self, rent: Decimal) -> Decimal:
        if self.rule.escalation_type == EscalationType.FIXED_AMOUNT:
            return rent + self.rule.amount_increase
        # fixed_percentage and cpi
        return rent * (1 + self.rule.percentage_increase)


def sort_rules(rules: Iterable[EscalationRule]) -> List[EscalationRule]:
    """Well-formed rules in effective_date order; input order breaks ties"""
    ordered = []
    for rule in rules:
        if not rule.is_well_formed:
            logger.debug(f"Skipping escalation without a usable amount: {rule}")
            continue
        ordered.append(rule)
    return sorted(ordered, key=lambda r: r.effective_date)


def expand_steps(rules: Iterable[EscalationRule], last_month: Optional[date]) -> List[RentStep]:
    """
    Expand rules into every step that falls on or before last_month

    Args:
        rules: Escalation rules in any order
        last_month: Final schedule month; None expands only first occurrences
    Returns:
        Steps ordered by month, then by rule order
    """
    steps: List[RentStep] = []
    for order, rule in enumerate(sort_rules(rules)):
        interval = RECURRENCE_MONTHS[rule.frequency]
        month = month_start(rule.effective_date)

        while last_month is None or month <= last_month:
            steps.append(RentStep(month=month, order=order, rule=rule))
            if interval is None or last_month is None:
                break
            month = add_months(month, interval)

    steps.sort(key=lambda s: (s.month, s.order))
    return steps


class RentEscalator:
    """
    Running base rent that steps forward one month at a time
    Steps are applied cumulatively and never re-applied
    """

    def __init__(self, base_rent: Decimal, steps: List[RentStep]):
        self.rent = base_rent
        self._steps = steps
        self._next = 0

    def rent_for(self, year: int, month: int) -> Decimal:
        """Apply every step effective on or before the given month, return unrounded rent"""
        current = date(year, month, 1)
        while self._next < len(self._steps) and self._steps[self._next].month <= current:
            self.rent = self._steps[self._next].apply(self.rent)
            self._next += 1
        return self.rent
