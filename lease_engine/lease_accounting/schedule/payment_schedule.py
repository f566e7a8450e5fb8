"""
Payment Schedule Generator
Expands lease terms and escalation rules into month-by-month scheduled amounts

Whole calendar months only: a month is either fully scheduled or absent.
Output is a pure function of the inputs, so callers can delete and
regenerate stored rows at any time without drift.
"""

import logging
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from lease_engine.lease_accounting.core.models import (
    LeaseTerms,
    SubleaseTerms,
    EscalationRule,
    PaymentScheduleEntry,
    PaymentType,
    SubleasePaymentType,
    PropertyTaxFrequency,
)
from lease_engine.lease_accounting.schedule.escalations import expand_steps, RentEscalator
from lease_engine.lease_accounting.utils.date_utils import month_start, months_between, iter_months, add_months
from lease_engine.lease_accounting.utils.finance import round_money, ZERO

logger = logging.getLogger(__name__)


class _ScheduleGenerator(ABC):
    """
    Month iteration, base rent, abatement and escalation shared by the
    lease and sublease generators. Subclasses supply the non-rent categories.
    """

    base_rent_type = PaymentType.BASE_RENT

    def generate(self, terms, escalations: Iterable[EscalationRule] = ()) -> List[PaymentScheduleEntry]:
        start, end = terms.commencement_date, terms.expiration_date
        if not start or not end or end <= start:
            logger.debug(f"No payment schedule: commencement={start}, expiration={end}")
            return []

        rent_start = month_start(terms.rent_start_date)
        escalator = RentEscalator(terms.base_rent_monthly, expand_steps(escalations, month_start(end)))
        entries: List[PaymentScheduleEntry] = []

        for month_index, (year, month) in enumerate(iter_months(start, end)):
            rent_index = months_between(rent_start, date(year, month, 1))
            if rent_index >= 0:
                rent = escalator.rent_for(year, month)
                if rent_index < terms.rent_abatement_months:
                    # Abated months keep a base_rent row, even at zero, while the nominal rent is nonzero
                    if rent != 0:
                        entries.append(PaymentScheduleEntry(year, month, self.base_rent_type,
                                                            round_money(terms.rent_abatement_amount)))
                else:
                    self._append(entries, year, month, self.base_rent_type, rent)

            # Operating costs keep posting through abatement
            for payment_type, amount in self._cost_amounts(terms, month_index):
                self._append(entries, year, month, payment_type, amount)

        logger.debug(f"Generated {len(entries)} schedule rows from {start} to {end}")
        return entries

    @staticmethod
    def _append(entries: List[PaymentScheduleEntry], year: int, month: int, payment_type, amount: Decimal):
        amount = round_money(amount)
        if amount != 0:
            entries.append(PaymentScheduleEntry(year, month, payment_type, amount))

    @abstractmethod
    def _cost_amounts(self, terms, month_index: int) -> Sequence[Tuple[object, Decimal]]:
        """(payment_type, amount) for each non-rent category, in output order"""


class PaymentScheduleGenerator(_ScheduleGenerator):
    """Lessee cash obligations: base rent plus operating cost categories"""

    def _cost_amounts(self, terms: LeaseTerms, month_index: int) -> Sequence[Tuple[object, Decimal]]:
        return (
            (PaymentType.CAM, terms.cam_monthly),
            (PaymentType.INSURANCE, terms.insurance_monthly),
            (PaymentType.PROPERTY_TAX, property_tax_amount(terms.property_tax_annual,
                                                           terms.property_tax_frequency, month_index)),
            (PaymentType.UTILITIES, terms.utilities_monthly),
            (PaymentType.OTHER, terms.other_monthly_costs),
        )


class SubleaseIncomeScheduleGenerator(_ScheduleGenerator):
    """Sublessor income: base rent plus flat monthly cost recoveries"""

    base_rent_type = SubleasePaymentType.BASE_RENT

    def _cost_amounts(self, terms: SubleaseTerms, month_index: int) -> Sequence[Tuple[object, Decimal]]:
        return (
            (SubleasePaymentType.CAM_RECOVERY, terms.cam_recovery_monthly),
            (SubleasePaymentType.PROPERTY_TAX_RECOVERY, terms.property_tax_recovery_monthly),
            (SubleasePaymentType.INSURANCE_RECOVERY, terms.insurance_recovery_monthly),
            (SubleasePaymentType.UTILITIES_RECOVERY, terms.utilities_recovery_monthly),
            (SubleasePaymentType.OTHER_RECOVERY, terms.other_recovery_monthly),
        )


def property_tax_amount(annual_amount: Decimal, frequency: PropertyTaxFrequency, month_index: int) -> Decimal:
    """
    Property tax posted in a given month of the lease
    Monthly: 1/12 each month. Semi-annual: 1/2 in cycle months 6 and 12.
    Annual: full amount in cycle month 12. Cycles run from commencement.

    Args:
        annual_amount: Annual property tax
        frequency: Billing frequency
        month_index: 0-based month offset from commencement
    """
    if not annual_amount:
        return ZERO

    cycle_month = month_index % 12 + 1
    if frequency == PropertyTaxFrequency.SEMI_ANNUAL:
        return annual_amount / 2 if cycle_month in (6, 12) else ZERO
    if frequency == PropertyTaxFrequency.ANNUAL:
        return annual_amount if cycle_month == 12 else ZERO
    return annual_amount / 12


def base_rent_stream(entries: Iterable[PaymentScheduleEntry], terms: Union[LeaseTerms, SubleaseTerms],
                     term_months: Optional[int] = None) -> List[Decimal]:
    """
    Per-period base rent for the lease term, starting at the commencement month
    Periods without a base_rent row (pre-rent-commencement, zero abatement) are 0

    Args:
        entries: Output of a schedule generator
        terms: The terms the schedule was generated from
        term_months: Number of periods; defaults to terms.lease_term_months
    """
    count = term_months if term_months is not None else getattr(terms, 'lease_term_months', 0)
    if not terms.commencement_date or not count:
        return []

    by_period = {
        entry.period: entry.scheduled_amount
        for entry in entries
        if entry.payment_type.value == PaymentType.BASE_RENT.value
    }

    start = month_start(terms.commencement_date)
    stream: List[Decimal] = []
    for offset in range(count):
        period = add_months(start, offset)
        stream.append(by_period.get((period.year, period.month), ZERO))
    return stream


_lease_generator = PaymentScheduleGenerator()
_sublease_generator = SubleaseIncomeScheduleGenerator()


def generate_payment_schedule(terms: LeaseTerms,
                              escalations: Iterable[EscalationRule] = ()) -> List[PaymentScheduleEntry]:
    """Generate the lessee payment schedule; see PaymentScheduleGenerator"""
    return _lease_generator.generate(terms, escalations)


def generate_sublease_income_schedule(terms: SubleaseTerms,
                                      escalations: Iterable[EscalationRule] = ()) -> List[PaymentScheduleEntry]:
    """Generate the sublease income schedule; see SubleaseIncomeScheduleGenerator"""
    return _sublease_generator.generate(terms, escalations)


def lease_payment_stream(terms: LeaseTerms, escalations: Iterable[EscalationRule] = ()) -> List[Decimal]:
    """
    Base-rent lease payments for ASC 842 measurement, with abatement and
    escalations applied, one amount per month of lease_term_months
    """
    return base_rent_stream(generate_payment_schedule(terms, escalations), terms)
