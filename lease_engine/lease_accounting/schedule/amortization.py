"""
ASC 842 Amortization Schedule Generator
Rolls the lease liability and ROU asset forward month by month

Operating lease:
  - Liability: effective interest method
  - Total expense: straight-line (payments + IDC - incentives) / n
  - ROU amortization: plug = straight-line expense - interest expense

Finance lease:
  - Liability: effective interest method (same as operating)
  - ROU amortization: straight-line over the lease term
  - Total expense: interest + amortization (front-loaded)

Every amount is rounded to the cent per period. The last period takes up the
accumulated rounding drift so both balances end at exactly zero.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from lease_engine.lease_accounting.core.models import (
    LeaseTerms,
    LeaseClassification,
    AmortizationRow,
    ASC842Summary,
    ASC842Result,
)
from lease_engine.lease_accounting.core.present_value import PresentValueEngine
from lease_engine.lease_accounting.utils.date_utils import month_start, add_months
from lease_engine.lease_accounting.utils.finance import monthly_rate, round_money, sum_money, ZERO

logger = logging.getLogger(__name__)


class AmortizationScheduleGenerator:

    def __init__(self, pv_engine: Optional[PresentValueEngine] = None):
        self.pv_engine = pv_engine or PresentValueEngine()

    def generate(self, terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> Optional[ASC842Result]:
        """
        Generate the full ASC 842 schedule with summary

        Args:
            terms: Lease terms, including classification
            monthly_payments: Escalated base-rent stream (see base_rent_stream);
                flat base_rent_monthly is used when omitted
        Returns:
            ASC842Result, or None when discount rate or term is not positive
        """
        if not terms.is_measurable or not terms.commencement_date:
            logger.debug(f"ASC 842 schedule not generated: rate={terms.discount_rate}, "
                         f"term={terms.lease_term_months}")
            return None

        n = terms.lease_term_months
        rate = monthly_rate(terms.discount_rate)
        payments = [round_money(p) for p in self.pv_engine.payments(terms, monthly_payments)]
        initial_liability = self.pv_engine.liability(terms, monthly_payments)
        initial_rou = self.pv_engine.rou_asset(terms, monthly_payments)
        is_operating = terms.classification == LeaseClassification.OPERATING

        # ASC 842-20-25-6: single lease cost = lease payments + IDC - incentives
        total_cost = sum(payments, ZERO) + terms.initial_direct_costs - terms.lease_incentives_received
        straight_line = round_money(total_cost / n)
        finance_amortization = round_money(initial_rou / n)

        start = month_start(terms.commencement_date)
        schedule: List[AmortizationRow] = []
        liability = initial_liability
        rou = initial_rou

        for i in range(n):
            period = add_months(start, i)
            is_last = i == n - 1
            payment = payments[i]

            interest = round_money(liability * rate)
            principal = payment - interest
            if is_last:
                # Close out the liability; interest absorbs the rounding drift
                principal = liability
                interest = payment - principal

            if is_last:
                amortization = rou
            elif is_operating:
                amortization = straight_line - interest
            else:
                amortization = finance_amortization

            # Operating expense stays flat; the last-period plug stays inside the ROU roll-forward
            total_expense = straight_line if is_operating else interest + amortization

            row = AmortizationRow(
                period=i + 1,
                period_year=period.year,
                period_month=period.month,
                lease_liability_beginning=liability,
                lease_payment=payment,
                interest_expense=interest,
                principal_reduction=principal,
                lease_liability_ending=liability - principal,
                rou_asset_beginning=rou,
                amortization_expense=amortization,
                rou_asset_ending=rou - amortization,
                total_expense=total_expense,
            )
            schedule.append(row)
            liability = row.lease_liability_ending
            rou = row.rou_asset_ending

        summary = ASC842Summary(
            classification=terms.classification,
            lease_term_months=n,
            initial_lease_liability=initial_liability,
            initial_rou_asset=initial_rou,
            total_lease_cost=sum_money(row.total_expense for row in schedule),
            total_interest_expense=sum_money(row.interest_expense for row in schedule),
            total_amortization_expense=sum_money(row.amortization_expense for row in schedule),
            monthly_straight_line_expense=straight_line if is_operating else None,
        )
        logger.debug(f"Generated {n}-month {terms.classification.value} schedule: "
                     f"liability={initial_liability}, rou={initial_rou}")
        return ASC842Result(summary=summary, schedule=tuple(schedule))


_generator = AmortizationScheduleGenerator()


def generate_asc842_schedule(terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> Optional[ASC842Result]:
    return _generator.generate(terms, monthly_payments)
