"""
Present Value Engine
Initial measurement of the lease liability and ROU asset at commencement

Only base rent counts as a lease payment here; CAM, tax, insurance and
utilities are non-lease components and are excluded.
"""

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from lease_engine.lease_accounting.core.models import LeaseTerms
from lease_engine.lease_accounting.utils.finance import (
    monthly_rate,
    present_value,
    net_present_value,
    round_money,
    to_decimal,
    calculate_rou_asset_value,
)

logger = logging.getLogger(__name__)


class PresentValueEngine:
    """
    Discounts the base-rent stream monthly at discount_rate / 12
    Payments are treated as made at the end of each period
    """

    def payments(self, terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> List[Decimal]:
        """
        Lease payments for each period of the term

        Args:
            terms: Lease terms
            monthly_payments: Escalated base-rent stream, one amount per term month.
                Ignored unless its length matches lease_term_months.
        """
        n = terms.lease_term_months
        if monthly_payments is not None:
            if len(monthly_payments) == n:
                return [to_decimal(p) for p in monthly_payments]
            logger.warning(f"⚠️  Ignoring payment stream of length {len(monthly_payments)}; "
                           f"lease term is {n} months. Using flat base rent.")
        return [terms.base_rent_monthly] * n

    def liability(self, terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> Optional[Decimal]:
        """Initial lease liability, or None when the lease cannot be measured yet"""
        if not terms.is_measurable:
            return None

        rate = monthly_rate(terms.discount_rate)
        payments = self.payments(terms, monthly_payments)
        if len(set(payments)) == 1:
            pv = present_value(rate, len(payments), payments[0])
        else:
            pv = net_present_value(rate, payments)
        return round_money(pv)

    def rou_asset(self, terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> Optional[Decimal]:
        """
        Initial ROU asset
        ROU = Lease Liability + Initial Direct Costs + Prepaid Rent - Incentives Received
        Same formula for operating and finance leases
        """
        liability = self.liability(terms, monthly_payments)
        if liability is None:
            return None
        return calculate_rou_asset_value(
            liability,
            initial_direct_costs=terms.initial_direct_costs,
            prepaid_rentals=terms.prepaid_rent,
            lease_incentives=terms.lease_incentives_received,
        )


_engine = PresentValueEngine()


def calculate_lease_liability(terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> Optional[Decimal]:
    return _engine.liability(terms, monthly_payments)


def calculate_rou_asset(terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> Optional[Decimal]:
    return _engine.rou_asset(terms, monthly_payments)
