"""
Journal Entry Generator
Creates ASC 842 initial recognition and monthly journal entries

GL account ids come from a LeaseAccountMapping passed in by the caller.
A missing id leaves the line unposted (account_id=None) rather than failing.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence

from lease_engine.lease_accounting.core.models import (
    LeaseTerms,
    LeaseClassification,
    LeaseAccountMapping,
    AmortizationRow,
    PaymentScheduleEntry,
    PaymentType,
    JournalEntry,
    JournalLine,
)
from lease_engine.lease_accounting.core.present_value import PresentValueEngine
from lease_engine.lease_accounting.utils.date_utils import period_date
from lease_engine.lease_accounting.utils.finance import round_money, ZERO

logger = logging.getLogger(__name__)

ROU_ASSET = "ROU Asset"
LEASE_LIABILITY = "Lease Liability"
LEASE_EXPENSE = "Lease Expense"
INTEREST_EXPENSE = "Interest Expense"
AMORTIZATION_EXPENSE = "Amortization Expense"
CAM_OPEX_EXPENSE = "CAM / OpEx Expense"
ASC842_ADJUSTMENT = "ASC 842 Adjustment"
CASH_AP = "Cash / AP"


class UnbalancedJournalEntryError(ValueError):
    """Raised if a generated entry's debits and credits differ"""


class _EntryBuilder:
    """Collects lines; zero amounts are dropped and negatives flip sides"""

    def __init__(self):
        self.debits: List[JournalLine] = []
        self.credits: List[JournalLine] = []

    def debit(self, account: str, amount: Decimal, account_id: Optional[str] = None):
        self._post(account, round_money(amount), account_id)

    def credit(self, account: str, amount: Decimal, account_id: Optional[str] = None):
        self._post(account, -round_money(amount), account_id)

    def _post(self, account: str, signed_amount: Decimal, account_id: Optional[str]):
        if signed_amount > 0:
            self.debits.append(JournalLine(account, signed_amount, account_id))
        elif signed_amount < 0:
            self.credits.append(JournalLine(account, -signed_amount, account_id))

    @property
    def difference(self) -> Decimal:
        """Debits minus credits"""
        return sum((l.amount for l in self.debits), ZERO) - sum((l.amount for l in self.credits), ZERO)

    def build(self, entry_date: date, description: str) -> JournalEntry:
        entry = JournalEntry(
            date=entry_date,
            description=description,
            debits=tuple(self.debits),
            credits=tuple(self.credits),
        )
        if not entry.is_balanced:
            logger.error(f"❌ Unbalanced journal entry '{description}': "
                         f"debits={entry.total_debits}, credits={entry.total_credits}")
            raise UnbalancedJournalEntryError(
                f"{description}: debits {entry.total_debits} != credits {entry.total_credits}"
            )
        return entry


class JournalGenerator:
    """
    Generate journal entries for one lease's account mapping
    """

    def __init__(self, accounts: Optional[LeaseAccountMapping] = None,
                 pv_engine: Optional[PresentValueEngine] = None):
        self.accounts = accounts or LeaseAccountMapping()
        self.pv_engine = pv_engine or PresentValueEngine()

    def initial_entries(self, terms: LeaseTerms, monthly_payments: Optional[Sequence] = None) -> List[JournalEntry]:
        """
        Initial recognition entries dated at commencement
          1. Dr ROU Asset / Cr Lease Liability (initial liability)
          2. Dr ROU Asset / Cr Cash/AP (initial direct costs)
          3. Dr ROU Asset / Cr Cash/AP (prepaid rent)
          4. Dr Cash/AP / Cr ROU Asset (lease incentives received)
        Returns [] when the lease cannot be measured yet.
        """
        liability = self.pv_engine.liability(terms, monthly_payments)
        if liability is None or not terms.commencement_date:
            return []

        a = self.accounts
        on = terms.commencement_date
        entries: List[JournalEntry] = []

        builder = _EntryBuilder()
        builder.debit(ROU_ASSET, liability, a.rou_asset_account_id)
        builder.credit(LEASE_LIABILITY, liability, a.lease_liability_account_id)
        entries.append(builder.build(on, "Initial recognition of ROU asset and lease liability"))

        for amount, description in (
            (terms.initial_direct_costs, "Initial direct costs capitalized to ROU asset"),
            (terms.prepaid_rent, "Prepaid rent reclassified to ROU asset"),
        ):
            if amount > 0:
                builder = _EntryBuilder()
                builder.debit(ROU_ASSET, amount, a.rou_asset_account_id)
                builder.credit(CASH_AP, amount, a.cash_ap_account_id)
                entries.append(builder.build(on, description))

        if terms.lease_incentives_received > 0:
            builder = _EntryBuilder()
            builder.debit(CASH_AP, terms.lease_incentives_received, a.cash_ap_account_id)
            builder.credit(ROU_ASSET, terms.lease_incentives_received, a.rou_asset_account_id)
            entries.append(builder.build(on, "Lease incentives received reduce ROU asset"))

        return entries

    def monthly_entry(self, row: AmortizationRow, classification) -> JournalEntry:
        """
        Monthly entry from a schedule row

        Operating: Dr Lease Expense (straight-line), Dr Lease Liability (principal),
                   Cr ROU Asset (amortization plug), Cr Cash/AP (payment).
                   Any final-period residue goes to the ASC 842 Adjustment account.
        Finance:   Dr Interest Expense + Dr Amortization Expense + Dr Lease Liability,
                   Cr ROU Asset + Cr Cash/AP.
        """
        classification = LeaseClassification(classification)
        a = self.accounts
        builder = _EntryBuilder()

        if classification == LeaseClassification.OPERATING:
            builder.debit(LEASE_EXPENSE, row.total_expense, a.lease_expense_account_id)
            builder.debit(LEASE_LIABILITY, row.principal_reduction, a.lease_liability_account_id)
            builder.credit(ROU_ASSET, row.amortization_expense, a.rou_asset_account_id)
            builder.credit(CASH_AP, row.lease_payment, a.cash_ap_account_id)
            residue = builder.difference
            if residue:
                builder.credit(ASC842_ADJUSTMENT, residue, a.asc842_adjustment_account_id)
        else:
            builder.debit(INTEREST_EXPENSE, row.interest_expense, a.interest_expense_account_id)
            builder.debit(AMORTIZATION_EXPENSE, row.amortization_expense, a.lease_expense_account_id)
            builder.debit(LEASE_LIABILITY, row.principal_reduction, a.lease_liability_account_id)
            builder.credit(ROU_ASSET, row.amortization_expense, a.rou_asset_account_id)
            builder.credit(CASH_AP, row.lease_payment, a.cash_ap_account_id)

        return builder.build(
            period_date(row.period_year, row.period_month),
            f"Period {row.period} {classification.value} lease expense",
        )

    def operating_cost_entry(self, entries: Iterable[PaymentScheduleEntry],
                             period_year: int, period_month: int) -> Optional[JournalEntry]:
        """
        Non-lease components for one period: Dr CAM/OpEx Expense per category, Cr Cash/AP
        Returns None when nothing besides base rent is scheduled for the period.
        """
        a = self.accounts
        builder = _EntryBuilder()
        total = ZERO
        for entry in entries:
            if entry.period != (period_year, period_month) or entry.payment_type == PaymentType.BASE_RENT:
                continue
            builder.debit(f"{CAM_OPEX_EXPENSE} ({entry.payment_type.value})", entry.scheduled_amount,
                          a.cam_expense_account_id)
            total += entry.scheduled_amount

        if not total:
            return None
        builder.credit(CASH_AP, total, a.cash_ap_account_id)
        return builder.build(
            period_date(period_year, period_month),
            f"{period_year}-{period_month:02d} operating costs",
        )


def generate_initial_journal_entries(terms: LeaseTerms, accounts: Optional[LeaseAccountMapping] = None,
                                     monthly_payments: Optional[Sequence] = None) -> List[JournalEntry]:
    return JournalGenerator(accounts).initial_entries(terms, monthly_payments)


def generate_monthly_journal_entry(row: AmortizationRow, classification,
                                   accounts: Optional[LeaseAccountMapping] = None) -> JournalEntry:
    return JournalGenerator(accounts).monthly_entry(row, classification)


def generate_operating_cost_entry(entries: Iterable[PaymentScheduleEntry], period_year: int, period_month: int,
                                  accounts: Optional[LeaseAccountMapping] = None) -> Optional[JournalEntry]:
    return JournalGenerator(accounts).operating_cost_entry(entries, period_year, period_month)
