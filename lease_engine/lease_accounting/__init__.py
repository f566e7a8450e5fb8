"""
Lease calculation engine
Payment schedules, ASC 842 measurement and amortization, and journal entries

Every function here is pure: identical inputs always give identical outputs.
"""

from lease_engine.lease_accounting.core.models import (
    LeaseClassification,
    EscalationType,
    EscalationFrequency,
    PropertyTaxFrequency,
    PaymentType,
    SubleasePaymentType,
    LeaseTerms,
    SubleaseTerms,
    EscalationRule,
    PaymentScheduleEntry,
    AmortizationRow,
    ASC842Summary,
    ASC842Result,
    LeaseAccountMapping,
    JournalLine,
    JournalEntry,
)
from lease_engine.lease_accounting.core.present_value import (
    PresentValueEngine,
    calculate_lease_liability,
    calculate_rou_asset,
)
from lease_engine.lease_accounting.schedule.payment_schedule import (
    PaymentScheduleGenerator,
    SubleaseIncomeScheduleGenerator,
    generate_payment_schedule,
    generate_sublease_income_schedule,
    base_rent_stream,
    lease_payment_stream,
)
from lease_engine.lease_accounting.schedule.amortization import (
    AmortizationScheduleGenerator,
    generate_asc842_schedule,
)
from lease_engine.lease_accounting.utils.journal_generator import (
    JournalGenerator,
    UnbalancedJournalEntryError,
    generate_initial_journal_entries,
    generate_monthly_journal_entry,
    generate_operating_cost_entry,
)

__all__ = [
    # Models
    'LeaseClassification',
    'EscalationType',
    'EscalationFrequency',
    'PropertyTaxFrequency',
    'PaymentType',
    'SubleasePaymentType',
    'LeaseTerms',
    'SubleaseTerms',
    'EscalationRule',
    'PaymentScheduleEntry',
    'AmortizationRow',
    'ASC842Summary',
    'ASC842Result',
    'LeaseAccountMapping',
    'JournalLine',
    'JournalEntry',

    # Components
    'PresentValueEngine',
    'PaymentScheduleGenerator',
    'SubleaseIncomeScheduleGenerator',
    'AmortizationScheduleGenerator',
    'JournalGenerator',
    'UnbalancedJournalEntryError',

    # Function surface
    'generate_payment_schedule',
    'generate_sublease_income_schedule',
    'base_rent_stream',
    'lease_payment_stream',
    'calculate_lease_liability',
    'calculate_rou_asset',
    'generate_asc842_schedule',
    'generate_initial_journal_entries',
    'generate_monthly_journal_entry',
    'generate_operating_cost_entry',
]
