"""
Data models for the lease calculation engine
Lease terms in, schedules and journal entries out
"""

from dataclasses import dataclass, field, fields
from datetime import date, timedelta
from decimal import Decimal
from enum import Enum
from typing import Optional, List, Dict, Any, Tuple

from lease_engine.lease_accounting.utils.date_utils import parse_date, months_between
from lease_engine.lease_accounting.utils.finance import to_decimal, sum_money, ZERO


class LeaseClassification(str, Enum):
    OPERATING = "operating"
    FINANCE = "finance"


class EscalationType(str, Enum):
    FIXED_PERCENTAGE = "fixed_percentage"
    FIXED_AMOUNT = "fixed_amount"
    # Index-linked; percentage_increase stands in for the unknown index
    CPI = "cpi"


class EscalationFrequency(str, Enum):
    ANNUAL = "annual"
    BIENNIAL = "biennial"
    AT_RENEWAL = "at_renewal"


class PropertyTaxFrequency(str, Enum):
    MONTHLY = "monthly"
    SEMI_ANNUAL = "semi_annual"
    ANNUAL = "annual"


class PaymentType(str, Enum):
    """Cost categories on a lessee payment schedule"""
    BASE_RENT = "base_rent"
    CAM = "cam"
    PROPERTY_TAX = "property_tax"
    INSURANCE = "insurance"
    UTILITIES = "utilities"
    OTHER = "other"


class SubleasePaymentType(str, Enum):
    """Income categories on a sublease (lessor) schedule"""
    BASE_RENT = "base_rent"
    CAM_RECOVERY = "cam_recovery"
    PROPERTY_TAX_RECOVERY = "property_tax_recovery"
    INSURANCE_RECOVERY = "insurance_recovery"
    UTILITIES_RECOVERY = "utilities_recovery"
    OTHER_RECOVERY = "other_recovery"


def _money(value: Any) -> Decimal:
    return to_decimal(value)


def _optional_money(value: Any) -> Optional[Decimal]:
    if value is None or value == '':
        return None
    return to_decimal(value)


def _decimal_to_json(value: Any) -> Any:
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


@dataclass
class LeaseTerms:
    """Commercial terms of a lease, as entered or abstracted from the agreement"""

    # Dates
    commencement_date: Optional[date]
    expiration_date: Optional[date]
    rent_commencement_date: Optional[date] = None
    lease_term_months: Optional[int] = None

    # Rent
    base_rent_monthly: Decimal = ZERO
    rent_abatement_months: int = 0
    rent_abatement_amount: Decimal = ZERO

    # Operating costs (non-lease components)
    cam_monthly: Decimal = ZERO
    insurance_monthly: Decimal = ZERO
    property_tax_annual: Decimal = ZERO
    property_tax_frequency: PropertyTaxFrequency = PropertyTaxFrequency.MONTHLY
    utilities_monthly: Decimal = ZERO
    other_monthly_costs: Decimal = ZERO

    # ASC 842 inputs
    discount_rate: Decimal = ZERO  # annual IBR as decimal (0.065 = 6.5%)
    initial_direct_costs: Decimal = ZERO
    lease_incentives_received: Decimal = ZERO
    prepaid_rent: Decimal = ZERO
    classification: LeaseClassification = LeaseClassification.OPERATING

    def __post_init__(self):
        self.commencement_date = parse_date(self.commencement_date)
        self.expiration_date = parse_date(self.expiration_date)
        self.rent_commencement_date = parse_date(self.rent_commencement_date)

        for name in ('base_rent_monthly', 'rent_abatement_amount', 'cam_monthly', 'insurance_monthly',
                     'property_tax_annual', 'utilities_monthly', 'other_monthly_costs', 'discount_rate',
                     'initial_direct_costs', 'lease_incentives_received', 'prepaid_rent'):
            setattr(self, name, _money(getattr(self, name)))

        self.rent_abatement_months = int(self.rent_abatement_months or 0)
        self.property_tax_frequency = PropertyTaxFrequency(self.property_tax_frequency or 'monthly')
        self.classification = LeaseClassification(self.classification or 'operating')

        if self.lease_term_months is None:
            self.lease_term_months = self._derive_term_months()
        else:
            self.lease_term_months = int(self.lease_term_months)

    def _derive_term_months(self) -> int:
        # 2024-01-01 through 2026-12-31 is 36 months
        if not self.commencement_date or not self.expiration_date:
            return 0
        return max(0, months_between(self.commencement_date, self.expiration_date + timedelta(days=1)))

    @property
    def rent_start_date(self) -> Optional[date]:
        """Rent commencement, falling back to lease commencement"""
        return self.rent_commencement_date or self.commencement_date

    @property
    def is_measurable(self) -> bool:
        """True when ASC 842 present value and amortization can be computed"""
        return self.discount_rate > 0 and self.lease_term_months > 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LeaseTerms':
        """Build from a JSON-style dict, ignoring unknown keys"""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class SubleaseTerms:
    """Terms of a sublease where the entity is the sublessor (income side)"""

    commencement_date: Optional[date]
    expiration_date: Optional[date]
    rent_commencement_date: Optional[date] = None

    base_rent_monthly: Decimal = ZERO
    rent_abatement_months: int = 0
    rent_abatement_amount: Decimal = ZERO

    # Operating cost pass-throughs recovered from the subtenant
    cam_recovery_monthly: Decimal = ZERO
    insurance_recovery_monthly: Decimal = ZERO
    property_tax_recovery_monthly: Decimal = ZERO
    utilities_recovery_monthly: Decimal = ZERO
    other_recovery_monthly: Decimal = ZERO

    def __post_init__(self):
        self.commencement_date = parse_date(self.commencement_date)
        self.expiration_date = parse_date(self.expiration_date)
        self.rent_commencement_date = parse_date(self.rent_commencement_date)
        for name in ('base_rent_monthly', 'rent_abatement_amount', 'cam_recovery_monthly',
                     'insurance_recovery_monthly', 'property_tax_recovery_monthly',
                     'utilities_recovery_monthly', 'other_recovery_monthly'):
            setattr(self, name, _money(getattr(self, name)))
        self.rent_abatement_months = int(self.rent_abatement_months or 0)

    @property
    def rent_start_date(self) -> Optional[date]:
        return self.rent_commencement_date or self.commencement_date

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SubleaseTerms':
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass
class EscalationRule:
    """A rent increase rule; recurrence is driven by frequency"""
    escalation_type: EscalationType
    effective_date: Optional[date]
    percentage_increase: Optional[Decimal] = None
    amount_increase: Optional[Decimal] = None
    frequency: EscalationFrequency = EscalationFrequency.ANNUAL

    def __post_init__(self):
        self.escalation_type = EscalationType(self.escalation_type)
        self.effective_date = parse_date(self.effective_date)
        self.percentage_increase = _optional_money(self.percentage_increase)
        self.amount_increase = _optional_money(self.amount_increase)
        self.frequency = EscalationFrequency(self.frequency or 'annual')

    @property
    def is_well_formed(self) -> bool:
        """False when the field this rule type reads is missing"""
        if self.effective_date is None:
            return False
        if self.escalation_type == EscalationType.FIXED_AMOUNT:
            return self.amount_increase is not None
        return self.percentage_increase is not None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EscalationRule':
        return cls(
            escalation_type=data.get('escalation_type') or data['type'],
            effective_date=data.get('effective_date'),
            percentage_increase=data.get('percentage_increase'),
            amount_increase=data.get('amount_increase'),
            frequency=data.get('frequency') or 'annual',
        )


@dataclass(frozen=True)
class PaymentScheduleEntry:
    """Single scheduled amount for one period and one category"""
    period_year: int
    period_month: int
    payment_type: Enum  # PaymentType or SubleasePaymentType
    scheduled_amount: Decimal

    @property
    def period(self) -> Tuple[int, int]:
        return self.period_year, self.period_month

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            'period_year': self.period_year,
            'period_month': self.period_month,
            'payment_type': self.payment_type.value,
            'scheduled_amount': float(self.scheduled_amount),
        }


@dataclass(frozen=True)
class AmortizationRow:
    """One month of the liability and ROU asset roll-forward"""
    period: int  # 1-indexed month of the lease term
    period_year: int
    period_month: int

    # Lease liability (effective interest method)
    lease_liability_beginning: Decimal
    lease_payment: Decimal
    interest_expense: Decimal
    principal_reduction: Decimal
    lease_liability_ending: Decimal

    # ROU asset
    rou_asset_beginning: Decimal
    amortization_expense: Decimal
    rou_asset_ending: Decimal

    # Total periodic lease cost
    total_expense: Decimal

    def to_dict(self) -> dict:
        return {f.name: _decimal_to_json(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class ASC842Summary:
    """Totals for a generated ASC 842 schedule"""
    classification: LeaseClassification
    lease_term_months: int
    initial_lease_liability: Decimal
    initial_rou_asset: Decimal
    total_lease_cost: Decimal
    total_interest_expense: Decimal
    total_amortization_expense: Decimal
    monthly_straight_line_expense: Optional[Decimal] = None  # operating only

    def to_dict(self) -> dict:
        return {f.name: _decimal_to_json(getattr(self, f.name)) for f in fields(self)}


@dataclass(frozen=True)
class ASC842Result:
    summary: ASC842Summary
    schedule: Tuple[AmortizationRow, ...]

    def to_dict(self) -> dict:
        return {
            'summary': self.summary.to_dict(),
            'schedule': [row.to_dict() for row in self.schedule],
        }


@dataclass(frozen=True)
class LeaseAccountMapping:
    """
    GL account ids for lease postings
    Any field may be None; the line is still produced, just without an account
    """
    rou_asset_account_id: Optional[str] = None
    lease_liability_account_id: Optional[str] = None
    lease_expense_account_id: Optional[str] = None
    interest_expense_account_id: Optional[str] = None
    cam_expense_account_id: Optional[str] = None
    asc842_adjustment_account_id: Optional[str] = None
    cash_ap_account_id: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'LeaseAccountMapping':
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        return cls(**{k: (str(v) if v is not None and v != '' else None)
                      for k, v in data.items() if k in known})


@dataclass(frozen=True)
class JournalLine:
    account: str  # display name, e.g. "ROU Asset"
    amount: Decimal
    account_id: Optional[str] = None  # None means unposted

    def to_dict(self) -> dict:
        return {
            'account': self.account,
            'account_id': self.account_id,
            'amount': float(self.amount),
        }


@dataclass(frozen=True)
class JournalEntry:
    """Balanced journal entry with debit and credit lines"""
    date: date
    description: str
    debits: Tuple[JournalLine, ...] = field(default_factory=tuple)
    credits: Tuple[JournalLine, ...] = field(default_factory=tuple)

    @property
    def total_debits(self) -> Decimal:
        return sum_money(line.amount for line in self.debits)

    @property
    def total_credits(self) -> Decimal:
        return sum_money(line.amount for line in self.credits)

    @property
    def is_balanced(self) -> bool:
        return self.total_debits == self.total_credits

    def to_dict(self) -> dict:
        return {
            'date': self.date.isoformat(),
            'description': self.description,
            'debits': [line.to_dict() for line in self.debits],
            'credits': [line.to_dict() for line in self.credits],
        }


def entries_to_dicts(entries: List[Any]) -> List[dict]:
    """Serialize a list of model objects for API responses"""
    return [entry.to_dict() for entry in entries]
