"""Shared fixtures: sample leases used across the engine and API tests."""

from decimal import Decimal

import pytest

from lease_engine.lease_accounting import LeaseTerms, LeaseAccountMapping, EscalationRule


@pytest.fixture
def operating_lease() -> LeaseTerms:
    """36-month operating lease, 10,000/month at 6%, nothing else."""
    return LeaseTerms(
        commencement_date="2024-01-01",
        expiration_date="2026-12-31",
        lease_term_months=36,
        base_rent_monthly=10_000,
        discount_rate=0.06,
        classification="operating",
    )


@pytest.fixture
def finance_lease() -> LeaseTerms:
    return LeaseTerms(
        commencement_date="2024-01-01",
        expiration_date="2026-12-31",
        lease_term_months=36,
        base_rent_monthly=10_000,
        discount_rate=0.06,
        initial_direct_costs=5_000,
        classification="finance",
    )


@pytest.fixture
def nnn_lease() -> LeaseTerms:
    """Triple-net lease with free rent and every operating cost category."""
    return LeaseTerms(
        commencement_date="2024-01-01",
        expiration_date="2025-12-31",
        lease_term_months=24,
        base_rent_monthly=5_000,
        rent_abatement_months=2,
        rent_abatement_amount=0,
        cam_monthly=500,
        insurance_monthly=200,
        property_tax_annual=12_000,
        property_tax_frequency="monthly",
        utilities_monthly=150,
        other_monthly_costs=75,
        discount_rate=0.065,
        initial_direct_costs=3_000,
        prepaid_rent=5_000,
        lease_incentives_received=10_000,
        classification="operating",
    )


@pytest.fixture
def annual_escalation() -> EscalationRule:
    """3% annual bump starting in month 13 of a lease commencing 2024-01-01."""
    return EscalationRule(
        escalation_type="fixed_percentage",
        effective_date="2025-01-01",
        percentage_increase=Decimal("0.03"),
        frequency="annual",
    )


@pytest.fixture
def accounts() -> LeaseAccountMapping:
    return LeaseAccountMapping(
        rou_asset_account_id="1600",
        lease_liability_account_id="2600",
        lease_expense_account_id="6100",
        interest_expense_account_id="7100",
        cam_expense_account_id="6150",
        asc842_adjustment_account_id="6199",
        cash_ap_account_id="2000",
    )


@pytest.fixture
def app(tmp_path, monkeypatch):
    from lease_engine.app import create_app
    from lease_engine.config import TestingConfig

    monkeypatch.setattr(TestingConfig, "LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(TestingConfig, "LEASE_ACCOUNT_MAPPING", {"rou_asset_account_id": "1600-default"})
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()
