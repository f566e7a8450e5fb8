"""Tests for ASC 842 journal entries: balance on every entry, account wiring, line layout."""

from datetime import date
from decimal import Decimal

import pytest

from lease_engine.lease_accounting import (
    AmortizationRow,
    LeaseAccountMapping,
    LeaseTerms,
    JournalGenerator,
    UnbalancedJournalEntryError,
    generate_asc842_schedule,
    generate_initial_journal_entries,
    generate_monthly_journal_entry,
    generate_operating_cost_entry,
    generate_payment_schedule,
    calculate_lease_liability,
    lease_payment_stream,
)


def _lines(lines):
    return {line.account: line.amount for line in lines}


class TestInitialEntries:

    def test_recognition_entry(self, operating_lease, accounts):
        entries = generate_initial_journal_entries(operating_lease, accounts)
        liability = calculate_lease_liability(operating_lease)

        assert len(entries) == 1
        entry = entries[0]
        assert entry.date == date(2024, 1, 1)
        assert [(l.account, l.account_id, l.amount) for l in entry.debits] == [("ROU Asset", "1600", liability)]
        assert [(l.account, l.account_id, l.amount) for l in entry.credits] == [("Lease Liability", "2600", liability)]

    def test_idc_prepaid_and_incentives_get_their_own_entries(self, nnn_lease, accounts):
        entries = generate_initial_journal_entries(nnn_lease, accounts, lease_payment_stream(nnn_lease))

        assert len(entries) == 4
        assert all(entry.is_balanced for entry in entries)
        assert {entry.date for entry in entries} == {date(2024, 1, 1)}

        idc, prepaid, incentives = entries[1:]
        assert _lines(idc.debits) == {"ROU Asset": Decimal("3000.00")}
        assert _lines(idc.credits) == {"Cash / AP": Decimal("3000.00")}
        assert _lines(prepaid.debits) == {"ROU Asset": Decimal("5000.00")}
        assert _lines(incentives.debits) == {"Cash / AP": Decimal("10000.00")}
        assert _lines(incentives.credits) == {"ROU Asset": Decimal("10000.00")}

    def test_net_rou_debits_equal_initial_rou_asset(self, nnn_lease):
        stream = lease_payment_stream(nnn_lease)
        entries = generate_initial_journal_entries(nnn_lease, None, stream)
        rou_debits = sum(l.amount for e in entries for l in e.debits if l.account == "ROU Asset")
        rou_credits = sum(l.amount for e in entries for l in e.credits if l.account == "ROU Asset")
        assert rou_debits - rou_credits == generate_asc842_schedule(nnn_lease, stream).summary.initial_rou_asset

    def test_missing_mapping_leaves_lines_unposted(self, operating_lease):
        entry = generate_initial_journal_entries(operating_lease, LeaseAccountMapping())[0]
        assert [l.account_id for l in entry.debits + entry.credits] == [None, None]

    def test_mapping_from_dict_keeps_zero_ids(self):
        mapping = LeaseAccountMapping.from_dict({"rou_asset_account_id": 0, "lease_liability_account_id": "",
                                                 "cash_ap_account_id": None, "unknown": "x"})
        assert mapping == LeaseAccountMapping(rou_asset_account_id="0")

    def test_not_measurable_gives_no_entries(self, operating_lease, accounts):
        terms = LeaseTerms(**{**operating_lease.__dict__, "discount_rate": 0})
        assert generate_initial_journal_entries(terms, accounts) == []


class TestMonthlyOperatingEntry:

    def test_every_period_balances(self, nnn_lease, accounts):
        result = generate_asc842_schedule(nnn_lease, lease_payment_stream(nnn_lease))
        for row in result.schedule:
            entry = generate_monthly_journal_entry(row, "operating", accounts)
            assert entry.total_debits == entry.total_credits

    def test_line_layout(self, operating_lease, accounts):
        row = generate_asc842_schedule(operating_lease).schedule[0]
        entry = generate_monthly_journal_entry(row, "operating", accounts)

        assert entry.date == date(2024, 1, 1)
        assert entry.description == "Period 1 operating lease expense"
        assert _lines(entry.debits) == {
            "Lease Expense": Decimal("10000.00"),
            "Lease Liability": row.principal_reduction,
        }
        assert _lines(entry.credits) == {
            "ROU Asset": row.amortization_expense,
            "Cash / AP": Decimal("10000.00"),
        }
        assert {l.account_id for l in entry.debits} == {"6100", "2600"}

    def test_abated_month_has_no_cash_line(self, nnn_lease):
        row = generate_asc842_schedule(nnn_lease, lease_payment_stream(nnn_lease)).schedule[0]
        entry = generate_monthly_journal_entry(row, "operating")

        assert "Cash / AP" not in _lines(entry.credits)
        # payment below interest: the liability accretes, so it is credited
        assert _lines(entry.credits)["Lease Liability"] == -row.principal_reduction
        assert entry.is_balanced

    def test_final_period_residue_goes_to_adjustment_account(self, nnn_lease, accounts):
        last = generate_asc842_schedule(nnn_lease, lease_payment_stream(nnn_lease)).schedule[-1]
        entry = generate_monthly_journal_entry(last, "operating", accounts)

        residue = last.total_expense - last.interest_expense - last.amortization_expense
        adjustment = [l for l in entry.debits + entry.credits if l.account == "ASC 842 Adjustment"]
        assert residue != 0
        assert [l.amount for l in adjustment] == [abs(residue)]
        assert adjustment[0].account_id == "6199"
        assert entry.is_balanced

    def test_no_adjustment_line_before_final_period(self, nnn_lease):
        schedule = generate_asc842_schedule(nnn_lease, lease_payment_stream(nnn_lease)).schedule
        for row in schedule[:-1]:
            entry = generate_monthly_journal_entry(row, "operating")
            assert "ASC 842 Adjustment" not in _lines(entry.debits + entry.credits)


class TestMonthlyFinanceEntry:

    def test_every_period_balances(self, finance_lease, accounts):
        for row in generate_asc842_schedule(finance_lease).schedule:
            entry = generate_monthly_journal_entry(row, "finance", accounts)
            assert entry.total_debits == entry.total_credits

    def test_line_layout(self, finance_lease, accounts):
        row = generate_asc842_schedule(finance_lease).schedule[0]
        entry = generate_monthly_journal_entry(row, "finance", accounts)

        assert entry.description == "Period 1 finance lease expense"
        assert _lines(entry.debits) == {
            "Interest Expense": row.interest_expense,
            "Amortization Expense": row.amortization_expense,
            "Lease Liability": row.principal_reduction,
        }
        assert _lines(entry.credits) == {
            "ROU Asset": row.amortization_expense,
            "Cash / AP": row.lease_payment,
        }
        interest_line = entry.debits[0]
        assert interest_line.account_id == "7100"

    def test_inconsistent_row_is_rejected(self):
        row = AmortizationRow(
            period=1, period_year=2024, period_month=1,
            lease_liability_beginning=Decimal("1000.00"),
            lease_payment=Decimal("100.00"),
            interest_expense=Decimal("5.00"),
            principal_reduction=Decimal("90.00"),
            lease_liability_ending=Decimal("910.00"),
            rou_asset_beginning=Decimal("1000.00"),
            amortization_expense=Decimal("80.00"),
            rou_asset_ending=Decimal("920.00"),
            total_expense=Decimal("85.00"),
        )
        with pytest.raises(UnbalancedJournalEntryError):
            generate_monthly_journal_entry(row, "finance")

    def test_unknown_classification(self, finance_lease):
        row = generate_asc842_schedule(finance_lease).schedule[0]
        with pytest.raises(ValueError):
            generate_monthly_journal_entry(row, "sales_type")


class TestOperatingCostEntry:

    def test_books_non_lease_components(self, nnn_lease, accounts):
        entries = generate_payment_schedule(nnn_lease)
        entry = generate_operating_cost_entry(entries, 2024, 3, accounts)

        # cam 500 + insurance 200 + tax 1,000 + utilities 150 + other 75
        assert entry.total_debits == Decimal("1925.00")
        assert _lines(entry.credits) == {"Cash / AP": Decimal("1925.00")}
        assert {l.account_id for l in entry.debits} == {"6150"}
        assert "CAM / OpEx Expense (cam)" in _lines(entry.debits)
        assert entry.date == date(2024, 3, 1)

    def test_none_when_only_base_rent(self, operating_lease):
        entries = generate_payment_schedule(operating_lease)
        assert JournalGenerator().operating_cost_entry(entries, 2024, 1) is None

    def test_entry_serializes(self, nnn_lease):
        entry = generate_operating_cost_entry(generate_payment_schedule(nnn_lease), 2024, 1)
        data = entry.to_dict()
        assert data["date"] == "2024-01-01"
        assert data["credits"] == [{"account": "Cash / AP", "account_id": None, "amount": 1925.0}]
