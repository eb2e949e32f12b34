"""Tests for display summaries built from ledger values."""
import unittest
from datetime import date

import pandas as pd

from emi_tracker.data_structures import LoanDraft
from emi_tracker.reports import (
    SUMMARY_COLUMNS,
    format_currency,
    format_date,
    loan_summary,
    loans_to_dataframe,
    portfolio_totals,
)
from emi_tracker.services.loan_ledger import LoanLedger


class TestReports(unittest.TestCase):

    def setUp(self):
        self.ledger = LoanLedger()
        self.home = self.ledger.add_loan(LoanDraft.from_mapping({
            "name": "Home", "principal": 500000, "annual_rate": 8,
            "start_date": "2024-01-01", "end_date": "2026-01-01",
            "declared_installment": 22000, "due_day": 5,
        }))
        self.phone = self.ledger.add_loan(LoanDraft.from_mapping({
            "name": "Phone", "principal": 1200, "annual_rate": 0,
            "start_date": "2024-01-01", "end_date": "2024-04-01",
            "declared_installment": 400, "due_day": 1,
        }))
        for _ in range(3):
            self.ledger.record_payment(self.phone.id)
        self.ledger.record_payment(self.home.id)
        self.home = self.ledger.get_loan(self.home.id)

    def test_format_helpers(self):
        self.assertEqual(format_currency(22613.6456), "₹22613.65")
        self.assertEqual(format_currency(0), "₹0.00")
        self.assertEqual(format_date(date(2024, 1, 1)), "January 01, 2024")

    def test_loan_summary_uses_engine_values(self):
        summary = loan_summary(self.home)

        self.assertEqual(summary["calculated_emi"], self.home.derived_installment)
        self.assertEqual(summary["your_emi"], 22000)
        self.assertEqual(summary["months_paid"], 1)
        self.assertEqual(summary["total_paid"], 22000)
        self.assertEqual(summary["remaining_months"], 23)
        self.assertEqual(summary["remaining_principal"], self.home.remaining_principal)
        self.assertEqual(summary["start_date"], "January 01, 2024")
        self.assertEqual(summary["status"], "ACTIVE")

    def test_dataframe_in_display_order(self):
        df = loans_to_dataframe(self.ledger)

        self.assertIsInstance(df, pd.DataFrame)
        self.assertEqual(list(df.columns), SUMMARY_COLUMNS)
        self.assertEqual(list(df["name"]), ["Home", "Phone"])
        self.assertEqual(df.loc[1, "status"], "RETIRED")
        self.assertEqual(df.loc[1, "remaining_principal"], 0)

    def test_empty_dataframe(self):
        df = loans_to_dataframe(LoanLedger())
        self.assertTrue(df.empty)
        self.assertEqual(list(df.columns), SUMMARY_COLUMNS)

    def test_portfolio_totals(self):
        totals = portfolio_totals(self.ledger)

        self.assertEqual(totals["amount"], 501200)
        self.assertEqual(totals["total_paid"], 22000 + 1200)
        self.assertAlmostEqual(totals["remaining_principal"], self.home.remaining_principal)
        self.assertEqual(totals["active_loans"], 1)

    def test_portfolio_totals_empty(self):
        self.assertEqual(portfolio_totals([])["active_loans"], 0)


if __name__ == '__main__':
    unittest.main()
