"""Tests for the TransactionClassifier utility."""

import pytest

from sms_ledger.models.core import TransactionType
from sms_ledger.utils.classifier import CATEGORY_RULES, DIRECTION_KEYWORDS, TransactionClassifier


class TestDirectionDetection:
    """Test cases for debit/credit detection"""

    def setup_method(self):
        """Set up test fixtures"""
        self.classifier = TransactionClassifier()

    def test_debited(self):
        assert self.classifier.detect_direction("ac 123**456 Debited USD 5.00") is TransactionType.DEBIT

    def test_credited(self):
        assert self.classifier.detect_direction("ac 123**456 Credited USD 5.00") is TransactionType.CREDIT

    def test_case_insensitive(self):
        assert self.classifier.detect_direction("DEBITED") is TransactionType.DEBIT
        assert self.classifier.detect_direction("credited") is TransactionType.CREDIT

    def test_neither_keyword(self):
        assert self.classifier.detect_direction("Hello, how are you?") is None

    def test_both_keywords_resolve_to_debit(self):
        """Debit has priority whichever keyword appears first in the text"""
        assert self.classifier.detect_direction("Debited then Credited") is TransactionType.DEBIT
        assert self.classifier.detect_direction("Credited then Debited") is TransactionType.DEBIT

    def test_direction_table_order(self):
        assert [keyword for keyword, _ in DIRECTION_KEYWORDS] == ['debited', 'credited']

    def test_empty_keyword_table(self):
        """An explicitly empty table detects nothing"""
        classifier = TransactionClassifier(direction_keywords=[])
        assert classifier.detect_direction("Debited USD 5.00") is None


class TestCategorization:
    """Test cases for merchant categorization"""

    def setup_method(self):
        """Set up test fixtures"""
        self.classifier = TransactionClassifier()

    @pytest.mark.parametrize("merchant, category", [
        ("OK Grocery Store", "Groceries"),
        ("Total FUEL Depot", "Fuel"),
        ("Econet Airtime", "Airtime"),
        ("ZESA Electricity Token", "Utilities"),
        ("Mama's Restaurant", "Dining"),
        ("Corner Shop", "Shopping"),
        ("Online shopping mall", "Shopping"),
        ("Coffee Bar", "Others"),
    ])
    def test_keyword_categories(self, merchant, category):
        assert self.classifier.categorize(merchant) == category

    def test_missing_merchant_is_unknown(self):
        assert self.classifier.categorize(None) == "Unknown"

    def test_empty_merchant_is_others(self):
        """An empty string is a merchant that matched nothing, not a missing one"""
        assert self.classifier.categorize("") == "Others"

    def test_priority_grocery_over_shop(self):
        assert self.classifier.categorize("Grocery Shop") == "Groceries"
        assert self.classifier.categorize("Shop for grocery") == "Groceries"

    def test_priority_follows_table_order(self):
        """A merchant matching every keyword takes the first rule"""
        merchant = "shop restaurant electricity airtime fuel grocery"
        assert self.classifier.categorize(merchant) == CATEGORY_RULES[0][1]

    def test_category_table_order(self):
        assert CATEGORY_RULES == [
            ('grocery', 'Groceries'),
            ('fuel', 'Fuel'),
            ('airtime', 'Airtime'),
            ('electricity', 'Utilities'),
            ('restaurant', 'Dining'),
            ('shop', 'Shopping'),
        ]

    def test_custom_rules(self):
        classifier = TransactionClassifier(category_rules=[('pharmacy', 'Health')])

        assert classifier.categorize("City Pharmacy") == "Health"
        assert classifier.categorize("Corner Shop") == "Others"

    def test_empty_rules_table(self):
        """An explicitly empty table puts every merchant in Others"""
        classifier = TransactionClassifier(category_rules=[])

        assert classifier.categorize("Corner Shop") == "Others"
        assert classifier.categorize("Fuel Station") == "Others"
