"""Shared fixtures for the SMS ledger tests."""

import pytest


FUEL_DEBIT_MESSAGE = (
    "Dear Customer, your ac 123**456 has been Debited USD 1500.00 "
    "REF:TXN789 Fuel Station Purchase on 15-Mar-24. Available Balance is USD 500.00"
)

GROCERY_CREDIT_MESSAGE = (
    "Your ac 987**654 has been Credited USD 250.75 REF:RFD001 Grocery Refund "
    "on 02-Apr-24. Available Balance is USD 750.75"
)

SMALL_DEBIT_MESSAGE = (
    "Your ac 111**222 has been Debited ZWG 999.99 REF:AIR42 Econet Airtime "
    "on 03-Apr-24. Available Balance is ZWG 10.01"
)

NO_MATCH_MESSAGE = "Hello, how are you?"


@pytest.fixture
def fuel_debit_message():
    return FUEL_DEBIT_MESSAGE


@pytest.fixture
def grocery_credit_message():
    return GROCERY_CREDIT_MESSAGE


@pytest.fixture
def small_debit_message():
    return SMALL_DEBIT_MESSAGE
