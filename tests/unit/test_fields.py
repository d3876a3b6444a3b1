"""
Unit tests for the field extractors.
"""

from datetime import datetime, timezone

import pytest

from momo_pipeline.core.extraction import (
    extract_amount,
    extract_balance,
    extract_date,
    extract_external_transaction_id,
    extract_fee,
    extract_transaction_id,
    parse_readable_date,
)


@pytest.mark.unit
class TestExtractAmount:
    """Tests for extract_amount"""

    def test_thousands_separator(self):
        assert extract_amount("You have received 2,000 RWF from Jane") == 2000

    def test_no_space_before_currency(self):
        assert extract_amount("Airtime top-up of 200RWF done") == 200

    def test_first_amount_wins(self):
        body = "Your payment of 1,000 RWF to Jane Smith. Your new balance: 5,000 RWF."
        assert extract_amount(body) == 1000

    def test_no_currency_marker(self):
        assert extract_amount("Your PIN was changed") is None

    def test_empty_body(self):
        assert extract_amount("") is None
        assert extract_amount(None) is None

    def test_custom_currency(self):
        assert extract_amount("Sent 1,500 UGX to Bob", currency="UGX") == 1500
        assert extract_amount("Sent 1,500 UGX to Bob") is None


@pytest.mark.unit
class TestExtractDate:
    """Tests for extract_date"""

    def test_date_token_anywhere(self):
        body = "Your payment has been completed at 2024-05-10 16:30:51. Balance 10 RWF"
        assert extract_date(body) == datetime(2024, 5, 10, 16, 30, 51, tzinfo=timezone.utc)

    def test_first_token_wins(self):
        body = "at 2024-05-10 16:30:51 then 2024-06-01 00:00:00"
        assert extract_date(body) == datetime(2024, 5, 10, 16, 30, 51, tzinfo=timezone.utc)

    def test_date_without_time_is_ignored(self):
        assert extract_date("completed on 2024-05-10") is None

    def test_impossible_date(self):
        assert extract_date("completed at 2024-13-45 16:30:51") is None

    def test_no_body(self):
        assert extract_date(None) is None


@pytest.mark.unit
class TestParseReadableDate:
    """Tests for parse_readable_date"""

    def test_date_only(self):
        assert parse_readable_date("10 May 2024") == datetime(2024, 5, 10, tzinfo=timezone.utc)

    def test_date_and_time(self):
        parsed = parse_readable_date("10 May 2024 4:30:58 PM")
        assert parsed == datetime(2024, 5, 10, 16, 30, 58, tzinfo=timezone.utc)

    def test_unparseable(self):
        assert parse_readable_date("not a date") is None

    def test_missing(self):
        assert parse_readable_date(None) is None
        assert parse_readable_date("") is None


@pytest.mark.unit
class TestExtractFee:
    """Tests for extract_fee"""

    def test_fee_was(self):
        assert extract_fee("Fee was 0 RWF. Your new balance: 100 RWF") == 0

    def test_fee_was_with_colon(self):
        assert extract_fee("Fee was: 100 RWF. New balance: 28300 RWF.") == 100

    def test_fee_paid_with_separator(self):
        assert extract_fee("Your new balance: 6400 RWF. Fee paid: 1,350 RWF.") == 1350

    def test_label_case_insensitive(self):
        assert extract_fee("FEE WAS: 250 RWF") == 250

    def test_no_fee(self):
        assert extract_fee("You have received 2000 RWF from Jane Smith") is None


@pytest.mark.unit
class TestExtractBalance:
    """Tests for extract_balance"""

    def test_balance_without_space(self):
        assert extract_balance("Your new balance:2000 RWF.") == 2000

    def test_balance_case_insensitive(self):
        assert extract_balance("NEW BALANCE: 40,400 RWF") == 40400

    def test_no_balance(self):
        assert extract_balance("You have received 2000 RWF") is None


@pytest.mark.unit
class TestExtractTransactionIds:
    """Tests for transaction id extractors"""

    def test_transaction_id(self):
        body = "Financial Transaction Id: 76662021700."
        assert extract_transaction_id(body) == "76662021700"

    def test_transaction_id_without_colon(self):
        assert extract_transaction_id("transaction id 12345") == "12345"

    def test_txid_fallback(self):
        assert extract_transaction_id("TxId: 73214484437. Your payment of") == "73214484437"
        assert extract_transaction_id("*162*TxId:13913173274*S*") == "13913173274"

    def test_transaction_id_preferred_over_txid(self):
        body = "TxId: 111. Financial Transaction Id: 222."
        assert extract_transaction_id(body) == "222"

    def test_no_transaction_id(self):
        assert extract_transaction_id("Your PIN was changed") is None

    def test_external_transaction_id(self):
        body = "External Transaction Id: ext-4f3a-99. Your new balance: 100 RWF."
        assert extract_external_transaction_id(body) == "ext-4f3a-99"

    def test_external_transaction_id_case_insensitive(self):
        assert extract_external_transaction_id("external transaction id ABC_123") == "ABC_123"

    def test_no_external_transaction_id(self):
        assert extract_external_transaction_id("Financial Transaction Id: 1") is None
