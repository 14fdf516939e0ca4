"""Tests for Pydantic models."""

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from chainfeed.models.blockchain import (
    Block,
    EnrichedTransactionDetail,
    LookupStatus,
    Transaction,
    TransactionLookup,
)


def make_transaction(**overrides) -> Transaction:
    fields = {
        "currency": "BTC",
        "hash": "t1",
        "block": 100,
        "to": ["A", "B"],
        "amount": Decimal("1.5"),
        "fee_currency": "BTC",
        "type": "receive",
    }
    fields.update(overrides)
    return Transaction(**fields)


class TestTransactionModel:
    """Tests for Transaction model."""

    def test_defaults(self) -> None:
        """Test from is empty and fee defaults to zero."""
        tx = make_transaction()

        assert tx.from_ == ""
        assert tx.fee == Decimal("0")
        assert tx.to == frozenset({"A", "B"})

    def test_to_deduplicates(self) -> None:
        """Test repeated addresses collapse into one."""
        tx = make_transaction(to=["A", "A", "B"])

        assert tx.to == frozenset({"A", "B"})

    def test_immutable(self) -> None:
        """Test transactions cannot be modified after creation."""
        tx = make_transaction()

        with pytest.raises(ValidationError):
            tx.amount = Decimal("2")

    def test_rejects_float_amount(self) -> None:
        """Test floats are refused for monetary fields."""
        with pytest.raises(ValidationError):
            make_transaction(amount=0.1)

        with pytest.raises(ValidationError):
            make_transaction(fee=0.0001)

    def test_rejects_negative_block(self) -> None:
        """Test block height must be unsigned."""
        with pytest.raises(ValidationError):
            make_transaction(block=-1)

    def test_json_uses_public_names(self) -> None:
        """Test JSON output carries 'from', sorted 'to' and exact decimals."""
        tx = make_transaction(to=["B", "A"], amount=Decimal("0.00000001"))

        data = json.loads(tx.to_json())

        assert data["from"] == ""
        assert "from_" not in data
        assert data["to"] == ["A", "B"]
        assert data["amount"] == "0.00000001"
        assert Decimal(data["amount"]) == Decimal("0.00000001")

    def test_populate_by_alias(self) -> None:
        """Test the record can be rebuilt from its own JSON."""
        tx = make_transaction()

        rebuilt = Transaction.model_validate_json(tx.to_json())

        assert rebuilt == tx


class TestTransactionLookupModel:
    """Tests for TransactionLookup model."""

    def test_found(self) -> None:
        """Test a found lookup carries its detail."""
        detail = EnrichedTransactionDetail(amount=Decimal("1"), details=[])

        lookup = TransactionLookup.found("t1", detail)

        assert lookup.is_found is True
        assert lookup.status == LookupStatus.FOUND
        assert lookup.detail == detail

    def test_not_found(self) -> None:
        """Test a not-found lookup has no detail."""
        lookup = TransactionLookup.not_found("t1")

        assert lookup.is_found is False
        assert lookup.detail is None

    def test_inconsistent_status(self) -> None:
        """Test status and detail must agree."""
        with pytest.raises(ValidationError):
            TransactionLookup(txid="t1", status=LookupStatus.FOUND)


class TestBlockModel:
    """Tests for Block model."""

    def test_ignores_extra_fields(self) -> None:
        """Test node fields outside the model are dropped."""
        block = Block.model_validate(
            {
                "hash": "00abc",
                "height": 100,
                "confirmations": 3,
                "tx": [{"txid": "t1", "vin": [], "vout": [], "hex": "00"}],
            }
        )

        assert block.height == 100
        assert block.tx[0].txid == "t1"
        assert block.tx[0].block is None

    def test_detail_rejects_float(self) -> None:
        """Test enrichment amounts must not be floats."""
        with pytest.raises(ValidationError):
            EnrichedTransactionDetail(amount=1.5, details=[])
