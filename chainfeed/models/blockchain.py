"""Blockchain-related domain models."""

from decimal import Decimal
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator


def _reject_float(value: Any) -> Any:
    # binary floats cannot represent most monetary amounts exactly
    if isinstance(value, float):
        raise ValueError("monetary values must be Decimal, str or int, not float")
    return value


class RawBlockTransaction(BaseModel):
    """Transaction entry embedded in a full-verbosity block."""

    txid: str
    # not part of the node payload, attached from the containing block
    block: int | None = Field(default=None, ge=0)


class Block(BaseModel):
    """Block returned by getblock at full verbosity."""

    hash: str
    height: int = Field(ge=0)
    tx: list[RawBlockTransaction] = Field(default_factory=list)


class TransactionDetailEntry(BaseModel):
    """One wallet movement inside a transaction."""

    # omitted by the node for non-standard outputs (e.g. OP_RETURN)
    address: str | None = None
    category: str


class EnrichedTransactionDetail(BaseModel):
    """Wallet view of a transaction as returned by gettransaction."""

    amount: Decimal
    fee: Decimal | None = None
    details: list[TransactionDetailEntry] = Field(default_factory=list)

    @field_validator("amount", "fee", mode="before")
    @classmethod
    def check_amounts(cls, v: Any) -> Any:
        return _reject_float(v)


class LookupStatus(str, Enum):
    """Outcome of a transaction lookup."""

    FOUND = "found"
    NOT_FOUND = "not_found"


class TransactionLookup(BaseModel):
    """Result of gettransaction: either the wallet detail or not-found."""

    txid: str
    status: LookupStatus
    detail: EnrichedTransactionDetail | None = None

    @model_validator(mode="after")
    def detail_matches_status(self) -> "TransactionLookup":
        if (self.status == LookupStatus.FOUND) != (self.detail is not None):
            raise ValueError("detail must be present exactly when the lookup is found")
        return self

    @classmethod
    def found(cls, txid: str, detail: EnrichedTransactionDetail) -> "TransactionLookup":
        return cls(txid=txid, status=LookupStatus.FOUND, detail=detail)

    @classmethod
    def not_found(cls, txid: str) -> "TransactionLookup":
        return cls(txid=txid, status=LookupStatus.NOT_FOUND)

    @property
    def is_found(self) -> bool:
        return self.status == LookupStatus.FOUND


class Transaction(BaseModel):
    """
    Canonical wallet transaction emitted to consumers.

    The field set is the contract with downstream consumers. Serialize with
    ``to_json()`` (or ``model_dump(by_alias=True)``) to get the ``from`` key.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    currency: str
    hash: str
    block: int = Field(ge=0)
    from_: str = Field(default="", alias="from")
    to: frozenset[str] = Field(default_factory=frozenset)
    amount: Decimal
    fee: Decimal = Decimal("0")
    fee_currency: str
    type: str

    @field_validator("amount", "fee", mode="before")
    @classmethod
    def check_amounts(cls, v: Any) -> Any:
        return _reject_float(v)

    @field_serializer("to")
    def _serialize_to(self, to: frozenset[str]) -> list[str]:
        return sorted(to)

    @field_serializer("amount", "fee", when_used="json")
    def _serialize_decimal(self, value: Decimal) -> str:
        # fixed-point, never exponent notation (1E-8)
        return format(value, "f")

    def to_json(self) -> str:
        """Serialize with public field names; decimals are written as strings."""
        return self.model_dump_json(by_alias=True)
