"""Conversion of wallet transaction lookups into canonical transactions."""

import logging
from decimal import Decimal

from chainfeed.constants import DEFAULT_CURRENCY, TransactionType
from chainfeed.core.gateway import RPCGateway
from chainfeed.models.blockchain import (
    EnrichedTransactionDetail,
    RawBlockTransaction,
    Transaction,
)

logger = logging.getLogger(__name__)


def classify(categories: set[str], amount: Decimal = Decimal("0")) -> str:
    """
    Derive the transaction type from the distinct detail categories.

    More than one category means the wallet is on both sides of the
    transfer, which is reported as internal. A single category is
    returned as the node reported it. Without categories (watch-only
    records come with empty details) the sign of the net amount decides
    between send and receive.
    """
    if len(categories) > 1:
        return TransactionType.INTERNAL.value
    if not categories:
        return (TransactionType.SEND if amount < 0 else TransactionType.RECEIVE).value
    (category,) = categories
    return category


class TransactionTransformer:
    """Builds a Transaction from a block entry and its wallet detail."""

    def __init__(self, gateway: RPCGateway, currency_symbol: str = DEFAULT_CURRENCY) -> None:
        """
        Initialize the transformer.

        Args:
            gateway: Node RPC gateway, shared with other components.
            currency_symbol: Symbol written to currency and fee_currency.
        """
        self._gateway = gateway
        self._currency_symbol = currency_symbol or DEFAULT_CURRENCY

    @property
    def currency_symbol(self) -> str:
        return self._currency_symbol

    async def transform(self, raw_transaction: RawBlockTransaction) -> Transaction | None:
        """
        Enrich and convert one block transaction.

        Args:
            raw_transaction: Block entry with the block height attached.

        Returns:
            The canonical Transaction, or None when the node has no wallet
            record of it.

        Raises:
            RPCTransportError: If the lookup fails for any other reason.
        """
        if raw_transaction.block is None:
            raise ValueError(f"Transaction {raw_transaction.txid} has no block height attached")

        lookup = await self._gateway.get_transaction(raw_transaction.txid)
        if not lookup.is_found:
            # not a wallet transaction, or txindex is off for foreign lookups
            logger.debug(f"Skipping {raw_transaction.txid[:16]}...: not found by node")
            return None

        return self.build(raw_transaction, lookup.detail)

    def build(self, raw_transaction: RawBlockTransaction, detail: EnrichedTransactionDetail) -> Transaction:
        """Aggregate detail entries into a Transaction."""
        # several entries when paying many outputs, or sending to ourselves
        addresses: set[str] = set()
        categories: set[str] = set()
        for entry in detail.details:
            if entry.address:
                addresses.add(entry.address)
            categories.add(entry.category)

        if not categories:
            logger.debug(f"Transaction {raw_transaction.txid[:16]}... has no detail entries, using amount sign")

        transaction = Transaction(
            currency=self._currency_symbol,
            hash=raw_transaction.txid,
            block=raw_transaction.block,
            from_="",
            to=frozenset(addresses),
            amount=detail.amount,
            fee=detail.fee if detail.fee is not None else Decimal("0"),
            fee_currency=self._currency_symbol,
            type=classify(categories, detail.amount),
        )
        logger.debug(
            f"Transaction {transaction.hash[:16]}... block={transaction.block} "
            f"type={transaction.type} amount={transaction.amount}"
        )
        return transaction
