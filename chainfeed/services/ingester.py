"""Block ingestion: fetch a block and enrich all of its transactions."""

import asyncio
import logging

from chainfeed.constants import FULL_VERBOSITY
from chainfeed.core.exceptions import BlockProcessingError
from chainfeed.core.gateway import RPCGateway
from chainfeed.models.blockchain import RawBlockTransaction, Transaction
from chainfeed.services.transformer import TransactionTransformer

logger = logging.getLogger(__name__)


class BlockIngester:
    """
    Handler for hashblock notifications.

    Every transaction of the block is enriched concurrently and the block
    completes only once all of them have resolved. A failed enrichment fails
    the whole block; transactions the node does not know are skipped.
    """

    def __init__(self, gateway: RPCGateway, transformer: TransactionTransformer) -> None:
        """
        Initialize the ingester.

        Args:
            gateway: Node RPC gateway used for the block fetch.
            transformer: Converter for the block's transactions.
        """
        self._gateway = gateway
        self._transformer = transformer

    async def ingest(self, block_hash: str) -> list[Transaction]:
        """
        Produce the wallet transactions contained in a block.

        Args:
            block_hash: Hash from the notification.

        Returns:
            Transactions in block order; may be empty.

        Raises:
            RPCTransportError: If the block cannot be fetched.
            BlockProcessingError: If any transaction enrichment failed.
        """
        block = await self._gateway.get_block(block_hash, FULL_VERBOSITY)

        transactions = self.attach_height(block.tx, block.height)
        logger.info(f"[Ingester] Block {block_hash[:16]}... height={block.height}: {len(transactions)} transaction(s)")

        tasks = [asyncio.create_task(self._transformer.transform(tx)) for tx in transactions]
        # wait for every attempt, failed or not, before judging the block
        results = await asyncio.gather(*tasks, return_exceptions=True)

        errors: list[BaseException] = []
        emitted: list[Transaction] = []
        for raw, result in zip(transactions, results):
            if isinstance(result, BaseException):
                logger.error(f"[Ingester] Enrichment of {raw.txid[:16]}... in block {block.height} failed: {result!r}")
                errors.append(result)
            elif result is not None:
                emitted.append(result)

        if errors:
            raise BlockProcessingError(block_hash, errors) from errors[0]

        logger.info(f"[Ingester] Block height={block.height}: {len(emitted)} wallet transaction(s)")
        return emitted

    @staticmethod
    def attach_height(transactions: list[RawBlockTransaction], height: int) -> list[RawBlockTransaction]:
        """Copy the containing block height onto each entry."""
        return [tx.model_copy(update={"block": height}) for tx in transactions]
