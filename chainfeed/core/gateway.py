"""Abstract RPC gateway interface."""

from abc import ABC, abstractmethod

from chainfeed.models.blockchain import Block, TransactionLookup


class RPCGateway(ABC):
    """Abstract base class for node RPC access."""

    @abstractmethod
    async def get_block(self, block_hash: str, verbosity: int) -> Block:
        """
        Fetch a block by hash.

        Args:
            block_hash: Block hash as reported by the node.
            verbosity: Level of detail; the pipeline always asks for
                full decoded transactions.

        Returns:
            Block with height and embedded transactions.

        Raises:
            RPCTransportError: On connection, timeout or protocol failures.
        """
        ...

    @abstractmethod
    async def get_transaction(self, txid: str) -> TransactionLookup:
        """
        Fetch the wallet view of a transaction.

        Args:
            txid: Transaction id.

        Returns:
            A found lookup carrying the detail, or a not-found lookup when the
            node has no wallet record of the transaction.

        Raises:
            RPCTransportError: On connection, timeout or protocol failures.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the gateway and release resources."""
        ...
