"""
Replay one block through the ingestion pipeline against the configured node.
Run: python scripts/replay_block.py <block_hash>
"""

import asyncio
import sys
from pathlib import Path

# Add chainfeed to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chainfeed.config import get_settings
from chainfeed.core.exceptions import ChainFeedError
from chainfeed.dependencies import create_rpc_gateway
from chainfeed.services.ingester import BlockIngester
from chainfeed.services.transformer import TransactionTransformer


async def replay(block_hash: str) -> int:
    """Ingest a block and print the wallet transactions found."""
    settings = get_settings()
    gateway = create_rpc_gateway(settings)
    ingester = BlockIngester(gateway, TransactionTransformer(gateway, settings.currency_symbol))

    print(f"\nReplaying block {block_hash}")
    print("=" * 60)
    try:
        transactions = await ingester.ingest(block_hash)
    except ChainFeedError as e:
        print(f"FAILED [{e.code}]: {e.message}")
        return 1
    finally:
        await gateway.close()

    for tx in transactions:
        print(tx.to_json())

    print("=" * 60)
    print(f"{len(transactions)} wallet transaction(s)")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(2)
    sys.exit(asyncio.run(replay(sys.argv[1])))
