"""
HIP3 Batch Example

This example demonstrates how to run a batch of trade intents against
Hyperliquid's builder-deployed (HIP3) perpetual markets:

Read-only Queries (unsigned, POST /info):
- Open orders of the trading address
- Positions and account summary
- Order book of a HIP3 asset

Trading Operations (signed, POST /exchange):
- Place a limit order far from the market
- Cancel it by order id
- Cancel all remaining orders on the asset

The batch runs with continue_on_fail=True so a failing item is reported in
its result instead of aborting the remaining items.

Environment Variables Required:
- HYPERLIQUID_PRIVATE_KEY: Your private key for signing
- HYPERLIQUID_NETWORK: mainnet or testnet (defaults to mainnet)
- HYPERLIQUID_VAULT_ADDRESS: optional vault / subaccount to trade for
"""

import logging

from hyperliquid_hip3 import HyperliquidHip3Client, Side

ASSET = "xyz:XYZ100"


def example_batch() -> None:
    """Query account state, then place and cancel a resting limit order."""

    print("=" * 70)
    print("Hyperliquid HIP3 Batch Example")
    print("=" * 70)

    print("\n[Setup] Loading credentials from environment...")
    client = HyperliquidHip3Client.from_env()
    print(f"[Setup] Trading address: {client.address}")
    print(f"[Setup] API Endpoint: {client.context.base_url}\n")

    # ==================================================================
    # PART 1: READ-ONLY QUERIES
    # ==================================================================
    print("=" * 70)
    print("PART 1: READ-ONLY QUERIES")
    print("=" * 70)

    results = client.execute(
        [
            {"operation": "getOpenOrders"},
            {"operation": "getAccountSummary"},
            {"operation": "getOrderBook", "asset": ASSET},
        ],
        continue_on_fail=True,
    )
    for result in results:
        print(f"  [{result.index}] {'ok' if result.ok else 'failed'}")
        if not result.ok:
            print(f"      {result.error}")

    # ==================================================================
    # PART 2: PLACE AND CANCEL
    # ==================================================================
    print("\n" + "=" * 70)
    print("PART 2: PLACE AND CANCEL")
    print("=" * 70)

    # a bid at 1 should rest without filling
    print(f"\n[2.1] Placing limit buy on {ASSET}...")
    response = client.place_order(
        ASSET, Side.Buy, "1", order_type="limit", price="1"
    )
    statuses = response["response"]["data"]["statuses"]  # type: ignore
    print(f"  Statuses: {statuses}")

    resting = statuses[0].get("resting") if statuses else None
    if resting:
        print(f"\n[2.2] Cancelling order {resting['oid']}...")
        print(f"  {client.cancel_order(resting['oid'], ASSET)}")

    print(f"\n[2.3] Cancelling all orders on {ASSET}...")
    print(f"  {client.cancel_all_orders(ASSET)}")

    print("\n" + "=" * 70)
    print("EXAMPLE COMPLETE")
    print("=" * 70)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example_batch()
