#!/usr/bin/env python3
"""Simple CLI for looking up wallets locally"""

import argparse
import asyncio
import sys
from typing import List, Optional

from wallet_explorer.errors import ExplorerError
from wallet_explorer.services.address import normalize_chain, require_address
from wallet_explorer.services.recent_searches import RecentSearches
from wallet_explorer.services.wallet import get_ether_price, get_wallet_overview
from wallet_explorer.types import Transaction, WalletOverview


def truncate(value: Optional[str], length: int = 10) -> str:
    if not value:
        return "-"
    if len(value) <= length:
        return value
    return f"{value[:length]}...{value[-4:]}"


def print_transactions(transactions: List[Transaction], unit: str, limit: int) -> None:
    print(f"\nTransactions (latest {min(limit, len(transactions))} of {len(transactions)}):")
    print("-" * 72)
    for tx in transactions[:limit]:
        value = f"{tx.value_native:.4f}" if tx.value_native is not None else "?"
        fee = f"{tx.fee_native:.8f}" if tx.fee_native is not None else "?"
        marker = "✅" if tx.status == "success" else "❌"
        print(
            f"{marker} {truncate(tx.hash)}  {truncate(tx.from_address)} → {truncate(tx.to_address)}"
            f"  {value:>12} {unit}  fee {fee}"
        )


def print_overview(overview: WalletOverview, tx_limit: int = 10) -> None:
    """Pretty print a wallet overview"""
    balance = overview.balance

    print("\n👛 Wallet Overview")
    print("=" * 72)
    print(f"Address: {overview.address}")
    print(f"Chain:   {overview.chain_id}")
    print(f"Balance: {balance.balance} {balance.unit}")
    print(f"Tokens:  {len(overview.tokens)} worth ${overview.total_value_usd:,.2f} USD")

    if overview.tokens:
        print("\nTokens:")
        print("-" * 72)
        for i, token in enumerate(overview.tokens, 1):
            symbol = token.metadata.symbol or "?"
            print(
                f"{i:2d}. {token.decimal_balance:>18,.6f} {symbol:<8}"
                f" ${token.value_usd:>14,.2f}  @ ${token.price_usd:,.4f}"
            )
            if token.metadata.name and token.metadata.name != symbol:
                print(f"    {token.metadata.name}")

    if overview.transactions:
        print_transactions(overview.transactions, balance.unit, tx_limit)


async def cli_lookup(address: str, chain: Optional[str], tx_limit: int, history: RecentSearches) -> int:
    """CLI command to look up a wallet"""
    try:
        address = require_address(address)
        chain_config = normalize_chain(chain)
    except ExplorerError as e:
        print(f"❌ {e.message}")
        return 2

    history.add(address, chain_config.chain_id)
    print(f"🔍 Looking up {address} on {chain_config.name}...")

    try:
        overview = await get_wallet_overview(address, chain_config.chain_id)
    except ExplorerError as e:
        print(f"❌ {e.public_message if e.status_code >= 500 else e.message}")
        return 1

    print_overview(overview, tx_limit)
    return 0


async def cli_price(chain: Optional[str]) -> int:
    try:
        price = await get_ether_price(chain)
    except ExplorerError as e:
        print(f"❌ {e.public_message if e.status_code >= 500 else e.message}")
        return 1
    print(f"ETH/USD {price.ethusd}   ETH/BTC {price.ethbtc}")
    return 0


def cli_recent(history: RecentSearches, clear: bool = False) -> int:
    if clear:
        history.clear()
        print("Recent searches cleared.")
        return 0

    searches = history.load()
    if not searches:
        print("No recent searches.")
        return 0
    for i, search in enumerate(searches, 1):
        print(f"{i:2d}. {search.address}  chain {search.chain_id}  {search.searched_at}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wallet Explorer CLI")
    subparsers = parser.add_subparsers(dest="command")

    lookup_parser = subparsers.add_parser("lookup", help="Show balance, tokens and transactions for a wallet")
    lookup_parser.add_argument("address", help="Wallet address")
    lookup_parser.add_argument("--chain", default=None, help="Chain id or alias (default: Ethereum)")
    lookup_parser.add_argument("--transactions", type=int, default=10, help="How many transactions to print")

    price_parser = subparsers.add_parser("price", help="Current ETH price")
    price_parser.add_argument("--chain", default=None, help="Chain id or alias (default: Ethereum)")

    recent_parser = subparsers.add_parser("recent", help="List recently searched addresses")
    recent_parser.add_argument("--clear", action="store_true", help="Forget all recent searches")

    return parser


async def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    history = RecentSearches()

    if args.command == "lookup":
        if args.transactions < 0:
            parser.error("--transactions must not be negative")
        return await cli_lookup(args.address, args.chain, args.transactions, history)
    if args.command == "price":
        return await cli_price(args.chain)
    if args.command == "recent":
        return cli_recent(history, clear=args.clear)

    parser.print_help()
    return 1


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
