import logging
from typing import Any, Dict, List, Optional

import pytest

from wallet_explorer.errors import UpstreamError
from wallet_explorer.providers.base import TokenBalanceProvider
from wallet_explorer.services.token_balances import (
    aggregate_token_pages,
    get_token_balances,
    normalize_balances,
)
from wallet_explorer.types import PageResult, RawBalanceEntry, TokenMetadata, TokenPrice

WALLET = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


def make_entry(
    raw: str,
    *,
    decimals: Any = 18,
    price: Optional[str] = "1.0",
    address: str = "0xtoken",
    symbol: str = "TKN",
) -> RawBalanceEntry:
    prices = [TokenPrice(currency="usd", value=price)] if price is not None else []
    return RawBalanceEntry(
        contract_address=address,
        raw_balance=raw,
        metadata=TokenMetadata(symbol=symbol, decimals=decimals),
        prices=prices,
    )


class ScriptedProvider(TokenBalanceProvider):
    """Serves pre-built pages and records the pageKey of every call."""

    name = "scripted"

    def __init__(self, pages: List[PageResult]):
        self.pages = pages
        self.calls: List[Optional[str]] = []

    async def ready(self) -> bool:
        return True

    async def health_check(self) -> Dict[str, Any]:
        return {"status": "healthy"}

    async def fetch_token_page(self, address, network, page_key=None):
        self.calls.append(page_key)
        page = self.pages[len(self.calls) - 1]
        if isinstance(page, Exception):
            raise page
        return page


class EndlessProvider(ScriptedProvider):
    """Always claims there is another page."""

    def __init__(self):
        super().__init__([])

    async def fetch_token_page(self, address, network, page_key=None):
        self.calls.append(page_key)
        n = len(self.calls)
        return PageResult(entries=[make_entry(hex(n), address=f"0x{n}")], continuation_token=f"key-{n}")


@pytest.mark.asyncio
async def test_aggregation_concatenates_pages_in_order():
    pages = [
        PageResult(entries=[make_entry("0x1", address="0xa"), make_entry("0x2", address="0xb")], continuation_token="p2"),
        PageResult(entries=[make_entry("0x3", address="0xc")], continuation_token="p3"),
        PageResult(entries=[make_entry("0x4", address="0xd")], continuation_token=None),
    ]
    provider = ScriptedProvider(pages)

    entries = await aggregate_token_pages(provider, WALLET, "eth-mainnet", max_pages=10)

    assert [e.contract_address for e in entries] == ["0xa", "0xb", "0xc", "0xd"]
    assert provider.calls == [None, "p2", "p3"]


@pytest.mark.asyncio
async def test_empty_continuation_token_ends_pagination():
    provider = ScriptedProvider([PageResult(entries=[make_entry("0x1")], continuation_token="")])

    entries = await aggregate_token_pages(provider, WALLET, "eth-mainnet")

    assert len(entries) == 1
    assert provider.calls == [None]


@pytest.mark.asyncio
async def test_aggregation_stops_at_page_ceiling():
    provider = EndlessProvider()

    entries = await aggregate_token_pages(provider, WALLET, "eth-mainnet", max_pages=4)

    assert len(provider.calls) == 4
    assert provider.calls == [None, "key-1", "key-2", "key-3"]
    assert len(entries) == 4


@pytest.mark.asyncio
async def test_page_ceiling_defaults_to_settings(monkeypatch):
    from wallet_explorer.services import token_balances

    monkeypatch.setattr(token_balances.settings, "token_page_ceiling", 2)
    provider = EndlessProvider()

    await aggregate_token_pages(provider, WALLET, "eth-mainnet")

    assert len(provider.calls) == 2


@pytest.mark.asyncio
async def test_upstream_failure_aborts_without_partial_results():
    provider = ScriptedProvider([
        PageResult(entries=[make_entry("0x1")], continuation_token="p2"),
        UpstreamError("alchemy returned HTTP 500", provider="alchemy", status=500),
    ])

    with pytest.raises(UpstreamError):
        await aggregate_token_pages(provider, WALLET, "eth-mainnet")

    assert provider.calls == [None, "p2"]


def test_normalizer_drops_zero_unpriced_and_dust():
    entries = [
        make_entry("0x0", address="0xzero"),
        make_entry("0x3635c9adc5dea00000", price=None, address="0xunpriced"),
        make_entry("0x3635c9adc5dea00000", price="0", address="0xfree"),
        # exactly 0.01 USD is not above the threshold
        make_entry("10000000000000000", price="1", address="0xdust"),
        make_entry("0x3635c9adc5dea00000", price="2.5", address="0xkeep"),
    ]

    result = normalize_balances(entries, min_value_usd=0.01)

    assert [b.contract_address for b in result] == ["0xkeep"]
    kept = result[0]
    assert kept.decimal_balance == 1000.0
    assert kept.price_usd == 2.5
    assert kept.value_usd == 2500.0
    assert kept.raw_balance == str(10**21)


def test_normalizer_sorts_by_value_and_keeps_ties_in_arrival_order():
    entries = [
        make_entry("1000000", decimals=6, price="1", address="0xone"),
        make_entry("5000000", decimals=6, price="1", address="0xfive-a"),
        make_entry("2000000", decimals=6, price="1", address="0xtwo"),
        make_entry("5000000", decimals=6, price="1", address="0xfive-b"),
    ]

    result = normalize_balances(entries, min_value_usd=0.01)

    assert [b.contract_address for b in result] == ["0xfive-a", "0xfive-b", "0xtwo", "0xone"]


def test_normalizer_skips_unparsable_entries(caplog):
    entries = [
        make_entry("0xnot-hex", address="0xbroken"),
        make_entry("0xde0b6b3a7640000", price="3000", address="0xeth-like"),
    ]

    with caplog.at_level(logging.WARNING, logger="wallet_explorer.services.token_balances"):
        result = normalize_balances(entries, min_value_usd=0.01)

    assert [b.contract_address for b in result] == ["0xeth-like"]
    assert result[0].value_usd == 3000.0
    assert "unparsable balance" in caplog.text


def test_normalizer_prefers_usd_quote_and_reads_string_decimals():
    entry = RawBalanceEntry(
        contract_address="0xusdc",
        raw_balance="0x1dcd6500",  # 500_000_000
        metadata=TokenMetadata(symbol="USDC", decimals="6"),
        prices=[TokenPrice(currency="eur", value="0.9"), TokenPrice(currency="usd", value="1.0")],
    )

    (balance,) = normalize_balances([entry], min_value_usd=0.01)

    assert balance.decimal_balance == 500.0
    assert balance.value_usd == 500.0
    assert balance.metadata.decimal_places == 6


@pytest.mark.asyncio
async def test_get_token_balances_uses_chain_network():
    captured = {}

    class RecordingProvider(ScriptedProvider):
        async def fetch_token_page(self, address, network, page_key=None):
            captured["network"] = network
            captured["address"] = address
            return PageResult(entries=[make_entry("0x3635c9adc5dea00000", price="1")])

    result = await get_token_balances(WALLET, "polygon", provider=RecordingProvider([]))

    assert captured == {"network": "polygon-mainnet", "address": WALLET}
    assert result[0].value_usd == 1000.0


@pytest.mark.parametrize(
    "decimals, expected",
    [("6", 6), ("6.0", 6), (6.0, 6), ("0x12", 18), ("0x6", 6), (" 8 ", 8), ("6.5", 18), ("abc", 18), (None, 18), (-1, 18)],
)
def test_metadata_decimals_parsing(decimals, expected):
    assert TokenMetadata(decimals=decimals).decimal_places == expected


def test_whole_number_decimal_strings_scale_correctly():
    entry = make_entry("0x1dcd6500", decimals="6.0", price="1")  # 500_000_000

    (balance,) = normalize_balances([entry], min_value_usd=0.01)

    assert balance.decimal_balance == 500.0
