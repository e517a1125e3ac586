import pytest

import cli
from wallet_explorer.services.recent_searches import RecentSearches
from wallet_explorer.types import EtherPrice

WALLET = "0xd8dA6BF26964aF9D7eEd9e03E53415D37aA96045"


@pytest.fixture
def history(tmp_path):
    return RecentSearches(path=tmp_path / "recent.json")


@pytest.mark.asyncio
async def test_lookup_rejects_bad_address_without_recording_it(history, capsys):
    code = await cli.cli_lookup("not-an-address", None, 10, history)

    assert code == 2
    assert "Invalid wallet address" in capsys.readouterr().out
    assert history.load() == []


@pytest.mark.asyncio
async def test_lookup_records_search_even_when_lookup_fails(history, monkeypatch, capsys):
    from wallet_explorer.errors import UpstreamError

    async def failing_overview(address, chain):
        raise UpstreamError("etherscan returned HTTP 502")

    monkeypatch.setattr(cli, "get_wallet_overview", failing_overview)

    code = await cli.cli_lookup(WALLET, "polygon", 10, history)

    assert code == 1
    assert "Upstream provider error" in capsys.readouterr().out
    (search,) = history.load()
    assert search.address == WALLET
    assert search.chain_id == 137


@pytest.mark.asyncio
async def test_price(monkeypatch, capsys):
    async def fake_price(chain):
        return EtherPrice(ethbtc="0.035", ethusd="3300.12")

    monkeypatch.setattr(cli, "get_ether_price", fake_price)

    assert await cli.cli_price(None) == 0
    assert "ETH/USD 3300.12" in capsys.readouterr().out


def test_recent_lists_and_clears(history, capsys):
    assert cli.cli_recent(history) == 0
    assert "No recent searches." in capsys.readouterr().out

    history.add(WALLET, 1)
    cli.cli_recent(history)
    assert WALLET in capsys.readouterr().out

    cli.cli_recent(history, clear=True)
    assert history.load() == []


def test_truncate():
    assert cli.truncate(None) == "-"
    assert cli.truncate("0xabc") == "0xabc"
    assert cli.truncate(WALLET) == "0xd8dA6BF2...6045"
