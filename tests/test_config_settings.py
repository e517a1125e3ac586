from wallet_explorer.config import Settings


def test_defaults_bound_pagination_and_dust(monkeypatch):
    monkeypatch.delenv("TOKEN_PAGE_CEILING", raising=False)
    monkeypatch.delenv("MIN_TOKEN_VALUE_USD", raising=False)

    settings = Settings(_env_file=None)

    assert settings.token_page_ceiling == 10
    assert settings.min_token_value_usd == 0.01
    assert settings.default_chain_id == 1


def test_values_load_from_environment(monkeypatch):
    monkeypatch.setenv("TOKEN_PAGE_CEILING", "3")
    monkeypatch.setenv("UPSTREAM_CACHE_TTL_SECONDS", "15")
    monkeypatch.setenv("ALCHEMY_API_KEY", "alchemy-key")

    settings = Settings(_env_file=None)

    assert settings.token_page_ceiling == 3
    assert settings.upstream_cache_ttl_seconds == 15
    assert settings.has_alchemy_key is True


def test_etherscan_key_legacy_alias(monkeypatch):
    """Etherscan key should load from the short ETHERSCAN_KEY name too."""

    monkeypatch.delenv("ETHERSCAN_API_KEY", raising=False)
    monkeypatch.setenv("ETHERSCAN_KEY", "alias-key")

    settings = Settings(_env_file=None)

    assert settings.etherscan_api_key == "alias-key"
    assert settings.has_etherscan_key is True
