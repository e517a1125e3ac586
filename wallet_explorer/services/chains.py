"""
Chain registry.

Static metadata for the EVM chains the explorer serves: display name, native
unit, the Alchemy network slug used by the token API and the block explorer
used for links.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class ChainConfig:
    """Metadata for one supported chain."""
    chain_id: int
    name: str
    native_symbol: str
    alchemy_network: Optional[str]
    explorer_url: str
    native_decimals: int = 18
    aliases: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        return {
            "chainId": self.chain_id,
            "name": self.name,
            "unit": self.native_symbol,
            "decimals": self.native_decimals,
            "alchemyNetwork": self.alchemy_network,
            "explorerUrl": self.explorer_url,
        }


CHAINS: Dict[int, ChainConfig] = {
    1: ChainConfig(
        chain_id=1,
        name="Ethereum",
        native_symbol="ETH",
        alchemy_network="eth-mainnet",
        explorer_url="https://etherscan.io",
        aliases=["eth", "ethereum", "mainnet"],
    ),
    56: ChainConfig(
        chain_id=56,
        name="BNB Chain",
        native_symbol="BNB",
        alchemy_network="bnb-mainnet",
        explorer_url="https://bscscan.com",
        aliases=["bsc", "bnb", "binance"],
    ),
    137: ChainConfig(
        chain_id=137,
        name="Polygon",
        native_symbol="MATIC",
        alchemy_network="polygon-mainnet",
        explorer_url="https://polygonscan.com",
        aliases=["polygon", "matic"],
    ),
    42161: ChainConfig(
        chain_id=42161,
        name="Arbitrum",
        native_symbol="ETH",
        alchemy_network="arb-mainnet",
        explorer_url="https://arbiscan.io",
        aliases=["arbitrum", "arb"],
    ),
    8453: ChainConfig(
        chain_id=8453,
        name="Base",
        native_symbol="ETH",
        alchemy_network="base-mainnet",
        explorer_url="https://basescan.org",
        aliases=["base", "base-mainnet"],
    ),
}

_ALIASES: Dict[str, int] = {
    alias: chain_id
    for chain_id, config in CHAINS.items()
    for alias in config.aliases
}


def get_chain(chain_id: int) -> Optional[ChainConfig]:
    """Get chain config by chain ID."""
    return CHAINS.get(chain_id)


def resolve_alias(alias: str) -> Optional[ChainConfig]:
    """Resolve a chain alias (``eth``, ``polygon``...) to its config."""
    chain_id = _ALIASES.get(alias.strip().lower())
    return CHAINS.get(chain_id) if chain_id is not None else None


def list_chains() -> List[ChainConfig]:
    return sorted(CHAINS.values(), key=lambda c: c.chain_id)


__all__ = ["ChainConfig", "CHAINS", "get_chain", "resolve_alias", "list_chains"]
