"""Helpers for normalizing chain identifiers and validating wallet addresses."""

from __future__ import annotations

import re
from typing import Optional, Union

from ..config import settings
from ..errors import InvalidAddress, MissingAddress, UnsupportedChain
from .chains import ChainConfig, get_chain, resolve_alias

_EVM_ADDRESS_RE = re.compile(r"^0x[a-fA-F0-9]{40}$")


def is_valid_evm_address(address: str) -> bool:
    if not address:
        return False
    return bool(_EVM_ADDRESS_RE.fullmatch(address))


def require_address(address: Optional[str]) -> str:
    """Return the trimmed address or raise the matching client error."""

    if address is None or not address.strip():
        raise MissingAddress()
    address = address.strip()
    if not is_valid_evm_address(address):
        raise InvalidAddress(context={"address": address})
    return address


def normalize_chain(chain: Union[str, int, None]) -> ChainConfig:
    """Collapse a numeric chain id or an alias into a known chain config.

    ``None`` and blank strings fall back to the configured default chain.
    """

    if chain is None or (isinstance(chain, str) and not chain.strip()):
        chain = settings.default_chain_id

    config: Optional[ChainConfig]
    if isinstance(chain, int):
        config = get_chain(chain)
    else:
        raw = chain.strip()
        config = get_chain(int(raw)) if raw.isascii() and raw.isdigit() else resolve_alias(raw)

    if config is None:
        raise UnsupportedChain(f"Unsupported chain '{chain}'", context={"chain": chain})
    return config


__all__ = [
    "is_valid_evm_address",
    "require_address",
    "normalize_chain",
]
