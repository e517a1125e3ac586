from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=BASE_DIR / ".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Settings
    host: str = Field(default="127.0.0.1", description="Server host")
    port: int = Field(default=8000, description="Server port")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: Optional[bool] = Field(
        default=None,
        description="Force JSON (true) or console (false) logs; unset picks console at DEBUG",
    )
    cors_allow_origins: List[str] = Field(
        default_factory=lambda: ["*"],
        description="Origins allowed to call the API from a browser",
    )

    # External API Keys
    alchemy_api_key: str = Field(default="", description="Alchemy API key")
    etherscan_api_key: str = Field(
        default="",
        description="Etherscan API key",
        validation_alias=AliasChoices("etherscan_api_key", "ETHERSCAN_KEY"),
    )

    # Upstream Endpoints
    alchemy_data_api_url: str = Field(
        default="https://api.g.alchemy.com/data/v1",
        description="Alchemy Data API base URL (the API key is appended as a path segment)",
    )
    etherscan_api_url: str = Field(
        default="https://api.etherscan.io/v2/api",
        description="Etherscan multichain API endpoint",
    )

    # Provider Toggles
    enable_alchemy: bool = Field(default=True, description="Enable Alchemy token balances")
    enable_etherscan: bool = Field(default=True, description="Enable Etherscan explorer lookups")

    # Wallet Lookups
    default_chain_id: int = Field(default=1, description="Chain used when the request names none")
    token_page_ceiling: int = Field(
        default=10,
        ge=1,
        description="Maximum number of token balance pages fetched per lookup",
    )
    min_token_value_usd: float = Field(
        default=0.01,
        ge=0,
        description="Token holdings worth this much or less are hidden",
    )
    transactions_page_size: int = Field(
        default=1000,
        ge=1,
        le=10000,
        description="Default number of transactions requested from the explorer",
    )

    # Cache Settings
    upstream_cache_ttl_seconds: int = Field(
        default=60,
        ge=1,
        description="How long identical upstream requests are served from memory",
    )
    max_cache_size: int = Field(default=1000, description="Maximum cache size")

    # HTTP Client
    request_timeout_seconds: int = Field(default=30, description="Request timeout")

    # CLI Recent Searches
    recent_searches_path: Path = Field(
        default=Path.home() / ".wallet_explorer" / "recent_searches.json",
        description="Where the CLI keeps previously searched addresses",
    )
    recent_searches_limit: int = Field(
        default=10,
        ge=1,
        description="Number of recent searches the CLI remembers",
    )

    @property
    def has_alchemy_key(self) -> bool:
        return bool(self.alchemy_api_key)

    @property
    def has_etherscan_key(self) -> bool:
        return bool(self.etherscan_api_key)


# Global settings instance
settings = Settings()
