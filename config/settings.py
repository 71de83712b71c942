from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Block explorers (Etherscan family) — per-network key, shared fallback
    etherscan_api_key: str = ""
    ethereum_api_key: str = ""
    bsc_api_key: str = ""
    polygon_api_key: str = ""
    explorer_timeout_sec: float = 10.0
    explorer_max_rps: float = 5.0

    # GoPlus Security (free, no key)
    goplus_base_url: str = "https://api.gopluslabs.io/api/v1"
    goplus_timeout_sec: float = 15.0
    goplus_max_rps: float = 2.0

    # DexScreener
    dexscreener_timeout_sec: float = 10.0
    dexscreener_max_rps: float = 4.0

    # Solana RPC (chain-state fallback)
    solana_rpc_url: str = "https://api.mainnet-beta.solana.com"
    solana_rpc_timeout_sec: float = 8.0

    # Outbound HTTP
    user_agent: str = "TokenScanner/1.3"

    # HTTP API
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    api_rate_limit: str = "10/minute"
    api_debug: bool = False

    # Telegram bot
    telegram_bot_token: str = ""
    enable_bot: bool = True
    bot_session_ttl_sec: int = 900

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False

    def explorer_api_key(self, network: str) -> str:
        """Per-network explorer key, falling back to the shared Etherscan key."""
        specific = getattr(self, f"{network}_api_key", "")
        return specific or self.etherscan_api_key or "YourApiKeyToken"


settings = Settings()
