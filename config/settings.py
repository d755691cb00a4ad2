from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # App
    APP_NAME: str = "XNM Escrow Market"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev
    LOG_LEVEL: str = "INFO"

    # Identities (opaque addresses supplied by the host runtime)
    OWNER_ADDRESS: str = "platform"
    FEE_RECEIVER: str = "platform-fees"
    ESCROW_ADDRESS: str = "xnm-market-escrow"
    USDT_TOKEN_ADDRESS: str = "usdt"

    # Market parameters (defaults match the reference deployment)
    MIN_TRADE_AMOUNT: int = 50
    SELLER_DEPOSIT_RATE: int = 21  # percent
    BUYER_DEPOSIT_RATE: int = 5  # percent
    MAX_DELIVERY_DAYS: int = 180

    # Seller fee schedule: (lifetime volume threshold, rate in bps), ascending
    FEE_TIERS: list[tuple[int, int]] = [
        (0, 500),
        (10_000, 360),
        (50_000, 270),
        (100_000, 200),
    ]

    # What happens to the unused part of a sell-order deposit on a partial fill
    PARTIAL_FILL_DEPOSIT_POLICY: Literal["LOCK_FULL", "PRO_RATA"] = "LOCK_FULL"


settings = Settings()
