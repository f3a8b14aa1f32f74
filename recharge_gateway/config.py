"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "recharge-gateway"
    api_version: str = "2.0.0"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3002

    # Mobile recharge simulation
    recharge_min_delay_ms: int = 500
    recharge_max_delay_ms: int = 2500
    recharge_success_rate: float = 0.95
    recharge_min_amount: float = 10
    recharge_max_amount: float = 5000

    # Bill payment simulation
    billpay_instant_delay_ms: int = 1000
    billpay_delayed_delay_ms: int = 5000
    billpay_success_rate: float = 0.95

    # Queries
    history_default_limit: int = 50

    # Balance inquiry (inclusive bounds, BDT)
    balance_min: int = 10
    balance_max: int = 1009

    # Seed for the outcome/delay random source; unset means nondeterministic
    random_seed: int | None = None


settings = Settings()
