"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Service
    service_name: str = "cashflow-api"
    log_level: str = "INFO"

    # Risk policy (base currency units; ratios are decimal fractions)
    risk_high_worst_balance: float = -1000.0
    risk_medium_worst_balance: float = 500.0
    risk_medium_volatility_ratio: float = 0.5
    trend_change_ratio: float = 0.1

    # Key events
    event_salary_change: float = 2000.0
    event_large_expense_change: float = -1000.0
    event_low_balance: float = 500.0

    # Projection
    projection_horizon_days: int = 90
    max_projection_days: int = 3660  # ~10 years
    max_recurring_occurrences: int = 24
    scenario_days_per_month: int = 30


settings = Settings()
