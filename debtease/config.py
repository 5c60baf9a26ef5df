from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "DEBTEASE_"}

    # Remote DebtEase server
    api_base_url: str = "http://localhost:8000"
    request_timeout: float = 15.0

    # Retry policy for the API client
    retry_max_attempts: int = 4  # first try + 3 retries
    retry_base_delay: float = 1.0  # seconds
    retry_max_delay: float = 5.0
    rate_limit_max_delay: float = 10.0

    # Simulation limits
    max_simulation_months: int = 1200  # 100 years
    closed_balance_threshold: Decimal = Decimal("1.00")

    # Extra monthly amounts shown as payoff scenarios
    scenario_extra_amounts: list[Decimal] = [
        Decimal("2500"),
        Decimal("5000"),
        Decimal("10000"),
        Decimal("15000"),
    ]

    # Backend DTI above this percentage is flagged as unhealthy
    healthy_dti_threshold: Decimal = Decimal("36")

    # App
    debug: bool = False
    log_level: str = "INFO"


settings = Settings()
