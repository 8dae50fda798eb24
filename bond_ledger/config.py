from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "BOND_LEDGER_",
    }

    # Issuance terms
    commercial_value_rate: float = 0.985
    # Share of principal charged as transaction cost. Older ledgers used 0.05.
    transaction_cost_rate: float = 0.01

    # Nominal rates: "daily" re-bases daily compounding to a 30-day month,
    # "simple" divides by the months in the period.
    nominal_method: str = "daily"

    # IRR
    irr_solver: str = "newton"
    irr_tolerance: float = 1e-10
    irr_max_iterations: int = 1000

    # App
    log_level: str = "INFO"


settings = Settings()
