"""
Configuration management for Matrix protocol components.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class OracleConfig(BaseSettings):
    """Price oracle configuration."""
    min_sources: int = 1


class MarketConfig(BaseSettings):
    """Marketplace configuration."""
    asset_name: str = "Matrix Collectible"
    asset_symbol: str = "DVNFT"


class LendingConfig(BaseSettings):
    """Lending pool configuration."""
    collateral_factor: int = 2
    price_scale: int = 10**18


class ReserveConfig(BaseSettings):
    """Liquidity reserve configuration."""
    fee_numerator: int = 997
    fee_denominator: int = 1000


class MonitoringConfig(BaseSettings):
    """Monitoring configuration."""
    log_level: str = "INFO"
    json_logs: bool = False


class MatrixConfig(BaseSettings):
    """Main Matrix configuration."""

    model_config = {"env_prefix": "MATRIX_", "env_nested_delimiter": "__"}

    # Environment
    environment: str = Field(default="development")

    # Components
    oracle: OracleConfig = Field(default_factory=OracleConfig)
    market: MarketConfig = Field(default_factory=MarketConfig)
    lending: LendingConfig = Field(default_factory=LendingConfig)
    reserve: ReserveConfig = Field(default_factory=ReserveConfig)

    # Monitoring
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "development"


@lru_cache
def get_config() -> MatrixConfig:
    """Get cached configuration instance."""
    # Load .env file if present
    from dotenv import load_dotenv
    load_dotenv()

    return MatrixConfig()
