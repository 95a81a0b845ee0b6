"""Application configuration with validation."""
from typing import Optional, Literal
from functools import lru_cache
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# =============================================================================
# PROTOCOL CONSTANTS
# =============================================================================
# Must match BracketPool.sol. These are not settings: changing them changes the
# economic outcome of a settlement.
# =============================================================================

BASIS_POINTS = 10_000

SEPOLIA_CHAIN_ID = 11155111
MAINNET_CHAIN_ID = 1


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Bracket Pool Scorer"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"

    # Chain access
    RPC_URL: Optional[str] = None
    CHAIN_ID: int = SEPOLIA_CHAIN_ID
    FROM_BLOCK: int = Field(default=0, ge=0)

    # Settlement
    FEE_BASIS_POINTS: int = Field(
        default=500,
        ge=0,
        le=BASIS_POINTS,
        description="Protocol fee in basis points, mirrors BracketPool.FEE_PERCENT",
    )
    OUTPUT_DIR: str = "."

    @field_validator("CHAIN_ID")
    @classmethod
    def validate_chain_id(cls, v: int) -> int:
        if v not in (MAINNET_CHAIN_ID, SEPOLIA_CHAIN_ID):
            raise ValueError(f"Unsupported CHAIN_ID {v}: expected 1 (mainnet) or 11155111 (sepolia)")
        return v

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has the settings a live settlement needs."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if not self.RPC_URL:
                raise ValueError("RPC_URL is required in production")
        return self

    @property
    def chain_name(self) -> str:
        return "mainnet" if self.CHAIN_ID == MAINNET_CHAIN_ID else "sepolia"


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
