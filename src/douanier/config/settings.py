"""
Application settings with environment-based configuration.

Priority (highest to lowest):
1. Environment variables (from .env or system)
2. Environment-specific YAML config file (development.yaml, production.yaml)
3. Default YAML config file (default.yaml)
4. Pydantic defaults
"""

import os
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Secrets (database password, JWT key, RPC URLs carrying API keys)
    should come from environment variables, not from YAML files.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application
    APP_NAME: str = "Douanier"
    APP_VERSION: str = "0.1.0"
    ENV: str = Field(default="development", description="Environment name")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # API Server
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8080, ge=1024, le=65535)
    API_RELOAD: bool = Field(default=False)

    # CORS Configuration (storefront script is served from merchant domains)
    CORS_ORIGINS: List[str] = Field(
        default=["*"],
        description="Allowed CORS origins",
    )

    # Database (from environment - REQUIRED in production)
    DATABASE_URL: str = Field(..., description="Database connection URL")
    DATABASE_ECHO: bool = Field(default=False)

    # Merchant JWT Authentication (tokens issued by the onboarding flow)
    JWT_SECRET_KEY: str = Field(..., description="JWT secret key")
    JWT_ALGORITHM: str = Field(default="HS256")
    JWT_EXPIRATION_HOURS: int = Field(default=24, ge=1)

    # Chains - JSON-RPC endpoints keyed by chain id
    CHAIN_RPC_URLS: Dict[int, str] = Field(
        default_factory=dict,
        description="EVM JSON-RPC endpoint per chain id",
    )
    ETHEREUM_RPC_URL: Optional[str] = Field(default=None)
    POLYGON_RPC_URL: Optional[str] = Field(default=None)
    BSC_RPC_URL: Optional[str] = Field(default=None)

    # Chain RPC timeouts
    RPC_TOTAL_TIMEOUT: float = Field(
        default=10.0,
        gt=0,
        description="Total JSON-RPC request timeout in seconds",
    )
    RPC_CONNECT_TIMEOUT: float = Field(
        default=3.0,
        gt=0,
        description="JSON-RPC connection timeout in seconds",
    )
    ORACLE_CALL_TIMEOUT: float = Field(
        default=8.0,
        gt=0,
        description="Per-rule balance lookup timeout during eligibility",
    )

    # Verification sessions
    SESSION_TTL_MINUTES: int = Field(
        default=15,
        ge=1,
        description="Minutes a pending verification session stays valid",
    )

    # Discount codes
    DISCOUNT_CODE_PREFIX: str = Field(default="DKG", min_length=1, max_length=8)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")

    # Observability - Metrics
    METRICS_ENABLED: bool = Field(
        default=True,
        description="Expose Prometheus metrics on /metrics",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"Invalid LOG_LEVEL. Must be one of: {allowed}")
        return v_upper

    @field_validator("DISCOUNT_CODE_PREFIX")
    @classmethod
    def validate_code_prefix(cls, v: str) -> str:
        """Discount code prefix must be alphanumeric."""
        if not v.isalnum():
            raise ValueError("DISCOUNT_CODE_PREFIX must be alphanumeric")
        return v.upper()

    def chain_endpoints(self) -> Dict[int, str]:
        """
        Resolve the configured JSON-RPC endpoint for each chain.

        Named shortcuts (Ethereum 1, Polygon 137, BSC 56) are applied
        first; explicit CHAIN_RPC_URLS entries win over them.

        Returns:
            Mapping of chain id to RPC URL
        """
        endpoints: Dict[int, str] = {}
        shortcuts = {
            1: self.ETHEREUM_RPC_URL,
            137: self.POLYGON_RPC_URL,
            56: self.BSC_RPC_URL,
        }
        for chain_id, url in shortcuts.items():
            if url:
                endpoints[chain_id] = url

        for chain_id, url in self.CHAIN_RPC_URLS.items():
            if url:
                endpoints[int(chain_id)] = url

        return endpoints


def load_config(
    config_file: Optional[str] = None,
    env_file: Optional[str] = None,
    env: Optional[str] = None,
) -> Settings:
    """
    Load configuration from YAML files and environment variables.

    Priority: ENV vars > environment-specific YAML > default YAML > defaults

    Args:
        config_file: Optional YAML config filename override
        env_file: Optional .env filename (e.g., ".env.development")
        env: Optional environment name override (e.g., "development", "test")

    Returns:
        Settings instance

    Raises:
        ValidationError: If required fields are missing
    """
    current_file = Path(__file__).resolve()
    project_root = current_file.parent.parent.parent.parent
    config_dir = project_root / "config"

    environment = env or os.getenv("ENV", "production")

    env_map = {
        "production": (".env.production", "production.yaml"),
        "development": (".env.development", "development.yaml"),
        "test": (".env.test", "test.yaml"),
    }

    if env_file is None:
        default_env_file, default_config_file = env_map.get(
            environment, (".env.production", "production.yaml")
        )
        env_file = default_env_file
        if config_file is None:
            config_file = default_config_file

    env_file_path = project_root / env_file
    if env_file_path.exists():
        load_dotenv(env_file_path, override=True)

    default_config_path = config_dir / "default.yaml"
    merged_config = {}

    if default_config_path.exists():
        with open(default_config_path, "r") as f:
            loaded = yaml.safe_load(f)
            if loaded:
                merged_config = loaded

    if config_file:
        env_config_path = config_dir / config_file
        if env_config_path.exists():
            with open(env_config_path, "r") as f:
                loaded = yaml.safe_load(f)
                if loaded:
                    merged_config.update(loaded)

    # Environment variables must win over YAML values
    for key in list(merged_config):
        if key in os.environ:
            merged_config.pop(key)

    return Settings(**merged_config)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get or initialize global settings singleton."""
    global _settings
    if _settings is None:
        _settings = load_config()
    return _settings


def override_settings(new_settings: Settings) -> None:
    """Override global settings (for testing)."""
    global _settings
    _settings = new_settings


def reset_settings() -> None:
    """Reset settings to force re-initialization (for testing)."""
    global _settings
    _settings = None
