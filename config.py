"""
Configuration Management for the Sui Attestation Service
Loads environment variables and provides application settings
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Settings loaded from environment variables
    """

    # Sui Blockchain Configuration
    SUI_NETWORK: Literal["mainnet", "testnet", "devnet", "localnet"] = "testnet"
    SUI_RPC_URL: str = "https://fullnode.testnet.sui.io:443"
    # Keystring of the service signer (suiprivkey1... or base64)
    SUI_PRIVATE_KEY: Optional[str] = None
    RPC_TIMEOUT_SECONDS: float = 10.0

    # Attestation Contract Configuration
    MOVE_PACKAGE_ID: str = ""
    APP_MODULE_NAME: str = "attestation_service_module"
    SCHEMA_GAS_BUDGET: int = 10_000_000
    ATTESTATION_GAS_BUDGET: int = 15_000_000

    # History scanning
    SCAN_MAX_PAGES: int = 5
    RETRY_MAX_ATTEMPTS: int = 3
    RETRY_DELAY_SECONDS: float = 2.0

    # Application Configuration
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 8000
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True
    )

    @property
    def is_testnet(self) -> bool:
        return self.SUI_NETWORK == "testnet" or "testnet" in self.SUI_RPC_URL

    @property
    def explorer_base_url(self) -> str:
        network = "testnet" if self.is_testnet else "mainnet"
        return f"https://suiscan.xyz/{network}"


@lru_cache
def get_settings() -> Settings:
    """Settings instance shared by the process entry points"""
    return Settings()
