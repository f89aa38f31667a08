"""
Configuration settings for the quoter

Loads environment variables (and a local .env file) once on import.
"""
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings:
    """Application settings"""

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING").upper()

    # Chain used when a request does not name one (Sepolia)
    DEFAULT_CHAIN_ID: int = int(os.getenv("DEFAULT_CHAIN_ID", 11155111))

    # API Configuration
    API_VERSION: str = "0.1.0"
    API_TITLE: str = "Concentrated Liquidity Swap Quoter"
    API_DESCRIPTION: str = "Exact-input and exact-output quotes against a single pool snapshot"

    # Server Configuration
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", 8000))
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    @property
    def log_level(self) -> str:
        """Effective log level, DEBUG when debug mode is on"""
        return "DEBUG" if self.DEBUG else self.LOG_LEVEL


# Create global settings instance
settings = Settings()
