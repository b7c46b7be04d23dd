"""
Configuration management for the workshop trend calculator.

Loads environment variables (optionally from a .env file) and validates them.
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Configuration class for the workshop trend calculator."""

    # Persistence
    STORE_PATH: str = os.getenv("WORKSHOP_STORE_PATH", "workshop_data.json")

    # Target given to a newly imported advisor's forecast inputs
    DEFAULT_TARGET_RAW: str = os.getenv("WORKSHOP_DEFAULT_TARGET", "35")

    # API server
    API_HOST: str = os.getenv("WORKSHOP_API_HOST", "0.0.0.0")
    API_PORT_RAW: str = os.getenv("WORKSHOP_API_PORT", "8000")

    LOG_LEVEL: str = os.getenv("WORKSHOP_LOG_LEVEL", "INFO").upper()

    @classmethod
    def default_target(cls) -> float:
        return float(cls.DEFAULT_TARGET_RAW)

    @classmethod
    def api_port(cls) -> int:
        return int(cls.API_PORT_RAW)

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all configuration values are usable.

        Raises:
            ValueError: If any setting is invalid.
        """
        invalid = []

        if not cls.STORE_PATH:
            invalid.append("WORKSHOP_STORE_PATH")
        try:
            if cls.default_target() < 0:
                invalid.append("WORKSHOP_DEFAULT_TARGET")
        except ValueError:
            invalid.append("WORKSHOP_DEFAULT_TARGET")
        try:
            cls.api_port()
        except ValueError:
            invalid.append("WORKSHOP_API_PORT")
        if cls.LOG_LEVEL not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            invalid.append("WORKSHOP_LOG_LEVEL")

        if invalid:
            raise ValueError(
                f"Invalid environment variables: {', '.join(invalid)}. "
                f"Check your .env file (see .env.example)."
            )


# Validate configuration on import
Config.validate()
