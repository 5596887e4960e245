"""
Centralized configuration management for OntoAbstract.

All environment variables and settings are managed here so the CLI, the
abstraction service and the tests read the same values.
"""

from functools import lru_cache
from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Centralized settings for OntoAbstract.

    All configuration is loaded from environment variables with sensible defaults.
    Uses Pydantic for validation and type safety.
    """

    # === Application Settings ===
    app_name: str = Field(default="OntoAbstract", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    # === Abstraction Settings ===
    attribute_height_increment: int = Field(
        default=20, ge=0, description="Height added to a class shape per folded component attribute"
    )
    max_fold_depth: int = Field(
        default=256, ge=1, description="Maximum nesting of recursive folds before giving up on a branch"
    )
    default_abstraction_rule: str = Field(
        default="parthood", description="Bulk rule used when a request names neither rule nor element"
    )

    # === Logging Configuration ===
    @property
    def logging_config(self) -> Dict[str, Any]:
        """Get logging configuration."""
        return {
            'level': self.log_level,
            'file': self.log_file,
            'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        }

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = {'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'}
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator('default_abstraction_rule')
    @classmethod
    def validate_default_rule(cls, v):
        valid_rules = {'parthood', 'hierarchy', 'aspects'}
        if v.lower() not in valid_rules:
            raise ValueError(f"Default abstraction rule must be one of {valid_rules}")
        return v.lower()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "ONTOABSTRACT_",
        "case_sensitive": False,
    }


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are only loaded once per application lifecycle.
    """
    return Settings()
