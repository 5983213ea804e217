import json
import sys
from pathlib import Path
from typing import Dict, List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator, model_validator

class Settings(BaseSettings):
    """
    Application Settings using Pydantic for validation.
    """
    # Redirect Resolution
    MAX_REDIRECTS: int = Field(default=10, ge=0, le=100)
    REQUEST_TIMEOUT_MS: int = Field(default=10000, ge=1)
    USER_AGENT: str = "SafeUrl/1.0 (URL Safety Checker)"

    # Rule Thresholds
    URL_MAX_LENGTH: int = Field(default=100, ge=1)
    URL_CRITICAL_LENGTH: int = Field(default=200, ge=1)

    # Optional local threat list (JSON: {"domains": [...], "urls": [...]})
    THREAT_LIST_FILE: Optional[Path] = Field(default=None, description="Path to a local threat list")

    LOG_LEVEL: str = "INFO"

    # Configuration for Pydantic Settings
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return v

    @model_validator(mode="after")
    def validate_length_thresholds(self) -> "Settings":
        if self.URL_CRITICAL_LENGTH < self.URL_MAX_LENGTH:
            raise ValueError("URL_CRITICAL_LENGTH must not be lower than URL_MAX_LENGTH")
        return self

    def load_threat_list(self, path: Optional[Path] = None) -> Dict[str, List[str]]:
        """Loads the local threat list from a JSON file."""
        empty = {"domains": [], "urls": []}
        path = Path(path) if path else self.THREAT_LIST_FILE
        if not path or not path.exists():
            return empty
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # The logger depends on settings, so report on stderr
            print(f"Error loading threat list {path}: {e}", file=sys.stderr)
            return empty

        if not isinstance(data, dict):
            print(f"Error loading threat list {path}: expected a JSON object", file=sys.stderr)
            return empty
        domains = data.get("domains") or []
        urls = data.get("urls") or []
        if not isinstance(domains, list) or not isinstance(urls, list):
            print(f"Error loading threat list {path}: 'domains' and 'urls' must be lists", file=sys.stderr)
            return empty
        return {
            "domains": [str(d) for d in domains],
            "urls": [str(u) for u in urls],
        }

# Instantiate
settings = Settings()
