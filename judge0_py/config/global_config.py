"""Global configuration management (~/.judge0_py.global)."""

import json
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, asdict

from .config import Config

DEFAULT_BASE_URL = "http://localhost:2358"


@dataclass
class GlobalConfig:
    """
    Command-line profile storing the service URL and credentials.
    Stored at ~/.judge0_py.global
    """

    base_url: str = DEFAULT_BASE_URL
    authentication_header_name: str = "X-Auth-Token"
    authentication_token: str = ""
    authorization_header_name: str = "X-Auth-User"
    authorization_token: str = ""

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "GlobalConfig":
        """Load global config from file."""
        if path is None:
            path = Path.home() / ".judge0_py.global"

        if not path.exists():
            return cls()

        defaults = cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
                return cls(
                    base_url=data.get("base_url", defaults.base_url),
                    authentication_header_name=data.get(
                        "authentication_header_name",
                        defaults.authentication_header_name,
                    ),
                    authentication_token=data.get("authentication_token", ""),
                    authorization_header_name=data.get(
                        "authorization_header_name",
                        defaults.authorization_header_name,
                    ),
                    authorization_token=data.get("authorization_token", ""),
                )
        except (json.JSONDecodeError, IOError, AttributeError):
            return defaults

    def save(self, path: Optional[Path] = None) -> None:
        """Save global config to file."""
        if path is None:
            path = Path.home() / ".judge0_py.global"

        with open(path, "w", encoding="utf-8") as f:
            json.dump(asdict(self), f, indent=2)

    def to_config(self, base64_encoded: bool = False, wait: bool = False) -> Config:
        """Build the client configuration for this profile."""
        return Config(
            authentication_header_name=self.authentication_header_name,
            authentication_token=self.authentication_token or None,
            authorization_header_name=self.authorization_header_name,
            authorization_token=self.authorization_token or None,
            base64_encoded=base64_encoded,
            wait=wait,
        )
