"""Client configuration shared by every request."""

import dataclasses
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Config:
    """
    Immutable request configuration.
    Build a new instance with replace() instead of mutating fields.
    """

    # X-Auth-Token is the default header name, but administrators of a
    # Judge0 instance can change it.
    authentication_header_name: str = "X-Auth-Token"

    # API key, sent on every request when the instance requires one.
    authentication_token: Optional[str] = None

    # X-Auth-User is the default header name, but administrators of a
    # Judge0 instance can change it.
    authorization_header_name: str = "X-Auth-User"

    # Needed for privileged calls such as listing all submissions.
    authorization_token: Optional[str] = None

    # Text fields of submissions are sent and received as base64.
    base64_encoded: bool = False

    # Ask the service to respond only after the submission has finished.
    # This does not scale well on the service side.
    wait: bool = False

    def replace(self, **overrides) -> "Config":
        """Return a copy with the given fields overridden."""
        return dataclasses.replace(self, **overrides)
