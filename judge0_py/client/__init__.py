"""Client module for Judge0 interaction."""

from .client import Client, build_headers
from .models import About, Language, Status, Submission, Worker

__all__ = [
    "Client",
    "build_headers",
    "About",
    "Language",
    "Status",
    "Submission",
    "Worker",
]
