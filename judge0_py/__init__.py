"""judge0_py - asynchronous client for the Judge0 code execution service."""

from .client import About, Client, Language, Status, Submission, Worker
from .config import Config
from .errors import (
    InvalidHeaderName,
    InvalidHeaderValue,
    Judge0Error,
    RequestFailed,
    SerializationFailed,
)

__version__ = "1.0.0"

__all__ = [
    "About",
    "Client",
    "Config",
    "InvalidHeaderName",
    "InvalidHeaderValue",
    "Judge0Error",
    "Language",
    "RequestFailed",
    "SerializationFailed",
    "Status",
    "Submission",
    "Worker",
]
