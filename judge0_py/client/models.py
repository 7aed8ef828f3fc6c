"""Data models for Judge0 entities."""

from dataclasses import MISSING, dataclass, fields
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union, get_args, get_origin


def _unwrap_optional(tp):
    """Return (inner type, optional flag) for Optional[X] annotations."""
    if get_origin(tp) is Union:
        args = [arg for arg in get_args(tp) if arg is not type(None)]
        return args[0], True
    return tp, False


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as sent by Judge0 (UTC, "Z" suffix)."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    """Format a timestamp the way Judge0 does."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    formatted = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return formatted.replace("+00:00", "Z")


def _decode_value(owner: str, name: str, value: Any, tp, nullable: bool) -> Any:
    inner, optional = _unwrap_optional(tp)
    where = f"{owner}.{name}"

    if value is None:
        if optional or nullable:
            return None
        raise TypeError(f"{where} must not be null")

    if inner is bool:
        if not isinstance(value, bool):
            raise TypeError(f"{where} must be a boolean, got {value!r}")
        return value
    if inner is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{where} must be an integer, got {value!r}")
        return value
    if inner is float:
        # Judge0 reports time and limits as decimal strings ("0.002")
        if isinstance(value, str):
            return float(value)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"{where} must be a number, got {value!r}")
        return float(value)
    if inner is str:
        if not isinstance(value, str):
            raise TypeError(f"{where} must be a string, got {value!r}")
        return value
    if inner is datetime:
        if not isinstance(value, str):
            raise TypeError(f"{where} must be a timestamp string, got {value!r}")
        return parse_timestamp(value)
    return inner.from_dict(value)


def _decode_fields(cls, data: Any, strict: bool = True) -> Dict[str, Any]:
    """
    Map a JSON object onto the dataclass fields of cls.
    Unknown keys are ignored. With strict=False, fields without a default
    may be absent or null, which is how projected reads come back.
    """
    if not isinstance(data, dict):
        raise TypeError(
            f"expected a JSON object for {cls.__name__}, got {type(data).__name__}"
        )

    kwargs = {}
    for field in fields(cls):
        required = field.default is MISSING
        if field.name not in data:
            if required and strict:
                raise KeyError(f"{cls.__name__}.{field.name} is missing")
            if required:
                kwargs[field.name] = None
            continue
        kwargs[field.name] = _decode_value(
            cls.__name__, field.name, data[field.name], field.type, not strict
        )
    return kwargs


@dataclass
class Language:
    """Represents a compiler/interpreter supported by the service."""

    id: int
    name: str
    is_archived: Optional[bool] = None
    source_file: Optional[str] = None
    compile_cmd: Optional[str] = None
    run_cmd: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Language":
        return cls(**_decode_fields(cls, data))


@dataclass
class Status:
    """Represents an execution status such as "Accepted"."""

    id: int
    description: str

    @classmethod
    def from_dict(cls, data: Any) -> "Status":
        return cls(**_decode_fields(cls, data))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "description": self.description}


@dataclass
class About:
    """Static service metadata."""

    version: str
    homepage: str
    source_code: str
    maintainer: str

    @classmethod
    def from_dict(cls, data: Any) -> "About":
        return cls(**_decode_fields(cls, data))


@dataclass
class Worker:
    """Snapshot of one execution queue's load."""

    queue: str
    size: int
    available: int
    idle: int
    working: int
    paused: int
    failed: int

    @classmethod
    def from_dict(cls, data: Any) -> "Worker":
        return cls(**_decode_fields(cls, data))


# Fields only the service fills in.
RESULT_FIELDS = frozenset(
    {
        "stdout",
        "stderr",
        "compile_output",
        "message",
        "exit_code",
        "exit_signal",
        "status",
        "created_at",
        "finished_at",
        "token",
        "time",
        "wall_time",
        "memory",
    }
)

# Status ids 1 and 2 are "In Queue" and "Processing".
_PENDING_STATUS_IDS = (1, 2)


@dataclass
class Submission:
    """
    A program to run and, once read back from the service, its outcome.

    Build one with source_code and language_id plus any limits, then
    pass it to Client.create_submission. Values read back from the
    service carry the result fields; fields excluded by a projection
    (including source_code and language_id) are None.
    """

    source_code: str
    language_id: int
    compiler_options: Optional[str] = None
    command_line_arguments: Optional[str] = None
    stdin: Optional[str] = None
    expected_output: Optional[str] = None
    cpu_time_limit: Optional[float] = None
    cpu_extra_time: Optional[float] = None
    wall_time_limit: Optional[float] = None
    memory_limit: Optional[int] = None
    stack_limit: Optional[int] = None
    max_processes_and_or_threads: Optional[int] = None
    enable_per_process_and_thread_time_limit: Optional[bool] = None
    enable_per_process_and_thread_memory_limit: Optional[bool] = None
    max_file_size: Optional[int] = None
    redirect_stderr_to_stdout: Optional[bool] = None
    enable_network: Optional[bool] = None
    number_of_runs: Optional[int] = None
    additional_files: Optional[str] = None
    callback_url: Optional[str] = None

    stdout: Optional[str] = None
    stderr: Optional[str] = None
    compile_output: Optional[str] = None
    message: Optional[str] = None
    exit_code: Optional[int] = None
    exit_signal: Optional[int] = None
    status: Optional[Status] = None
    created_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    token: Optional[str] = None
    time: Optional[float] = None
    wall_time: Optional[float] = None
    memory: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> "Submission":
        # An object without a single submission key is an error body
        if isinstance(data, dict) and not any(f.name in data for f in fields(cls)):
            raise KeyError(f"no submission fields in {sorted(data)}")
        return cls(**_decode_fields(cls, data, strict=False))

    def to_dict(self, results: bool = False) -> Dict[str, Any]:
        """
        Encode as a Judge0 JSON object. Unset fields are left out.
        Result fields are only included when results is true.
        """
        data = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            if field.name in RESULT_FIELDS and not results:
                continue
            if isinstance(value, Status):
                value = value.to_dict()
            elif isinstance(value, datetime):
                value = format_timestamp(value)
            data[field.name] = value
        return data

    @property
    def is_finished(self) -> bool:
        """True once the service reports a terminal status."""
        return self.status is not None and self.status.id not in _PENDING_STATUS_IDS
