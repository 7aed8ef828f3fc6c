import copy

import httpx
import pytest

from judge0_py import Client

BASE_URL = "http://judge0.test"
TOKEN = "d85cd024-1548-4165-96c7-7bc88673f194"

LANGUAGES = [
    {"id": 45, "name": "Assembly (NASM 2.14.02)"},
    {"id": 71, "name": "Python (3.8.1)"},
]

STATUSES = [
    {"id": 1, "description": "In Queue"},
    {"id": 2, "description": "Processing"},
    {"id": 3, "description": "Accepted"},
    {"id": 5, "description": "Time Limit Exceeded"},
]

FINISHED_SUBMISSION = {
    "source_code": 'print("hello")',
    "language_id": 71,
    "stdin": None,
    "stdout": "hello\n",
    "stderr": None,
    "compile_output": None,
    "message": None,
    "exit_code": 0,
    "exit_signal": None,
    "status": {"id": 3, "description": "Accepted"},
    "created_at": "2024-03-01T10:15:30.123Z",
    "finished_at": "2024-03-01T10:15:31.456Z",
    "token": TOKEN,
    "time": "0.012",
    "wall_time": "0.034",
    "memory": 3280,
    "cpu_time_limit": "5.0",
    "redirect_stderr_to_stdout": False,
    "language": {"id": 71, "name": "Python (3.8.1)"},
}


def default_routes():
    return {
        ("POST", "/authenticate"): (200, None),
        ("POST", "/authorize"): (200, None),
        ("GET", "/languages"): (200, LANGUAGES),
        ("GET", "/languages/all"): (
            200,
            LANGUAGES + [{"id": 1, "name": "Bash (4.4)", "is_archived": True}],
        ),
        ("GET", "/languages/45"): (
            200,
            {
                "id": 45,
                "name": "Assembly (NASM 2.14.02)",
                "is_archived": False,
                "source_file": "main.asm",
                "compile_cmd": "/usr/local/nasm-2.14.02/bin/nasmld -f elf64 %s main.asm",
                "run_cmd": "./a.out",
            },
        ),
        ("GET", "/statuses"): (200, STATUSES),
        ("GET", "/about"): (
            200,
            {
                "version": "1.13.1",
                "homepage": "https://judge0.com",
                "source_code": "https://github.com/judge0/judge0",
                "maintainer": "Herman Zvonimir Došilović <hermanz.dosilovic@gmail.com>",
            },
        ),
        ("GET", "/workers"): (
            200,
            [
                {
                    "queue": "1.13.1",
                    "size": 0,
                    "available": 1,
                    "idle": 1,
                    "working": 0,
                    "paused": 0,
                    "failed": 0,
                }
            ],
        ),
        ("GET", "/config_info"): (200, {"enable_wait_result": True, "cpu_time_limit": 5}),
        ("GET", "/statistics"): (200, {"languages": [], "statuses": []}),
        ("GET", "/system_info"): (200, {"Architecture": "x86_64", "CPU(s)": "4"}),
        ("POST", "/submissions"): (201, {"token": TOKEN}),
        ("GET", "/submissions"): (
            200,
            {"submissions": [FINISHED_SUBMISSION], "meta": {"current_page": 1}},
        ),
        ("GET", f"/submissions/{TOKEN}"): (200, FINISHED_SUBMISSION),
        ("DELETE", f"/submissions/{TOKEN}"): (200, FINISHED_SUBMISSION),
        ("POST", "/submissions/batch"): (201, [{"token": TOKEN}]),
        ("GET", "/submissions/batch"): (200, {"submissions": [FINISHED_SUBMISSION]}),
    }


class MockService:
    """Fake Judge0 instance recording every request it receives."""

    def __init__(self):
        self.requests = []
        self.routes = copy.deepcopy(default_routes())

    def add(self, method, path, status_code=200, body=None, content=None):
        self.routes[(method, path)] = (status_code, content if content is not None else body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.routes.get(
            (request.method, request.url.path), (404, {"error": "Not Found"})
        )
        if isinstance(body, bytes):
            return httpx.Response(status_code, content=body)
        if body is None:
            return httpx.Response(status_code)
        return httpx.Response(status_code, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def service():
    return MockService()


@pytest.fixture
def make_client(service):
    def factory(config=None):
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(service.handler))
        return Client(BASE_URL, config, http_client=http_client)

    return factory


@pytest.fixture
def client(make_client):
    return make_client()
