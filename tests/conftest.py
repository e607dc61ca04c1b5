import json
from typing import List, Mapping, Optional

import pytest

from webapi_client import Environment, TransportError, TransportResponse, WebAPIClient


class FakeTransport:
    """Transport that replays queued outcomes and records every call."""

    def __init__(self, outcomes=None):
        self.outcomes = list(outcomes or [])
        self.calls: List[dict] = []

    def queue_json(self, payload, status: int = 200) -> None:
        self.outcomes.append(TransportResponse(status=status, content=json.dumps(payload).encode("utf-8")))

    def send(self, method: str, url: str, headers: Mapping[str, str], body: Optional[bytes]) -> TransportResponse:
        self.calls.append({"method": method, "url": url, "headers": dict(headers), "body": body})
        outcome = self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def failing_then(response: TransportResponse, failures: int) -> FakeTransport:
    outcomes = [TransportError(f"connection refused ({i})") for i in range(failures)]
    return FakeTransport(outcomes + [response])


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def client(transport, sleep):
    env = Environment(name="test", base_url="https://api.example.com/v1/", transport=transport)
    return WebAPIClient(env, sleep=sleep)
