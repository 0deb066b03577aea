"""
Pytest fixtures for the Shyft SDK tests.
"""
import copy
import json
from typing import Callable, List

import httpx
import pytest

from shyft_sdk import ShyftClient
from shyft_sdk._rate_limited_log import reset_rate_limited_log
from shyft_sdk.retry import RetryPolicy

# Constants for testing
TEST_API_KEY = "k"
TEST_BASE_URL = "https://api.shyft.to/sol/v1/"
TEST_SIGNATURE = "sigABC"
TEST_ACCOUNT = "8R5brRqNa1CDMtcQRaLPQfJeLBrtyqpjDPTSKbBvmsna"
SYSTEM_PROGRAM = {"address": "11111111111111111111111111111111", "name": "SYSTEM_PROGRAM"}

MINIMAL_RECORD = {
    "timestamp": "2024-05-01T12:00:00.000Z",
    "fee": 0.000005,
    "fee_payer": "Payer1111111111111111111111111111111111111",
    "signers": ["Payer1111111111111111111111111111111111111"],
    "signatures": [TEST_SIGNATURE],
    "protocol": SYSTEM_PROGRAM,
    "type": "SOL_TRANSFER",
    "status": "Success",
    "actions": [
        {
            "info": {
                "sender": "Payer1111111111111111111111111111111111111",
                "receiver": "Recv22222222222222222222222222222222222222",
                "amount": 0.5,
                "amount_raw": 500000000,
            },
            "source_protocol": SYSTEM_PROGRAM,
            "type": "SOL_TRANSFER",
        }
    ],
}


def make_record(signature: str = TEST_SIGNATURE, **overrides) -> dict:
    """Return a fresh copy of the minimal record with a given signature."""
    record = copy.deepcopy(MINIMAL_RECORD)
    record["signatures"] = [signature]
    record.update(overrides)
    return record


def envelope(result, success: bool = True, message: str = "ok") -> dict:
    return {"success": success, "message": message, "result": result}


class RecordingSleep:
    """Async stand-in for asyncio.sleep that remembers requested delays"""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture(autouse=True)
def _reset_log_suppression():
    reset_rate_limited_log()
    yield
    reset_rate_limited_log()


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def requests_seen():
    """List collecting every httpx.Request that reached the mock transport."""
    return []


@pytest.fixture
def make_client(recording_sleep, requests_seen) -> Callable[..., ShyftClient]:
    """
    Factory building a ShyftClient backed by httpx.MockTransport.

    ``handler`` receives the httpx.Request and returns an httpx.Response (or
    raises an httpx exception). Sleeping between retries is recorded, not
    performed.
    """
    def _factory(handler, **kwargs) -> ShyftClient:
        def _recording_handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return handler(request)

        max_retries = kwargs.pop("max_retries", 3)
        policy = RetryPolicy(
            min_interval=kwargs.pop("min_retry_interval", 0.5),
            max_interval=kwargs.pop("max_retry_interval", 1.0),
            max_retries=max_retries,
            sleep=recording_sleep,
        )
        client = ShyftClient(
            kwargs.pop("api_key", TEST_API_KEY),
            max_retries=max_retries,
            transport=httpx.MockTransport(_recording_handler),
            retry_policy=policy,
            **kwargs,
        )
        return client

    return _factory


def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode(), headers={"Content-Type": "application/json"})
