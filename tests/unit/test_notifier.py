"""Unit tests for the results webhook client"""

import asyncio
import httpx
import pytest
from score_projector.domain.exceptions import NotificationError
from score_projector.infrastructure.clients.notifier import ResultsNotifier

PAYLOAD = {"event": "SIMULATION_SAVED", "simulation_id": "abc", "email": "sam@example.com"}


def make_notifier(handler) -> ResultsNotifier:
    notifier = ResultsNotifier(webhook_url="http://hooks.test/results", transport=httpx.MockTransport(handler))
    notifier.backoff_base = 0
    notifier.max_retries = 3
    return notifier


def test_send_results_event_success():
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(202)

    asyncio.run(make_notifier(handler).send_results_event(PAYLOAD))

    assert len(received) == 1
    assert received[0].url == "http://hooks.test/results"
    assert b"SIMULATION_SAVED" in received[0].content


def test_send_results_event_retries_server_errors():
    """Test 5xx responses are retried until one succeeds"""
    statuses = iter([503, 500, 200])
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(next(statuses))

    asyncio.run(make_notifier(handler).send_results_event(PAYLOAD))

    assert len(calls) == 3


def test_send_results_event_gives_up_after_max_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(NotificationError):
        asyncio.run(make_notifier(handler).send_results_event(PAYLOAD))

    assert len(calls) == 3


def test_send_results_event_does_not_retry_client_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400)

    with pytest.raises(NotificationError):
        asyncio.run(make_notifier(handler).send_results_event(PAYLOAD))

    assert len(calls) == 1
