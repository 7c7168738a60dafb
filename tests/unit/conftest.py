"""Shared fixtures for unit tests."""

from typing import TYPE_CHECKING

import pytest

from tixte import TixteClient

from tests.fakes.fake_api import API_KEY, SESSION_TOKEN, FakeTixteApi

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def fake_api() -> FakeTixteApi:
    """Provide a fresh FakeTixteApi instance for each test.

    The FakeTixteApi serves an in-memory account through httpx.MockTransport,
    so a TixteClient can be exercised without network access.

    Returns:
        A new FakeTixteApi with one registered domain and no uploads.

    Example:
        def test_uploads(fake_api: FakeTixteApi) -> None:
            with TixteClient("test-api-key", http_client=fake_api.client()) as c:
                assert c.get_uploads().total == 0
    """
    return FakeTixteApi()


@pytest.fixture
def make_client(
    fake_api: FakeTixteApi,
) -> "Iterator[Callable[..., TixteClient]]":
    """Factory fixture for creating TixteClient instances bound to fake_api.

    Provides credentials the fake accepts and disables the rate-limit delay.
    Every created client is closed at teardown.

    Returns:
        A callable that creates TixteClient instances.

    Example:
        def test_without_session(make_client) -> None:
            client = make_client(session_token=None)
            assert client.session_token is None
    """
    created: list[TixteClient] = []

    def create_client(
        *,
        api_key: str = API_KEY,
        session_token: str | None = SESSION_TOKEN,
        default_domain: str | None = "alice.tixte.co",
    ) -> TixteClient:
        client = TixteClient(
            api_key,
            session_token=session_token,
            default_domain=default_domain,
            http_client=fake_api.client(),
            rate_limit_retry_delay=0,
        )
        created.append(client)
        return client

    yield create_client

    for client in created:
        client.close()


@pytest.fixture
def client(make_client: "Callable[..., TixteClient]") -> TixteClient:
    """A client with an API key, session token and default domain."""
    return make_client()


@pytest.fixture
def make_file(tmp_path: "Path") -> "Callable[..., Path]":
    """Factory fixture to create a file on disk for uploading.

    Returns:
        A callable that takes a file name and content and returns the path.
    """

    def create_file(name: str = "photo.png", content: bytes = b"\x89PNG") -> "Path":
        path = tmp_path / name
        _ = path.write_bytes(content)
        return path

    return create_file
