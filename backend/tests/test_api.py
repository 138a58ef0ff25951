"""Tests for the exercise lookup and session listing endpoints."""

import pytest
from httpx import AsyncClient

from lift_logger.sessions.store import SessionStore


@pytest.mark.asyncio
async def test_exercises_ranks_prefix_before_substring(client: AsyncClient) -> None:
    response = await client.get("/api/exercises", params={"q": "row"})
    assert response.status_code == 200
    assert response.json() == {"query": "row", "suggestions": ["Barbell Row"]}


@pytest.mark.asyncio
async def test_exercises_without_query_lists_catalog_order(client: AsyncClient) -> None:
    data = (await client.get("/api/exercises", params={"limit": 2})).json()
    assert data["suggestions"] == ["Bench", "Squat"]


@pytest.mark.asyncio
async def test_exercises_limit_above_platform_ceiling_rejected(client: AsyncClient) -> None:
    response = await client.get("/api/exercises", params={"limit": 26})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_sessions_lists_active_channels(
    client: AsyncClient, sessions: SessionStore
) -> None:
    sessions.start("chan-b", "sid-2")
    sessions.start("chan-a", "sid-1")

    response = await client.get("/api/sessions")

    assert response.status_code == 200
    assert response.json() == [
        {"channel_id": "chan-a", "session_id": "sid-1"},
        {"channel_id": "chan-b", "session_id": "sid-2"},
    ]
