"""
Writing Submissions Backend — Writing API Tests
================================================

What:  End-to-end tests for /api/writing against a throw-away SQLite database.
How:   api_client overrides the session dependency; submissions are seeded
       directly through the ORM; requests authenticate with real tokens.

What we test:
    ✅ Only the caller's submissions, newest first, exactly eight fields
    ✅ Empty history → 200 {"submissions": []}
    ✅ Persistence failure → exactly 500 {"error": "Failed to fetch submissions"}
    ✅ Identity comes from the token, never from query parameters
    ✅ Concurrent requests for different users stay isolated
    ✅ Detail endpoint: owner-only, 404 otherwise
    ✅ The real session dependency closes without committing
"""

import asyncio
from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.models.writing_submission import WritingSubmission

SUBMISSIONS_URL = "/api/writing/submissions"

PROJECTED_FIELDS = {
    "id",
    "createdAt",
    "difficulty",
    "topic",
    "promptText",
    "userText",
    "wordCount",
    "evaluation",
}

T0 = datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)


async def _seed(session_factory, *submissions: WritingSubmission) -> None:
    async with session_factory() as session:
        session.add_all(submissions)
        await session.commit()


def _submission(sub_id: str, user_id: str, created_at: datetime, **overrides) -> WritingSubmission:
    fields = {
        "id": sub_id,
        "user_id": user_id,
        "created_at": created_at,
        "difficulty": "A2_INTERMEDIATE",
        "topic": "Meine Familie",
        "prompt_text": "Schreiben Sie über Ihre Familie.",
        "user_text": "Ich habe einen Bruder und zwei Schwestern.",
        "word_count": 7,
        "evaluation": {"overallScore": 80},
    }
    fields.update(overrides)
    return WritingSubmission(**fields)


def _auth(token: str) -> dict:
    return {"Cookie": f"auth-token={token}"}


class TestListSubmissions:
    """GET /api/writing/submissions"""

    @pytest.mark.asyncio
    async def test_newest_first(self, api_client, sqlite_session_factory, make_token):
        await _seed(
            sqlite_session_factory,
            _submission("t2", "alice", T0 + timedelta(hours=1)),
            _submission("t1", "alice", T0),
            _submission("t3", "alice", T0 + timedelta(hours=2)),
        )

        response = await api_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        assert response.status_code == 200
        ids = [s["id"] for s in response.json()["submissions"]]
        assert ids == ["t3", "t2", "t1"]

    @pytest.mark.asyncio
    async def test_only_callers_submissions(self, api_client, sqlite_session_factory, make_token):
        await _seed(
            sqlite_session_factory,
            _submission("a1", "alice", T0),
            _submission("b1", "bob", T0 + timedelta(minutes=5)),
            _submission("a2", "alice", T0 + timedelta(minutes=10)),
        )

        response = await api_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        assert response.status_code == 200
        assert [s["id"] for s in response.json()["submissions"]] == ["a2", "a1"]

    @pytest.mark.asyncio
    async def test_exact_projection(self, api_client, sqlite_session_factory, make_token):
        await _seed(
            sqlite_session_factory,
            _submission("a1", "alice", T0, topic=None, evaluation=None),
        )

        response = await api_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        body = response.json()
        assert list(body) == ["submissions"]
        item = body["submissions"][0]
        assert set(item) == PROJECTED_FIELDS
        assert "userId" not in item
        assert "user_id" not in item
        assert item["topic"] is None
        assert item["evaluation"] is None
        assert item["wordCount"] == 7
        assert item["difficulty"] == "A2_INTERMEDIATE"
        assert item["createdAt"].startswith("2024-05-01T08:00:00")

    @pytest.mark.asyncio
    async def test_evaluation_is_passed_through(self, api_client, sqlite_session_factory, make_token):
        evaluation = {
            "overallScore": 72,
            "errors": [{"start": 0, "end": 3, "errorType": "article-usage"}],
            "positiveAspects": ["Gute Wortwahl"],
        }
        await _seed(sqlite_session_factory, _submission("a1", "alice", T0, evaluation=evaluation))

        response = await api_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        assert response.json()["submissions"][0]["evaluation"] == evaluation

    @pytest.mark.asyncio
    async def test_empty_history(self, api_client, sqlite_session_factory, make_token):
        await _seed(sqlite_session_factory, _submission("b1", "bob", T0))

        response = await api_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        assert response.status_code == 200
        assert response.json() == {"submissions": []}

    @pytest.mark.asyncio
    async def test_query_parameter_cannot_change_identity(
        self, api_client, sqlite_session_factory, make_token
    ):
        await _seed(
            sqlite_session_factory,
            _submission("a1", "alice", T0),
            _submission("b1", "bob", T0),
        )

        response = await api_client.get(
            SUBMISSIONS_URL,
            params={"userId": "bob", "user_id": "bob"},
            headers=_auth(make_token("alice")),
        )

        assert [s["id"] for s in response.json()["submissions"]] == ["a1"]

    @pytest.mark.asyncio
    async def test_bearer_header_is_accepted(self, api_client, sqlite_session_factory, make_token):
        await _seed(sqlite_session_factory, _submission("a1", "alice", T0))

        response = await api_client.get(
            SUBMISSIONS_URL,
            headers={"Authorization": f"Bearer {make_token('alice')}"},
        )

        assert response.status_code == 200
        assert len(response.json()["submissions"]) == 1

    @pytest.mark.asyncio
    async def test_stale_cookie_falls_back_to_bearer(
        self, api_client, sqlite_session_factory, make_token
    ):
        await _seed(sqlite_session_factory, _submission("a1", "alice", T0))
        stale = make_token("alice", expires_in=timedelta(minutes=-5))

        response = await api_client.get(
            SUBMISSIONS_URL,
            headers={
                "Cookie": f"auth-token={stale}",
                "Authorization": f"Bearer {make_token('alice')}",
            },
        )

        assert response.status_code == 200
        assert [s["id"] for s in response.json()["submissions"]] == ["a1"]

    @pytest.mark.asyncio
    async def test_response_is_not_cacheable(self, api_client, make_token):
        response = await api_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        assert response.headers["Cache-Control"] == "private, no-store"
        assert response.headers["X-Request-ID"]

    @pytest.mark.asyncio
    async def test_concurrent_users_are_isolated(
        self, api_client, sqlite_session_factory, make_token
    ):
        users = ["alice", "bob", "carol", "dave"]
        await _seed(
            sqlite_session_factory,
            *[
                _submission(f"{user}-{i}", user, T0 + timedelta(minutes=i))
                for user in users
                for i in range(3)
            ],
        )

        responses = await asyncio.gather(
            *[
                api_client.get(SUBMISSIONS_URL, headers=_auth(make_token(user)))
                for user in users * 3
            ]
        )

        for user, response in zip(users * 3, responses):
            assert response.status_code == 200
            ids = [s["id"] for s in response.json()["submissions"]]
            assert ids == [f"{user}-2", f"{user}-1", f"{user}-0"]


class TestListSubmissionsFailure:
    """Persistence faults surface as a fixed 500 body."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "fault",
        [
            OperationalError("SELECT ...", {}, Exception("could not connect to server")),
            TimeoutError("statement timeout"),
            RuntimeError("unexpected driver state"),
        ],
    )
    async def test_fault_returns_generic_500(self, test_client, make_token, fault):
        from app.main import app

        broken_session = AsyncMock()
        broken_session.execute = AsyncMock(side_effect=fault)

        async def _broken_db_session() -> AsyncGenerator[AsyncSession, None]:
            yield broken_session

        app.dependency_overrides[get_db_session] = _broken_db_session
        try:
            response = await test_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))
        finally:
            app.dependency_overrides.pop(get_db_session, None)

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch submissions"}


class TestGetSubmission:
    """GET /api/writing/{id}"""

    @pytest.mark.asyncio
    async def test_owner_gets_submission(self, api_client, sqlite_session_factory, make_token):
        await _seed(sqlite_session_factory, _submission("a1", "alice", T0))

        response = await api_client.get("/api/writing/a1", headers=_auth(make_token("alice")))

        assert response.status_code == 200
        submission = response.json()["submission"]
        assert submission["id"] == "a1"
        assert set(submission) == PROJECTED_FIELDS

    @pytest.mark.asyncio
    async def test_other_users_submission_is_not_found(
        self, api_client, sqlite_session_factory, make_token
    ):
        await _seed(sqlite_session_factory, _submission("b1", "bob", T0))

        response = await api_client.get("/api/writing/b1", headers=_auth(make_token("alice")))

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}

    @pytest.mark.asyncio
    async def test_unknown_id_is_not_found(self, api_client, make_token):
        response = await api_client.get("/api/writing/missing", headers=_auth(make_token("alice")))

        assert response.status_code == 404
        assert response.json() == {"error": "Not found"}


def _patched_session_factory(session: AsyncMock) -> MagicMock:
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = session
    factory.return_value.__aexit__.return_value = False
    return factory


class TestSessionDependency:
    """get_db_session as the app uses it, with the session factory mocked."""

    @pytest.mark.asyncio
    async def test_success_closes_without_commit(self, test_client, make_token):
        session = AsyncMock()
        session.execute.return_value = MagicMock(all=MagicMock(return_value=[]))
        session.commit.side_effect = OperationalError(
            "COMMIT", {}, Exception("server closed the connection")
        )
        factory = _patched_session_factory(session)

        with patch("app.database.async_session_factory", factory):
            response = await test_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        assert response.status_code == 200
        assert response.json() == {"submissions": []}
        session.commit.assert_not_awaited()
        factory.return_value.__aexit__.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failure_closes_and_returns_generic_500(self, test_client, make_token):
        session = AsyncMock()
        session.execute.side_effect = OperationalError(
            "SELECT ...", {}, Exception("server closed the connection")
        )
        factory = _patched_session_factory(session)

        with patch("app.database.async_session_factory", factory):
            response = await test_client.get(SUBMISSIONS_URL, headers=_auth(make_token("alice")))

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to fetch submissions"}
        factory.return_value.__aexit__.assert_awaited_once()
