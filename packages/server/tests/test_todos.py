"""
Integration tests for Todo endpoints.

Tests cover:
- Creating todos under a project, including the cross-organisation check
- Read/update/delete by id
- Batch assignment semantics (all or nothing, strict ids, idempotent removal)
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from sqlalchemy import func
from sqlmodel import select

from app.models.assignments import Assignment
from taskhub_shared.schemas.todos import AssignmentBatch, TodoCreate


class TestTodoSchemas:
    def test_status_defaults_to_todo(self):
        assert TodoCreate(title="T", description="").status.value == "TODO"

    def test_description_required(self):
        with pytest.raises(ValidationError):
            TodoCreate(title="T")

    @pytest.mark.parametrize("bad", [["1"], [1.5], [True], [0], [-3], "1,2"])
    def test_assignment_ids_strict(self, bad):
        with pytest.raises(ValidationError):
            AssignmentBatch.model_validate({"user_ids": bad})

    def test_assignment_ids_accepts_ints(self):
        assert AssignmentBatch.model_validate({"user_ids": [1, 2]}).user_ids == [1, 2]


# ---------------------------------------------------------------------------
# Creation under a project
# ---------------------------------------------------------------------------

class TestCreateTodo:
    @pytest.mark.asyncio
    async def test_outsider_cannot_create(self, client, make_user, make_org, make_project):
        alice = await make_user("alice")
        bob = await make_user("bob")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        payload = {"title": "T", "description": "d"}

        resp = await client.post(
            f"/projects/{project['id']}/todos", json=payload, headers=bob.headers
        )
        assert resp.status_code == 403
        assert resp.json() == {"error": "User is not in the organisation of the project"}

        resp = await client.post(
            f"/projects/{project['id']}/todos", json=payload, headers=alice.headers
        )
        assert resp.status_code == 201
        created = resp.json()
        assert isinstance(created, list) and len(created) == 1
        todo = created[0]
        assert todo["created_by"] == alice.id
        assert todo["project_id"] == project["id"]
        assert todo["status"] == "TODO"

    @pytest.mark.asyncio
    async def test_missing_project_is_forbidden(self, client, make_user):
        alice = await make_user("alice")
        resp = await client.post(
            "/projects/999/todos", json={"title": "T", "description": "d"}, headers=alice.headers
        )
        assert resp.status_code == 403

    @pytest.mark.asyncio
    async def test_with_status_and_due_date(self, client, make_user, make_org, make_project):
        alice = await make_user("alice")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        resp = await client.post(
            f"/projects/{project['id']}/todos",
            json={
                "title": "T",
                "description": "d",
                "status": "DOING",
                "due_date": "2030-01-31T12:00:00Z",
            },
            headers=alice.headers,
        )
        assert resp.status_code == 201
        [body] = resp.json()
        assert body["status"] == "DOING"
        assert body["due_date"].startswith("2030-01-31T12:00:00")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {"title": "", "description": "d"},
            {"title": "T"},
            {"title": "T", "description": "d", "status": "BLOCKED"},
            {"title": "T", "description": "d", "due_date": "next tuesday"},
        ],
    )
    async def test_invalid_payload(self, client, make_user, make_org, make_project, payload):
        alice = await make_user("alice")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        resp = await client.post(
            f"/projects/{project['id']}/todos", json=payload, headers=alice.headers
        )
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_list(self, client, make_user, make_org, make_project, make_todo):
        alice = await make_user("alice")
        bob = await make_user("bob")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        first = await make_todo(alice, project["id"], "first")
        second = await make_todo(alice, project["id"], "second")

        resp = await client.get(f"/projects/{project['id']}/todos", headers=alice.headers)
        assert resp.status_code == 200
        assert [t["id"] for t in resp.json()] == [first["id"], second["id"]]

        resp = await client.get(f"/projects/{project['id']}/todos", headers=bob.headers)
        assert resp.status_code == 403


# ---------------------------------------------------------------------------
# By id
# ---------------------------------------------------------------------------

class TestTodoById:
    @pytest.mark.asyncio
    async def test_get_missing(self, client, make_user):
        alice = await make_user("alice")
        resp = await client.get("/todos/999", headers=alice.headers)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Todo not found"}

    @pytest.mark.asyncio
    async def test_get_by_outsider(self, client, make_user, make_org, make_project, make_todo):
        alice = await make_user("alice")
        bob = await make_user("bob")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        todo = await make_todo(alice, project["id"])
        resp = await client.get(f"/todos/{todo['id']}", headers=bob.headers)
        assert resp.status_code == 403
        assert resp.json() == {"error": "User is not in the organisation of the todo"}

    @pytest.mark.asyncio
    async def test_update(self, client, make_user, make_org, make_project, make_todo):
        alice = await make_user("alice")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        todo = await make_todo(alice, project["id"], "draft")

        resp = await client.patch(
            f"/todos/{todo['id']}", json={"status": "DONE"}, headers=alice.headers
        )
        assert resp.status_code == 200
        body = resp.json()
        assert body["status"] == "DONE"
        assert body["title"] == "draft"

    @pytest.mark.asyncio
    async def test_update_rejects_bad_status(
        self, client, make_user, make_org, make_project, make_todo
    ):
        alice = await make_user("alice")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        todo = await make_todo(alice, project["id"])
        resp = await client.patch(
            f"/todos/{todo['id']}", json={"status": "LATER"}, headers=alice.headers
        )
        assert resp.status_code == 400

    @pytest.mark.asyncio
    async def test_delete(self, client, make_user, make_org, make_project, make_todo):
        alice = await make_user("alice")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        todo = await make_todo(alice, project["id"])
        resp = await client.delete(f"/todos/{todo['id']}", headers=alice.headers)
        assert resp.status_code == 200
        resp = await client.get(f"/todos/{todo['id']}", headers=alice.headers)
        assert resp.status_code == 404


# ---------------------------------------------------------------------------
# Assignments
# ---------------------------------------------------------------------------

class TestAssignments:
    @pytest.fixture
    async def board(self, make_user, make_org, make_project, make_todo, add_member):
        alice = await make_user("alice")
        bob = await make_user("bob")
        carol = await make_user("carol")
        org = await make_org(alice)
        await add_member(alice, org["id"], bob)
        project = await make_project(alice, org["id"])
        todo = await make_todo(alice, project["id"])
        return alice, bob, carol, todo

    @staticmethod
    async def _assigned(session_factory, todo_id):
        async with session_factory() as session:
            result = await session.execute(
                select(Assignment.user_id)
                .where(Assignment.todo_id == todo_id)
                .order_by(Assignment.user_id)
            )
            return list(result.scalars().all())

    @pytest.mark.asyncio
    async def test_assign_batch(self, client, board):
        alice, bob, _, todo = board
        resp = await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [alice.id, bob.id]},
            headers=bob.headers,
        )
        assert resp.status_code == 201
        assert resp.json() == {"message": "Assignments created successfully"}

        resp = await client.get(f"/todos/{todo['id']}/assignments", headers=alice.headers)
        assert resp.json() == [
            {"user_id": alice.id, "todo_id": todo["id"]},
            {"user_id": bob.id, "todo_id": todo["id"]},
        ]

    @pytest.mark.asyncio
    async def test_batch_with_duplicate_persists_nothing(self, client, board, session_factory):
        alice, bob, carol, todo = board
        await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [alice.id]},
            headers=alice.headers,
        )

        resp = await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [carol.id, alice.id]},
            headers=alice.headers,
        )
        assert resp.status_code == 400
        assert await self._assigned(session_factory, todo["id"]) == [alice.id]

    @pytest.mark.asyncio
    async def test_batch_with_unknown_user_persists_nothing(
        self, client, board, session_factory
    ):
        alice, bob, _, todo = board
        resp = await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [bob.id, 999]},
            headers=alice.headers,
        )
        assert resp.status_code == 400
        assert await self._assigned(session_factory, todo["id"]) == []

    @pytest.mark.asyncio
    async def test_repeated_id_in_one_batch(self, client, board, session_factory):
        alice, bob, _, todo = board
        resp = await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [bob.id, bob.id]},
            headers=alice.headers,
        )
        assert resp.status_code == 201
        assert await self._assigned(session_factory, todo["id"]) == [bob.id]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_ids", [["2"], [2.0], [True], [0], "2"])
    async def test_non_integer_ids_rejected(self, client, board, session_factory, user_ids):
        alice, _, _, todo = board
        resp = await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": user_ids},
            headers=alice.headers,
        )
        assert resp.status_code == 400
        assert await self._assigned(session_factory, todo["id"]) == []

    @pytest.mark.asyncio
    async def test_unassign_ignores_unassigned_ids(self, client, board, session_factory):
        alice, bob, carol, todo = board
        await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [alice.id, bob.id]},
            headers=alice.headers,
        )

        resp = await client.request(
            "DELETE",
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [bob.id, carol.id]},
            headers=alice.headers,
        )
        assert resp.status_code == 200
        assert resp.json() == {"message": "Assignments deleted successfully"}
        assert await self._assigned(session_factory, todo["id"]) == [alice.id]

    @pytest.mark.asyncio
    async def test_outsider_cannot_assign(self, client, board, session_factory):
        _, _, carol, todo = board
        resp = await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [carol.id]},
            headers=carol.headers,
        )
        assert resp.status_code == 403
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(Assignment))
            assert result.scalar_one() == 0


# ---------------------------------------------------------------------------
# Id range
# ---------------------------------------------------------------------------

class TestIdRange:
    @pytest.mark.parametrize("bad", [[2**31], [2**70]])
    def test_assignment_ids_capped(self, bad):
        with pytest.raises(ValidationError):
            AssignmentBatch.model_validate({"user_ids": bad})

    def test_largest_id_accepted(self):
        assert AssignmentBatch.model_validate({"user_ids": [2**31 - 1]}).user_ids == [2**31 - 1]

    @pytest.mark.asyncio
    async def test_oversized_assignment_id_is_400(
        self, client, make_user, make_org, make_project, make_todo, session_factory
    ):
        alice = await make_user("alice")
        org = await make_org(alice)
        project = await make_project(alice, org["id"])
        todo = await make_todo(alice, project["id"])

        resp = await client.post(
            f"/todos/{todo['id']}/assignments",
            json={"user_ids": [alice.id, 2**70]},
            headers=alice.headers,
        )
        assert resp.status_code == 400
        assert "error" in resp.json()
        async with session_factory() as session:
            result = await session.execute(select(func.count()).select_from(Assignment))
            assert result.scalar_one() == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "path",
        [
            f"/todos/{2**70}",
            f"/todos/{2**70}/comments",
            f"/projects/{2**70}",
            f"/organisations/{2**70}",
            f"/comments/{2**70}",
            "/todos/0",
            "/projects/-1",
        ],
    )
    async def test_out_of_range_path_id_is_400(self, client, make_user, path):
        alice = await make_user("alice")
        method = "PATCH" if path.startswith("/comments") else "GET"
        resp = await client.request(method, path, json={"content": "x"}, headers=alice.headers)
        assert resp.status_code == 400
        assert "error" in resp.json()
