import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def alice(register):
    return await register("alice@x.com", "Alice")


@pytest_asyncio.fixture
async def bob(register):
    return await register("bob@x.com", "Bob")


@pytest_asyncio.fixture
async def project(client, alice):
    _, headers = alice
    response = await client.post(
        "/projects", json={"name": "Alpha", "key": "abc"}, headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


@pytest_asyncio.fixture
async def board_id(client, alice, project):
    _, headers = alice
    response = await client.get(f"/projects/{project['id']}/boards", headers=headers)
    return response.json()["data"][0]["id"]


@pytest_asyncio.fixture
async def membership(client, alice, bob, project):
    """Bob joins Alice's project as a plain member"""
    _, headers = alice
    response = await client.post(
        f"/projects/{project['id']}/members",
        json={"user_id": bob[0]["id"]},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def create_task(client, board_id, headers, title="Task", **fields):
    response = await client.post(
        f"/boards/{board_id}/tasks",
        json={"type": "issue", "title": title, **fields},
        headers=headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestHealth:

    @pytest.mark.asyncio
    async def test_root(self, client):
        response = await client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "running"


class TestProjects:

    @pytest.mark.asyncio
    async def test_create_project(self, client, alice, project):
        user, headers = alice

        assert project["key"] == "ABC"
        assert project["owner_id"] == user["id"]

        response = await client.get(f"/projects/{project['id']}", headers=headers)
        assert response.status_code == 200
        detail = response.json()["data"]
        assert [(m["user_id"], m["role"]) for m in detail["members"]] == [(user["id"], "admin")]
        assert [b["name"] for b in detail["boards"]] == ["Main Board"]
        assert detail["labels"] == []

        board_id = detail["boards"][0]["id"]
        response = await client.get(f"/boards/{board_id}/columns", headers=headers)
        columns = response.json()["data"]
        assert [(c["name"], c["position"]) for c in columns] == [
            ("To Do", 0), ("In Progress", 1), ("Done", 2)
        ]

    @pytest.mark.asyncio
    async def test_duplicate_key(self, client, alice, project):
        _, headers = alice
        response = await client.post(
            "/projects", json={"name": "Again", "key": "ABC"}, headers=headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Project key already exists"

    @pytest.mark.asyncio
    async def test_key_too_short(self, client, alice):
        _, headers = alice
        response = await client.post(
            "/projects", json={"name": "Short", "key": "A"}, headers=headers
        )
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["data"] is None
        assert "key" in body["message"]

    @pytest.mark.asyncio
    async def test_list_only_member_projects(self, client, alice, bob, project):
        response = await client.get("/projects", headers=alice[1])
        assert [p["id"] for p in response.json()["data"]] == [project["id"]]

        response = await client.get("/projects", headers=bob[1])
        assert response.json()["data"] == []

    @pytest.mark.asyncio
    async def test_non_member_cannot_read_project(self, client, bob, project):
        response = await client.get(f"/projects/{project['id']}", headers=bob[1])
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_update_project(self, client, alice, project):
        response = await client.patch(
            f"/projects/{project['id']}", json={"description": "Docs"}, headers=alice[1]
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["name"] == "Alpha"
        assert data["description"] == "Docs"

    @pytest.mark.asyncio
    async def test_member_management(self, client, alice, bob, project, membership):
        assert {(m["user_id"], m["role"]) for m in membership} == {
            (alice[0]["id"], "admin"),
            (bob[0]["id"], "member"),
        }

        # plain members cannot manage membership
        response = await client.post(
            f"/projects/{project['id']}/members",
            json={"user_id": alice[0]["id"], "role": "member"},
            headers=bob[1],
        )
        assert response.status_code == 403

        response = await client.delete(
            f"/projects/{project['id']}/members/{alice[0]['id']}", headers=alice[1]
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot remove project owner"

        response = await client.delete(
            f"/projects/{project['id']}/members/{bob[0]['id']}", headers=alice[1]
        )
        assert response.status_code == 200

        response = await client.get(f"/projects/{project['id']}", headers=bob[1])
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_add_unknown_user(self, client, alice, project):
        response = await client.post(
            f"/projects/{project['id']}/members", json={"user_id": 9999}, headers=alice[1]
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_owner_role_cannot_be_lowered(self, client, alice, project):
        owner, headers = alice
        response = await client.post(
            f"/projects/{project['id']}/members",
            json={"user_id": owner["id"], "role": "member"},
            headers=headers,
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Cannot change project owner role"

        # owner keeps admin rights
        response = await client.patch(
            f"/projects/{project['id']}", json={"name": "Still mine"}, headers=headers
        )
        assert response.status_code == 200

        response = await client.post(
            f"/projects/{project['id']}/members",
            json={"user_id": owner["id"], "role": "admin"},
            headers=headers,
        )
        assert response.status_code == 201

    @pytest.mark.asyncio
    async def test_delete_project(self, client, alice, project, board_id):
        response = await client.delete(f"/projects/{project['id']}", headers=alice[1])
        assert response.status_code == 200

        response = await client.get(f"/boards/{board_id}", headers=alice[1])
        assert response.status_code == 404


class TestBoards:

    @pytest.mark.asyncio
    async def test_board_detail(self, client, alice, board_id):
        headers = alice[1]
        parent = await create_task(client, board_id, headers, "Parent")
        response = await client.post(
            f"/tasks/{parent['id']}/subtasks", json={"title": "Child"}, headers=headers
        )
        assert response.status_code == 201
        assert response.json()["data"]["type"] == "subtask"
        assert response.json()["data"]["position"] == 0

        response = await client.get(f"/boards/{board_id}", headers=headers)
        assert response.status_code == 200
        detail = response.json()["data"]
        assert detail["board"]["name"] == "Main Board"
        assert len(detail["columns"]) == 3
        assert [t["title"] for t in detail["tasks"]] == ["Parent"]
        assert [s["title"] for s in detail["tasks"][0]["subtasks"]] == ["Child"]

    @pytest.mark.asyncio
    async def test_missing_board_is_404_before_membership(self, client, bob):
        response = await client.get("/boards/9999", headers=bob[1])
        assert response.status_code == 404
        assert response.json() == {"data": None, "success": False, "message": "Board not found"}

    @pytest.mark.asyncio
    async def test_non_member_gets_403(self, client, bob, board_id):
        response = await client.get(f"/boards/{board_id}", headers=bob[1])
        assert response.status_code == 403
        assert response.json()["message"] == "Not a member of this project"

    @pytest.mark.asyncio
    async def test_create_board_has_default_columns(self, client, alice, project):
        response = await client.post(
            f"/projects/{project['id']}/boards", json={"name": "Sprint"}, headers=alice[1]
        )
        assert response.status_code == 201
        new_board = response.json()["data"]

        response = await client.get(f"/boards/{new_board['id']}/columns", headers=alice[1])
        assert len(response.json()["data"]) == 3

    @pytest.mark.asyncio
    async def test_member_cannot_modify_board(self, client, bob, project, board_id, membership):
        response = await client.delete(f"/boards/{board_id}", headers=bob[1])
        assert response.status_code == 403

        response = await client.post(
            f"/projects/{project['id']}/boards", json={"name": "Mine"}, headers=bob[1]
        )
        assert response.status_code == 403

        response = await client.post(
            f"/boards/{board_id}/columns", json={"name": "Review"}, headers=bob[1]
        )
        assert response.status_code == 403


class TestColumns:

    @pytest.mark.asyncio
    async def test_reorder(self, client, alice, board_id):
        headers = alice[1]
        columns = (await client.get(f"/boards/{board_id}/columns", headers=headers)).json()["data"]
        ids = [c["id"] for c in columns]

        response = await client.patch(
            f"/boards/{board_id}/columns/reorder",
            json={"column_ids": [ids[2], ids[0], ids[1]]},
            headers=headers,
        )
        assert response.status_code == 200
        assert [c["id"] for c in response.json()["data"]] == [ids[2], ids[0], ids[1]]

    @pytest.mark.asyncio
    async def test_cannot_delete_last_column(self, client, alice, board_id):
        headers = alice[1]
        columns = (await client.get(f"/boards/{board_id}/columns", headers=headers)).json()["data"]

        for column in columns[:-1]:
            response = await client.delete(f"/columns/{column['id']}", headers=headers)
            assert response.status_code == 200

        response = await client.delete(f"/columns/{columns[-1]['id']}", headers=headers)
        assert response.status_code == 400


class TestTasks:

    @pytest.mark.asyncio
    async def test_positions(self, client, alice, board_id):
        first = await create_task(client, board_id, alice[1], "T1")
        second = await create_task(client, board_id, alice[1], "T2")

        assert (first["position"], second["position"]) == (0, 1)
        assert first["status"] == "todo"
        assert first["priority"] == "medium"
        assert first["reporter_id"] == alice[0]["id"]

    @pytest.mark.asyncio
    async def test_member_permissions(self, client, alice, bob, board_id, membership):
        alice_task = await create_task(client, board_id, alice[1], "Alice's")
        bob_task = await create_task(client, board_id, bob[1], "Bob's")

        response = await client.patch(
            f"/tasks/{alice_task['id']}", json={"status": "in_progress"}, headers=bob[1]
        )
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "in_progress"
        assert response.json()["data"]["title"] == "Alice's"

        response = await client.delete(f"/tasks/{alice_task['id']}", headers=bob[1])
        assert response.status_code == 403

        response = await client.delete(f"/tasks/{bob_task['id']}", headers=bob[1])
        assert response.status_code == 200

        # admins may delete any task
        response = await client.delete(f"/tasks/{alice_task['id']}", headers=alice[1])
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_update_clears_deadline(self, client, alice, board_id):
        task = await create_task(
            client, board_id, alice[1], deadline="2025-05-15T20:59:59.000Z"
        )
        assert task["deadline"].startswith("2025-05-15T20:59:59")

        response = await client.patch(
            f"/tasks/{task['id']}", json={"deadline": None, "title": None}, headers=alice[1]
        )
        data = response.json()["data"]
        assert data["deadline"] is None
        assert data["title"] == "Task"

    @pytest.mark.asyncio
    async def test_invalid_type(self, client, alice, board_id):
        response = await client.post(
            f"/boards/{board_id}/tasks", json={"type": "epic", "title": "X"}, headers=alice[1]
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    @pytest.mark.asyncio
    async def test_subtask_of_missing_parent(self, client, alice):
        response = await client.post(
            "/tasks/9999/subtasks", json={"title": "Orphan"}, headers=alice[1]
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Parent task not found"

    @pytest.mark.asyncio
    async def test_unknown_assignee(self, client, alice, board_id):
        headers = alice[1]
        response = await client.post(
            f"/boards/{board_id}/tasks",
            json={"type": "issue", "title": "X", "assignee_id": 9999},
            headers=headers,
        )
        assert response.status_code == 404
        assert response.json()["message"] == "Assignee not found"

        task = await create_task(client, board_id, headers, assignee_id=alice[0]["id"])
        assert task["assignee_id"] == alice[0]["id"]

        response = await client.patch(
            f"/tasks/{task['id']}", json={"assignee_id": 9999}, headers=headers
        )
        assert response.status_code == 404

        response = await client.post(
            f"/tasks/{task['id']}/subtasks",
            json={"title": "Sub", "assignee_id": 9999},
            headers=headers,
        )
        assert response.status_code == 404

        # clearing the assignee needs no lookup
        response = await client.patch(
            f"/tasks/{task['id']}", json={"assignee_id": None}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["assignee_id"] is None

    @pytest.mark.asyncio
    async def test_task_detail(self, client, alice, project, board_id):
        headers = alice[1]
        task = await create_task(client, board_id, headers)

        label = (await client.post(
            f"/projects/{project['id']}/labels", json={"name": "bug"}, headers=headers
        )).json()["data"]
        response = await client.post(f"/tasks/{task['id']}/labels/{label['id']}", headers=headers)
        assert response.status_code == 200
        response = await client.post(f"/tasks/{task['id']}/labels/{label['id']}", headers=headers)
        assert [item["id"] for item in response.json()["data"]] == [label["id"]]

        await client.post(f"/tasks/{task['id']}/comments", json={"content": "hi"}, headers=headers)

        response = await client.get(f"/tasks/{task['id']}", headers=headers)
        detail = response.json()["data"]
        assert [item["name"] for item in detail["task"]["labels"]] == ["bug"]
        assert [c["content"] for c in detail["comments"]] == ["hi"]
        assert detail["subtasks"] == []

    @pytest.mark.asyncio
    async def test_label_from_other_project(self, client, alice, board_id):
        headers = alice[1]
        other = (await client.post(
            "/projects", json={"name": "Other", "key": "OTH"}, headers=headers
        )).json()["data"]
        label = (await client.post(
            f"/projects/{other['id']}/labels", json={"name": "x"}, headers=headers
        )).json()["data"]
        task = await create_task(client, board_id, headers)

        response = await client.post(f"/tasks/{task['id']}/labels/{label['id']}", headers=headers)
        assert response.status_code == 400


class TestComments:

    @pytest.mark.asyncio
    async def test_comment_permissions(self, client, alice, bob, board_id, membership):
        task = await create_task(client, board_id, alice[1])
        comment = (await client.post(
            f"/tasks/{task['id']}/comments", json={"content": "from alice"}, headers=alice[1]
        )).json()["data"]
        assert comment["author_id"] == alice[0]["id"]

        response = await client.patch(
            f"/comments/{comment['id']}", json={"content": "edited"}, headers=bob[1]
        )
        assert response.status_code == 403

        response = await client.delete(f"/comments/{comment['id']}", headers=bob[1])
        assert response.status_code == 403

        response = await client.patch(
            f"/comments/{comment['id']}", json={"content": "edited"}, headers=alice[1]
        )
        assert response.json()["data"]["content"] == "edited"

        bob_comment = (await client.post(
            f"/tasks/{task['id']}/comments", json={"content": "from bob"}, headers=bob[1]
        )).json()["data"]
        response = await client.delete(f"/comments/{bob_comment['id']}", headers=alice[1])
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_empty_comment_rejected(self, client, alice, board_id):
        task = await create_task(client, board_id, alice[1])
        response = await client.post(
            f"/tasks/{task['id']}/comments", json={"content": ""}, headers=alice[1]
        )
        assert response.status_code == 400
