"""User Routes - end-to-end behaviour of /users through FastAPI and SQLite.

Invariants:
    - POST → 201, PUT/GET/DELETE → 200
    - CONFLICT → 409, NOT_FOUND → 404, MISSING_INPUT and shape errors → 406
    - Wire field names are snake_case
    - Failed writes leave stored users unchanged
"""


async def test_create_returns_201_with_snake_case_body(client):
    res = await client.post(
        "/users",
        json={"first_name": "John", "last_name": "Doe", "email": "john.doe@example.com"},
    )

    assert res.status_code == 201
    body = res.json()
    assert set(body) == {"id", "first_name", "last_name", "email"}
    assert body["id"] is not None
    assert body["email"] == "john.doe@example.com"


async def test_create_duplicate_email_returns_409(client, create_user):
    await create_user()

    res = await client.post(
        "/users",
        json={"first_name": "Other", "last_name": "Person", "email": "john.doe@example.com"},
    )

    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "CONFLICT"
    assert error["message"] == "User already exists"
    assert error["category"] == "conflict"


async def test_create_with_bad_email_returns_406_with_hint(client):
    res = await client.post(
        "/users",
        json={"first_name": "John", "last_name": "Doe", "email": "not-an-email"},
    )

    assert res.status_code == 406
    error = res.json()["error"]
    assert error["code"] == "SHAPE_INVALID"
    assert error["message"].startswith("Incorrect email formatting")
    assert error["details"][0]["field"] == "body.email"


async def test_create_with_missing_field_returns_406(client):
    res = await client.post("/users", json={"first_name": "John", "email": "j@example.com"})

    assert res.status_code == 406
    error = res.json()["error"]
    assert error["message"] == "Invalid request data"
    assert any(d["field"] == "body.last_name" for d in error["details"])


async def test_list_returns_page_metadata(client, create_user):
    for i in range(3):
        await create_user(first=f"User{i}", email=f"user{i}@example.com")

    res = await client.get("/users", params={"page": 1, "size": 2})

    assert res.status_code == 200
    body = res.json()
    assert [u["first_name"] for u in body["content"]] == ["User2"]
    assert body["number"] == 1
    assert body["size"] == 2
    assert body["total_elements"] == 3
    assert body["total_pages"] == 2
    assert body["last"] is True


async def test_list_uses_default_page_size(client, create_user):
    for i in range(6):
        await create_user(first=f"User{i}", email=f"user{i}@example.com")

    body = (await client.get("/users")).json()

    assert body["size"] == 5
    assert body["number_of_elements"] == 5


async def test_list_is_idempotent(client, create_user):
    await create_user()
    await create_user(first="Jane", email="jane.roe@example.com")

    first = (await client.get("/users")).json()
    second = (await client.get("/users")).json()

    assert first["content"] == second["content"]


async def test_list_rejects_negative_page(client):
    res = await client.get("/users", params={"page": -1})

    assert res.status_code == 406


async def test_search_by_first_name(client, create_user):
    await create_user()
    await create_user(first="Jane", email="jane.roe@example.com")

    res = await client.get("/users/search", params={"first_name": "Jane"})

    assert res.status_code == 200
    assert [u["email"] for u in res.json()["content"]] == ["jane.roe@example.com"]


async def test_search_without_matches_returns_empty_page(client):
    res = await client.get("/users/search", params={"first_name": "Nobody"})

    assert res.status_code == 200
    assert res.json()["empty"] is True


async def test_search_without_name_returns_406(client):
    res = await client.get("/users/search")

    assert res.status_code == 406
    assert res.json()["error"]["code"] == "MISSING_INPUT"


async def test_update_changes_names_and_email(client, create_user):
    user = await create_user()

    res = await client.put(
        f"/users/{user['id']}",
        json={"first_name": "Johnny", "last_name": "Dee", "email": "johnny@example.com"},
    )

    assert res.status_code == 200
    assert res.json() == {
        "id": user["id"], "first_name": "Johnny", "last_name": "Dee",
        "email": "johnny@example.com",
    }


async def test_update_keeping_own_email_succeeds(client, create_user):
    user = await create_user()

    res = await client.put(
        f"/users/{user['id']}",
        json={"first_name": "X", "last_name": "Doe", "email": "john.doe@example.com"},
    )

    assert res.status_code == 200
    assert res.json()["first_name"] == "X"
    assert res.json()["email"] == "john.doe@example.com"


async def test_update_to_taken_email_returns_409_and_keeps_user(client, create_user):
    john = await create_user()
    await create_user(first="Jane", email="jane.roe@example.com")

    res = await client.put(
        f"/users/{john['id']}",
        json={"first_name": "X", "last_name": "Doe", "email": "jane.roe@example.com"},
    )

    assert res.status_code == 409
    listed = (await client.get("/users/search", params={"first_name": "John"})).json()
    assert listed["content"] == [john]


async def test_update_unknown_user_returns_404(client):
    res = await client.put(
        "/users/999",
        json={"first_name": "X", "last_name": "Y", "email": "x@example.com"},
    )

    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_FOUND"


async def test_delete_user(client, create_user):
    user = await create_user()

    res = await client.delete(f"/users/{user['id']}")

    assert res.status_code == 200
    assert res.json() == {"message": f"Successful deleted user {user['id']}"}
    assert (await client.get("/users")).json()["total_elements"] == 0


async def test_delete_unknown_user_returns_404(client):
    res = await client.delete("/users/12345")

    assert res.status_code == 404


async def test_delete_with_non_integer_id_returns_406(client):
    res = await client.delete("/users/abc")

    assert res.status_code == 406


async def test_create_keeps_email_and_names_as_sent(client):
    res = await client.post(
        "/users",
        json={"first_name": " John ", "last_name": "Doe", "email": "John.Doe@EXAMPLE.com"},
    )

    assert res.status_code == 201
    assert res.json()["first_name"] == " John "
    assert res.json()["email"] == "John.Doe@EXAMPLE.com"


async def test_create_with_display_name_email_returns_406(client):
    res = await client.post(
        "/users",
        json={"first_name": "Jim", "last_name": "Bob", "email": "Jim Bob <jim@example.com>"},
    )

    assert res.status_code == 406
    assert res.json()["error"]["message"].startswith("Incorrect email formatting")
    assert (await client.get("/users")).json()["total_elements"] == 0


async def test_create_with_overlong_email_has_no_format_hint(client):
    res = await client.post(
        "/users",
        json={"first_name": "John", "last_name": "Doe", "email": "a" * 250 + "@example.com"},
    )

    assert res.status_code == 406
    error = res.json()["error"]
    assert error["message"] == "Invalid request data"
    assert error["details"][0]["type"] == "string_too_long"


async def test_list_rejects_page_beyond_integer_range(client):
    res = await client.get("/users", params={"page": 10**17, "size": 100})

    assert res.status_code == 406
    assert res.json()["error"]["code"] == "SHAPE_INVALID"


async def test_delete_with_out_of_range_id_returns_406(client):
    res = await client.delete(f"/users/{2**70}")

    assert res.status_code == 406
    assert res.json()["error"]["code"] == "SHAPE_INVALID"


async def test_update_with_out_of_range_id_returns_406(client):
    res = await client.put(
        f"/users/{2**63}",
        json={"first_name": "X", "last_name": "Y", "email": "x@example.com"},
    )

    assert res.status_code == 406


async def test_delete_negative_id_returns_404(client):
    res = await client.delete("/users/-1")

    assert res.status_code == 404
    assert res.json()["error"]["message"].endswith("wrong or negative id?")
