"""End-to-end register / login / me over the GraphQL endpoint with the qid cookie."""
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from postboard.db.models_user import User

REGISTER_ALICE = """
mutation { register(options: {username: "alice", password: "secretpw"}) { user { id } } }
"""


async def test_health_check(http_client):
    response = await http_client.get("/")
    assert response.status_code == 200
    assert response.text == "hello world"


async def test_hello_query(gql):
    body = await gql.execute("query { hello }")
    assert body["data"]["hello"] == "hello world"


async def test_me_is_null_without_session(gql):
    assert await gql.me() is None


async def test_register_short_username(gql):
    result = await gql.register("ab", "secret")

    assert result["user"] is None
    assert result["errors"][0]["field"] == "username"


async def test_register_short_password(gql):
    result = await gql.register("alice", "12345")

    assert result["user"] is None
    assert result["errors"][0]["field"] == "password"


async def test_register_sets_session_cookie(gql, http_client):
    result = await gql.register("alice", "secretpw")

    assert result["errors"] is None
    assert result["user"]["username"] == "alice"
    assert "qid" in http_client.cookies, "register must issue the session cookie"

    me = await gql.me()
    assert me == result["user"]


async def test_register_duplicate(gql, other_gql, db):
    await gql.register("alice", "secretpw")
    result = await other_gql.register("alice", "other123")

    assert result["user"] is None
    assert result["errors"] == [{"field": "username", "message": "Username has already been taken."}]
    assert await other_gql.me() is None

    res = await db.execute(select(func.count()).select_from(User))
    assert res.scalar_one() == 1


async def test_login_flow(gql, other_gql):
    registered = await gql.register("alice", "secretpw")

    missing = await other_gql.login("bob", "secretpw")
    assert missing["errors"] == [{"field": "username", "message": "Username Not Found."}]

    wrong = await other_gql.login("alice", "wrongpw")
    assert wrong["errors"] == [{"field": "password", "message": "Password Is Incorrect"}]
    assert await other_gql.me() is None

    ok = await other_gql.login("alice", "secretpw")
    assert ok["errors"] is None
    assert ok["user"]["id"] == registered["user"]["id"]
    assert (await other_gql.me())["username"] == "alice"


async def test_tampered_cookie_is_anonymous(gql, http_client):
    await gql.register("alice", "secretpw")
    session_id = http_client.cookies["qid"].rsplit(".", 1)[0]
    http_client.cookies.clear()

    response = await http_client.post(
        "/graphql",
        json={"query": "query { me { id } }"},
        headers={"cookie": f"qid={session_id}.forged"},
    )

    assert response.json()["data"]["me"] is None


async def test_password_is_not_exposed(http_client):
    response = await http_client.post("/graphql", json={"query": "query { me { id password } }"})
    assert response.json().get("errors"), "User.password must not be part of the schema"


async def test_unexpected_database_failure_is_a_graphql_error(gql, monkeypatch):
    async def broken_commit(self):
        raise OperationalError("INSERT INTO users", {}, Exception("disk I/O error"))

    monkeypatch.setattr(AsyncSession, "commit", broken_commit)

    body = await gql.execute(REGISTER_ALICE)

    assert body["data"] is None, "a failed insert must not look like an empty success"
    assert body["errors"][0]["message"] == "Could not insert user"
    assert body["errors"][0]["path"] == ["register"]


async def test_long_username_is_a_field_error(gql):
    result = await gql.register("a" * 81, "secretpw")

    assert result["user"] is None
    assert result["errors"] == [{"field": "username", "message": "Provided Username is Too Long"}]
