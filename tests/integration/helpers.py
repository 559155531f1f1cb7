from http.cookies import SimpleCookie

from httpx import AsyncClient, Response
from sqlalchemy import update

from iam.domain.entities import GlobalRole, User

PASSWORD = "Password123!"


def set_cookies(response: Response) -> dict:
    """Cookies from Set-Cookie headers as {name: morsel}"""
    cookies = {}
    for header in response.headers.get_list("set-cookie"):
        parsed = SimpleCookie()
        parsed.load(header)
        cookies.update(parsed)
    return cookies


async def signup(client: AsyncClient, email: str, password: str = PASSWORD) -> Response:
    return await client.post(
        "/auth/signup",
        json={"email": email, "password": password, "first_name": "A", "last_name": "B"},
    )


async def login(client: AsyncClient, email: str, password: str = PASSWORD) -> Response:
    response = await client.post("/auth/login", json={"email": email, "password": password})
    # Requests authenticate explicitly, never through the client's cookie jar
    client.cookies.clear()
    return response


async def signup_and_login(client: AsyncClient, email: str) -> dict:
    await signup(client, email)
    response = await login(client, email)
    cookies = set_cookies(response)
    return {
        "access_token": cookies["access_token"].value,
        "encrypted_token": cookies["encrypted_token"].value,
        "user_id": response.json()["user"]["id"],
    }


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def promote_to_super_admin(db_session, email: str) -> None:
    await db_session.execute(
        update(User).where(User.email == email).values(global_role=GlobalRole.super_admin)
    )
    await db_session.commit()
