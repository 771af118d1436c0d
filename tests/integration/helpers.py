from datetime import UTC, datetime, timedelta

from httpx import AsyncClient

from config import ApplicationConfig

V1 = ApplicationConfig.API_PREFIX


def future_date(days: int = 7) -> str:
    day = datetime.now(UTC) + timedelta(days=days)
    return day.replace(hour=0, minute=0, second=0, microsecond=0).isoformat()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


async def register(client: AsyncClient, username: str, role: str = "customer", age: int = 25,
                   password: str = "Password1") -> dict:
    response = await client.post(f"{V1}/auth/register", json={
        "username": username,
        "password": password,
        "role": role,
        "age": age,
    })
    assert response.status_code == 201, response.text
    return response.json()


async def create_movie(client: AsyncClient, token: str, title: str = "X",
                       age_restriction: int = 10) -> dict:
    response = await client.post(
        f"{V1}/movies",
        json={"title": title, "ageRestriction": age_restriction},
        headers=bearer(token),
    )
    assert response.status_code == 201, response.text
    return response.json()


async def create_session(client: AsyncClient, token: str, movie_id: str, room_number: int = 1,
                         timeslot: str = "18:00-20:00", days: int = 7) -> dict:
    response = await client.post(
        f"{V1}/movies/{movie_id}/sessions",
        json={"date": future_date(days), "timeslot": timeslot, "roomNumber": room_number},
        headers=bearer(token),
    )
    assert response.status_code == 201, response.text
    return response.json()
