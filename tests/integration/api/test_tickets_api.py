import pytest
from httpx import AsyncClient

from tests.integration.helpers import V1, bearer, create_movie, create_session, register


async def _buy(client: AsyncClient, buyer: dict, session_id: str):
    return await client.post(
        f"{V1}/tickets",
        json={"userId": buyer["user"]["id"], "sessionId": session_id},
        headers=bearer(buyer["accessToken"]),
    )


@pytest.mark.asyncio
async def test_buy_ticket(client: AsyncClient, manager_token, customer):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])

    response = await _buy(client, customer, session["id"])

    assert response.status_code == 201
    data = response.json()
    assert data["userId"] == customer["user"]["id"]
    assert data["sessionId"] == session["id"]
    assert data["isUsed"] is False
    assert data["usedAt"] is None
    assert data["purchasedAt"]


@pytest.mark.asyncio
async def test_buy_ticket_twice_conflicts(client: AsyncClient, manager_token, customer):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])
    assert (await _buy(client, customer, session["id"])).status_code == 201

    response = await _buy(client, customer, session["id"])

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "TICKET_ALREADY_PURCHASED"


@pytest.mark.asyncio
async def test_buy_ticket_for_someone_else_is_forbidden(
    client: AsyncClient, manager, manager_token, customer
):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])

    response = await client.post(
        f"{V1}/tickets",
        json={"userId": manager["user"]["id"], "sessionId": session["id"]},
        headers=bearer(customer["accessToken"]),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_buy_ticket_unknown_session(client: AsyncClient, customer):
    response = await _buy(client, customer, "00000000-0000-4000-8000-000000000000")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "MOVIE_SESSION_NOT_FOUND"


@pytest.mark.asyncio
async def test_use_ticket_is_one_way(client: AsyncClient, manager_token, customer):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])
    ticket = (await _buy(client, customer, session["id"])).json()

    forbidden = await client.post(
        f"{V1}/tickets/{ticket['id']}/use", headers=bearer(customer["accessToken"])
    )
    assert forbidden.status_code == 403

    used = await client.post(f"{V1}/tickets/{ticket['id']}/use", headers=bearer(manager_token))
    assert used.status_code == 200
    assert used.json()["isUsed"] is True
    assert used.json()["usedAt"] is not None

    again = await client.post(f"{V1}/tickets/{ticket['id']}/use", headers=bearer(manager_token))
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "TICKET_ALREADY_USED"

    mine = await client.get(f"{V1}/tickets/me", headers=bearer(customer["accessToken"]))
    assert mine.json()[0]["isUsed"] is True


@pytest.mark.asyncio
async def test_use_unknown_ticket(client: AsyncClient, manager_token):
    response = await client.post(
        f"{V1}/tickets/00000000-0000-4000-8000-000000000000/use", headers=bearer(manager_token)
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "TICKET_NOT_FOUND"


@pytest.mark.asyncio
async def test_my_tickets_filter(client: AsyncClient, manager_token, customer):
    movie = await create_movie(client, manager_token)
    first = await create_session(client, manager_token, movie["id"], room_number=1)
    second = await create_session(client, manager_token, movie["id"], room_number=2)
    used = (await _buy(client, customer, first["id"])).json()
    unused = (await _buy(client, customer, second["id"])).json()
    await client.post(f"{V1}/tickets/{used['id']}/use", headers=bearer(manager_token))
    headers = bearer(customer["accessToken"])

    all_tickets = await client.get(f"{V1}/tickets/me", headers=headers)
    assert {t["id"] for t in all_tickets.json()} == {used["id"], unused["id"]}

    only_used = await client.get(f"{V1}/tickets/me", params={"filterByUse": "used"}, headers=headers)
    assert [t["id"] for t in only_used.json()] == [used["id"]]

    only_unused = await client.get(
        f"{V1}/tickets/me", params={"filterByUse": "unused"}, headers=headers
    )
    assert [t["id"] for t in only_unused.json()] == [unused["id"]]

    invalid = await client.get(f"{V1}/tickets/me", params={"filterByUse": "some"}, headers=headers)
    assert invalid.status_code == 400


@pytest.mark.asyncio
async def test_list_and_delete_tickets(client: AsyncClient, manager_token, customer):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])
    ticket = (await _buy(client, customer, session["id"])).json()

    forbidden = await client.get(f"{V1}/tickets", headers=bearer(customer["accessToken"]))
    assert forbidden.status_code == 403

    listing = await client.get(f"{V1}/tickets", headers=bearer(manager_token))
    assert [t["id"] for t in listing.json()] == [ticket["id"]]

    deleted = await client.delete(f"{V1}/tickets/{ticket['id']}", headers=bearer(manager_token))
    assert deleted.status_code == 204

    again = await client.delete(f"{V1}/tickets/{ticket['id']}", headers=bearer(manager_token))
    assert again.status_code == 404


@pytest.mark.asyncio
async def test_deleting_session_keeps_ticket(client: AsyncClient, manager_token, customer):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])
    ticket = (await _buy(client, customer, session["id"])).json()

    response = await client.delete(
        f"{V1}/movie-sessions/{session['id']}", headers=bearer(manager_token)
    )
    assert response.status_code == 204

    mine = await client.get(f"{V1}/tickets/me", headers=bearer(customer["accessToken"]))
    assert [(t["id"], t["sessionId"]) for t in mine.json()] == [(ticket["id"], None)]


@pytest.mark.asyncio
async def test_second_customer_can_buy_same_session(client: AsyncClient, manager_token, customer):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])
    other = await register(client, "c2")

    assert (await _buy(client, customer, session["id"])).status_code == 201
    assert (await _buy(client, other, session["id"])).status_code == 201
