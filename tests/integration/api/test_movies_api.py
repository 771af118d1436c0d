import pytest
from httpx import AsyncClient

from tests.integration.helpers import V1, bearer, create_movie, create_session


@pytest.mark.asyncio
async def test_create_movie(client: AsyncClient, manager_token):
    response = await client.post(
        f"{V1}/movies",
        json={"title": "X", "ageRestriction": 10},
        headers=bearer(manager_token),
    )

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["title"] == "X"
    assert data["ageRestriction"] == 10
    assert "createdAt" in data and "updatedAt" in data


@pytest.mark.asyncio
async def test_create_movie_requires_manager(client: AsyncClient, customer_token):
    response = await client.post(
        f"{V1}/movies",
        json={"title": "X", "ageRestriction": 10},
        headers=bearer(customer_token),
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


@pytest.mark.asyncio
async def test_movies_require_authentication(client: AsyncClient):
    response = await client.get(f"{V1}/movies")

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_create_movie_invalid_data(client: AsyncClient, manager_token, test_data):
    for movie in test_data.get_copy("invalid_movies"):
        response = await client.post(f"{V1}/movies", json=movie, headers=bearer(manager_token))

        assert response.status_code == 400, movie
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_create_movie_duplicate_title(client: AsyncClient, manager_token):
    await create_movie(client, manager_token, title="X")

    response = await client.post(
        f"{V1}/movies",
        json={"title": "X", "ageRestriction": 12},
        headers=bearer(manager_token),
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "MOVIE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_list_movies_filters_sorts_and_paginates(
    client: AsyncClient, manager_token, customer_token, test_data
):
    for movie in test_data.get_copy("movies"):
        await create_movie(client, manager_token, movie["title"], movie["ageRestriction"])
    headers = bearer(customer_token)

    response = await client.get(f"{V1}/movies", params={"title": "matrix"}, headers=headers)
    assert response.status_code == 200
    assert sorted(m["title"] for m in response.json()["movies"]) == [
        "Matrix Reloaded",
        "The Matrix",
    ]

    response = await client.get(f"{V1}/movies", params={"ageRestriction": 16}, headers=headers)
    assert {m["title"] for m in response.json()["movies"]} == {
        "The Matrix",
        "Matrix Reloaded",
        "Alien",
    }

    response = await client.get(
        f"{V1}/movies",
        params={"sort": "title", "order": "desc", "page": 2, "perPage": 3},
        headers=headers,
    )
    data = response.json()
    assert [m["title"] for m in data["movies"]] == ["Alien"]
    assert data["meta"] == {
        "currentPage": 2,
        "totalPages": 2,
        "totalItems": 4,
        "perPage": 3,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params",
    [{"page": 0}, {"perPage": 101}, {"sort": "rating"}, {"order": "up"}, {"ageRestriction": -1}],
)
async def test_list_movies_rejects_bad_query(client: AsyncClient, customer_token, params):
    response = await client.get(f"{V1}/movies", params=params, headers=bearer(customer_token))

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_list_movies_is_cached_and_cleared_on_write(
    client: AsyncClient, manager_token, cache
):
    headers = bearer(manager_token)
    first = await client.get(f"{V1}/movies", headers=headers)
    assert first.json()["meta"]["totalItems"] == 0
    assert len(cache) == 1

    await create_movie(client, manager_token, title="Fresh")
    assert len(cache) == 0

    second = await client.get(f"{V1}/movies", headers=headers)
    assert [m["title"] for m in second.json()["movies"]] == ["Fresh"]


@pytest.mark.asyncio
async def test_get_movie_includes_sessions(client: AsyncClient, manager_token, customer_token):
    movie = await create_movie(client, manager_token)
    session = await create_session(client, manager_token, movie["id"])

    response = await client.get(f"{V1}/movies/{movie['id']}", headers=bearer(customer_token))

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "X"
    assert [s["id"] for s in data["sessions"]] == [session["id"]]


@pytest.mark.asyncio
async def test_get_movie_not_found(client: AsyncClient, customer_token):
    response = await client.get(
        f"{V1}/movies/00000000-0000-4000-8000-000000000000", headers=bearer(customer_token)
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "MOVIE_NOT_FOUND"


@pytest.mark.asyncio
async def test_get_movie_invalid_id(client: AsyncClient, customer_token):
    response = await client.get(f"{V1}/movies/not-a-uuid", headers=bearer(customer_token))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_movie(client: AsyncClient, manager_token):
    movie = await create_movie(client, manager_token)

    response = await client.patch(
        f"{V1}/movies/{movie['id']}",
        json={"ageRestriction": 18},
        headers=bearer(manager_token),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "X"
    assert data["ageRestriction"] == 18


@pytest.mark.asyncio
async def test_update_movie_conflicts_and_errors(client: AsyncClient, manager_token):
    headers = bearer(manager_token)
    movie = await create_movie(client, manager_token, title="X")
    await create_movie(client, manager_token, title="Y")

    clash = await client.patch(f"{V1}/movies/{movie['id']}", json={"title": "Y"}, headers=headers)
    assert clash.status_code == 409
    assert clash.json()["error"]["code"] == "MOVIE_ALREADY_EXISTS"

    invalid = await client.patch(
        f"{V1}/movies/{movie['id']}", json={"ageRestriction": 30}, headers=headers
    )
    assert invalid.status_code == 400

    missing = await client.patch(
        f"{V1}/movies/00000000-0000-4000-8000-000000000000", json={"title": "Z"}, headers=headers
    )
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_delete_movie_cascades_sessions(client: AsyncClient, manager_token):
    headers = bearer(manager_token)
    movie = await create_movie(client, manager_token)
    await create_session(client, manager_token, movie["id"])

    response = await client.delete(f"{V1}/movies/{movie['id']}", headers=headers)
    assert response.status_code == 204

    assert (await client.get(f"{V1}/movies/{movie['id']}", headers=headers)).status_code == 404
    sessions = await client.get(f"{V1}/movie-sessions", headers=headers)
    assert sessions.json()["meta"]["totalItems"] == 0


@pytest.mark.asyncio
async def test_bulk_create_movies(client: AsyncClient, manager_token, test_data):
    movies = test_data.get_copy("movies")

    response = await client.post(
        f"{V1}/movies/bulk", json={"movies": movies}, headers=bearer(manager_token)
    )

    assert response.status_code == 201
    assert [m["title"] for m in response.json()] == [m["title"] for m in movies]


@pytest.mark.asyncio
async def test_bulk_create_movies_is_all_or_nothing(client: AsyncClient, manager_token):
    headers = bearer(manager_token)
    batch = [
        {"title": "One", "ageRestriction": 0},
        {"title": "Two", "ageRestriction": 0},
        {"title": "One", "ageRestriction": 12},
    ]

    response = await client.post(f"{V1}/movies/bulk", json={"movies": batch}, headers=headers)

    assert response.status_code == 409
    listing = await client.get(f"{V1}/movies", headers=headers)
    assert listing.json()["meta"]["totalItems"] == 0


@pytest.mark.asyncio
async def test_bulk_delete_movies(client: AsyncClient, manager_token):
    headers = bearer(manager_token)
    one = await create_movie(client, manager_token, title="One")
    two = await create_movie(client, manager_token, title="Two")

    missing = await client.request(
        "DELETE",
        f"{V1}/movies/bulk",
        json={"movieIds": [one["id"], "00000000-0000-4000-8000-000000000000"]},
        headers=headers,
    )
    assert missing.status_code == 404
    assert (await client.get(f"{V1}/movies/{one['id']}", headers=headers)).status_code == 200

    response = await client.request(
        "DELETE", f"{V1}/movies/bulk", json={"movieIds": [one["id"], two["id"]]}, headers=headers
    )
    assert response.status_code == 204
    listing = await client.get(f"{V1}/movies", headers=headers)
    assert listing.json()["meta"]["totalItems"] == 0


@pytest.mark.asyncio
async def test_title_filter_treats_wildcards_literally(
    client: AsyncClient, manager_token, customer_token
):
    await create_movie(client, manager_token, title="100% Wolf")
    await create_movie(client, manager_token, title="Toy Story")
    headers = bearer(customer_token)

    percent = await client.get(f"{V1}/movies", params={"title": "%"}, headers=headers)
    underscore = await client.get(f"{V1}/movies", params={"title": "_"}, headers=headers)

    assert [m["title"] for m in percent.json()["movies"]] == ["100% Wolf"]
    assert underscore.json()["movies"] == []
    assert underscore.json()["meta"]["totalItems"] == 0


@pytest.mark.asyncio
async def test_unknown_query_parameters_share_one_cache_entry(
    client: AsyncClient, customer_token, cache
):
    headers = bearer(customer_token)

    for n in range(5):
        response = await client.get(f"{V1}/movies", params={"x": f"noise-{n}"}, headers=headers)
        assert response.status_code == 200
    await client.get(f"{V1}/movies", params={"page": 1, "order": "asc"}, headers=headers)

    assert len(cache) == 1

    await client.get(f"{V1}/movies", params={"page": 2}, headers=headers)
    assert len(cache) == 2
