"""Tests for the author endpoints."""

import pytest


# --- create / read ---

@pytest.mark.asyncio
async def test_create_and_list_authors(client, author, make_author):
    assert author["name"] == "Frank Herbert"
    assert author["email"] == "frank@dune.org"
    assert isinstance(author["id"], int)

    await make_author("George Orwell", "george@animalfarm.org")

    resp = await client.get("/authors")
    assert resp.status_code == 200
    authors = resp.json()
    assert [a["name"] for a in authors] == ["Frank Herbert", "George Orwell"]


@pytest.mark.asyncio
async def test_get_author(client, author):
    resp = await client.get(f"/authors/{author['id']}")
    assert resp.status_code == 200
    assert resp.json() == author


@pytest.mark.asyncio
async def test_get_author_not_found(client):
    resp = await client.get("/authors/9999")
    assert resp.status_code == 404
    body = resp.json()
    assert body["error"] == "NotFound"
    assert body["resource"] == "Author"
    assert body["field"] == "id"
    assert body["value"] == 9999


@pytest.mark.asyncio
async def test_create_author_duplicate_email(client, make_author):
    await make_author()

    resp = await client.post("/authors", json={"name": "Someone Else", "email": "frank@dune.org"})
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "Conflict"
    assert body["field"] == "email"
    assert body["value"] == "frank@dune.org"

    resp = await client.get("/authors")
    assert len(resp.json()) == 1


@pytest.mark.asyncio
async def test_create_author_blank_name(client):
    resp = await client.post("/authors", json={"name": "   ", "email": "x@y.org"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "InvalidArgument"
    assert body["field"] == "name"


@pytest.mark.asyncio
async def test_create_author_missing_email(client):
    resp = await client.post("/authors", json={"name": "Nobody"})
    assert resp.status_code == 400
    body = resp.json()
    assert body["error"] == "InvalidArgument"
    assert body["field"] == "email"


# --- update ---

@pytest.mark.asyncio
async def test_update_author(client, author):
    resp = await client.put(
        f"/authors/{author['id']}", json={"name": "Frank P. Herbert", "email": "fph@dune.org"}
    )
    assert resp.status_code == 200
    assert resp.json() == {"id": author["id"], "name": "Frank P. Herbert", "email": "fph@dune.org"}


@pytest.mark.asyncio
async def test_update_author_keeping_own_email(client, author):
    resp = await client.put(
        f"/authors/{author['id']}", json={"name": "F. Herbert", "email": "frank@dune.org"}
    )
    assert resp.status_code == 200
    assert resp.json()["name"] == "F. Herbert"


@pytest.mark.asyncio
async def test_update_author_email_conflict(client, make_author):
    await make_author()
    other = await make_author("George Orwell", "george@animalfarm.org")

    resp = await client.put(
        f"/authors/{other['id']}", json={"name": "George Orwell", "email": "frank@dune.org"}
    )
    assert resp.status_code == 409

    resp = await client.get(f"/authors/{other['id']}")
    assert resp.json()["email"] == "george@animalfarm.org"


@pytest.mark.asyncio
async def test_update_author_not_found(client):
    resp = await client.put("/authors/9999", json={"name": "Ghost", "email": "ghost@nowhere.org"})
    assert resp.status_code == 404


# --- delete ---

@pytest.mark.asyncio
async def test_delete_author(client, author):
    resp = await client.delete(f"/authors/{author['id']}")
    assert resp.status_code == 204

    resp = await client.get(f"/authors/{author['id']}")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_delete_author_not_found(client, make_author):
    await make_author()

    resp = await client.delete("/authors/9999")
    assert resp.status_code == 404

    resp = await client.get("/authors")
    assert len(resp.json()) == 1


@pytest.mark.asyncio
async def test_delete_author_with_books_is_rejected(client, author, make_book):
    await make_book(author["id"])

    resp = await client.delete(f"/authors/{author['id']}")
    assert resp.status_code == 409
    body = resp.json()
    assert body["error"] == "Conflict"
    assert body["field"] == "books"
    assert body["value"] == 1

    resp = await client.get(f"/authors/{author['id']}")
    assert resp.status_code == 200


# --- author's books ---

@pytest.mark.asyncio
async def test_list_author_books(client, make_author, make_book):
    herbert = await make_author()
    orwell = await make_author("George Orwell", "george@animalfarm.org")
    await make_book(herbert["id"], "Dune", "isbn-1")
    await make_book(orwell["id"], "1984", "isbn-2")
    await make_book(herbert["id"], "Dune Messiah", "isbn-3")

    resp = await client.get(f"/authors/{herbert['id']}/books", params={"sortBy": "title"})
    assert resp.status_code == 200
    body = resp.json()
    assert [b["title"] for b in body["books"]] == ["Dune", "Dune Messiah"]
    assert body["totalItems"] == 2
    assert body["totalPages"] == 1
    assert all(b["author"]["id"] == herbert["id"] for b in body["books"])


@pytest.mark.asyncio
async def test_list_author_books_author_not_found(client):
    resp = await client.get("/authors/9999/books")
    assert resp.status_code == 404
