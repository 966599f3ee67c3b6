"""End-to-end join request flow against a real database."""

import asyncio

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.models import Collaboration, JoinRequest
from tests.helpers import auth_headers

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

API = "/api/v1"


async def _create_project(client: AsyncClient, owner, **fields) -> dict:
    payload = {
        "title": "Hub",
        "description": "A place to find collaborators",
        "domain": "Web",
        "tech_stack": ["Python"],
        "looking_for_contributors": True,
    }
    payload.update(fields)
    response = await client.post(f"{API}/projects", json=payload, headers=auth_headers(owner.id))
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def _request_to_join(client: AsyncClient, requester, owner_username="alice", slug="hub"):
    return await client.post(
        f"{API}/projects/{owner_username}/{slug}/join-requests",
        json={"message": "I'd love to help", "role_requested": "Backend"},
        headers=auth_headers(requester.id),
    )


async def test_request_approve_and_appear_as_contributor(
    client: AsyncClient, db_session: AsyncSession, alice, bob
) -> None:
    project = await _create_project(client, alice)

    response = await _request_to_join(client, bob)
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert body["data"]["status"] == "pending"
    request_id = body["data"]["id"]

    duplicate = await _request_to_join(client, bob)
    assert duplicate.status_code == 409
    assert duplicate.json()["success"] is False

    incoming = await client.get(f"{API}/join-requests/incoming", headers=auth_headers(alice.id))
    items = incoming.json()["data"]["items"]
    assert [item["id"] for item in items] == [request_id]
    assert items[0]["requester"]["username"] == "bob"

    response = await client.post(
        f"{API}/join-requests/{request_id}/respond",
        json={"action": "accept"},
        headers=auth_headers(alice.id),
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "approved"
    assert response.json()["data"]["collaboration_id"] is not None

    again = await client.post(
        f"{API}/join-requests/{request_id}/respond",
        json={"action": "reject"},
        headers=auth_headers(alice.id),
    )
    assert again.status_code == 400

    page = await client.get(f"{API}/projects/alice/hub")
    contributors = page.json()["data"]["contributors"]
    assert [c["username"] for c in contributors] == ["bob"]
    assert contributors[0]["role"] == "Backend"

    contributed = await client.get(f"{API}/projects/contributed", headers=auth_headers(bob.id))
    assert [p["id"] for p in contributed.json()["data"]["projects"]] == [project["id"]]

    rejoin = await _request_to_join(client, bob)
    assert rejoin.status_code == 409

    notifications = await client.get(f"{API}/notifications", headers=auth_headers(bob.id))
    items = notifications.json()["data"]["items"]
    assert "request_approved" in [n["type"] for n in items]

    approved = next(n for n in items if n["type"] == "request_approved")
    marked = await client.post(
        f"{API}/notifications/{approved['id']}/read", headers=auth_headers(bob.id)
    )
    assert marked.status_code == 200

    unread = await client.get(
        f"{API}/notifications", params={"unread_only": "true"}, headers=auth_headers(bob.id)
    )
    assert approved["id"] not in [n["id"] for n in unread.json()["data"]["items"]]

    # Bob's notification is not Alice's to mark
    foreign = await client.post(
        f"{API}/notifications/{approved['id']}/read", headers=auth_headers(alice.id)
    )
    assert foreign.status_code == 404


async def test_concurrent_approvals_create_one_collaboration(
    client: AsyncClient, db_session: AsyncSession, alice, bob
) -> None:
    await _create_project(client, alice)
    request_id = (await _request_to_join(client, bob)).json()["data"]["id"]

    responses = await asyncio.gather(
        *[
            client.post(
                f"{API}/join-requests/{request_id}/respond",
                json={"action": "accept"},
                headers=auth_headers(alice.id),
            )
            for _ in range(3)
        ]
    )

    assert sorted(r.status_code for r in responses) == [200, 400, 400]
    count = await db_session.scalar(
        select(func.count()).select_from(Collaboration).where(Collaboration.collaborator_id == bob.id)
    )
    assert count == 1


async def test_closed_project_rejects_requests(client: AsyncClient, alice, bob) -> None:
    await _create_project(client, alice, looking_for_contributors=False)

    response = await _request_to_join(client, bob)

    assert response.status_code == 400
    assert "not accepting contributors" in response.json()["message"]


async def test_only_owner_can_respond(client: AsyncClient, alice, bob, carol) -> None:
    await _create_project(client, alice)
    request_id = (await _request_to_join(client, bob)).json()["data"]["id"]

    response = await client.post(
        f"{API}/join-requests/{request_id}/respond",
        json={"action": "accept"},
        headers=auth_headers(carol.id),
    )

    assert response.status_code == 403


async def test_cancel_then_request_again(
    client: AsyncClient, db_session: AsyncSession, alice, bob
) -> None:
    await _create_project(client, alice)
    request_id = (await _request_to_join(client, bob)).json()["data"]["id"]

    cancelled = await client.post(
        f"{API}/join-requests/{request_id}/cancel", headers=auth_headers(bob.id)
    )
    assert cancelled.status_code == 200
    assert cancelled.json()["data"]["status"] == "cancelled"

    retry = await _request_to_join(client, bob)
    assert retry.status_code == 201

    outgoing = await client.get(f"{API}/join-requests/outgoing", headers=auth_headers(bob.id))
    statuses = [item["status"] for item in outgoing.json()["data"]["items"]]
    assert statuses == ["pending", "cancelled"]

    rows = await db_session.scalar(
        select(func.count()).select_from(JoinRequest).where(JoinRequest.requester_id == bob.id)
    )
    assert rows == 2


async def test_owner_cannot_request_own_project(client: AsyncClient, alice) -> None:
    await _create_project(client, alice)

    response = await _request_to_join(client, alice)

    assert response.status_code == 400


async def test_unknown_project_and_anonymous(client: AsyncClient, alice, bob) -> None:
    missing = await _request_to_join(client, bob, slug="nope")
    assert missing.status_code == 404

    anonymous = await client.post(f"{API}/projects/alice/hub/join-requests", json={})
    assert anonymous.status_code == 401
