"""MOCI Routes — login proxy and bearer pass-through lookups.

Tests cover:
    - Every lookup without / with malformed Authorization → 401, nothing forwarded
    - Forwarded request carries exactly the caller's token and the CR number
    - Each lookup maps to its own upstream segment
    - Upstream body returned unmodified; upstream 5xx / transport error → 500
    - Login forwards the JSON body without credentials
"""

import json

import httpx
import pytest

from gateway.core.route_table import MOCI_LOOKUPS

LOOKUP_NAMES = sorted(MOCI_LOOKUPS)


@pytest.mark.parametrize("name", LOOKUP_NAMES)
@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Basic dXNlcjpwYXNz"},
        {"Authorization": "Bearer "},
        {"Authorization": "bearer abc"},
    ],
)
async def test_lookup_without_bearer_returns_401(client, upstream, name, headers):
    res = await client.get(f"/api/v1/moci/{name}/1234567", headers=headers)
    assert res.status_code == 401
    assert res.json() == {"error": "Missing or invalid Authorization header"}
    assert upstream["rest"] == []


@pytest.mark.parametrize("name", LOOKUP_NAMES)
async def test_lookup_forwards_token_unchanged(client, upstream, name):
    token = "eyJhbGciOiJIUzI1NiJ9.payload.sig-_~"
    res = await client.get(
        f"/api/v1/moci/{name}/1234567",
        headers={"Authorization": f"Bearer {token}"},
    )

    assert res.status_code == 200
    forwarded = upstream["rest"][0]
    assert forwarded.method == "GET"
    assert forwarded.headers["authorization"] == f"Bearer {token}"
    assert forwarded.headers["content-type"] == "application/json"
    assert forwarded.url.path.endswith("/" + MOCI_LOOKUPS[name].segment)
    assert forwarded.url.params["CRNumber"] == "1234567"


async def test_lookup_returns_upstream_body_unmodified(client, upstream):
    payload = b'{"CRNumber":"1234567","Companies":[{"Name":"Al Noor LLC"}]}'
    upstream["rest_handler"] = lambda request: httpx.Response(
        200, content=payload, headers={"content-type": "application/json; charset=utf-8"},
    )
    res = await client.get(
        "/api/v1/moci/search-company/1234567",
        headers={"Authorization": "Bearer t0k"},
    )
    assert res.status_code == 200
    assert res.content == payload


async def test_lookup_upstream_5xx_returns_500(client, upstream):
    upstream["rest_handler"] = lambda request: httpx.Response(503, text="down")
    res = await client.get(
        "/api/v1/moci/get-company-data/1234567",
        headers={"Authorization": "Bearer t0k"},
    )
    assert res.status_code == 500
    assert "503" in res.json()["error"]


async def test_lookup_transport_error_returns_500(client, upstream):
    def refuse(request):
        raise httpx.ConnectError("Connection refused", request=request)

    upstream["rest_handler"] = refuse
    res = await client.get(
        "/api/v1/moci/get-declared-activities/1234567",
        headers={"Authorization": "Bearer t0k"},
    )
    assert res.status_code == 500
    assert res.json() == {"error": "Error : Connection refused"}


async def test_unknown_lookup_is_not_routed(client, upstream):
    res = await client.get(
        "/api/v1/moci/delete-company/1234567",
        headers={"Authorization": "Bearer t0k"},
    )
    assert res.status_code == 404
    assert res.json() == {"error": "Not Found"}
    assert upstream["rest"] == []


async def test_login_forwards_body_without_credentials(client, upstream):
    upstream["rest_handler"] = lambda request: httpx.Response(
        200, json={"token": "issued"},
    )
    res = await client.post(
        "/api/v1/moci/login", json={"UserName": "inspector", "Password": "pw"},
    )

    assert res.status_code == 200
    assert res.json() == {"token": "issued"}
    forwarded = upstream["rest"][0]
    assert forwarded.method == "POST"
    assert forwarded.url.path.endswith("/Login")
    assert "authorization" not in forwarded.headers
    assert json.loads(forwarded.content) == {"UserName": "inspector", "Password": "pw"}
