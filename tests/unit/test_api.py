from collections.abc import Iterator
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient
from yarl import URL

from taskweb.app_factory import create_app
from taskweb.auth.dependencies import auth_required
from taskweb.auth.models import OBJECT_ID_CLAIM_TYPE, Claim, Principal
from taskweb.config import AuthConfig, B2CConfig, Config
from taskweb.graph.client import B2CGraphClient
from taskweb.graph.errors import GraphApiError, GraphAuthError
from taskweb.graph.models import Group


@pytest.fixture
def config() -> Config:
    return Config(
        b2c=B2CConfig(
            client_id="graph-client-id",
            client_secret="graph-client-secret",
            tenant="contoso.onmicrosoft.com",
        ),
        auth=AuthConfig(
            jwks_url=URL("https://contoso.b2clogin.com/discovery/v2.0/keys"),
            issuer="https://contoso.b2clogin.com/tenant-id/v2.0/",
            audience="web-app-client-id",
        ),
    )


@pytest.fixture
def principal() -> Principal:
    return Principal(
        claims=(
            Claim(type="tfp", value="B2C_1_signin"),
            Claim(type=OBJECT_ID_CLAIM_TYPE, value="user-1"),
        )
    )


@pytest.fixture
def mock_graph_client() -> AsyncMock:
    mock_client = AsyncMock(spec=B2CGraphClient)
    mock_client.get_user_groups.return_value = [
        Group(object_id="g1", display_name="Readers"),
        Group(object_id="g2", display_name="Writers"),
    ]
    return mock_client


@pytest.fixture
def app_client(
    config: Config, principal: Principal, mock_graph_client: AsyncMock
) -> Iterator[TestClient]:
    with (
        patch("taskweb.lifespan.GraphTokenProvider"),
        patch("taskweb.lifespan.B2CGraphClient") as mock_graph_client_class,
    ):
        mock_graph_client_class.return_value = mock_graph_client

        app = create_app(config)

        async def mock_auth_required() -> Principal:
            return principal

        app.dependency_overrides[auth_required] = mock_auth_required

        with TestClient(app) as client:
            yield client


def test_ping_endpoint(app_client: TestClient) -> None:
    response = app_client.get("/ping")
    assert response.status_code == 200
    assert response.text == "Pong"


def test_index_endpoint(app_client: TestClient) -> None:
    response = app_client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_error_endpoint(app_client: TestClient) -> None:
    response = app_client.get("/error", params={"message": "Sign-in was cancelled"})
    assert response.status_code == 200
    assert response.json() == {"message": "Sign-in was cancelled"}


def test_claims_endpoint(app_client: TestClient, mock_graph_client: AsyncMock) -> None:
    response = app_client.get("/claims")

    assert response.status_code == 200
    assert response.json() == {
        "message": "Your application description page.",
        "claims": [
            {"type": "tfp", "value": "B2C_1_signin"},
            {"type": OBJECT_ID_CLAIM_TYPE, "value": "user-1"},
            {"type": "USER_GROUPS", "value": "Readers Writers"},
        ],
    }
    mock_graph_client.get_user_groups.assert_called_once_with("user-1")


def test_claims_endpoint_without_object_id(
    app_client: TestClient, principal: Principal, mock_graph_client: AsyncMock
) -> None:
    async def anonymous_principal() -> Principal:
        return Principal(claims=(Claim(type="tfp", value="B2C_1_signin"),))

    app_client.app.dependency_overrides[auth_required] = anonymous_principal  # type: ignore[attr-defined]

    response = app_client.get("/claims")

    assert response.status_code == 200
    assert response.json()["claims"] == [{"type": "tfp", "value": "B2C_1_signin"}]
    mock_graph_client.get_user_groups.assert_not_called()


def test_claims_endpoint_directory_error(
    app_client: TestClient, mock_graph_client: AsyncMock
) -> None:
    mock_graph_client.get_user_groups.side_effect = GraphApiError(
        status=403, body={"odata.error": {"code": "Authorization_RequestDenied"}}
    )

    response = app_client.get("/claims")

    assert response.status_code == 502
    assert response.json() == {
        "detail": {"message": "Error calling the directory service", "status": 403}
    }


def test_claims_endpoint_token_error(
    app_client: TestClient, mock_graph_client: AsyncMock
) -> None:
    mock_graph_client.get_user_groups.side_effect = GraphAuthError("invalid_client")

    response = app_client.get("/claims")

    assert response.status_code == 502
    assert response.json()["detail"]["status"] is None


def test_claims_endpoint_requires_token(config: Config) -> None:
    with (
        patch("taskweb.lifespan.GraphTokenProvider"),
        patch("taskweb.lifespan.B2CGraphClient"),
    ):
        with TestClient(create_app(config)) as client:
            response = client.get("/claims")

    assert response.status_code == 401
    assert response.json() == {"detail": {"message": "Unauthorized"}}
