"""End-to-end workflow over HTTP: JWT auth, GraphQL router, in-memory store."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app import create_app
from domain.shared.ports.people_directory import PatientSummary, StaffSummary
from infrastructure.directory.in_memory import InMemoryPeopleDirectory
from infrastructure.identity.jwt_provider import JwtAuthProvider
from infrastructure.persistence.in_memory.diet_chart_repository import (
    InMemoryDietChartRepository,
)

pytestmark = pytest.mark.integration

SECRET = "test-secret"


def token_for(staff_id: str, role: str) -> str:
    return jwt.encode(
        {
            "sub": staff_id,
            "role": role,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        SECRET,
        algorithm="HS256",
    )


@pytest.fixture
def http_app():
    directory = InMemoryPeopleDirectory(
        patients=[PatientSummary(id="patient-1", name="Ada Byron", room_number="12")],
        staff=[StaffSummary(id="pantry-1", name="Linus"), StaffSummary(id="runner-1", name="Ken")],
    )
    return create_app(
        repository=InMemoryDietChartRepository(),
        directory=directory,
        auth_provider=JwtAuthProvider(secret=SECRET),
        auth_required=True,
    )


@pytest_asyncio.fixture
async def client(http_app):
    transport = ASGITransport(app=http_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def graphql(client, staff_id, role, query, variables=None):
    response = await client.post(
        "/graphql",
        json={"query": query, "variables": variables or {}},
        headers={"Authorization": f"Bearer {token_for(staff_id, role)}"},
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_health_is_public(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_graphql_without_token_is_rejected(client):
    response = await client.post("/graphql", json={"query": "{ dietCharts { id } }"})

    assert response.status_code == 401
    assert response.json()["code"] == "UNAUTHENTICATED"


@pytest.mark.asyncio
async def test_meal_travels_from_kitchen_to_bedside(client):
    created = await graphql(
        client,
        "manager-1",
        "manager",
        """
        mutation {
          createDietChart(input: {
            patientId: "patient-1"
            date: "2026-10-19"
            meals: [{ type: LUNCH, ingredients: ["rice", "steamed fish"] }]
          }) {
            ... on DietChartSuccess { dietChart { id meals { id } } }
            ... on OperationError { code message }
          }
        }
        """,
    )
    chart = created["data"]["createDietChart"]["dietChart"]
    chart_id, meal_id = chart["id"], chart["meals"][0]["id"]

    status_mutation = """
    mutation Move($input: UpdateMealStatusInput!) {
      updateMealStatus(input: $input) {
        __typename
        ... on DietChartSuccess {
          dietChart { meals { preparationStatus assignedPantry { name } assignedDelivery { name } deliveryTime } }
        }
        ... on OperationError { code }
      }
    }
    """

    def move(status):
        return {"input": {"chartId": chart_id, "mealId": meal_id, "status": status}}

    for status in ("PREPARING", "READY"):
        result = await graphql(client, "pantry-1", "pantry", status_mutation, move(status))
        assert result["data"]["updateMealStatus"]["__typename"] == "DietChartSuccess"

    queue = await graphql(client, "runner-1", "delivery", "{ tasks { deliveryQueue { id } } }")
    assert queue["data"]["tasks"]["deliveryQueue"] == [{"id": chart_id}]

    delivered = await graphql(client, "runner-1", "delivery", status_mutation, move("DELIVERED"))
    meal = delivered["data"]["updateMealStatus"]["dietChart"]["meals"][0]
    assert meal["preparationStatus"] == "DELIVERED"
    assert meal["assignedPantry"] == {"name": "Linus"}
    assert meal["assignedDelivery"] == {"name": "Ken"}
    assert meal["deliveryTime"] is not None

    queue = await graphql(client, "runner-1", "delivery", "{ tasks { deliveryQueue { id } } }")
    assert queue["data"]["tasks"]["deliveryQueue"] == []

    done = await graphql(
        client, "runner-1", "delivery", "{ tasks { deliveryCompleted { id patient { name } } } }"
    )
    assert done["data"]["tasks"]["deliveryCompleted"] == [
        {"id": chart_id, "patient": {"name": "Ada Byron"}}
    ]


@pytest.mark.asyncio
async def test_second_pantry_member_cannot_take_over(client):
    created = await graphql(
        client,
        "manager-1",
        "manager",
        """
        mutation {
          createDietChart(input: {patientId: "patient-1", date: "2026-10-19",
                                  meals: [{ type: DINNER }]}) {
            ... on DietChartSuccess { dietChart { id meals { id } } }
          }
        }
        """,
    )
    chart = created["data"]["createDietChart"]["dietChart"]
    variables = {
        "input": {"chartId": chart["id"], "mealId": chart["meals"][0]["id"], "status": "PREPARING"}
    }
    mutation = """
    mutation Move($input: UpdateMealStatusInput!) {
      updateMealStatus(input: $input) { __typename ... on OperationError { code } }
    }
    """

    first = await graphql(client, "pantry-1", "pantry", mutation, variables)
    second = await graphql(client, "pantry-2", "pantry", mutation, variables)

    assert first["data"]["updateMealStatus"]["__typename"] == "DietChartSuccess"
    assert second["data"]["updateMealStatus"] == {"__typename": "OperationError", "code": "FORBIDDEN"}
