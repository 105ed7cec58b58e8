"""Integration tests for pet endpoints."""
import pytest
from httpx import AsyncClient

from petshop.models.adoption_application import AdoptionApplication
from petshop.models.pet import Pet, PetStatus
from petshop.models.user import User


class TestPetBrowsing:
    """Public pet listing and detail."""

    @pytest.mark.asyncio
    async def test_list_pets_without_authentication(
        self,
        unauthenticated_client: AsyncClient,
        make_pet,
    ):
        await make_pet(name="Max")
        await make_pet(name="Bella", species="cat")

        response = await unauthenticated_client.get("/api/pets/")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Bella", "Max"]

    @pytest.mark.asyncio
    async def test_list_pets_filters_by_status_and_species(
        self,
        async_client: AsyncClient,
        make_pet,
    ):
        await make_pet(name="Max")
        await make_pet(name="Bella", species="cat")
        await make_pet(name="Rocky", status=PetStatus.ADOPTED)

        available = await async_client.get("/api/pets/", params={"status": "available"})
        cats = await async_client.get("/api/pets/", params={"species": "cat"})

        assert {p["name"] for p in available.json()} == {"Max", "Bella"}
        assert [p["name"] for p in cats.json()] == ["Bella"]

    @pytest.mark.asyncio
    async def test_list_pets_newest_first(self, async_client: AsyncClient, make_pet):
        await make_pet(name="Alpha")
        await make_pet(name="Zulu")

        response = await async_client.get("/api/pets/", params={"sort": "newest"})

        assert [p["name"] for p in response.json()] == ["Zulu", "Alpha"]

    @pytest.mark.asyncio
    async def test_list_pets_rejects_unknown_status(self, async_client: AsyncClient):
        response = await async_client.get("/api/pets/", params={"status": "sold"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_list_pets_pagination(self, async_client: AsyncClient, make_pet):
        for name in ["A", "B", "C"]:
            await make_pet(name=name)

        response = await async_client.get("/api/pets/", params={"skip": 1, "limit": 1})

        assert [p["name"] for p in response.json()] == ["B"]

    @pytest.mark.asyncio
    async def test_limit_above_maximum_is_rejected(self, async_client: AsyncClient):
        response = await async_client.get("/api/pets/", params={"limit": 1000})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_get_pet(self, async_client: AsyncClient, test_pet: Pet):
        response = await async_client.get(f"/api/pets/{test_pet.id}")

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Buddy"
        assert data["breed"] == "Golden Retriever"
        assert data["status"] == "available"


class TestPetAdministration:
    """Admin-only pet management."""

    @pytest.mark.asyncio
    async def test_admin_creates_pet(
        self,
        async_client: AsyncClient,
        acting_user,
        admin_user: User,
    ):
        acting_user.switch(admin_user)

        response = await async_client.post(
            "/api/pets/",
            json={"name": "Luna", "species": "cat", "breed": "Siamese", "age": 2},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] > 0
        assert data["status"] == "available"
        assert data["breed"] == "Siamese"

    @pytest.mark.asyncio
    async def test_regular_user_cannot_create_pet(self, async_client: AsyncClient):
        response = await async_client.post("/api/pets/", json={"name": "Luna", "species": "cat"})

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unauthenticated_cannot_create_pet(self, unauthenticated_client: AsyncClient):
        response = await unauthenticated_client.post(
            "/api/pets/", json={"name": "Luna", "species": "cat"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_admin_updates_only_given_fields(
        self,
        async_client: AsyncClient,
        acting_user,
        admin_user: User,
        test_pet: Pet,
    ):
        acting_user.switch(admin_user)

        response = await async_client.put(f"/api/pets/{test_pet.id}", json={"age": 4})

        assert response.status_code == 200
        data = response.json()
        assert data["age"] == 4
        assert data["name"] == "Buddy"
        assert data["breed"] == "Golden Retriever"

    @pytest.mark.asyncio
    async def test_admin_status_override_leaves_applications_alone(
        self,
        async_client: AsyncClient,
        acting_user,
        test_user: User,
        admin_user: User,
        test_pet: Pet,
        fresh,
    ):
        pet_id = test_pet.id
        created = await async_client.post(f"/api/pets/{pet_id}/adopt", json={})
        application_id = created.json()["id"]

        acting_user.switch(admin_user)
        response = await async_client.put(f"/api/pets/{pet_id}", json={"status": "adopted"})

        assert response.status_code == 200
        assert response.json()["status"] == "adopted"
        application = await fresh(AdoptionApplication, application_id)
        assert application.status == "pending"

    @pytest.mark.asyncio
    async def test_update_missing_pet_returns_404(
        self,
        async_client: AsyncClient,
        acting_user,
        admin_user: User,
    ):
        acting_user.switch(admin_user)

        response = await async_client.put("/api/pets/999999", json={"age": 1})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_admin_deletes_pet_and_its_applications(
        self,
        async_client: AsyncClient,
        acting_user,
        admin_user: User,
        test_pet: Pet,
        fresh,
    ):
        pet_id = test_pet.id
        created = await async_client.post(f"/api/pets/{pet_id}/adopt", json={})
        application_id = created.json()["id"]

        acting_user.switch(admin_user)
        response = await async_client.delete(f"/api/pets/{pet_id}")

        assert response.status_code == 204
        assert await fresh(Pet, pet_id) is None
        assert await fresh(AdoptionApplication, application_id) is None
