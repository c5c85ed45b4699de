"""
Unit tests for InMemoryRepository.

Tests the repository contract shared with MongoRepository.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from bson import ObjectId

from tagger_backend.models import Driver, Service, User, Vehicle
from tagger_backend.repositories import InMemoryRepository


def make_user(name: str = "Mehmet Demir") -> User:
    return User(name=name, email="mehmet@example.com", phone="5559876543")


@pytest.fixture
def users():
    return InMemoryRepository(User)


class TestAdd:
    """Test entity creation."""

    @pytest.mark.asyncio
    async def test_assigns_object_id(self, users):
        user = make_user()
        user_id = await users.add(user)

        assert ObjectId.is_valid(user_id)
        assert user.id == user_id
        assert len(users) == 1

    @pytest.mark.asyncio
    async def test_discards_client_id(self, users):
        user = make_user()
        user.id = "000000000000000000000000"

        user_id = await users.add(user)

        assert user_id != "000000000000000000000000"

    @pytest.mark.asyncio
    async def test_add_then_get(self, users):
        user = make_user()
        user_id = await users.add(user)

        fetched = await users.get(user_id)

        assert fetched == user

    @pytest.mark.asyncio
    async def test_ids_are_unique(self, users):
        ids = {await users.add(make_user(f"user {i}")) for i in range(10)}
        assert len(ids) == 10


class TestGet:
    """Test single lookups."""

    @pytest.mark.asyncio
    async def test_missing(self, users):
        assert await users.get(str(ObjectId())) is None

    @pytest.mark.asyncio
    async def test_non_hex_id(self, users):
        assert await users.get("zzzzzzzzzzzzzzzzzzzzzzzz") is None

    @pytest.mark.asyncio
    async def test_returns_copies(self, users):
        user_id = await users.add(make_user())

        fetched = await users.get(user_id)
        fetched.name = "changed"

        assert (await users.get(user_id)).name == "Mehmet Demir"


class TestListAll:
    """Test listing."""

    @pytest.mark.asyncio
    async def test_empty(self, users):
        assert await users.list_all() == []

    @pytest.mark.asyncio
    async def test_count_after_adds_and_deletes(self, users):
        ids = [await users.add(make_user(f"user {i}")) for i in range(5)]
        for user_id in ids[:2]:
            await users.delete(user_id)

        assert len(await users.list_all()) == 3


class TestReplace:
    """Test full replacement."""

    @pytest.mark.asyncio
    async def test_replace_existing(self, users):
        user_id = await users.add(make_user())
        replacement = make_user("Zeynep Kaya")

        assert await users.replace(user_id, replacement) is True

        fetched = await users.get(user_id)
        assert fetched.name == "Zeynep Kaya"
        assert fetched.id == user_id
        assert replacement.id == user_id

    @pytest.mark.asyncio
    async def test_replace_missing(self, users):
        assert await users.replace("000000000000000000000000", make_user()) is False
        assert len(users) == 0

    @pytest.mark.asyncio
    async def test_replace_drops_omitted_fields(self):
        drivers = InMemoryRepository(Driver)
        driver = Driver(
            name="Ayşe",
            email="ayse@example.com",
            phone="555",
            license_number="34ABC123",
            license_class="B",
            license_expiry_date=datetime(2030, 1, 1, tzinfo=timezone.utc),
            location={"coordinates": [32.85, 39.93]},
        )
        driver_id = await drivers.add(driver)

        replacement = driver.model_copy(update={"location": None})
        await drivers.replace(driver_id, replacement)

        assert (await drivers.get(driver_id)).location is None


class TestDelete:
    """Test deletion."""

    @pytest.mark.asyncio
    async def test_delete_is_not_repeatable(self, users):
        user_id = await users.add(make_user())

        assert await users.delete(user_id) is True
        assert await users.delete(user_id) is False
        assert await users.get(user_id) is None

    @pytest.mark.asyncio
    async def test_clear(self, users):
        await users.add(make_user())
        users.clear()
        assert len(users) == 0


class TestStoreParity:
    """Ids and documents are handled the way MongoDB handles them."""

    @pytest.mark.asyncio
    async def test_uppercase_id_matches(self, users):
        user_id = await users.add(make_user())

        fetched = await users.get(user_id.upper())

        assert fetched.id == user_id
        assert await users.replace(user_id.upper(), make_user("Zeynep Kaya")) is True
        assert (await users.get(user_id)).name == "Zeynep Kaya"
        assert await users.delete(user_id.upper()) is True
        assert len(users) == 0

    @pytest.mark.asyncio
    async def test_oversized_int_is_rejected(self):
        vehicles = InMemoryRepository(Vehicle)
        vehicle = Vehicle(
            plate_number="34 TGR 42",
            brand="Fiat",
            model="Egea",
            year=10**20,
            color_id=str(ObjectId()),
            type_id=str(ObjectId()),
        )

        with pytest.raises(OverflowError):
            await vehicles.add(vehicle)
        assert len(vehicles) == 0

    @pytest.mark.asyncio
    async def test_datetimes_come_back_utc_aware(self, users):
        user_id = await users.add(make_user())

        fetched = await users.get(user_id)

        assert fetched.created_at.utcoffset() == timedelta(0)

    @pytest.mark.asyncio
    async def test_decimal_price_survives(self):
        services = InMemoryRepository(Service)
        service_id = await services.add(
            Service(
                name="Transfer",
                description="Airport",
                price=Decimal("750.50"),
                duration=60,
                category="transfer",
            )
        )

        assert (await services.get(service_id)).price == Decimal("750.50")
