"""
Birdhouse Backend - Bird Service Unit Tests
============================================

Tests for BirdService against a mocked AsyncSession (no database).

What we test:
    ✅ Create assigns defaults and drops non-whitelisted keys
    ✅ Lookups raise NotFoundError for missing or impossible ids
    ✅ Update writes only the supplied fields
    ✅ Increment is a single UPDATE ... likes + 1 statement
    ✅ SQLAlchemy failures surface as DatabaseError
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from sqlalchemy.exc import OperationalError

from app.exceptions import DatabaseError, NotFoundError
from app.models.bird import MAX_BIRD_ID, Bird
from app.schemas.bird import BirdCreate, BirdUpdate
from app.services.bird_service import BirdService


def _result_with(bird):
    result = MagicMock()
    result.scalar_one_or_none.return_value = bird
    return result


class TestBirdServiceCreate:
    """Tests for create_bird."""

    def setup_method(self):
        self.service = BirdService()

    @pytest.mark.asyncio
    async def test_create_defaults_likes_to_zero(self, mock_db_session):
        """Omitted likes should be stored and returned as 0."""
        async def assign_id():
            added = mock_db_session.add.call_args.args[0]
            added.id = 7
        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        result = await self.service.create_bird(
            mock_db_session,
            BirdCreate(name="Robin", species="Turdus migratorius"),
        )

        assert result.id == 7
        assert result.likes == 0
        assert result.name == "Robin"
        mock_db_session.add.assert_called_once()
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_ignores_injected_id(self, mock_db_session):
        """An id in the payload never reaches the model; the store assigns it."""
        async def assign_id():
            added = mock_db_session.add.call_args.args[0]
            assert added.id is None
            added.id = 1
        mock_db_session.flush = AsyncMock(side_effect=assign_id)

        payload = BirdCreate.model_validate({"id": 999, "name": "Wren", "color": "brown"})
        result = await self.service.create_bird(mock_db_session, payload)

        assert result.id == 1

    @pytest.mark.asyncio
    async def test_create_database_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.create_bird(mock_db_session, BirdCreate(name="Robin"))


class TestBirdServiceGet:
    """Tests for get_bird."""

    def setup_method(self):
        self.service = BirdService()

    @pytest.mark.asyncio
    async def test_get_bird_found(self, mock_db_session, sample_bird_data):
        mock_db_session.execute.return_value = _result_with(Bird(**sample_bird_data))

        result = await self.service.get_bird(mock_db_session, 1)

        assert result.model_dump() == sample_bird_data

    @pytest.mark.asyncio
    async def test_get_bird_not_found(self, mock_db_session):
        """Missing bird should raise NotFoundError with the client message."""
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get_bird(mock_db_session, 42)

        assert exc_info.value.message == "Bird not found"
        assert exc_info.value.context["resource_id"] == "42"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bird_id", [0, -1, MAX_BIRD_ID + 1])
    async def test_get_bird_impossible_id_skips_query(self, mock_db_session, bird_id):
        with pytest.raises(NotFoundError):
            await self.service.get_bird(mock_db_session, bird_id)

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_bird_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection lost"))
        )

        with pytest.raises(DatabaseError):
            await self.service.get_bird(mock_db_session, 1)


class TestBirdServiceList:
    """Tests for list_birds."""

    def setup_method(self):
        self.service = BirdService()

    @pytest.mark.asyncio
    async def test_list_birds_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        assert await self.service.list_birds(mock_db_session) == []

    @pytest.mark.asyncio
    async def test_list_birds_with_results(self, mock_db_session):
        birds = [
            Bird(id=1, name="Robin", species="Turdus migratorius", likes=0),
            Bird(id=2, name="Blue Jay", species="Cyanocitta cristata", likes=5),
        ]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = birds
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_birds(mock_db_session)

        assert [b.id for b in result] == [1, 2]
        assert result[1].likes == 5


class TestBirdServiceUpdate:
    """Tests for update_bird."""

    def setup_method(self):
        self.service = BirdService()

    @pytest.mark.asyncio
    async def test_update_only_likes_keeps_other_fields(self, mock_db_session, sample_bird_data):
        mock_db_session.execute.return_value = _result_with(Bird(**sample_bird_data))

        result = await self.service.update_bird(mock_db_session, 1, BirdUpdate(likes=10))

        assert result.likes == 10
        assert result.name == sample_bird_data["name"]
        assert result.species == sample_bird_data["species"]
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_can_clear_name(self, mock_db_session, sample_bird_data):
        """An explicit null for a nullable field is written, unlike an omitted one."""
        mock_db_session.execute.return_value = _result_with(Bird(**sample_bird_data))

        result = await self.service.update_bird(
            mock_db_session, 1, BirdUpdate.model_validate({"name": None}),
        )

        assert result.name is None
        assert result.species == sample_bird_data["species"]

    @pytest.mark.asyncio
    async def test_update_not_found_does_not_flush(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError):
            await self.service.update_bird(mock_db_session, 5, BirdUpdate(name="Crow"))

        mock_db_session.flush.assert_not_awaited()


class TestBirdServiceIncrementLikes:
    """Tests for increment_likes."""

    def setup_method(self):
        self.service = BirdService()

    @pytest.mark.asyncio
    async def test_increment_returns_updated_bird(self, mock_db_session, sample_bird_data):
        liked = Bird(**{**sample_bird_data, "likes": sample_bird_data["likes"] + 1})
        mock_db_session.execute.return_value = _result_with(liked)

        result = await self.service.increment_likes(mock_db_session, 1)

        assert result.likes == 4
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_increment_is_single_atomic_update(self, mock_db_session, sample_bird_data):
        """The counter is bumped in SQL, not read into Python and written back."""
        mock_db_session.execute.return_value = _result_with(Bird(**sample_bird_data))

        await self.service.increment_likes(mock_db_session, 1)

        statement = str(mock_db_session.execute.call_args.args[0])
        assert statement.startswith("UPDATE birds")
        assert "birds.likes + :likes_1" in statement
        assert "RETURNING" in statement

    @pytest.mark.asyncio
    async def test_increment_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = _result_with(None)

        with pytest.raises(NotFoundError, match="Bird not found"):
            await self.service.increment_likes(mock_db_session, 999999)

    @pytest.mark.asyncio
    async def test_increment_database_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("UPDATE", {}, Exception("deadlock"))
        )

        with pytest.raises(DatabaseError):
            await self.service.increment_likes(mock_db_session, 1)
