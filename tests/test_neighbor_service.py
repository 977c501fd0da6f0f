import pytest

from country_api.app.core.config import settings
from country_api.app.core.exceptions import DataIntegrityError, NotFoundError


@pytest.fixture
def countries(put_countries):
    return put_countries(
        {"countryID": "KE", "name": "Kenya", "capital": "Nairobi", "region": "Africa", "currency": "KES"},
        {"countryID": "UG", "name": "Uganda", "capital": "Kampala", "region": "Africa", "currency": "UGX"},
        {"countryID": "TZ", "name": "Tanzania", "capital": "Dodoma", "region": "Africa", "currency": "TZS"},
    )


class TestGetNeighbors:
    @pytest.mark.asyncio
    async def test_no_relations_is_empty(self, neighbor_service, countries):
        assert await neighbor_service.get_neighbors("KE") == []

    @pytest.mark.asyncio
    async def test_public_shape(self, neighbor_service, neighbor_repo, countries):
        neighbor_repo.add("KE", "UG")
        neighbors = await neighbor_service.get_neighbors("KE")
        assert [n.model_dump() for n in neighbors] == [
            {"id": "UG", "name": "Uganda", "currency": "UGX", "capital": "Kampala", "region": "Africa"}
        ]

    @pytest.mark.asyncio
    async def test_unknown_country(self, neighbor_service, countries):
        with pytest.raises(NotFoundError):
            await neighbor_service.get_neighbors("XX")

    @pytest.mark.asyncio
    async def test_dangling_relation_is_integrity_fault(self, neighbor_service, neighbor_repo, store, countries):
        neighbor_repo.add("KE", "UG")
        store.delete(settings.country_table, {"countryID": "UG"})
        with pytest.raises(DataIntegrityError):
            await neighbor_service.get_neighbors("KE")


class TestAddNeighbors:
    @pytest.mark.asyncio
    async def test_adds_valid_neighbors(self, neighbor_service, neighbor_repo, countries):
        result = await neighbor_service.add_neighbors("KE", ["UG", "TZ"])
        assert result.added == ["UG", "TZ"]
        assert result.errors == []
        assert result.succeeded
        assert neighbor_repo.list_by_country("KE") == ["TZ", "UG"]

    @pytest.mark.asyncio
    async def test_relations_are_directed(self, neighbor_service, neighbor_repo, countries):
        await neighbor_service.add_neighbors("KE", ["UG"])
        assert neighbor_repo.get("UG", "KE") is None
        assert await neighbor_service.get_neighbors("UG") == []

    @pytest.mark.asyncio
    async def test_second_add_is_reported_as_duplicate(self, neighbor_service, countries):
        first = await neighbor_service.add_neighbors("KE", ["UG"])
        second = await neighbor_service.add_neighbors("KE", ["UG"])
        assert first.added == ["UG"]
        assert second.added == []
        assert second.errors == ["neighbor UG already exists for this country"]
        assert not second.succeeded

    @pytest.mark.asyncio
    async def test_duplicate_within_one_batch(self, neighbor_service, countries):
        result = await neighbor_service.add_neighbors("KE", ["UG", "UG"])
        assert result.added == ["UG"]
        assert result.errors == ["neighbor UG already exists for this country"]

    @pytest.mark.asyncio
    async def test_mixed_valid_and_invalid(self, neighbor_service, countries):
        result = await neighbor_service.add_neighbors("KE", ["UG", "ZZ"])
        assert result.added == ["UG"]
        assert result.errors == ["invalid neighbor country id: ZZ"]
        assert result.succeeded

    @pytest.mark.asyncio
    async def test_all_invalid(self, neighbor_service, neighbor_repo, countries):
        result = await neighbor_service.add_neighbors("KE", ["ZZ", "YY"])
        assert result.added == []
        assert len(result.errors) == 2
        assert not result.succeeded
        assert neighbor_repo.list_by_country("KE") == []

    @pytest.mark.asyncio
    async def test_malformed_candidates_rejected_individually(self, neighbor_service, countries):
        result = await neighbor_service.add_neighbors("KE", ["UG", "", None, 42, {"id": "TZ"}])
        assert result.added == ["UG"]
        assert result.errors == [
            "invalid neighbor country id: ",
            "invalid neighbor country id: None",
            "invalid neighbor country id: 42",
            "invalid neighbor country id: {'id': 'TZ'}",
        ]

    @pytest.mark.asyncio
    async def test_self_relation_rejected(self, neighbor_service, countries):
        result = await neighbor_service.add_neighbors("KE", ["KE"])
        assert result.added == []
        assert result.errors == ["country KE cannot be its own neighbor"]

    @pytest.mark.asyncio
    async def test_unknown_source_aborts_batch(self, neighbor_service, neighbor_repo, countries):
        with pytest.raises(NotFoundError):
            await neighbor_service.add_neighbors("XX", ["UG"])
        assert neighbor_repo.list_by_country("XX") == []

    @pytest.mark.asyncio
    async def test_empty_batch(self, neighbor_service, countries):
        result = await neighbor_service.add_neighbors("KE", [])
        assert result.added == []
        assert result.errors == []
        assert not result.succeeded
