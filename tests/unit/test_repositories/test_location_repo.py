"""
Test Location Repositories
"""

import pytest

from wms.common.errors import TooManyResultsError
from wms.db.models import Location, LocationGroup
from wms.db.session import transaction
from wms.domain.location import LocationPK
from wms.repositories.location_repo import LocationRepository


def new_location(area="AREA01", aisle="01", x="01", y="01", **kwargs) -> Location:
    return Location(area=area, aisle=aisle, x=x, y=y, **kwargs)


@pytest.mark.asyncio
async def test_find_by_unique_id_scenario(session_factory, location_repo):
    """Test the single match is returned and a duplicate key is reported"""
    async with transaction(session_factory) as session:
        await location_repo.persist(session, new_location(description="first"))

    async with transaction(session_factory) as session:
        found = await location_repo.find_by_unique_id(session, "AREA01/01/01/01")
    assert found is not None
    assert found.description == "first"

    async with transaction(session_factory) as session:
        await location_repo.persist(session, new_location(description="second"))

    with pytest.raises(TooManyResultsError):
        async with transaction(session_factory) as session:
            await location_repo.find_by_unique_id(session, "AREA01/01/01/01")


@pytest.mark.asyncio
async def test_persist_computes_location_pk(db_session, location_repo):
    """Test the business key is derived from the normalized components"""
    location = new_location(area=" AREA02 ", aisle="03 ", x=" 10", y="07")

    await location_repo.persist(db_session, location)

    assert location.location_pk == "AREA02/03/10/07"
    assert location.area == "AREA02"
    assert location.aisle == "03"


@pytest.mark.asyncio
async def test_save_recomputes_location_pk(session_factory, location_repo):
    """Test changing a component updates the business key on save"""
    location = new_location()
    async with transaction(session_factory) as session:
        await location_repo.persist(session, location)

    location.y = "02"
    async with transaction(session_factory) as session:
        saved = await location_repo.save(session, location)

    assert saved.location_pk == "AREA01/01/01/02"
    async with transaction(session_factory) as session:
        assert await location_repo.find_by_location_pk(session, "AREA01/01/01/01") is None
        assert await location_repo.find_by_location_pk(session, "AREA01/01/01/02") is not None


@pytest.mark.asyncio
async def test_find_by_location_pk(db_session, location_repo):
    """Test lookup by key string and by LocationPK"""
    await location_repo.persist(db_session, new_location())

    by_text = await location_repo.find_by_location_pk(db_session, " AREA01/01/01/01 ")
    by_pk = await location_repo.find_by_location_pk(
        db_session, LocationPK(area="AREA01", aisle="01", x="01", y="01")
    )

    assert by_text is not None
    assert by_text is by_pk


@pytest.mark.asyncio
async def test_find_by_location_pk_malformed(db_session, location_repo):
    """Test a malformed key string is rejected before querying"""
    with pytest.raises(ValueError):
        await location_repo.find_by_location_pk(db_session, "AREA01/01")


@pytest.mark.asyncio
async def test_find_by_area(db_session, location_repo):
    """Test locations are filtered by area and ordered by key"""
    await location_repo.persist(db_session, new_location(x="02"))
    await location_repo.persist(db_session, new_location(x="01"))
    await location_repo.persist(db_session, new_location(area="AREA09"))

    result = await location_repo.find_by_area(db_session, "AREA01")

    assert [loc.location_pk for loc in result] == ["AREA01/01/01/01", "AREA01/01/02/01"]


@pytest.mark.asyncio
async def test_get_all_locations_loads_group(session_factory, location_repo, location_group_repo):
    """Test the eager query returns locations with their group loaded"""
    async with transaction(session_factory) as session:
        group = LocationGroup(name="ZONE-A")
        await location_group_repo.persist(session, group)
        await location_repo.persist(session, new_location(location_group=group))
        await location_repo.persist(session, new_location(x="02"))

    async with transaction(session_factory) as session:
        locations = await location_repo.get_all_locations(session)

    # Accessed after the session is closed: the group must already be loaded
    assert [loc.location_group.name if loc.location_group else None for loc in locations] == [
        "ZONE-A",
        None,
    ]


@pytest.mark.asyncio
async def test_find_all_empty(db_session, location_repo):
    """Test find_all on an empty store"""
    assert await location_repo.find_all(db_session) == []


@pytest.mark.asyncio
async def test_remove_location(session_factory, location_repo):
    """Test removing a location"""
    location = new_location()
    async with transaction(session_factory) as session:
        await location_repo.persist(session, location)
    async with transaction(session_factory) as session:
        await location_repo.remove(session, location)
    async with transaction(session_factory) as session:
        assert await location_repo.find_by_id(session, location.id) is None


@pytest.mark.asyncio
async def test_location_group_find_by_name(db_session, location_group_repo):
    """Test LocationGroup lookup by its unique name"""
    await location_group_repo.persist(db_session, LocationGroup(name="ZONE-A"))

    assert (await location_group_repo.find_by_name(db_session, "ZONE-A")).name == "ZONE-A"
    assert await location_group_repo.find_by_name(db_session, "ZONE-B") is None


def test_not_found_policy_defaults_to_settings(query_registry, monkeypatch):
    """Test the repository picks the not-found policy from settings"""
    from wms.config import get_settings

    monkeypatch.setattr(get_settings(), "REPOSITORY_RAISE_ON_MISSING", True)

    repo = LocationRepository(query_registry)
    explicit = LocationRepository(query_registry, raise_on_missing=False)

    assert repo.delegate.config.raise_on_missing is True
    assert explicit.delegate.config.raise_on_missing is False
