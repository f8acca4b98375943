"""Tests for save-time map preparation."""

import pytest

from indoor_map.errors import MapOwnershipError, MapValidationError
from indoor_map.models import (
    ConnectionType,
    ElementConnection,
    ElementType,
    Floor,
    Location,
    MapData,
    MapElement,
    MapMetadata,
    MapSaveRequest,
    TemplateCategory,
)
from indoor_map.services.maps import (
    apply_update,
    build_map,
    create_empty_map,
    maps_within_radius,
    prepare_map,
    toggle_published,
)


def el(id, type, x, y, floor=0) -> MapElement:
    return MapElement(id=id, type=type, x=x, y=y, width=100, height=40, floor=floor)


@pytest.fixture
def request_two_floors() -> MapSaveRequest:
    """Ground floor without connections, first floor with an explicit one."""
    return MapSaveRequest(
        name="Central Station",
        category=TemplateCategory.STATION,
        metadata=MapMetadata(tags=["rail"]),
        floors=[
            Floor(level=0, name="Ground", elements=[
                el("e1", ElementType.ENTRANCE, 0, 0),
                el("c1", ElementType.CORRIDOR, 100, 0),
                el("st1", ElementType.STAIRS, 200, 0),
            ]),
            Floor(
                level=1,
                name="Platforms",
                elements=[
                    el("p1", ElementType.PLATFORM, 0, 0, floor=1),
                    el("c2", ElementType.CORRIDOR, 100, 0, floor=1),
                ],
                connections=[
                    ElementConnection(
                        id="manual", from_element_id="p1", to_element_id="c2",
                        type=ConnectionType.WALKABLE,
                    )
                ],
            ),
        ],
    )


class TestCreateEmptyMap:
    def test_defaults(self):
        m = create_empty_map("Draft", "user-1")
        assert m.name == "Draft"
        assert m.created_by == "user-1"
        assert m.version == 1
        assert not m.is_published
        assert len(m.floors) == 1
        assert m.floors[0].level == 0
        assert m.floors[0].name == "Ground Floor"
        assert m.metadata.total_width == 500
        assert m.metadata.total_floors == 1

    def test_fails_required_entrance(self):
        """A fresh map has no entrance yet, so it is not saveable."""
        with pytest.raises(MapValidationError):
            prepare_map(create_empty_map("Draft", "user-1"))


class TestBuildMap:
    def test_fills_metadata_defaults(self, request_two_floors: MapSaveRequest):
        m = build_map(request_two_floors, "user-1")
        assert m.metadata.total_width == 500
        assert m.metadata.total_height == 500
        assert m.metadata.total_floors == 2
        assert m.metadata.tags == ["rail"]
        assert m.category is TemplateCategory.STATION
        assert m.created_by == "user-1"

    def test_keeps_given_dimensions(self, request_two_floors: MapSaveRequest):
        request_two_floors.metadata.total_width = 320
        assert build_map(request_two_floors, "u").metadata.total_width == 320


class TestPrepareMap:
    def test_backfills_only_missing_connections(self, request_two_floors):
        prepared = prepare_map(build_map(request_two_floors, "user-1"))
        ground, platforms = prepared.floors
        assert [c.id for c in ground.connections] == ["e1-c1", "c1-st1"]
        assert ground.connections[1].type == ConnectionType.STAIRS_UP
        assert [c.id for c in platforms.connections] == ["manual"]

    def test_does_not_mutate_input(self, request_two_floors):
        m = build_map(request_two_floors, "user-1")
        prepare_map(m)
        assert m.floors[0].connections == []

    def test_invalid_map_raises_with_all_errors(self):
        m = MapData(
            metadata=MapMetadata(total_width=5),
            floors=[Floor(level=0, name="G", elements=[el("c", ElementType.CORRIDOR, 0, 0)])],
        )
        with pytest.raises(MapValidationError) as exc:
            prepare_map(m)
        assert exc.value.errors == [
            "Map width must be between 10 and 1000",
            "Map must have at least one entrance element",
        ]
        assert str(exc.value) == (
            "Map validation failed: Map width must be between 10 and 1000, "
            "Map must have at least one entrance element"
        )


class TestApplyUpdate:
    @pytest.fixture
    def saved(self, request_two_floors) -> MapData:
        return prepare_map(build_map(request_two_floors, "owner"))

    def test_rename(self, saved: MapData):
        updated = apply_update(saved, {"name": "Renamed"}, "owner")
        assert updated.name == "Renamed"
        assert updated.version == saved.version + 1
        assert updated.updated_at >= saved.updated_at
        assert saved.name == "Central Station"

    def test_wrong_owner(self, saved: MapData):
        with pytest.raises(MapOwnershipError):
            apply_update(saved, {"name": "Mine now"}, "intruder")

    def test_floor_update_backfills(self, saved: MapData):
        new_floor = Floor(level=0, name="Ground", elements=[
            el("e1", ElementType.ENTRANCE, 0, 0),
            el("s1", ElementType.SHOP, 0, 40),
        ])
        updated = apply_update(saved, {"floors": [new_floor]}, "owner")
        assert [c.id for c in updated.floors[0].connections] == ["e1-s1"]
        assert updated.floors[0].connections[0].type == ConnectionType.DOOR

    def test_invalid_floor_update_rejected(self, saved: MapData):
        corridor_only = Floor(level=0, name="Ground", elements=[
            el("c1", ElementType.CORRIDOR, 0, 0),
        ])
        with pytest.raises(MapValidationError, match="entrance"):
            apply_update(saved, {"floors": [corridor_only]}, "owner")

    def test_toggle_published(self, saved: MapData):
        published = toggle_published(saved, "owner")
        assert published.is_published is True
        assert toggle_published(published, "owner").is_published is False


class TestMapsWithinRadius:
    def test_filter(self):
        vienna = MapData(name="Vienna", metadata=MapMetadata(
            location=Location(latitude=48.2082, longitude=16.3738)))
        graz = MapData(name="Graz", metadata=MapMetadata(
            location=Location(latitude=47.0707, longitude=15.4395)))
        nowhere = MapData(name="Nowhere", metadata=MapMetadata())
        partial = MapData(name="Partial")

        near = maps_within_radius([vienna, graz, nowhere, partial], 48.21, 16.37, 50)
        assert [m.name for m in near] == ["Vienna"]

        wide = maps_within_radius([vienna, graz, nowhere], 48.21, 16.37, 200)
        assert [m.name for m in wide] == ["Vienna", "Graz"]
