"""Unit tests for KeyframeStore."""

from unittest.mock import Mock

import pytest

from growgrid.models import Cell, Keyframe, Schedule, blank_grid, filled_grid
from growgrid.protocols import EditEvent, EditObserver
from growgrid.services import KeyframeStore

WHITE = Cell(r=255, g=255, b=255, active=True)


def _first_id(store, day=0):
    return store.keyframes(day)[0].id


@pytest.mark.unit
class TestKeyframeCrud:
    """Add, delete, retime and rename."""

    def test_add_keyframe_sorts_and_returns_record(self, store):
        late = store.add_keyframe(0, 900, filled_grid(8, WHITE), name="Late")
        early = store.add_keyframe(0, 300, filled_grid(8, WHITE), name="Early")

        times = [kf.time for kf in store.keyframes(0)]
        assert times == [0, 300, 900]
        assert late.id != early.id
        assert store.get_keyframe(0, early.id) is early

    def test_add_keyframe_default_name(self, store):
        keyframe = store.add_keyframe(0, 100, blank_grid(8))
        assert keyframe.name == "Scene 2"

    def test_add_keyframe_resizes_grid(self, store):
        keyframe = store.add_keyframe(0, 100, [WHITE])
        assert len(keyframe.grid) == 64
        assert keyframe.grid[0] == WHITE
        assert keyframe.grid[1] == Cell.off()

    def test_add_keyframe_unknown_day(self, store):
        assert store.add_keyframe(9, 100, blank_grid(8)) is None

    def test_delete_keyframe(self, store):
        keyframe = store.add_keyframe(1, 100, blank_grid(8))
        assert store.delete_keyframe(1, keyframe.id) is True
        assert len(store.get_day(1)) == 1

    def test_cannot_delete_last_keyframe(self, store):
        only = _first_id(store)
        assert store.delete_keyframe(0, only) is False
        assert len(store.get_day(0)) == 1

    def test_delete_unknown_is_noop(self, store):
        assert store.delete_keyframe(0, "missing") is False
        assert store.delete_keyframe(42, _first_id(store)) is False

    def test_lookup_is_scoped_to_day(self, store):
        keyframe = store.add_keyframe(0, 100, blank_grid(8))
        assert store.get_keyframe(1, keyframe.id) is None
        assert store.delete_keyframe(1, keyframe.id) is False

    @pytest.mark.parametrize(("requested", "expected"), [(-50, 0), (2000, 1439), (600.4, 600)])
    def test_update_time_clamps(self, store, requested, expected):
        keyframe = store.update_time(0, _first_id(store), requested)
        assert keyframe.time == expected

    def test_update_time_resorts(self, store):
        a = store.add_keyframe(0, 100, blank_grid(8), name="a")
        store.add_keyframe(0, 200, blank_grid(8), name="b")
        store.update_time(0, a.id, 300)
        assert [kf.name for kf in store.keyframes(0)] == ["Scene 1", "b", "a"]

    def test_update_name_allows_duplicates(self, store):
        a = store.add_keyframe(0, 100, blank_grid(8), name="Dawn")
        store.update_name(0, _first_id(store), "Dawn")
        assert [kf.name for kf in store.keyframes(0)] == ["Dawn", "Dawn"]
        assert store.get_keyframe(0, a.id).name == "Dawn"

    def test_update_unknown_is_noop(self, store):
        assert store.update_time(0, "missing", 10) is None
        assert store.update_name(5, "missing", "x") is None


@pytest.mark.unit
class TestPainting:
    """Cell painting helpers."""

    def test_paint_cell_scales_and_toggles(self, store):
        kf_id = _first_id(store)
        cell = store.paint_cell(0, kf_id, 3, 200, 100, 50, brightness=50)

        assert cell.to_rgb_tuple() == (100, 50, 25)
        assert cell.active is True

        again = store.paint_cell(0, kf_id, 3, 200, 100, 50)
        assert again.active is False

    def test_paint_cell_out_of_range(self, store):
        assert store.paint_cell(0, _first_id(store), 64, 1, 1, 1) is None

    def test_fill_and_clear(self, store):
        kf_id = _first_id(store)
        store.fill_all(0, kf_id, 255, 0, 0)
        assert all(c.active and c.r == 255 for c in store.get_keyframe(0, kf_id).grid)

        store.clear_all(0, kf_id)
        assert store.get_keyframe(0, kf_id).grid == blank_grid(8)


@pytest.mark.unit
class TestBulkOperations:
    """Grid resize, day count and wholesale replacement."""

    def test_resize_down_and_up_preserves_prefix(self, store):
        kf_id = _first_id(store)
        painted = [Cell(r=i, g=i, b=i, active=i % 2 == 0) for i in range(64)]
        store.get_keyframe(0, kf_id).grid = list(painted)

        store.resize_grid(4)
        assert all(len(kf.grid) == 16 for day in store.schedule.days for kf in day.keyframes)

        store.resize_grid(8)
        grid = store.get_keyframe(0, kf_id).grid
        assert len(grid) == 64
        assert grid[:16] == painted[:16]
        assert grid[16:] == [Cell.off()] * 48

    def test_resize_applies_to_every_day(self, store):
        store.resize_grid(2)
        assert store.grid_size == 2
        for day in store.schedule.days:
            assert all(len(kf.grid) == 4 for kf in day.keyframes)

    def test_resize_clamps(self, store):
        assert store.resize_grid(100) == 32
        assert store.resize_grid(0) == 1

    def test_grow_days_duplicates_last_day(self, store):
        last_id = store.add_keyframe(2, 600, filled_grid(8, WHITE), name="Noon").id

        assert store.set_total_days(5) == 5
        assert store.total_days == 5

        for day in (3, 4):
            assert [kf.name for kf in store.keyframes(day)] == ["Scene 1", "Noon"]
            assert store.get_keyframe(day, last_id) is None

        # Copies are independent
        copy_id = store.keyframes(3)[1].id
        store.fill_all(3, copy_id, 0, 0, 255)
        assert store.keyframes(4)[1].grid == filled_grid(8, WHITE)
        assert store.get_keyframe(2, last_id).grid == filled_grid(8, WHITE)

    def test_shrink_days_truncates(self, store):
        kept = _first_id(store, 1)
        assert store.set_total_days(2) == 2
        assert store.get_day(2) is None
        assert store.keyframes(1)[0].id == kept

    @pytest.mark.parametrize(("requested", "expected"), [(0, 1), (-3, 1), (20, 14)])
    def test_day_count_clamps(self, store, requested, expected):
        assert store.set_total_days(requested) == expected

    def test_replace_day_mints_fresh_ids_and_sorts(self, store):
        source = [
            Keyframe(id="fixed-b", name="b", time=800, grid=[WHITE]),
            Keyframe(id="fixed-a", name="a", time=100, grid=[WHITE]),
        ]
        replaced = store.replace_day(1, source)

        assert [kf.name for kf in replaced] == ["a", "b"]
        assert {kf.id for kf in replaced}.isdisjoint({"fixed-a", "fixed-b"})
        assert all(len(kf.grid) == 64 for kf in replaced)

    def test_replace_day_refuses_empty(self, store):
        before = store.keyframes(0)
        assert store.replace_day(0, []) is None
        assert store.keyframes(0) == before

    def test_replace_schedule_normalizes_grids(self, store):
        schedule = Schedule.create_default(grid_size=2, total_days=1)
        schedule.days[0].keyframes[0].grid = [WHITE]

        store.replace_schedule(schedule)
        assert store.grid_size == 2
        assert store.keyframes(0)[0].grid == [WHITE, Cell.off(), Cell.off(), Cell.off()]


@pytest.mark.unit
class TestKeyframeStoreEvents:
    """Observer notifications."""

    @pytest.fixture
    def observer(self):
        return Mock(spec=EditObserver)

    @pytest.fixture
    def watched(self, store, observer):
        store.register_observer(observer)
        return store

    def test_add_notifies(self, watched, observer):
        keyframe = watched.add_keyframe(1, 10, blank_grid(8))
        observer.on_edit_event.assert_called_once_with(EditEvent.KEYFRAME_ADDED, 1, [keyframe.id])

    def test_delete_notifies(self, watched, observer):
        keyframe = watched.add_keyframe(0, 10, blank_grid(8))
        observer.reset_mock()
        watched.delete_keyframe(0, keyframe.id)
        observer.on_edit_event.assert_called_once_with(EditEvent.KEYFRAME_DELETED, 0, [keyframe.id])

    def test_refused_delete_is_silent(self, watched, observer):
        watched.delete_keyframe(0, _first_id(watched))
        observer.on_edit_event.assert_not_called()

    def test_resize_notifies(self, watched, observer):
        watched.resize_grid(4)
        observer.on_edit_event.assert_called_once_with(EditEvent.GRID_RESIZED, None, [])

    def test_same_size_resize_is_silent(self, watched, observer):
        watched.resize_grid(8)
        observer.on_edit_event.assert_not_called()

    def test_days_changed_notifies(self, watched, observer):
        watched.set_total_days(4)
        observer.on_edit_event.assert_called_once_with(EditEvent.DAYS_CHANGED, None, [])

    def test_paint_notifies(self, watched, observer):
        kf_id = _first_id(watched)
        watched.paint_cell(0, kf_id, 0, 1, 2, 3)
        observer.on_edit_event.assert_called_once_with(EditEvent.KEYFRAME_PAINTED, 0, [kf_id])

    def test_unregistered_observer_not_called(self, watched, observer):
        watched.unregister_observer(observer)
        watched.set_total_days(4)
        observer.on_edit_event.assert_not_called()
