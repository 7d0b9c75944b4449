"""Tests for TimelineSession: controller effects applied to a block pool."""

from __future__ import annotations

import pytest

from conftest import DAY_ID, make_block, make_context, px, ts


def _session(store, blocks=None, **context_kwargs):
    from timeline_primitives.session import TimelineSession

    if blocks is None:
        blocks = [
            make_block("a", "09:00", "10:00"),
            make_block("b", "09:30", "10:30"),
            make_block("c", "13:00", "14:00"),
        ]
    return TimelineSession(DAY_ID, blocks, make_context(**context_kwargs), store)


class TestDispatch:

    def test_drag_updates_pool_and_store(self, store):
        from timeline_primitives.controller import (
            BeginDrag,
            PointerMove,
            PointerRelease,
            Select,
        )

        session = _session(store)
        session.dispatch(Select(session.get("c")))
        session.dispatch(BeginDrag(0))
        session.dispatch(PointerMove(px(60)))
        session.dispatch(PointerMove(px(120)))
        session.dispatch(PointerRelease())

        moved = session.get("c")
        assert (moved.start, moved.end, moved.duration) == (ts("15:00"), ts("16:00"), 60)
        assert store.updates == [
            ("c", {"start": ts("14:00"), "end": ts("15:00"), "duration": 60}),
            ("c", {"start": ts("15:00"), "end": ts("16:00"), "duration": 60}),
        ]

    def test_duration_recomputed_on_resize(self, store):
        from timeline_primitives.controller import BeginResize, PointerMove, Select

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        session.dispatch(BeginResize("bottom", 0))
        session.dispatch(PointerMove(px(90)))

        resized = session.get("a")
        assert resized.end == ts("11:30")
        assert resized.duration == 150
        assert store.updates[-1][1]["duration"] == 150

    def test_layout_follows_moves(self, store):
        from timeline_primitives.controller import KeyPress, Select

        session = _session(store)
        assert session.layout()["b"].total_columns == 2

        session.dispatch(Select(session.get("b")))
        session.dispatch(KeyPress("ArrowDown", shift=True))  # 10:30-11:30

        layout = session.layout()
        assert layout["a"].total_columns == 1
        assert layout["b"].total_columns == 1

    def test_conflicts(self, store):
        session = _session(store)
        assert [b.id for b in session.conflicts("a")] == ["b"]
        assert session.conflicts("c") == []

    def test_edit_saved_to_store(self, store):
        from timeline_primitives.controller import EditDraft, SaveEdit, Select, StartEdit

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        session.dispatch(StartEdit())
        session.dispatch(EditDraft("tags", "x, y"))
        session.dispatch(SaveEdit())

        assert session.get("a").tags == ("x", "y")
        block_id, changes = store.updates[-1]
        assert block_id == "a"
        assert changes["tags"] == ("x", "y")

    def test_delete_key(self, store):
        from timeline_primitives.controller import Idle, KeyPress, Select

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        session.dispatch(KeyPress("Delete"))

        assert isinstance(session.state, Idle)
        assert [b.id for b in session.blocks] == ["b", "c"]
        assert store.deleted == ["a"]

    def test_update_for_missing_block_raises(self, store):
        """A held block that storage no longer has is a desync, not a no-op."""
        from timeline_primitives.controller import KeyPress, Selected
        from timeline_primitives.types import BlockNotFoundError

        session = _session(store)
        session.state = Selected(make_block("ghost", "09:00", "10:00"))
        with pytest.raises(BlockNotFoundError) as exc_info:
            session.dispatch(KeyPress("ArrowDown"))
        assert exc_info.value.block_id == "ghost"
        assert store.updates == []

    def test_get_missing(self, store):
        from timeline_primitives.types import BlockNotFoundError

        with pytest.raises(BlockNotFoundError):
            _session(store).get("nope")

    def test_dispatch_returns_effects(self, store):
        from timeline_primitives.controller import IntervalChanged, KeyPress, Select

        session = _session(store)
        assert session.dispatch(Select(session.get("c"))) == ()
        effects = session.dispatch(KeyPress("ArrowUp"))
        assert effects == (IntervalChanged("c", ts("12:45"), ts("13:45"), 60),)


class TestReplaceBlocks:

    def test_held_block_removed_goes_idle(self, store):
        from timeline_primitives.controller import Idle, Select

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        session.replace_blocks([make_block("c", "13:00", "14:00")])
        assert isinstance(session.state, Idle)
        assert [b.id for b in session.blocks] == ["c"]

    def test_held_block_kept(self, store):
        from timeline_primitives.controller import Select, Selected

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        session.replace_blocks([make_block("a", "09:00", "10:00")])
        assert isinstance(session.state, Selected)

    def test_held_block_picks_up_stored_times(self, store):
        """A move after a resync starts from the stored interval."""
        from timeline_primitives.controller import KeyPress, Select, Selected

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        fresh = make_block("a", "14:00", "15:00")
        session.replace_blocks([fresh])
        assert session.state == Selected(fresh)

        session.dispatch(KeyPress("ArrowDown"))
        moved = session.get("a")
        assert (moved.start, moved.end) == (ts("14:15"), ts("15:15"))
        assert store.updates[-1] == (
            "a",
            {"start": ts("14:15"), "end": ts("15:15"), "duration": 60},
        )

    def test_resync_mid_drag_ends_gesture(self, store):
        from timeline_primitives.controller import (
            BeginDrag,
            PointerMove,
            Select,
            Selected,
        )

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        session.dispatch(BeginDrag(0))
        session.dispatch(PointerMove(px(30)))
        fresh = make_block("a", "14:00", "15:00")
        session.replace_blocks([fresh])

        assert session.state == Selected(fresh)
        session.dispatch(PointerMove(px(60)))
        assert session.get("a") == fresh

    def test_resync_while_editing_keeps_draft(self, store):
        from timeline_primitives.controller import (
            EditDraft,
            Editing,
            Select,
            StartEdit,
        )

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        session.dispatch(StartEdit())
        session.dispatch(EditDraft("title", "Renamed"))
        fresh = make_block("a", "14:00", "15:00")
        session.replace_blocks([fresh])

        assert isinstance(session.state, Editing)
        assert session.state.block == fresh
        assert session.state.draft.title == "Renamed"


class TestCreateAt:

    def test_click_creates_snapped_hour_block(self, store):
        """Click 95 px below an 08:00 window start -> 09:35 snaps to 09:30."""
        session = _session(store, blocks=[])
        block = session.create_at(95)

        assert block is not None
        assert (block.start, block.end, block.duration) == (ts("09:30"), ts("10:30"), 60)
        assert block.day_id == DAY_ID
        assert block.title == "New Block"
        assert store.created == [block]
        assert session.get(block.id) == block

    def test_window_offset(self, store):
        session = _session(store, blocks=[], start_hour=6, end_hour=20)
        block = session.create_at(0)
        assert block.start == ts("06:00")

    def test_not_while_selected(self, store):
        from timeline_primitives.controller import Select

        session = _session(store)
        session.dispatch(Select(session.get("a")))
        assert session.create_at(100) is None
        assert store.created == []

    def test_rejected_past_midnight(self, store):
        session = _session(store, blocks=[], start_hour=20, end_hour=23)
        assert session.create_at(px(3 * 60 + 30)) is None
