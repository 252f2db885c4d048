"""Unit tests for the cutting workflow: transitions, previews, document, session."""

import json
import logging

import pytest

from scorecut_bars.config import CuttingConfig
from scorecut_bars.geometry import Point2D
from scorecut_bars.session import (
    BarCutSession,
    BarDocument,
    BeginCut,
    Clicked,
    Committed,
    Cutting,
    CuttingStage,
    Empty,
    FinishCut,
    Loaded,
    PageLoaded,
    PointerMoved,
    Reset,
    Saving,
    SelectingHeight,
    SelectingTopLeft,
    SelectingTopRight,
    advance,
    calibration_guides,
    preview_bar_boxes,
    top_edge_proportion,
)
from tests.conftest import assert_point


@pytest.fixture
def cutting(top_left, top_right, staff_height_point) -> Cutting:
    return Cutting(
        page_number=1,
        top_left=top_left,
        top_right=top_right,
        staff_height_point=staff_height_point,
    )


def _cut_system(session: BarCutSession, clicks: list[Point2D], page_number: int = 1) -> None:
    if session.stage is not CuttingStage.LOADED or session.state.page_number != page_number:
        session.handle(PageLoaded(page_number=page_number))
    session.handle(BeginCut())
    for point in clicks:
        session.handle(Clicked(point))


CALIBRATION = [Point2D(0, 0), Point2D(100, 0), Point2D(50, 10)]


# ========== advance() ==========

def test_stage_sequence(top_left, top_right, staff_height_point) -> None:
    state = advance(Empty(), PageLoaded(page_number=3))
    assert state == Loaded(page_number=3)

    state = advance(state, BeginCut())
    assert state == SelectingTopLeft(page_number=3)

    state = advance(state, Clicked(top_left))
    assert state == SelectingTopRight(page_number=3, top_left=top_left)

    state = advance(state, Clicked(top_right))
    assert state == SelectingHeight(page_number=3, top_left=top_left, top_right=top_right)

    state = advance(state, Clicked(staff_height_point))
    assert isinstance(state, Cutting)
    assert state.staff_height_point == staff_height_point
    assert state.break_points == ()


def test_pointer_move_updates_preview(top_left) -> None:
    state = advance(SelectingTopLeft(page_number=1), PointerMoved(Point2D(4, 5)))
    assert state.preview == Point2D(4, 5)

    state = advance(SelectingTopRight(page_number=1, top_left=top_left), PointerMoved(Point2D(9, 9)))
    assert state.preview == Point2D(9, 9)
    assert state.top_left == top_left


def test_click_clears_preview(cutting) -> None:
    state = advance(cutting, PointerMoved(Point2D(30, 5)))
    state = advance(state, Clicked(Point2D(30, 5)))
    assert state.preview is None
    assert state.break_points == (Point2D(30, 5),)


def test_click_inside_system_adds_break_point(cutting) -> None:
    state = advance(cutting, Clicked(Point2D(30, 5)))
    state = advance(state, Clicked(Point2D(97, 5)))
    assert isinstance(state, Cutting)
    assert state.break_points == (Point2D(30, 5), Point2D(97, 5))


def test_click_past_threshold_ends_system(cutting) -> None:
    state = advance(cutting, Clicked(Point2D(30, 5)))
    state = advance(state, Clicked(Point2D(99, 5)))
    assert isinstance(state, Saving)
    assert state.break_points == (Point2D(30, 5), Point2D(99, 5))


def test_final_click_can_be_excluded(cutting) -> None:
    config = CuttingConfig(include_final_break_point=False)
    state = advance(cutting, Clicked(Point2D(30, 5)), config)
    state = advance(state, Clicked(Point2D(120, 5)), config)
    assert isinstance(state, Saving)
    assert state.break_points == (Point2D(30, 5),)


def test_custom_threshold(cutting) -> None:
    state = advance(cutting, Clicked(Point2D(60, 5)), CuttingConfig(completion_threshold=0.5))
    assert isinstance(state, Saving)


def test_top_right_on_top_left_is_ignored() -> None:
    state = SelectingTopRight(page_number=1, top_left=Point2D(10, 10))

    assert advance(state, Clicked(Point2D(10, 10))) is state

    moved = advance(state, Clicked(Point2D(90, 10)))
    assert isinstance(moved, SelectingHeight)


def test_height_on_top_edge_is_ignored(top_left, top_right) -> None:
    state = SelectingHeight(page_number=1, top_left=top_left, top_right=top_right)

    assert advance(state, Clicked(Point2D(50, 0))) is state
    assert advance(state, Clicked(Point2D(150, 0))) is state

    moved = advance(state, Clicked(Point2D(50, 10)))
    assert isinstance(moved, Cutting)


def test_top_edge_proportion(cutting) -> None:
    assert top_edge_proportion(cutting, Point2D(25, 8)) == pytest.approx(0.25)


def test_finish_commit_and_reset(cutting) -> None:
    saving = advance(cutting, FinishCut())
    assert isinstance(saving, Saving)
    assert saving.break_points == ()

    assert advance(saving, Committed()) == Empty()
    assert advance(cutting, Reset()) == Empty()


def test_page_load_abandons_cut(cutting) -> None:
    assert advance(cutting, PageLoaded(page_number=2)) == Loaded(page_number=2)


def test_unhandled_events_keep_state(cutting) -> None:
    empty = Empty()
    assert advance(empty, BeginCut()) is empty
    assert advance(empty, Clicked(Point2D(1, 1))) is empty
    assert advance(cutting, Committed()) is cutting
    loaded = Loaded(page_number=1)
    assert advance(loaded, PointerMoved(Point2D(1, 1))) is loaded
    assert advance(loaded, FinishCut()) is loaded


def test_stage_names() -> None:
    assert Empty().stage is CuttingStage.EMPTY
    assert SelectingTopLeft(page_number=1).stage is CuttingStage.TOP_LEFT


# ========== Previews ==========

def test_preview_includes_pointer(cutting) -> None:
    state = advance(cutting, Clicked(Point2D(30, 5)))
    state = advance(state, PointerMoved(Point2D(70, 5)))

    bars = preview_bar_boxes(state)

    assert len(bars) == 2
    assert bars[1].width == pytest.approx(40)


def test_preview_outside_cutting_is_empty(top_left) -> None:
    assert preview_bar_boxes(SelectingTopRight(page_number=1, top_left=top_left)) == []


def test_guides_while_choosing_height(top_left, top_right) -> None:
    state = SelectingHeight(page_number=1, top_left=top_left, top_right=top_right, preview=Point2D(50, 10))
    guides = calibration_guides(state)

    assert guides.top_edge == (top_left, top_right)
    bottom_left, bottom_right = guides.bottom_edge
    assert_point(bottom_left, 0, 10)
    assert_point(bottom_right, 100, 10)


def test_guides_while_choosing_top_right(top_left) -> None:
    guides = calibration_guides(SelectingTopRight(page_number=1, top_left=top_left))
    assert guides.points == (top_left,)
    assert guides.top_edge is None


def test_guides_while_cutting(cutting) -> None:
    state = advance(cutting, Clicked(Point2D(30, 5)))
    state = advance(state, PointerMoved(Point2D(60, 5)))
    guides = calibration_guides(state)
    assert len(guides.points) == 3
    assert guides.break_points == (Point2D(30, 5), Point2D(60, 5))


def test_guides_empty_state() -> None:
    guides = calibration_guides(Empty())
    assert guides.points == ()
    assert guides.top_edge is None


# ========== BarCutSession ==========

def test_session_cuts_and_stores_system(session) -> None:
    _cut_system(session, CALIBRATION + [Point2D(30, 5), Point2D(70, 5), Point2D(100, 5)])

    assert session.stage is CuttingStage.LOADED
    assert len(session.document) == 1
    widths = [bar.width for bar in session.last_system.bars]
    assert widths == pytest.approx([30, 40, 30])
    assert [bar.index_in_document for bar in session.document.bars()] == [0, 1, 2]


def test_session_without_auto_reload_returns_to_empty() -> None:
    session = BarCutSession(auto_reload=False)
    _cut_system(session, CALIBRATION + [Point2D(100, 5)])
    assert session.stage is CuttingStage.EMPTY
    assert session.document.bar_count == 1


def test_session_offsets_across_systems_and_pages(session) -> None:
    _cut_system(session, CALIBRATION + [Point2D(50, 5), Point2D(100, 5)])
    _cut_system(session, CALIBRATION + [Point2D(40, 5), Point2D(80, 5), Point2D(100, 5)])
    _cut_system(session, CALIBRATION + [Point2D(100, 5)], page_number=2)

    first, second, third = session.document.systems()
    assert [bar.index_in_page for bar in second.bars] == [2, 3, 4]
    assert [bar.index_in_document for bar in second.bars] == [2, 3, 4]
    assert [bar.index_in_page for bar in third.bars] == [0]
    assert [bar.index_in_document for bar in third.bars] == [5]
    assert session.document.pages == [1, 2]


def test_session_finish_cut(session) -> None:
    _cut_system(session, CALIBRATION + [Point2D(50, 5)])
    assert session.stage is CuttingStage.CUTTING
    assert len(session.preview()) == 1

    session.handle(FinishCut())

    assert session.stage is CuttingStage.LOADED
    assert session.document.bar_count == 1


def test_session_reset_keeps_document(session) -> None:
    _cut_system(session, CALIBRATION + [Point2D(100, 5)])
    session.handle(BeginCut())
    session.reset()
    assert session.stage is CuttingStage.EMPTY
    assert session.document.bar_count == 1


def test_session_logs_stage_changes(session, caplog) -> None:
    caplog.set_level(logging.INFO, logger="scorecut")
    session.handle(PageLoaded(page_number=1))

    entries = [
        json.loads(record.getMessage())
        for record in caplog.records
        if record.name.startswith("scorecut")
    ]
    stage_changes = [e for e in entries if e['event'] == 'session.stage_changed']
    assert stage_changes[0]['metadata']['to'] == 'loaded'


def test_degenerate_calibration_never_reaches_cutting(caplog) -> None:
    session = BarCutSession()
    session.handle(PageLoaded(page_number=1))
    session.handle(BeginCut())

    session.handle(Clicked(Point2D(10, 10)))
    session.handle(Clicked(Point2D(10, 10)))
    assert session.stage is CuttingStage.TOP_RIGHT

    session.handle(Clicked(Point2D(90, 10)))
    session.handle(Clicked(Point2D(50, 10)))
    assert session.stage is CuttingStage.HEIGHT

    session.handle(FinishCut())
    assert session.stage is CuttingStage.HEIGHT
    assert len(session.document) == 0

    ignored = [
        json.loads(record.getMessage())
        for record in caplog.records
        if "session.click_ignored" in record.getMessage()
    ]
    assert [entry['metadata']['stage'] for entry in ignored] == ['top_right', 'height']


# ========== BarDocument ==========

def test_document_json_round_trip(session, tmp_path) -> None:
    _cut_system(session, CALIBRATION + [Point2D(30, 5), Point2D(100, 5)])

    path = session.document.save_json(tmp_path / "out" / "bars.json")
    loaded = BarDocument.load_json(path)

    assert loaded.systems() == session.document.systems()
    assert loaded.next_index_in_document == 2


def test_document_offsets_count_skipped_bars() -> None:
    document = BarDocument()
    document.add_system(1, [], row_length=3)
    assert document.bar_count == 0
    assert document.next_index_in_document == 3
    assert document.next_index_in_page(1) == 3
    assert document.next_index_in_page(2) == 0


def test_document_rejects_unknown_schema() -> None:
    with pytest.raises(ValueError, match="schema version"):
        BarDocument.from_dict({'schema_version': '0.1', 'systems': []})


def test_document_load_missing_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        BarDocument.load_json(tmp_path / "missing.json")
