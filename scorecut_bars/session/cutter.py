"""
Bar Cut Session Module
======================

Stateful driver of the cutting workflow.

Design:
- Current state held privately; transitions delegated to advance()
- Stores every completed system in a BarDocument with running offsets
- Logs stage changes, break points and completed systems
- Caller must synchronize if events come from several threads
"""

from typing import List, Optional

from scorecut_bars.config import CuttingConfig
from scorecut_bars.partition.barbox import BarBox
from scorecut_bars.partition.partitioner import make_bar_boxes_from_active_bar_cut
from scorecut_bars.session.document import BarDocument, SystemCut
from scorecut_bars.session.preview import CalibrationGuides, calibration_guides, preview_bar_boxes
from scorecut_bars.session.stages import (
    CutEvent,
    CutState,
    CuttingStage,
    Empty,
    Cutting,
    Saving,
    Clicked,
    Committed,
    PageLoaded,
    Reset,
)
from scorecut_bars.session.transitions import advance
from scorecut_bars.logging import LogEvent, StructuredLogger, create_logger

_IGNORED_CLICK_MESSAGES = {
    CuttingStage.TOP_RIGHT: "Top-right corner coincides with the top-left corner",
    CuttingStage.HEIGHT: "Staff height point lies on the top edge",
    CuttingStage.CUTTING: "Click could not be placed on the system's top edge",
}
_GUARDED_STAGES = frozenset(_IGNORED_CLICK_MESSAGES)


class BarCutSession:
    """
    Interactive cutting of systems into bars.

    When a system reaches the Saving stage its bar boxes are computed with
    the document's running offsets, stored, and the session commits back to
    Empty. With ``auto_reload`` the current page is reloaded right away so the
    next system can start with BeginCut.

    Usage:
        session = BarCutSession()
        session.handle(PageLoaded(page_number=1))
        session.handle(BeginCut())
        for point in clicks:
            session.handle(Clicked(point))
        session.document.bar_count
    """

    def __init__(
        self,
        config: Optional[CuttingConfig] = None,
        document: Optional[BarDocument] = None,
        auto_reload: bool = True,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Initialize an empty session.

        Args:
            config: Completion threshold and final break point policy
            document: Document to append to (default: new empty document)
            auto_reload: Reload the page after each completed system
            logger: Structured logger (default: "session" component)
        """
        self.config = config or CuttingConfig()
        self.document = document if document is not None else BarDocument()
        self.auto_reload = auto_reload
        self._logger = logger or create_logger("session")
        self._state: CutState = Empty()
        self._last_system: Optional[SystemCut] = None

    @property
    def state(self) -> CutState:
        return self._state

    @property
    def stage(self) -> CuttingStage:
        return self._state.stage

    @property
    def last_system(self) -> Optional[SystemCut]:
        """Most recent system completed by this session."""
        return self._last_system

    def handle(self, event: CutEvent) -> CutState:
        """
        Apply one input event.

        Returns:
            The state after the event (and after auto-commit, if the event
            completed a system)
        """
        previous = self._state
        state = self._apply(event)

        if isinstance(event, Clicked) and state is previous and previous.stage in _GUARDED_STAGES:
            self._logger.warning(
                event=LogEvent.CLICK_IGNORED,
                message=_IGNORED_CLICK_MESSAGES[previous.stage],
                metadata={
                    'point': event.point.to_dict(),
                    'stage': previous.stage.value,
                },
            )
        elif isinstance(event, Clicked) and isinstance(previous, Cutting):
            if len(state.break_points) > len(previous.break_points):
                self._logger.debug(
                    event=LogEvent.BREAK_POINT_ADDED,
                    message="Break point added",
                    metadata={
                        'point': event.point.to_dict(),
                        'break_points': len(state.break_points),
                    },
                )

        if isinstance(state, Saving):
            self._complete(state)

        return self._state

    def preview(self) -> List[BarBox]:
        """Bar boxes of the system being cut, using the document offsets."""
        page_number = getattr(self._state, 'page_number', None)
        if page_number is None:
            return []
        return preview_bar_boxes(
            self._state,
            self.document.next_index_in_page(page_number),
            self.document.next_index_in_document,
        )

    def guides(self) -> CalibrationGuides:
        return calibration_guides(self._state)

    def reset(self) -> None:
        """Abandon the current cut (stored systems are kept)."""
        self._apply(Reset())

    def _apply(self, event: CutEvent) -> CutState:
        previous = self._state
        self._state = advance(previous, event, self.config)

        if self._state.stage is not previous.stage:
            self._logger.info(
                event=LogEvent.SESSION_STAGE_CHANGED,
                message=f"{previous.stage.value} -> {self._state.stage.value}",
                metadata={
                    'from': previous.stage.value,
                    'to': self._state.stage.value,
                    'page_number': getattr(self._state, 'page_number', None),
                },
            )
        return self._state

    def _complete(self, state: Saving) -> SystemCut:
        bars = make_bar_boxes_from_active_bar_cut(
            state.top_left,
            state.top_right,
            state.staff_height_point,
            state.break_points,
            self.document.next_index_in_page(state.page_number),
            self.document.next_index_in_document,
        )
        system = self.document.add_system(
            state.page_number,
            bars,
            row_length=len(state.break_points),
        )
        self._last_system = system

        self._logger.info(
            event=LogEvent.SYSTEM_COMPLETED,
            message=f"Cut system into {len(bars)} bars",
            metadata={
                'page_number': state.page_number,
                'bars': len(bars),
                'break_points': len(state.break_points),
                'document_bars': self.document.bar_count,
            },
        )

        self._apply(Committed())
        if self.auto_reload:
            self._apply(PageLoaded(page_number=state.page_number))
        return system

    def __repr__(self) -> str:
        return f"BarCutSession(stage={self.stage.value}, systems={len(self.document)})"
