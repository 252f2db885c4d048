"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for structured logging.

Event Naming Convention:
    <component>.<action>

    component: geometry, partition, session, config, export, render, cli
    action: what happened (stage_changed, bar_skipped, written, ...)
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - geometry.*: Degenerate input met by the primitives
    - partition.*: Bar partitioning of one system
    - session.*: Interactive cutting workflow
    - config.*, export.*, render.*, cli.*: Ambient tooling
    """

    # ========== Geometry Events ==========
    GEOMETRY_DEGENERATE = "geometry.degenerate"
    """A primitive could not be computed (coincident points, bad triangle)."""

    GEOMETRY_OFF_LINE = "geometry.off_line"
    """A point passed as lying on a line does not."""

    # ========== Partition Events ==========
    CALIBRATION_MISSING = "partition.calibration_missing"
    """Partition requested before all calibration points were set."""

    BAR_SKIPPED = "partition.bar_skipped"
    """A break point could not be projected and was dropped."""

    SYSTEM_PARTITIONED = "partition.system_partitioned"
    """A system was partitioned into bar boxes."""

    PARTITION_FAILED = "partition.failed"
    """The system geometry is degenerate; no bars produced."""

    # ========== Session Events ==========
    SESSION_STAGE_CHANGED = "session.stage_changed"
    """The cutting workflow moved to another stage."""

    BREAK_POINT_ADDED = "session.break_point_added"
    """A bar break point was recorded."""

    CLICK_IGNORED = "session.click_ignored"
    """A click could not be placed on the system and was dropped."""

    SYSTEM_COMPLETED = "session.system_completed"
    """A system was fully cut and stored in the document."""

    # ========== Ambient Events ==========
    CONFIG_LOADED = "config.loaded"
    """Configuration file parsed and validated."""

    EXPORT_WRITTEN = "export.written"
    """Bar document written to disk."""

    PREVIEW_WRITTEN = "render.preview_written"
    """Annotated preview image written to disk."""

    CROP_SAVED = "render.crop_saved"
    """A single bar image was cropped and saved."""

    CROP_SKIPPED = "render.crop_skipped"
    """A bar lies outside the page image and was not cropped."""

    CLI_ERROR = "cli.error"
    """Command failed with a user-facing error."""


PARTITION_EVENTS = {
    LogEvent.CALIBRATION_MISSING,
    LogEvent.BAR_SKIPPED,
    LogEvent.SYSTEM_PARTITIONED,
    LogEvent.PARTITION_FAILED,
}

SESSION_EVENTS = {
    LogEvent.SESSION_STAGE_CHANGED,
    LogEvent.BREAK_POINT_ADDED,
    LogEvent.CLICK_IGNORED,
    LogEvent.SYSTEM_COMPLETED,
}
