"""
Scorecut CLI - Main entry point.

Replays recorded clicks through BarCutSession and exports the bar document.
"""

import argparse
import sys
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import cv2
import yaml

from scorecut_bars.config import ScorecutConfig
from scorecut_bars.geometry.shapes import Point2D
from scorecut_bars.logging import LogEvent, create_logger, set_log_level
from scorecut_bars.rendering import BarBoxVisualizer, MeasureCropper
from scorecut_bars.session import (
    BarCutSession,
    BarDocument,
    BeginCut,
    Clicked,
    CuttingStage,
    FinishCut,
    PageLoaded,
)

_logger = create_logger("cli")


@dataclass(frozen=True)
class SystemClicks:
    """Recorded calibration clicks for one system."""

    page_number: int
    top_left: Point2D
    top_right: Point2D
    staff_height: Point2D
    break_points: List[Point2D]
    finish: bool = True


def get_target_run_folder(application_name: str, base_dir: str = "./runs") -> Path:
    # runs is datetime generated folder in the application name folder;
    # runs started in the same second get a numeric suffix
    parent = Path(base_dir) / application_name
    parent.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime('%Y%m%d_%H%M%S')
    name, suffix = stamp, 1
    while True:
        target = parent / name
        try:
            target.mkdir()
            return target
        except FileExistsError:
            name = f"{stamp}_{suffix}"
            suffix += 1


def load_yaml_config(config_path: str) -> Dict[str, Any]:
    """
    Load YAML file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If YAML is invalid
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"File not found: {config_path}")

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {config_path}: {e}")

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the root of {config_path}")
    return data


def parse_systems(data: Dict[str, Any]) -> List[SystemClicks]:
    """
    Parse recorded clicks.

    Example YAML:
        systems:
          - page_number: 1
            top_left: [340, 128]
            top_right: [1016, 116]
            staff_height: [520, 236]
            break_points: [[455, 180], [610, 178], [1020, 176]]
            finish: true

    Raises:
        ValueError: If a system entry is incomplete or malformed
    """
    systems = []
    for i, entry in enumerate(data.get("systems") or []):
        try:
            systems.append(SystemClicks(
                page_number=int(entry.get("page_number", 1)),
                top_left=Point2D.from_sequence(entry["top_left"]),
                top_right=Point2D.from_sequence(entry["top_right"]),
                staff_height=Point2D.from_sequence(entry["staff_height"]),
                break_points=[Point2D.from_sequence(p) for p in entry.get("break_points") or []],
                finish=bool(entry.get("finish", True)),
            ))
        except KeyError as e:
            raise ValueError(f"System {i} is missing {e}")
        except (TypeError, AttributeError) as e:
            raise ValueError(f"System {i} is malformed: {e}")
    return systems


def replay_systems(session: BarCutSession, systems: Sequence[SystemClicks]) -> BarDocument:
    """
    Feed recorded clicks through the cutting workflow.

    Clicks after the one that completes a system are ignored. A system whose
    break points never reach the end of the top edge is closed with
    FinishCut when ``finish`` is set, and abandoned otherwise. A system
    whose calibration clicks were rejected is abandoned as well.
    """
    for system in systems:
        if getattr(session.state, "page_number", None) != system.page_number:
            session.handle(PageLoaded(page_number=system.page_number))
        elif session.stage is not CuttingStage.LOADED:
            session.reset()
            session.handle(PageLoaded(page_number=system.page_number))

        completed = session.last_system
        session.handle(BeginCut())
        for point in (system.top_left, system.top_right, system.staff_height):
            session.handle(Clicked(point))
        if session.stage is not CuttingStage.CUTTING:
            session.reset()
            continue

        for point in system.break_points:
            if session.last_system is not completed:
                break
            session.handle(Clicked(point))

        if session.last_system is completed:
            if system.finish:
                session.handle(FinishCut())
            else:
                session.reset()

    return session.document


def load_image(image_path: str):
    image = cv2.imread(str(image_path))
    if image is None:
        raise FileNotFoundError(f"Image not found or unreadable: {image_path}")
    return image


def run_cut(
    points_path: str,
    image_path: Optional[str] = None,
    config_path: Optional[str] = None,
    output_dir: str = "./runs",
    crop: bool = False,
    mask: bool = False,
) -> Path:
    """
    Cut the recorded systems and write the results.

    Returns:
        Run folder holding bars.json (and preview.png / crops/)
    """
    config = ScorecutConfig.from_yaml(Path(config_path)) if config_path else ScorecutConfig()
    set_log_level(config.log_level)
    if config_path:
        _logger.info(
            event=LogEvent.CONFIG_LOADED,
            message=f"Loaded configuration from {config_path}",
            metadata={'completion_threshold': config.cutting.completion_threshold},
        )

    systems = parse_systems(load_yaml_config(points_path))
    image = load_image(image_path) if image_path else None

    session = BarCutSession(config=config.cutting)
    document = replay_systems(session, systems)

    run_folder = get_target_run_folder("cut", base_dir=output_dir)
    bars_path = document.save_json(run_folder / "bars.json")
    _logger.info(
        event=LogEvent.EXPORT_WRITTEN,
        message=f"Wrote {document.bar_count} bars",
        metadata={'path': str(bars_path), 'systems': len(document)},
    )

    if image is not None:
        visualizer = BarBoxVisualizer.from_config(config.render)
        preview = visualizer.draw_bar_boxes(image.copy(), document.bars())
        preview_path = run_folder / "preview.png"
        cv2.imwrite(str(preview_path), preview)
        _logger.info(
            event=LogEvent.PREVIEW_WRITTEN,
            message="Wrote annotated preview",
            metadata={'path': str(preview_path)},
        )

        if crop:
            cropper = MeasureCropper(str(run_folder / "crops"), mask_outside=mask)
            cropper.save(image, document.bars())

    return run_folder


def summarize(document: BarDocument) -> str:
    lines = [f"{len(document)} systems, {document.bar_count} bars"]
    for page_number in document.pages:
        for i, system in enumerate(document.systems(page_number)):
            indices = [bar.index_in_document for bar in system.bars]
            span = f"{indices[0]}-{indices[-1]}" if indices else "-"
            lines.append(
                f"  page {page_number} system {i}: {len(system.bars)} bars (#{span})"
            )
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Scorecut CLI - Cut score systems into bar boxes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Cut systems from recorded clicks, export bars.json only
  scorecut cut cuts.yaml

  # Also draw the bars on the page and crop every bar
  scorecut cut cuts.yaml --image page-001.png --crop

  # Summarize an exported document
  scorecut summary runs/cut/20251024_153045/bars.json
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    cut = subparsers.add_parser('cut', help='Cut systems from recorded clicks')
    cut.add_argument('points', help='Path to recorded clicks YAML')
    cut.add_argument('--image', help='Page image for preview and crops')
    cut.add_argument('--config', help='Path to scorecut config YAML')
    cut.add_argument('--output-dir', default='./runs', help='Base folder for runs (default: ./runs)')
    cut.add_argument('--crop', action='store_true', help='Save one image per bar (needs --image)')
    cut.add_argument('--mask', action='store_true', help='Mask pixels outside each bar when cropping')

    summary = subparsers.add_parser('summary', help='Summarize an exported bar document')
    summary.add_argument('bars', help='Path to bars.json')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == 'cut':
            if args.crop and not args.image:
                raise ValueError("--crop requires --image")
            run_folder = run_cut(
                args.points,
                image_path=args.image,
                config_path=args.config,
                output_dir=args.output_dir,
                crop=args.crop,
                mask=args.mask,
            )
            print(run_folder)

        elif args.command == 'summary':
            print(summarize(BarDocument.load_json(Path(args.bars))))

    except (FileNotFoundError, ValueError) as e:
        _logger.error(event=LogEvent.CLI_ERROR, message=str(e), exc_info=e)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
