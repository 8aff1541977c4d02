import argparse
import shutil
from pathlib import Path
from typing import List, Optional, Tuple

from collage.state import LayoutConfig
from collage.utils import StepTimer
from collage.workflow import CollageSession, initialize_state
from placement_engine import DEFAULT_MARGIN, DEFAULT_MAX_ATTEMPTS, OVERSIZE_POLICIES


SCRIPT_DIR = Path(__file__).parent.resolve()


def parse_size(value: str) -> Tuple[float, float]:
    parts = value.lower().split("x")
    if len(parts) != 2:
        raise ValueError(f"Invalid size '{value}', expected WxH")
    w = float(parts[0])
    h = float(parts[1])
    if w < 0 or h < 0:
        raise ValueError("Size components cannot be negative")
    return w, h


def _size_arg(value: str) -> Tuple[float, float]:
    try:
        return parse_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def run_collage(
    items_dir: Path,
    sizes: List[Tuple[float, float]],
    config: LayoutConfig,
    output_dir: Optional[Path] = None,
) -> Path:
    """Lay out ``items_dir`` once per container size.

    The first size fires the ready trigger, every further size a resize.
    Returns the run directory holding one ``pass_NN`` folder per size.
    """
    print("\n=== Running collage layout ===")
    if not sizes:
        raise ValueError("At least one container size is required")
    base_out = output_dir or (SCRIPT_DIR / "output_collage")
    run_root = base_out / Path(items_dir).name
    # Clean previous outputs for this folder to avoid mixing runs
    if run_root.exists():
        shutil.rmtree(run_root)

    timer = StepTimer()
    with timer.time_step("prepare"):
        state = initialize_state(items_dir, base_out, sizes[0], config=config)
    session = CollageSession(state)

    with timer.time_step("pass_01"):
        session.on_ready()
    for idx, (w, h) in enumerate(sizes[1:], start=2):
        with timer.time_step(f"pass_{idx:02d}"):
            session.on_resize(w, h)

    timer.write_to_file(str(session.state.run.run_root / "time_log.txt"))
    print(f"Collage outputs saved to: {session.state.run.run_root}")
    return session.state.run.run_root


def main():
    parser = argparse.ArgumentParser(description="Random non-overlapping collage layout for a folder of images.")
    parser.add_argument("--items", required=True, help="Folder with the collage images (optionally a collage.json manifest)")
    parser.add_argument("--size", required=True, type=_size_arg, action="append", help="Container size WxH; repeat to simulate resizes (e.g. --size 1200x800 --size 600x900)")
    parser.add_argument("--margin", type=float, default=DEFAULT_MARGIN, help=f"Minimum gap between images (default: {DEFAULT_MARGIN:g})")
    parser.add_argument("--max-attempts", type=int, default=DEFAULT_MAX_ATTEMPTS, help=f"Draws per image before giving up on overlap (default: {DEFAULT_MAX_ATTEMPTS})")
    parser.add_argument("--oversize", choices=list(OVERSIZE_POLICIES), default="clamp", help="Handling of images larger than the container")
    parser.add_argument("--scale", type=float, default=1.0, help="Rendered size as a fraction of each image's own size")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible layouts")
    parser.add_argument("--background", default="#ffffff", help="'solid', 'gradient' or a #rrggbb colour")
    parser.add_argument("--background-image", default=None, help="Reference image for solid/gradient backgrounds")
    parser.add_argument("--no-render", action="store_true", help="Only write placements.json and collage.css")
    parser.add_argument("--output", default=None, help="Output folder (default: output_collage/ next to this script)")
    args = parser.parse_args()

    items_dir = Path(args.items).resolve()
    if not items_dir.exists():
        raise FileNotFoundError(f"Expected collage images at {items_dir}")

    config = LayoutConfig(
        margin=args.margin,
        max_attempts=args.max_attempts,
        oversize=args.oversize,
        scale=args.scale,
        seed=args.seed,
        render=not args.no_render,
        background=args.background,
        background_path=Path(args.background_image) if args.background_image else None,
    )
    run_collage(
        items_dir,
        args.size,
        config,
        output_dir=Path(args.output).resolve() if args.output else None,
    )


if __name__ == "__main__":
    main()
