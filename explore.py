import os
import sys
import warnings
from argparse import Action, ArgumentParser, ArgumentTypeError
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from mandelbrot_explorer import (
    PALETTES,
    REFERENCE_FRAME,
    AdvanceIterations,
    AdvancePalette,
    AdvanceRegionFromLine,
    AdvanceRegionFromRectangle,
    ExplorerError,
    ExplorerSession,
    ViewState,
)
from mandelbrot_explorer.calculator import MAX_ITERATION_CAP
from mandelbrot_explorer.state import (
    INITIAL_MAX_IMAGINARY,
    INITIAL_MAX_ITERATIONS,
    INITIAL_MAX_REAL,
    INITIAL_MIN_IMAGINARY,
    INITIAL_MIN_REAL,
    INITIAL_PALETTE,
)

log("TensorFlow version: %s" % tf.__version__)

gpus = tf.config.list_physical_devices('GPU')
if gpus:
    try:
        for gpu in gpus:
            tf.config.experimental.set_memory_growth(gpu, True)
        DEVICE = '/GPU:0'
        log("GPU found, using %s" % gpus[0].name)
    except RuntimeError as e:
        log(e)
        DEVICE = '/CPU:0'
else:
    DEVICE = '/CPU:0'
    log("No GPU found, using CPU")

AUTO_PATH = "auto"


def _four_floats(text: str) -> tuple[float, float, float, float]:
    parts = [part.strip() for part in text.split(",")]
    if len(parts) != 4:
        raise ArgumentTypeError(f"expected four comma-separated numbers, got '{text}'")
    try:
        return tuple(float(part) for part in parts)
    except ValueError as exc:
        raise ArgumentTypeError(f"expected four comma-separated numbers, got '{text}'") from exc


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError as exc:
        raise ArgumentTypeError(f"expected a positive integer, got '{text}'") from exc
    if value <= 0:
        raise ArgumentTypeError(f"expected a positive integer, got '{text}'")
    if value > MAX_ITERATION_CAP:
        raise ArgumentTypeError(f"expected at most {MAX_ITERATION_CAP}, got '{text}'")
    return value


class _StepAction(Action):
    """Record navigation flags in command line order on ``namespace.steps``."""

    def __call__(self, parser, namespace, values, option_string=None):
        steps = list(getattr(namespace, "steps", None) or [])
        steps.append((self.const, values))
        namespace.steps = steps


@dataclass(frozen=True)
class ExplorerConfig:
    width: int
    height: int
    frame_size: float
    initial: ViewState
    steps: tuple[tuple[str, object], ...]
    image_path: Path
    image_format: str
    params_path: Path | None
    gif_path: Path | None


def build_parser():
    parser = ArgumentParser(description="Render and navigate the Mandelbrot set from the command line.")
    parser.set_defaults(steps=[])

    parser.add_argument('--width', type=_positive_int,
                        dest='width', help='width of the rendered image in pixels',
                        metavar='WIDTH', default=850)

    parser.add_argument('--height', type=_positive_int,
                        dest='height', help='height of the rendered image in pixels',
                        metavar='HEIGHT', default=850)

    parser.add_argument('--frame-size', type=float,
                        dest='frame_size', help='size of the square reference frame that zoom coordinates are given in',
                        metavar='FRAME_SIZE', default=REFERENCE_FRAME)

    parser.add_argument('--max-iterations', type=_positive_int,
                        dest='max_iterations', help='iteration cap of the first view',
                        metavar='MAX_ITERATIONS', default=INITIAL_MAX_ITERATIONS)

    parser.add_argument('--palette', choices=PALETTES, default=INITIAL_PALETTE,
                        help='palette of the first view')

    parser.add_argument('--min-real', type=float, dest='min_real', default=INITIAL_MIN_REAL,
                        help='lower real bound of the first view')
    parser.add_argument('--max-real', type=float, dest='max_real', default=INITIAL_MAX_REAL,
                        help='upper real bound of the first view')
    parser.add_argument('--min-imag', type=float, dest='min_imag', default=INITIAL_MIN_IMAGINARY,
                        help='lower imaginary bound of the first view')
    parser.add_argument('--max-imag', type=float, dest='max_imag', default=INITIAL_MAX_IMAGINARY,
                        help='upper imaginary bound of the first view')

    parser.add_argument('--zoom-rect', action=_StepAction, const='zoom-rect', type=_four_floats,
                        metavar='X0,X1,Y0,Y1', help='zoom into a selection rectangle given in reference-frame pixels. May be repeated.')

    parser.add_argument('--zoom-line', action=_StepAction, const='zoom-line', type=_four_floats,
                        metavar='X1,X2,Y1,Y2', help='pan along a line dragged in reference-frame pixels. May be repeated.')

    parser.add_argument('--next-palette', action=_StepAction, const='next-palette', nargs=0,
                        help='advance to the next palette (Pure, Red, Green, Blue, Brown).')

    parser.add_argument('--iterations', action=_StepAction, const='iterations', type=_positive_int,
                        metavar='N', help='change the iteration cap.')

    parser.add_argument('--undo', action=_StepAction, const='undo', nargs=0,
                        help='step back one state in the history.')

    parser.add_argument('--redo', action=_StepAction, const='redo', nargs=0,
                        help='step forward one state in the history.')

    parser.add_argument('--load', action=_StepAction, const='load', type=str,
                        metavar='PATH', help='append the view state saved in PATH to the history.')

    parser.add_argument('--output', dest='output', type=str,
                        help='image file for the final view. Default: MSPic_<timestamp>.<format> in the working directory.')

    parser.add_argument('--format', type=str,
                        dest='format', help='file format of the image. Can be any extension supported by Pillow. Default: "png".',
                        metavar='FORMAT', default='png')

    parser.add_argument('--save-params', dest='save_params', nargs='?', const=AUTO_PATH, default=None,
                        metavar='PATH', help='save the final view state. Without PATH a timestamped MSFile_<timestamp>.json is written.')

    parser.add_argument('--history-gif', dest='history_gif', type=str,
                        metavar='PATH', help='write every state up to the final one as an animated GIF.')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow and hardware diagnostics.')

    return parser


def _timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now()).strftime("%Y-%m-%d_%H-%M-%S")


def snapshot_filename(now: datetime | None = None) -> str:
    return f"MSFile_{_timestamp(now)}.json"


def image_filename(image_format: str, now: datetime | None = None) -> str:
    return f"MSPic_{_timestamp(now)}.{image_format}"


def resolve_config(opt, parser: ArgumentParser) -> ExplorerConfig:
    if not opt.min_real < opt.max_real:
        parser.error("--min-real must be smaller than --max-real.")
    if not opt.min_imag < opt.max_imag:
        parser.error("--min-imag must be smaller than --max-imag.")
    if opt.frame_size <= 0:
        parser.error("--frame-size must be positive.")

    image_format = (getattr(opt, "format", "png") or "png").lower().lstrip(".")
    if not image_format:
        image_format = "png"

    if opt.output:
        image_path = Path(opt.output).expanduser()
        if image_path.exists() and image_path.is_dir():
            parser.error("--output must point to a file, not a directory.")
        suffix = image_path.suffix
        if suffix:
            if suffix.lower().lstrip(".") != image_format:
                parser.error(f"--output extension {suffix} does not match --format {image_format}.")
        else:
            image_path = image_path.with_suffix(f".{image_format}")
    else:
        image_path = Path(image_filename(image_format))

    params_path = None
    if opt.save_params is not None:
        params_path = Path(snapshot_filename() if opt.save_params == AUTO_PATH else opt.save_params).expanduser()

    gif_path = None
    if opt.history_gif:
        gif_path = Path(opt.history_gif).expanduser()
        if gif_path.suffix.lower() != ".gif":
            parser.error("--history-gif must end with .gif.")

    initial = ViewState(
        min_real=opt.min_real,
        max_real=opt.max_real,
        min_imag=opt.min_imag,
        max_imag=opt.max_imag,
        palette=opt.palette,
        max_iterations=opt.max_iterations,
    )

    return ExplorerConfig(
        width=opt.width,
        height=opt.height,
        frame_size=float(opt.frame_size),
        initial=initial,
        steps=tuple(opt.steps or ()),
        image_path=image_path.resolve(),
        image_format=image_format,
        params_path=params_path.resolve() if params_path is not None else None,
        gif_path=gif_path.resolve() if gif_path is not None else None,
    )


def run_steps(session: ExplorerSession, steps) -> None:
    """Apply the recorded navigation steps to ``session`` in order."""

    for kind, value in steps:
        if kind == 'zoom-rect':
            session.navigate(AdvanceRegionFromRectangle(*value))
        elif kind == 'zoom-line':
            session.navigate(AdvanceRegionFromLine(*value))
        elif kind == 'next-palette':
            session.navigate(AdvancePalette())
        elif kind == 'iterations':
            session.navigate(AdvanceIterations(value))
        elif kind == 'undo':
            if not session.history.can_undo:
                log("undo: already at the first state")
            session.undo()
        elif kind == 'redo':
            if not session.history.can_redo:
                log("redo: already at the latest state")
            session.redo()
        elif kind == 'load':
            session.load_snapshot(Path(value).expanduser())
        else:
            raise ValueError(f"Unknown navigation step '{kind}'.")
        view = session.current
        log("{0}: state {1} of {2}, real [{3:.6g}, {4:.6g}], imag [{5:.6g}, {6:.6g}], {7}, {8} iterations".format(
            kind,
            session.history.cursor + 1,
            len(session.history),
            view.min_real,
            view.max_real,
            view.min_imag,
            view.max_imag,
            view.palette,
            view.max_iterations,
        ))


def main(argv=None):
    parser = build_parser()
    opt = parser.parse_args(argv)

    config = resolve_config(opt, parser)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    session = ExplorerSession(
        config.width,
        config.height,
        initial=config.initial,
        frame_size=config.frame_size,
        device=DEVICE,
    )

    try:
        run_steps(session, config.steps)
        written = session.export_image(config.image_path, config.image_format)
        print(f"image written to {written}")
        if config.params_path is not None:
            written = session.save_snapshot(config.params_path)
            print(f"view state written to {written}")
        if config.gif_path is not None:
            written = session.export_history_gif(config.gif_path)
            print(f"history written to {written}")
    except ExplorerError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
