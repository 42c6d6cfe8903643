from __future__ import annotations

import shutil
import subprocess
import sys
from argparse import ArgumentParser
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_ARGS = ["--width", "160", "--height", "160"]


@dataclass
class Expected:
    path: Path


@dataclass
class Example:
    name: str
    args: list[str]
    expected: list[Expected]
    clean: list[Path] | None = None

    def full_args(self) -> list[str]:
        return ["python", "explore.py", *self.args]


EXAMPLES: list[Example] = [
    Example(
        name="initial",
        args=[*BASE_ARGS, "--output", str(EXAMPLES_ROOT / "initial" / "initial.png")],
        expected=[Expected(EXAMPLES_ROOT / "initial" / "initial.png")],
        clean=[EXAMPLES_ROOT / "initial"],
    ),
    Example(
        name="palette",
        args=[*BASE_ARGS, "--palette", "Blue", "--output", str(EXAMPLES_ROOT / "palette" / "blue.png")],
        expected=[Expected(EXAMPLES_ROOT / "palette" / "blue.png")],
        clean=[EXAMPLES_ROOT / "palette"],
    ),
    Example(
        name="zoom-rect",
        args=[
            *BASE_ARGS,
            "--next-palette",
            "--zoom-rect", "300,550,150,400",
            "--output", str(EXAMPLES_ROOT / "zoom-rect" / "seahorse-valley.png"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "zoom-rect" / "seahorse-valley.png")],
        clean=[EXAMPLES_ROOT / "zoom-rect"],
    ),
    Example(
        name="zoom-line",
        args=[*BASE_ARGS, "--palette", "Green", "--zoom-line", "0,40,0,-60", "--output", str(EXAMPLES_ROOT / "zoom-line" / "panned.png")],
        expected=[Expected(EXAMPLES_ROOT / "zoom-line" / "panned.png")],
        clean=[EXAMPLES_ROOT / "zoom-line"],
    ),
    Example(
        name="iterations",
        args=[*BASE_ARGS, "--palette", "Red", "--iterations", "500", "--output", str(EXAMPLES_ROOT / "iterations" / "deep.png")],
        expected=[Expected(EXAMPLES_ROOT / "iterations" / "deep.png")],
        clean=[EXAMPLES_ROOT / "iterations"],
    ),
    Example(
        name="undo-redo",
        args=[
            *BASE_ARGS,
            "--zoom-rect", "200,650,200,650",
            "--iterations", "300",
            "--undo",
            "--next-palette",
            "--undo",
            "--redo",
            "--output", str(EXAMPLES_ROOT / "undo-redo" / "branch.png"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "undo-redo" / "branch.png")],
        clean=[EXAMPLES_ROOT / "undo-redo"],
    ),
    Example(
        name="format",
        args=[*BASE_ARGS, "--palette", "Brown", "--format", "jpg", "--output", str(EXAMPLES_ROOT / "format" / "brown.jpg")],
        expected=[Expected(EXAMPLES_ROOT / "format" / "brown.jpg")],
        clean=[EXAMPLES_ROOT / "format"],
    ),
    Example(
        name="save-params",
        args=[
            *BASE_ARGS,
            "--zoom-rect", "100,300,400,600",
            "--output", str(EXAMPLES_ROOT / "save-params" / "zoomed.png"),
            "--save-params", str(EXAMPLES_ROOT / "save-params" / "zoomed.json"),
        ],
        expected=[
            Expected(EXAMPLES_ROOT / "save-params" / "zoomed.png"),
            Expected(EXAMPLES_ROOT / "save-params" / "zoomed.json"),
        ],
        clean=[EXAMPLES_ROOT / "save-params"],
    ),
    Example(
        name="load",
        args=[
            *BASE_ARGS,
            "--load", str(EXAMPLES_ROOT / "save-params" / "zoomed.json"),
            "--next-palette",
            "--output", str(EXAMPLES_ROOT / "load" / "reloaded.png"),
        ],
        expected=[Expected(EXAMPLES_ROOT / "load" / "reloaded.png")],
        clean=[EXAMPLES_ROOT / "load"],
    ),
    Example(
        name="history-gif",
        args=[
            *BASE_ARGS,
            "--next-palette",
            "--zoom-rect", "200,650,200,650",
            "--zoom-rect", "200,650,200,650",
            "--iterations", "250",
            "--output", str(EXAMPLES_ROOT / "history-gif" / "final.png"),
            "--history-gif", str(EXAMPLES_ROOT / "history-gif" / "history.gif"),
        ],
        expected=[
            Expected(EXAMPLES_ROOT / "history-gif" / "final.png"),
            Expected(EXAMPLES_ROOT / "history-gif" / "history.gif"),
        ],
        clean=[EXAMPLES_ROOT / "history-gif"],
    ),
    Example(
        name="verbose",
        args=[*BASE_ARGS, "--verbose", "--next-palette", "--output", str(EXAMPLES_ROOT / "verbose" / "diagnostic.png")],
        expected=[Expected(EXAMPLES_ROOT / "verbose" / "diagnostic.png")],
        clean=[EXAMPLES_ROOT / "verbose"],
    ),
]


def run_example(example: Example) -> list[Path]:
    """Regenerate one example and return the expected files it failed to produce."""

    for stale in example.clean or []:
        shutil.rmtree(stale, ignore_errors=True)
    for expected in example.expected:
        expected.path.parent.mkdir(parents=True, exist_ok=True)

    subprocess.run(example.full_args(), check=True)
    return [expected.path for expected in example.expected if not expected.path.is_file()]


def select_examples(names: Iterable[str]) -> list[Example]:
    wanted = set(names)
    if not wanted:
        return list(EXAMPLES)
    unknown = wanted - {example.name for example in EXAMPLES}
    if unknown:
        raise SystemExit(f"unknown example(s): {', '.join(sorted(unknown))}")
    return [example for example in EXAMPLES if example.name in wanted]


def main(argv: list[str] | None = None) -> int:
    parser = ArgumentParser(description="Regenerate the CLI option examples under examples/cli-options.")
    parser.add_argument("names", nargs="*", metavar="NAME", help="only regenerate these examples")
    opt = parser.parse_args(argv)

    missing: dict[str, list[Path]] = {}
    for example in select_examples(opt.names):
        print(f"[cli-example] {example.name}")
        absent = run_example(example)
        if absent:
            missing[example.name] = absent

    for name, paths in missing.items():
        print(f"{name}: missing {', '.join(str(path) for path in paths)}", file=sys.stderr)
    return 1 if missing else 0


if __name__ == "__main__":
    sys.exit(main())
