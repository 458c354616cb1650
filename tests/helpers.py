import subprocess
import sys
from itertools import combinations
from pathlib import Path
from typing import Dict, Iterable, List, Tuple


def _project_root() -> Path:
    # helpers.py resides in tests/, go one level up
    return Path(__file__).resolve().parents[1]


def write_simple(path: Path, rows: Iterable[Tuple[str, int]]) -> Path:
    """Write a scaffold<TAB>pos file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        for scaffold, pos in rows:
            f.write(f"{scaffold}\t{pos}\n")
    return path


def beagle_line(v: Dict) -> str:
    """Build one beagle-like line.

    The dict must contain ``scaffold`` and ``pos``; ``prefix``, ``ref``,
    ``alt`` and ``probs`` are optional.
    """
    name = f"{v.get('prefix', 'id_1')}_{v['scaffold']}_{v['pos']}"
    fields = [
        name,
        str(v.get("ref", 0)),
        str(v.get("alt", 2)),
        *v.get("probs", ["0.333333", "0.333333", "0.333333"]),
    ]
    return "\t".join(fields)


def write_beagle(path: Path, variants: List[Dict]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        for v in variants:
            f.write(beagle_line(v) + "\n")
    return path


def read_simple_output(path: Path) -> List[Tuple[str, int]]:
    """Parse a ``scaffold:pos`` output file."""
    rows = []
    with open(path) as f:
        for line in f:
            scaffold, pos = line.rstrip("\n").rsplit(":", 1)
            rows.append((scaffold, int(pos)))
    return rows


def assert_spaced(rows: Iterable[Tuple[str, int]], threshold: int) -> None:
    for (s1, p1), (s2, p2) in combinations(list(rows), 2):
        if s1 == s2:
            assert (
                abs(p1 - p2) >= threshold
            ), f"{s1}:{p1} and {s2}:{p2} closer than {threshold}"


def run_snpthin(*args: str, check: bool = True) -> subprocess.CompletedProcess:
    """Run the CLI in a subprocess and capture its output."""
    cmd = [sys.executable, "-m", "snpthin.cli", *[str(a) for a in args]]
    return subprocess.run(
        cmd,
        check=check,
        cwd=_project_root(),
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
    )
