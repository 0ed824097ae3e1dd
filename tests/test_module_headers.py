# tests/test_module_headers.py
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent
MODULES = sorted(
    path
    for folder in ("app", "tests")
    for path in (ROOT / folder).rglob("*.py")
)


@pytest.mark.parametrize("path", MODULES, ids=lambda p: p.relative_to(ROOT).as_posix())
def test_module_starts_with_its_path(path: Path):
    first_line = path.read_text(encoding="utf-8").splitlines()[0]
    assert first_line == f"# {path.relative_to(ROOT).as_posix()}"
