import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'compass_config'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from compass_config.core.frameworks import FrameworkRegistry


def _touch(path: Path, content: bytes = b"") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return path


@pytest.fixture
def touch():
    """Create a file (and its parents) under a test directory."""
    return _touch


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A stand-alone project with one image and one font.

    Layout:
        <tmp>/project/images/logo.png
        <tmp>/project/images/icons/close.png
        <tmp>/project/fonts/body.woff
        <tmp>/project/sass/screen.scss
    """
    root = tmp_path / "project"
    _touch(root / "images" / "logo.png", b"\x89PNG")
    _touch(root / "images" / "icons" / "close.png", b"\x89PNG")
    _touch(root / "fonts" / "body.woff", b"wOFF")
    _touch(root / "sass" / "screen.scss", b"")
    return root


@pytest.fixture
def frameworks() -> FrameworkRegistry:
    """A registry private to the test."""
    return FrameworkRegistry()
