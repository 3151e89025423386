import sys
from pathlib import Path

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from roomcrawl.config import default_registry  # noqa: E402
from roomcrawl.rng import RandomSource  # noqa: E402


@pytest.fixture()
def rng() -> RandomSource:
    return RandomSource(seed=1234)


@pytest.fixture()
def registry():
    return default_registry()
