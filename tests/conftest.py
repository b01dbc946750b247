# tests/conftest.py
import os
import sys

import pytest

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
lot_common_path = os.path.join(project_root, 'src', 'libs', 'lot-common')
for path in (project_root, lot_common_path):
    if path not in sys.path:
        sys.path.insert(0, path)

from tests.test_support.in_memory_catalog import InMemoryCatalog, color, quality  # noqa: E402


@pytest.fixture
def seeded_catalog() -> InMemoryCatalog:
    """A small catalog covering alias, scope and case-folding scenarios."""
    return InMemoryCatalog(
        qualities=[
            quality("COT100", "cotton", "100% cotton"),
            quality("SLK200", "silk", "mulberry silk"),
            quality("LIN300"),
            quality("VIS400", "viscose", "rayon"),
            quality("POLY_50", "poly blend"),
        ],
        colors=[
            color("SLK200", "Royal Blue", "RB-01"),
            color("COT100", "Sky Blue", "SB-02"),
            color("COT100", "Crimson Red", None),
            color("LIN300", "Navy blue", "NB-03"),
            color("VIS400", "Blue 100%", "B100"),
        ],
    )
