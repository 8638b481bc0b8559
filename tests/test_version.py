"""Simple version check for the package.

Verifies that the ``__version__`` attribute matches the expected release
string."""

import importlib
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

random_melody = importlib.import_module("random_melody")


def test_version_matches():
    """Ensure ``random_melody.__version__`` exposes the release version."""
    assert random_melody.__version__ == "0.1.0"
