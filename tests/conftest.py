"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local sheetbind package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))


@pytest.fixture(autouse=True)
def default_resolver() -> Generator[None, None, None]:
    """Give every test a fresh process-wide resolver with default settings."""
    from sheetbind.config.models import SheetbindConfig
    from sheetbind.reflect import configure

    configure(SheetbindConfig())
    yield
    configure(SheetbindConfig())
