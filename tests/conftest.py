import os
import sys

import pytest

# Ensure local src path is importable
_here = os.path.dirname(os.path.dirname(__file__))
_src = os.path.join(_here, "src")
if os.path.isdir(_src) and _src not in sys.path:
    sys.path.insert(0, _src)

_CONFIG_ENV_VARS = (
    "DELTA_LINES_CONTEXT_LINES",
    "DELTA_LINES_COLUMN_WIDTH",
    "DELTA_LINES_MAX_RENDER_LINES",
    "DELTA_LINES_MAX_INLINE_CHARS",
)


@pytest.fixture
def clean_config_env(monkeypatch):
    """Remove any DELTA_LINES_* configuration overrides from the environment."""
    for key in _CONFIG_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def five_line_pair():
    """Two five-line texts differing by one character on the middle line."""
    lhs = "alpha\nbravo\ncharlie\ndelta\necho\n"
    rhs = "alpha\nbravo\nchXrlie\ndelta\necho\n"
    return lhs, rhs
