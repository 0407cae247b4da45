# tests/conftest.py
"""Shared test fixtures and helpers.

Fixtures:
- plugin_manager: PluginManager with the built-in codecs registered
- long_codec / text_codec: codec instances for reader tests
- job_conf: the default job configuration (comma delimiter, no duplication)
- edges_file: factory writing lines to a file under tmp_path

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import os
from collections.abc import Callable
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

from edgeline.core.config import DELIMITER_KEY, REVERSE_DUPLICATOR_KEY
from edgeline.plugins.codecs.long import LongCodec
from edgeline.plugins.codecs.text import TextCodec
from edgeline.plugins.manager import PluginManager

# =============================================================================
# Hypothesis Configuration
# =============================================================================

settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def plugin_manager() -> PluginManager:
    manager = PluginManager()
    manager.register_builtin_plugins()
    return manager


@pytest.fixture
def long_codec() -> LongCodec:
    return LongCodec()


@pytest.fixture
def text_codec() -> TextCodec:
    return TextCodec()


@pytest.fixture
def job_conf() -> dict[str, str]:
    return {DELIMITER_KEY: ",", REVERSE_DUPLICATOR_KEY: "false"}


@pytest.fixture
def edges_file(tmp_path: Path) -> Callable[..., Path]:
    """Factory: edges_file(["A,B", ...], name="edges.csv") -> Path."""

    def _write(lines: list[str], name: str = "edges.csv") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write
