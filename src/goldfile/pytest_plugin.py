"""pytest integration for golden-file sessions.

Enable it from a ``conftest.py``:

    pytest_plugins = ["goldfile.pytest_plugin"]

Tests then request the ``golden`` fixture, write their output through it, and
the session is verified (or, with ``--update-golden`` / ``UPDATE_GOLDEN=1``,
updated) when the test finishes. Golden files live in a ``golden`` directory
next to the test module unless the ``golden_dir`` ini option says otherwise.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Generator

import pytest

from .core.config import GoldenConfig
from .core.session import GoldenSession, SessionState

logger = logging.getLogger(__name__)

_phase_reports = pytest.StashKey[dict[str, pytest.TestReport]]()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add --update-golden option and golden_dir ini key."""
    group = parser.getgroup("goldfile", "golden-file testing")
    group.addoption(
        "--update-golden",
        action="store_true",
        default=False,
        help="Update golden files with current output instead of verifying",
    )
    parser.addini(
        "golden_dir",
        default="golden",
        help="Golden file directory, relative to each test module",
    )


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_runtest_makereport(
    item: pytest.Item, call: pytest.CallInfo[None]
) -> Generator[None, None, None]:
    """Remember each phase's report so fixtures can see the test outcome."""
    outcome = yield
    report = outcome.get_result()
    item.stash.setdefault(_phase_reports, {})[report.when] = report


@pytest.fixture
def golden_config(request: pytest.FixtureRequest) -> GoldenConfig:
    """Session configuration from the environment and --update-golden.

    Returns:
        GoldenConfig for the current test.
    """
    config = GoldenConfig.from_env()
    if request.config.getoption("--update-golden"):
        config = replace(config, update=True)
    return config


@pytest.fixture
def golden(
    request: pytest.FixtureRequest, golden_config: GoldenConfig
) -> Generator[GoldenSession, None, None]:
    """A GoldenSession rooted at the test module's golden directory.

    The session is finalized at teardown only when the test body passed; a
    failing test just discards the staged output.
    """
    golden_root = request.path.parent / request.config.getini("golden_dir")
    session = GoldenSession(golden_root, config=golden_config)
    yield session

    reports = request.node.stash.get(_phase_reports, {})
    call_report = reports.get("call")
    if call_report is None or not call_report.passed:
        logger.debug(f"Test {request.node.nodeid} did not pass; discarding golden session")
        session.discard()
    elif session.state is SessionState.ACTIVE:
        session.finish()
