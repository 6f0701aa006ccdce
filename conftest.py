import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List

import pytest

logger = logging.getLogger("shallowtee_conftest")

if TYPE_CHECKING:
    from pytest import Config, Parser

REPO_ROOT = Path(__file__).parent.resolve()

# this is analogous to running `python -m pytest`
# this is needed for `pytest` discovery reasons specific to the `shallowtee` namespace package structure
sys.path.insert(0, str(REPO_ROOT))

# Project Level pytest fixtures
# these fixtures are available to any test in the repository

@pytest.fixture(scope="session")
def repo_root() -> Path:
    """
    Returns absolute path to repository's root directory.
    Only functional with `pytest` style tests.
    Use `repo_root_unittest` to add similar functionality to `unittest.TestCase` tests.
    """
    return REPO_ROOT

# fixture variants designated for use with `unittest.TestCase`
# NOTE: fixture `scope` must be "class" to use with `unittest.TestCase` tests

@pytest.fixture(scope="class")
def repo_root_unittest(request: pytest.FixtureRequest, repo_root: Path) -> Path:
    """
    Sets `._repo_root` property on class to the absolute path to repository's root directory.
    Returns absolute path to repository's root directory if `pytest` style test.
    Functional with both `unittest.TestCase` and `pytest` style tests.
    """
    assert request.cls is not None
    request.cls._repo_root = repo_root
    return repo_root

# Pytest CLI customization
# Includes logic for setting environment variables, such as `SHALLOWTEE_COPY_CHUNK_SIZE`, for a test session


def pytest_addoption(parser: "Parser"):
    parser.addini(
        "env_vars", "Environment variables to set", type="args"
    )


def parse_env_vars(name_values: List[str]) -> Dict[str, str]:
    return dict(map(lambda pair: pair.split("=", 1), name_values))


def _configure_env_vars(config: "Config"):
    env_vars = config.getini("env_vars")
    assert isinstance(env_vars, list)
    parsed_vars = parse_env_vars(env_vars)
    logger.debug(f"Adding these environment variables: {parsed_vars}")
    os.environ.update(parsed_vars)


def pytest_configure(config: "Config"):
    _configure_env_vars(config)
