"""Pytest configuration for path setup and marker handling."""

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parent.parent))


def pytest_addoption(parser):
    parser.addoption(
        "--runintegration",
        action="store_true",
        default=False,
        help="run integration tests",
    )


def pytest_collection_modifyitems(config, items):
    skip_integration = not config.getoption("--runintegration")

    for item in items:
        fspath = str(getattr(item, "fspath", ""))
        if "tests/cli/" in fspath.replace("\\", "/"):
            item.add_marker(pytest.mark.integration)

        if skip_integration and "integration" in item.keywords:
            item.add_marker(
                pytest.mark.skip(reason="need --runintegration to run integration tests")
            )


SAMPLE_PCM = "ref terrain material grass\npoint terrain 1 2 3\npoint terrain 4 5 6\n"


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_PCM


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.pcm"
    path.write_text(SAMPLE_PCM, encoding="utf-8")
    return path
