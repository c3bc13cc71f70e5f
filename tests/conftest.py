"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

CHECKSUM = "d41d8cd98f00b204e9800998ecf8427e"

SAMPLE_PAYLOAD_LINES = [
    '<?xml version="1.0" encoding="utf-8"?>',
    "<Save>",
    '  <Kills count="2">',
    '    <Titan id="Eyecube"/>',
    '    <Titan id="Knight"/>',
    "  </Kills>",
    '  <Key id="Door1"/>',
    '  <time val="7260"/>',
    '  <Deaths count="14"/>',
    "</Save>",
]


@pytest.fixture
def checksum() -> str:
    return CHECKSUM


@pytest.fixture
def make_save_text() -> Callable[..., str]:
    """Build save file text from payload lines and a trailing checksum line."""

    def _make(*payload_lines: str, checksum: str = CHECKSUM, newline: str = "\n") -> str:
        return newline.join([*payload_lines, checksum])

    return _make


@pytest.fixture
def sample_save_text(make_save_text: Callable[..., str]) -> str:
    return make_save_text(*SAMPLE_PAYLOAD_LINES)


@pytest.fixture
def write_save(tmp_path: Path) -> Callable[..., Path]:
    """Write raw save text to a file under tmp_path, byte for byte."""

    def _write(name: str, content: str, encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode(encoding))
        return path

    return _write


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Remove handlers installed by setup_logging between tests."""
    yield
    logger = logging.getLogger("titan_souls")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)
