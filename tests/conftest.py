"""Common test fixtures."""

import sys
from pathlib import Path
from textwrap import dedent
from typing import Callable

import pytest
from loguru import logger

from site_content.config import ContentConfig
from site_content.store import ContentStore


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep settings from the developer's shell out of the tests."""
    for name in (
        "SITE_CONTENT_CONTENT_DIR",
        "SITE_CONTENT_EXTENSIONS",
        "SITE_CONTENT_DELIMITER",
        "SITE_CONTENT_IGNORE_PATTERNS",
        "SITE_CONTENT_LOG_LEVEL",
        "SITE_CONTENT_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI callback replaces loguru sinks; restore a plain one after each test."""
    yield
    logger.remove()
    logger.add(sys.stderr, level="DEBUG")


@pytest.fixture
def log_messages():
    """Capture loguru messages emitted during a test."""
    messages = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def content_dir(tmp_path) -> Path:
    path = tmp_path / "content"
    path.mkdir()
    return path


@pytest.fixture
def write_content(content_dir) -> Callable[[str, str], Path]:
    """Write a dedented content file relative to the content root."""

    def _write(rel_path: str, text: str) -> Path:
        path = content_dir / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_site(write_content, content_dir) -> Path:
    """A small content root with two posts and one project write-up."""
    write_content(
        "posts/hugo.md",
        """
        +++
        title = "Hugo"
        date = "2019-03-06T00:57:32+05:30"
        tags = ["go", "static-sites"]
        +++

        Hello world.
        """,
    )
    write_content(
        "posts/react-hooks.md",
        """
        +++
        title = "React hooks"
        date = "2020-01-10T09:00:00+00:00"
        tags = ["react"]
        description = "Notes on hooks"
        +++

        Hooks let function components hold state.
        """,
    )
    write_content(
        "projects/nes.md",
        """
        +++
        title = "NES emulator"
        date = "2018-07-01"
        tags = ["rust", "emulation"]
        +++

        ```rust
        fn step(&mut self) {}
        ```
        """,
    )
    return content_dir


@pytest.fixture
def store(sample_site) -> ContentStore:
    return ContentStore(sample_site, ContentConfig(content_dir=sample_site))
