"""Shared fixtures: a scripted Host and a temporary opt tree."""

from pathlib import Path

import pytest

from propedit.fs.capability import DirectoryCapability, LocalDirectory


class FakeHost:
    """Host that replays scripted answers and records every notification."""

    def __init__(
        self,
        directory: DirectoryCapability | None = None,
        confirm_answers: list[bool] | None = None,
    ) -> None:
        self.directory = directory
        self.confirm_answers = list(confirm_answers or [])
        self.prompts: list[tuple[str, str]] = []
        self.confirms: list[str] = []
        self.notifications: list[tuple[str, str, str]] = []

    async def prompt_directory(self, mode: str, start_hint: str) -> DirectoryCapability | None:
        self.prompts.append((mode, start_hint))
        return self.directory

    async def confirm(self, message: str) -> bool:
        self.confirms.append(message)
        return self.confirm_answers.pop(0) if self.confirm_answers else False

    def notify(self, message: str, *, title: str = "", severity: str = "information") -> None:
        self.notifications.append((message, title, severity))

    @property
    def errors(self) -> list[str]:
        return [m for m, _, severity in self.notifications if severity == "error"]


def write_opt_tree(root: Path, *, local: bool = False) -> Path:
    """Create a small opt/ layout with two projects and return the opt path."""
    opt = root / "opt"
    cache = opt / "data" / "orders" / "config-cache"
    cache.mkdir(parents=True)
    (cache / "application+Main.properties").write_text(
        "# generated\n\nserver.port=8080\ndb.url=jdbc:mysql://db/orders?a=b\n"
    )
    (cache / "logging.properties").write_text("level=INFO\n")
    (cache / "notes.txt").write_text("not a properties file\n")
    (opt / "data" / "billing" / "config-cache").mkdir(parents=True)
    settings = opt / "settings"
    settings.mkdir()
    content = "[General]\nenv=Local\nport=80" if local else "[General]\nport=80"
    (settings / "server.properties").write_text(content)
    return opt


@pytest.fixture
def opt_path(tmp_path: Path) -> Path:
    return write_opt_tree(tmp_path)


@pytest.fixture
def local_opt_path(tmp_path: Path) -> Path:
    return write_opt_tree(tmp_path, local=True)


@pytest.fixture
def opt_root(opt_path: Path) -> LocalDirectory:
    return LocalDirectory.open(opt_path)


@pytest.fixture
def local_opt_root(local_opt_path: Path) -> LocalDirectory:
    return LocalDirectory.open(local_opt_path)
