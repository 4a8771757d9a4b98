"""Tests for EditSession: loading, mutation gating, save and close."""

from pathlib import Path

import pytest
from conftest import FakeHost

from propedit.constants import BLOCKED_IN_ONLINE_MODE
from propedit.environment import EnvironmentSwitch
from propedit.fs.capability import LocalDirectory
from propedit.models import ConfigFile, EnvironmentMode, SessionState
from propedit.session import EditSession

FILE_NAME = "application+Main.properties"


def _cache(opt: Path) -> LocalDirectory:
    return LocalDirectory.open(opt / "data" / "orders" / "config-cache")


def _session(host: FakeHost, mode: EnvironmentMode = EnvironmentMode.LOCAL) -> EditSession:
    switch = EnvironmentSwitch(host)
    switch.mode = mode
    return EditSession(host, switch)


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def local_session(host: FakeHost, opt_path: Path) -> EditSession:
    session = _session(host)
    assert session.open(ConfigFile(FILE_NAME, _cache(opt_path)))
    return session


@pytest.fixture
def online_session(host: FakeHost, opt_path: Path) -> EditSession:
    session = _session(host, EnvironmentMode.ONLINE)
    assert session.open(ConfigFile(FILE_NAME, _cache(opt_path)))
    return session


class TestOpen:
    def test_decodes_entries(self, local_session: EditSession):
        """
        Given a properties file with a comment and two assignments
        When it is opened
        Then the session holds the two entries, is READY and clean
        """
        assert [(e.key, e.value) for e in local_session.entries] == [
            ("server.port", "8080"),
            ("db.url", "jdbc:mysql://db/orders?a=b"),
        ]
        assert local_session.state is SessionState.READY
        assert local_session.dirty is False

    def test_missing_file_reports_and_stays_closed(self, host: FakeHost, opt_path: Path):
        """
        Given a ConfigFile that no longer exists
        When it is opened
        Then open returns False, the session is CLOSED and one error is shown
        """
        session = _session(host)
        assert session.open(ConfigFile("gone.properties", _cache(opt_path))) is False
        assert session.state is SessionState.CLOSED
        assert session.entries == []
        assert len(host.errors) == 1

    def test_rows_are_deletable_only_in_local_mode(
        self, local_session: EditSession, online_session: EditSession
    ):
        """
        Given one session in Local mode and one in Online mode
        When rows are requested
        Then only the Local rows are deletable
        """
        assert all(row.deletable for row in local_session.rows)
        assert not any(row.deletable for row in online_session.rows)

    def test_reopen_clears_dirty(self, local_session: EditSession, opt_path: Path):
        """
        Given a dirty session
        When a file is opened again
        Then dirty is False
        """
        local_session.add_row()
        assert local_session.open(ConfigFile(FILE_NAME, _cache(opt_path)))
        assert local_session.dirty is False


class TestMutation:
    def test_set_value_marks_dirty(self, local_session: EditSession):
        """
        Given a clean Local session
        When a value is edited
        Then the entry changes and the session is dirty
        """
        assert local_session.set_cell(0, "value", "9090")
        assert local_session.entries[0].value == "9090"
        assert local_session.dirty is True
        assert local_session.state is SessionState.READY

    def test_set_key(self, local_session: EditSession):
        assert local_session.set_cell(1, "key", "db.uri")
        assert local_session.entries[1].key == "db.uri"

    def test_out_of_range_row_is_noop(self, local_session: EditSession):
        """
        Given a Local session with two rows
        When row 5 is edited
        Then nothing changes
        """
        assert local_session.set_cell(5, "value", "x") is False
        assert local_session.dirty is False

    def test_unknown_column_is_noop(self, local_session: EditSession):
        assert local_session.set_cell(0, "comment", "x") is False  # type: ignore[arg-type]
        assert local_session.dirty is False

    def test_add_row_appends_placeholder(self, local_session: EditSession):
        """
        Given a Local session with two rows
        When a row is added
        Then a new_key=new_value entry is the last row and its index is returned
        """
        assert local_session.add_row() == 2
        assert (local_session.entries[2].key, local_session.entries[2].value) == (
            "new_key",
            "new_value",
        )
        assert local_session.dirty is True

    async def test_delete_confirmed(self, host: FakeHost, local_session: EditSession):
        """
        Given a Local session and a confirming user
        When row 0 is deleted
        Then the entry is removed after a prompt naming its key
        """
        host.confirm_answers = [True]
        assert await local_session.delete_row(0)
        assert [e.key for e in local_session.entries] == ["db.url"]
        assert host.confirms == ["Delete server.port?"]
        assert local_session.dirty is True

    async def test_delete_declined(self, host: FakeHost, local_session: EditSession):
        host.confirm_answers = [False]
        assert await local_session.delete_row(0) is False
        assert len(local_session.entries) == 2
        assert local_session.dirty is False

    def test_mutation_bumps_revision(self, local_session: EditSession):
        before = local_session.revision
        local_session.add_row()
        assert local_session.revision > before


class TestOnlineMode:
    async def test_mutations_are_noops(self, host: FakeHost, online_session: EditSession):
        """
        Given an Online session
        When edits, adds and deletes are attempted
        Then nothing changes, no prompt is shown and nothing is written
        """
        assert online_session.set_cell(0, "value", "x") is False
        assert online_session.add_row() is None
        assert await online_session.delete_row(0) is False
        assert online_session.entries[0].value == "8080"
        assert online_session.dirty is False
        assert host.confirms == []

    def test_save_is_blocked(self, host: FakeHost, online_session: EditSession, opt_path: Path):
        """
        Given an Online session
        When save is called
        Then the file is untouched and exactly one read-only warning is shown
        """
        target = opt_path / "data" / "orders" / "config-cache" / FILE_NAME
        before = target.read_text()

        assert online_session.save() is False
        assert target.read_text() == before
        assert host.notifications == [(BLOCKED_IN_ONLINE_MODE, "Read-only", "warning")]


class TestSave:
    def test_writes_encoded_entries(
        self, host: FakeHost, local_session: EditSession, opt_path: Path
    ):
        """
        Given an edited Local session
        When save is called
        Then the file holds the encoded entries, comments are gone and dirty is cleared
        """
        local_session.set_cell(0, "value", "9090")
        assert local_session.save()

        target = opt_path / "data" / "orders" / "config-cache" / FILE_NAME
        assert target.read_text() == "server.port=9090\ndb.url=jdbc:mysql://db/orders?a=b\n"
        assert local_session.dirty is False
        assert host.notifications[-1] == (f"Saved {FILE_NAME}", "Saved", "information")

    def test_blank_key_rows_are_not_written(self, local_session: EditSession, opt_path: Path):
        """
        Given a row whose key was cleared
        When the session is saved
        Then that row is not in the file
        """
        local_session.set_cell(0, "key", "   ")
        local_session.save()
        target = opt_path / "data" / "orders" / "config-cache" / FILE_NAME
        assert target.read_text() == "db.url=jdbc:mysql://db/orders?a=b\n"

    def test_failure_keeps_dirty(self, host: FakeHost, local_session: EditSession, opt_path: Path):
        """
        Given an edited Local session whose file was deleted externally
        When save is called
        Then save fails, one error is shown and the session stays dirty
        """
        local_session.add_row()
        (opt_path / "data" / "orders" / "config-cache" / FILE_NAME).unlink()

        assert local_session.save() is False
        assert local_session.dirty is True
        assert len(host.errors) == 1
        assert not (opt_path / "data" / "orders" / "config-cache" / FILE_NAME).exists()

    def test_no_file_open(self, host: FakeHost):
        session = _session(host)
        assert session.save() is False
        assert len(host.errors) == 1


class TestClose:
    async def test_clean_close(self, host: FakeHost, local_session: EditSession):
        """
        Given a clean session
        When it is closed
        Then no confirmation is asked and the session is CLOSED
        """
        assert await local_session.close()
        assert local_session.state is SessionState.CLOSED
        assert local_session.file is None
        assert host.confirms == []

    async def test_dirty_close_confirmed(self, host: FakeHost, local_session: EditSession):
        """
        Given a dirty session and a confirming user
        When it is closed
        Then the changes are discarded and the session is CLOSED
        """
        local_session.add_row()
        host.confirm_answers = [True]

        assert await local_session.close()
        assert local_session.state is SessionState.CLOSED
        assert local_session.dirty is False
        assert local_session.entries == []

    async def test_dirty_close_declined(self, host: FakeHost, local_session: EditSession):
        """
        Given a dirty session and a declining user
        When it is closed
        Then the session stays READY with its edits
        """
        local_session.add_row()
        host.confirm_answers = [False]

        assert await local_session.close() is False
        assert local_session.state is SessionState.READY
        assert local_session.dirty is True
        assert len(local_session.entries) == 3

    async def test_close_when_closed(self, host: FakeHost):
        assert await _session(host).close()
