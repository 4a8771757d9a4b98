"""Tests for the env= directive functions and the EnvironmentSwitch."""

from pathlib import Path

from conftest import FakeHost

from propedit.domain.environment import parse_mode, rewrite_for_mode
from propedit.environment import EnvironmentSwitch
from propedit.errors import WriteFailure
from propedit.fs.capability import LocalDirectory
from propedit.models import EnvironmentMode


class TestParseMode:
    def test_local_directive(self):
        """
        Given content with env=Local after [General]
        When parse_mode is called
        Then the mode is Local
        """
        assert parse_mode("[General]\nenv=Local\nport=80") is EnvironmentMode.LOCAL

    def test_no_directive_is_online(self):
        """
        Given content without an env= line
        When parse_mode is called
        Then the mode is Online
        """
        assert parse_mode("[General]\nport=80") is EnvironmentMode.ONLINE

    def test_other_value_is_online(self):
        """
        Given env=Prod
        When parse_mode is called
        Then the mode is Online
        """
        assert parse_mode("[General]\nenv=Prod") is EnvironmentMode.ONLINE

    def test_value_is_case_sensitive(self):
        """
        Given env=local in lower case
        When parse_mode is called
        Then the mode is Online
        """
        assert parse_mode("env=local") is EnvironmentMode.ONLINE

    def test_whitespace_around_line_and_value(self):
        """
        Given an indented env line with spaces around the value
        When parse_mode is called
        Then the mode is Local
        """
        assert parse_mode("[General]\n   env=  Local  ") is EnvironmentMode.LOCAL

    def test_first_directive_wins(self):
        """
        Given two env= lines, Online first then Local
        When parse_mode is called
        Then only the first one counts
        """
        assert parse_mode("env=Online\nenv=Local") is EnvironmentMode.ONLINE

    def test_only_second_field_counts(self):
        """
        Given env=Local=extra
        When parse_mode is called
        Then only the text between the first and second = is compared
        """
        assert parse_mode("env=Local=extra") is EnvironmentMode.LOCAL

    def test_empty_content(self):
        assert parse_mode("") is EnvironmentMode.ONLINE


class TestRewriteForMode:
    def test_online_to_local_inserts_after_general(self):
        """
        Given content with [General] and no directive
        When it is rewritten for Local
        Then env=Local is the line right after [General]
        """
        result = rewrite_for_mode("[General]\nport=80", EnvironmentMode.LOCAL)
        assert result == "[General]\nenv=Local\nport=80"

    def test_local_to_online_removes_directive(self):
        """
        Given content with env=Local
        When it is rewritten for Online
        Then the directive is gone and the other lines stay
        """
        result = rewrite_for_mode("[General]\nenv=Local\nport=80", EnvironmentMode.ONLINE)
        assert result == "[General]\nport=80"

    def test_missing_general_for_local(self):
        """
        Given content without a [General] line
        When it is rewritten for Local
        Then [General] is prepended and env=Local is appended at the end
        """
        assert rewrite_for_mode("port=80", EnvironmentMode.LOCAL) == "[General]\nport=80\nenv=Local"

    def test_missing_general_for_online(self):
        """
        Given content without a [General] line
        When it is rewritten for Online
        Then [General] is prepended
        """
        assert rewrite_for_mode("port=80", EnvironmentMode.ONLINE) == "[General]\nport=80"

    def test_empty_content_for_local(self):
        assert rewrite_for_mode("", EnvironmentMode.LOCAL) == "[General]\nenv=Local"

    def test_blank_lines_are_dropped(self):
        """
        Given content with blank and whitespace-only lines
        When it is rewritten
        Then no blank lines remain
        """
        result = rewrite_for_mode("[General]\n\nport=80\n   \n", EnvironmentMode.ONLINE)
        assert result == "[General]\nport=80"

    def test_all_directives_removed_before_insert(self):
        """
        Given content with several env= lines
        When it is rewritten for Local
        Then exactly one env=Local line remains
        """
        content = "[General]\nenv=Prod\nport=80\nenv=Local"
        result = rewrite_for_mode(content, EnvironmentMode.LOCAL)
        assert result == "[General]\nenv=Local\nport=80"

    def test_general_elsewhere_is_not_duplicated(self):
        """
        Given a [General] line that is not the first line
        When it is rewritten for Online
        Then no second [General] is added
        """
        result = rewrite_for_mode("[Other]\na=1\n[General]\nb=2", EnvironmentMode.ONLINE)
        assert result == "[Other]\na=1\n[General]\nb=2"

    def test_toggling_twice_is_stable(self):
        """
        Given Local content
        When it is rewritten to Online and back to Local
        Then the result equals a single Local rewrite
        """
        content = "[General]\nenv=Local\nport=80"
        online = rewrite_for_mode(content, EnvironmentMode.ONLINE)
        assert rewrite_for_mode(online, EnvironmentMode.LOCAL) == content
        assert parse_mode(rewrite_for_mode(online, EnvironmentMode.LOCAL)).is_local


class TestEnvironmentSwitchRead:
    def test_reads_online(self, opt_root: LocalDirectory):
        """
        Given a server.properties without env=
        When read is called
        Then the mode is Online
        """
        switch = EnvironmentSwitch(FakeHost())
        assert switch.read(opt_root) is EnvironmentMode.ONLINE
        assert switch.label == "Online"

    def test_reads_local(self, local_opt_root: LocalDirectory):
        """
        Given a server.properties with env=Local
        When read is called
        Then the mode is Local
        """
        switch = EnvironmentSwitch(FakeHost())
        assert switch.read(local_opt_root) is EnvironmentMode.LOCAL
        assert switch.is_local

    def test_creates_missing_settings(self, tmp_path: Path):
        """
        Given an opt directory without settings/
        When read is called
        Then settings/server.properties is created with [General] and the mode is Online
        """
        opt = tmp_path / "opt"
        opt.mkdir()
        switch = EnvironmentSwitch(FakeHost())

        assert switch.read(LocalDirectory.open(opt)) is EnvironmentMode.ONLINE
        assert (opt / "settings" / "server.properties").read_text() == "[General]\n"

    def test_unreadable_settings_falls_back_to_online(self, tmp_path: Path):
        """
        Given settings is a regular file instead of a directory
        When read is called
        Then the mode is Online and one error is reported
        """
        opt = tmp_path / "opt"
        opt.mkdir()
        (opt / "settings").write_text("not a directory")
        host = FakeHost()
        switch = EnvironmentSwitch(host)
        switch.mode = EnvironmentMode.LOCAL

        assert switch.read(LocalDirectory.open(opt)) is EnvironmentMode.ONLINE
        assert len(host.errors) == 1


class TestEnvironmentSwitchToggle:
    async def test_online_to_local(self, opt_root: LocalDirectory, opt_path: Path):
        """
        Given Online mode and a confirming user
        When toggle is called
        Then the file gains env=Local, the mode is Local, and a success toast is shown
        """
        host = FakeHost(confirm_answers=[True])
        switch = EnvironmentSwitch(host)
        switch.read(opt_root)

        assert await switch.toggle(opt_root) is EnvironmentMode.LOCAL
        content = (opt_path / "settings" / "server.properties").read_text()
        assert content == "[General]\nenv=Local\nport=80"
        assert host.notifications[-1][0] == "Switched to Local"

    async def test_local_to_online(self, local_opt_root: LocalDirectory, local_opt_path: Path):
        """
        Given Local mode and a confirming user
        When toggle is called
        Then env=Local is removed and the mode is Online
        """
        switch = EnvironmentSwitch(FakeHost(confirm_answers=[True]))
        switch.read(local_opt_root)

        assert await switch.toggle(local_opt_root) is EnvironmentMode.ONLINE
        content = (local_opt_path / "settings" / "server.properties").read_text()
        assert content == "[General]\nport=80"

    async def test_declined_changes_nothing(self, opt_root: LocalDirectory, opt_path: Path):
        """
        Given Online mode and a user who declines
        When toggle is called
        Then the mode and the file are unchanged
        """
        host = FakeHost(confirm_answers=[False])
        switch = EnvironmentSwitch(host)
        switch.read(opt_root)

        assert await switch.toggle(opt_root) is EnvironmentMode.ONLINE
        assert (opt_path / "settings" / "server.properties").read_text() == "[General]\nport=80"
        assert host.confirms and host.notifications == []

    async def test_write_failure_leaves_mode_flipped(self, opt_root: LocalDirectory, monkeypatch):
        """
        Given Online mode and a write that fails
        When toggle is confirmed
        Then an error is reported and the mode already reads Local
        """
        host = FakeHost(confirm_answers=[True])
        switch = EnvironmentSwitch(host)
        switch.read(opt_root)

        def failing_write(self, name, text, *, create=True):
            raise WriteFailure("disk full")

        monkeypatch.setattr(LocalDirectory, "write_text", failing_write)

        assert await switch.toggle(opt_root) is EnvironmentMode.LOCAL
        assert len(host.errors) == 1
        assert "disk full" in host.errors[0]

    async def test_read_after_toggle_agrees(self, opt_root: LocalDirectory):
        """
        Given a successful toggle to Local
        When the file is read again
        Then the re-derived mode is Local
        """
        switch = EnvironmentSwitch(FakeHost(confirm_answers=[True]))
        switch.read(opt_root)
        await switch.toggle(opt_root)

        switch.reset()
        assert switch.read(opt_root) is EnvironmentMode.LOCAL
