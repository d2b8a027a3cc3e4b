"""Tests for CLI argument handling in main.py."""
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner

from pexplorer.command_result import CommandResult
from pexplorer.constants import SOCKET_ENVVAR
from pexplorer.main import main


@pytest.fixture
def runner() -> CliRunner:
    """Create a CliRunner with no daemon socket in the environment."""
    return CliRunner(env={SOCKET_ENVVAR: None})


@pytest.fixture
def daemon():
    """Replace the daemon round trip with an AsyncMock."""
    with patch("pexplorer.client.send_request", new_callable=AsyncMock) as send:
        send.return_value = CommandResult.success()
        yield send


class TestLocalCommands:
    """Filesystem subcommands without a daemon."""

    def test_help_exits_with_code_0(self, runner: CliRunner) -> None:
        """Test that --help lists the subcommands."""
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for name in ("serve", "copy", "cut", "paste", "ls"):
            assert name in result.output

    def test_ls(self, runner: CliRunner, source_tree: Path) -> None:
        """Test ls prints the JSON listing."""
        result = runner.invoke(main, ["ls", str(source_tree)])
        assert result.exit_code == 0
        assert '"name": "a.txt"' in result.output

    def test_cat(self, runner: CliRunner, source_tree: Path) -> None:
        """Test cat prints file contents."""
        result = runner.invoke(main, ["cat", str(source_tree / "a.txt")])
        assert result.output == "alpha\n"

    def test_cp_reports_size(self, runner: CliRunner, source_tree: Path, tmp_path: Path) -> None:
        """Test cp prints the byte count."""
        result = runner.invoke(main, ["cp", str(source_tree), str(tmp_path / "copy")])
        assert result.exit_code == 0
        assert "Copied 12 bytes" in result.output

    def test_error_exits_with_code_1(self, runner: CliRunner, tmp_path: Path) -> None:
        """Test a failing command prints the error and exits 1."""
        result = runner.invoke(main, ["mkdir", str(tmp_path / "nope"), "x"])
        assert result.exit_code == 1
        assert "Error: Parent directory does not exist" in result.output

    def test_clipboard_command_needs_socket(self, runner: CliRunner, source_tree: Path) -> None:
        """Test clipboard commands refuse to run without a daemon."""
        result = runner.invoke(main, ["copy", str(source_tree)])
        assert result.exit_code == 2
        assert SOCKET_ENVVAR in result.output

    def test_serve_needs_socket(self, runner: CliRunner) -> None:
        """Test serve without a socket path is a usage error."""
        result = runner.invoke(main, ["serve"])
        assert result.exit_code == 2


class TestDaemonCommands:
    """Clipboard subcommands sent to the daemon."""

    def test_copy_single_path(self, runner: CliRunner, daemon: AsyncMock, tmp_path: Path) -> None:
        """Test one path is sent as copy_to_clipboard with an absolute path."""
        sock = str(tmp_path / "d.sock")
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(main, ["--socket", sock, "copy", "rel.txt"])
            expected = str(Path.cwd() / "rel.txt")
        assert result.exit_code == 0
        daemon.assert_awaited_once_with(sock, "copy_to_clipboard", {"path": expected})

    def test_copy_many_paths(self, runner: CliRunner, daemon: AsyncMock) -> None:
        """Test several paths are sent as copy_multiple_items."""
        runner.invoke(main, ["--socket", "/tmp/d.sock", "copy", "/a", "/b"])
        daemon.assert_awaited_once_with(
            "/tmp/d.sock", "copy_multiple_items", {"paths": ["/a", "/b"]}
        )

    def test_copy_text(self, runner: CliRunner, daemon: AsyncMock) -> None:
        """Test --text is sent as copy_text."""
        runner.invoke(main, ["--socket", "/tmp/d.sock", "copy", "--text", "hello"])
        daemon.assert_awaited_once_with("/tmp/d.sock", "copy_text", {"text": "hello"})

    def test_copy_content(self, runner: CliRunner, daemon: AsyncMock) -> None:
        """Test --content is sent as copy_file_content."""
        runner.invoke(main, ["--socket", "/tmp/d.sock", "copy", "--content", "/f"])
        daemon.assert_awaited_once_with("/tmp/d.sock", "copy_file_content", {"path": "/f"})

    def test_copy_text_and_content_exclusive(self, runner: CliRunner, daemon: AsyncMock) -> None:
        """Test --text and --content cannot be combined."""
        result = runner.invoke(
            main, ["--socket", "/tmp/d.sock", "copy", "--text", "x", "--content", "/f"]
        )
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output
        daemon.assert_not_awaited()

    def test_copy_nothing(self, runner: CliRunner, daemon: AsyncMock) -> None:
        """Test copy with no operands is a usage error."""
        result = runner.invoke(main, ["--socket", "/tmp/d.sock", "copy"])
        assert result.exit_code == 2
        daemon.assert_not_awaited()

    def test_cut_many_paths(self, runner: CliRunner, daemon: AsyncMock) -> None:
        """Test several paths are sent as cut_multiple_items."""
        runner.invoke(main, ["--socket", "/tmp/d.sock", "cut", "/a", "/b"])
        daemon.assert_awaited_once_with(
            "/tmp/d.sock", "cut_multiple_items", {"paths": ["/a", "/b"]}
        )

    def test_socket_from_environment(self, daemon: AsyncMock) -> None:
        """Test the socket path is taken from PEXPLORER_SOCKET."""
        runner = CliRunner(env={SOCKET_ENVVAR: "/tmp/env.sock"})
        runner.invoke(main, ["paste", "/dest"])
        daemon.assert_awaited_once_with(
            "/tmp/env.sock", "paste_from_clipboard", {"destination_path": "/dest"}
        )

    def test_daemon_failure_exits_with_code_1(self, runner: CliRunner, daemon: AsyncMock) -> None:
        """Test a failed daemon result is printed and exits 1."""
        daemon.return_value = CommandResult.failure("Clipboard is empty")
        result = runner.invoke(main, ["--socket", "/tmp/d.sock", "paste", "/dest"])
        assert result.exit_code == 1
        assert "Error: Clipboard is empty" in result.output

    def test_unreachable_daemon_exits_with_code_1(
        self, runner: CliRunner, daemon: AsyncMock
    ) -> None:
        """Test a connection failure is printed and exits 1."""
        daemon.side_effect = ConnectionError("Failed to connect to /tmp/d.sock")
        result = runner.invoke(main, ["--socket", "/tmp/d.sock", "status"])
        assert result.exit_code == 1
        assert "Failed to connect" in result.output

    @pytest.mark.parametrize(
        "status, expected",
        [
            ({"has_content": False, "operation": "none"}, "Clipboard is empty"),
            ({"has_content": True, "operation": "none"}, "next paste copies it"),
            ({"has_content": True, "operation": "cut"}, "Clipboard staged for cut"),
        ],
    )
    def test_status_output(
        self, status: dict, expected: str, runner: CliRunner, daemon: AsyncMock
    ) -> None:
        """Test status renders the clipboard_status result."""
        daemon.return_value = CommandResult.success(status)
        result = runner.invoke(main, ["--socket", "/tmp/d.sock", "status"])
        assert expected in result.output
