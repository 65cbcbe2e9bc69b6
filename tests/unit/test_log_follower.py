"""Unit tests for log_follower module.

Test Coverage:
- Zero / one / many matches
- Index selection and validation
- az command construction
"""

from unittest.mock import Mock, patch

import pytest

from capps.app_display import ContainerAppDisplay
from capps.app_enumerator import ContainerAppEnumerator
from capps.log_follower import LogFollower, build_log_command
from fakes import PROD_SUB_ID, STAGING_SUB_ID


@pytest.fixture
def display(quiet_console):
    return ContainerAppDisplay(console=quiet_console)


def follower(session, display, answer=None):
    prompt = Mock(return_value=answer)
    return LogFollower(session, display=display, prompt=prompt), prompt


class TestBuildLogCommand:
    """Test build_log_command."""

    def test_command(self, session):
        """Test the command targets the app's name, group and subscription."""
        record = ContainerAppEnumerator(session).list_apps("worker-1")[0]

        assert build_log_command(record) == [
            "containerapp",
            "logs",
            "show",
            "--name",
            "worker-1",
            "--resource-group",
            "jobs-rg",
            "--subscription",
            PROD_SUB_ID,
            "--follow",
            "--format",
            "text",
        ]


class TestFollowLogs:
    """Test LogFollower.follow_logs."""

    @patch("capps.log_follower.stream_az")
    def test_no_apps(self, mock_stream, session, display, capsys):
        """Test zero matches reports and streams nothing."""
        log_follower, prompt = follower(session, display)

        assert log_follower.follow_logs("nothing*") == 0

        assert "No apps found" in capsys.readouterr().out
        prompt.assert_not_called()
        mock_stream.assert_not_called()

    @patch("capps.log_follower.stream_az", return_value=0)
    def test_single_match_streams_without_prompt(self, mock_stream, session, display):
        """Test one match streams immediately."""
        log_follower, prompt = follower(session, display)

        log_follower.follow_logs("worker-*")

        prompt.assert_not_called()
        args = mock_stream.call_args[0][0]
        assert args[args.index("--name") + 1] == "worker-1"
        assert mock_stream.call_args[1]["az_command"] == "az"

    @patch("capps.log_follower.stream_az", return_value=0)
    def test_multiple_matches_select_by_index(self, mock_stream, session, display, quiet_console):
        """Test entering 1 resolves to the second listed app."""
        log_follower, prompt = follower(session, display, answer="1")

        log_follower.follow_logs("api-*")

        prompt.assert_called_once()
        args = mock_stream.call_args[0][0]
        assert args[args.index("--name") + 1] == "api-users"
        assert "#" in quiet_console.file.getvalue()

    @patch("capps.log_follower.stream_az", return_value=0)
    def test_last_index_selects_other_subscription(self, mock_stream, session, display):
        """Test the index spans apps from every subscription."""
        log_follower, _ = follower(session, display, answer="2")

        log_follower.follow_logs("api-*")

        args = mock_stream.call_args[0][0]
        assert args[args.index("--subscription") + 1] == STAGING_SUB_ID

    @pytest.mark.parametrize("answer", ["5", "3", "-1", "abc", ""])
    @patch("capps.log_follower.stream_az")
    def test_invalid_index(self, mock_stream, answer, session, display, capsys):
        """Test out-of-range or non-numeric input aborts without streaming."""
        log_follower, _ = follower(session, display, answer=answer)

        assert log_follower.follow_logs("api-*") == 0

        assert "Invalid index" in capsys.readouterr().out
        mock_stream.assert_not_called()

    @patch("capps.log_follower.stream_az")
    def test_end_of_input_is_invalid(self, mock_stream, session, display, capsys):
        """Test closing stdin at the prompt aborts."""
        log_follower = LogFollower(session, display=display, prompt=Mock(side_effect=EOFError))

        log_follower.follow_logs("api-*")

        assert "Invalid index" in capsys.readouterr().out
        mock_stream.assert_not_called()

    @patch("capps.log_follower.stream_az", return_value=130)
    def test_returns_stream_exit_code(self, mock_stream, session, display):
        """Test the stream's exit code is returned."""
        log_follower, _ = follower(session, display)
        assert log_follower.follow_logs("worker-1") == 130

    @patch("capps.log_follower.stream_az", return_value=0)
    def test_subscription_glob(self, mock_stream, session, display):
        """Test the subscription glob narrows the candidates."""
        log_follower, prompt = follower(session, display)

        log_follower.follow_logs("api-orders", "Staging")

        prompt.assert_not_called()
        args = mock_stream.call_args[0][0]
        assert args[args.index("--resource-group") + 1] == "stg-rg"
