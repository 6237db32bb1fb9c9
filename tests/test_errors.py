"""Tests for jirabranch.utils.errors and jirabranch.integrations.exceptions."""

from jirabranch.integrations.exceptions import (
    JiraNotConfiguredError,
    JiraTransportError,
    TicketNotFoundError,
    TrackerError,
)
from jirabranch.utils.errors import (
    BranchAlreadyExistsError,
    BranchCreationError,
    ExitCode,
    GitOperationError,
    InvalidTicketFormatError,
    JiraBranchError,
    NotAGitRepositoryError,
    UserCancelledError,
)


class TestExitCode:
    """Tests for ExitCode enum."""

    def test_exit_code_values(self):
        """Exit codes are stable for calling scripts."""
        assert ExitCode.SUCCESS == 0
        assert ExitCode.GENERAL_ERROR == 1
        assert ExitCode.TRACKER_NOT_CONFIGURED == 3
        assert ExitCode.USER_CANCELLED == 4
        assert ExitCode.GIT_ERROR == 5
        assert ExitCode.TICKET_NOT_FOUND == 6


class TestJiraBranchError:
    """Tests for JiraBranchError base class."""

    def test_default_exit_code(self):
        """Base error uses GENERAL_ERROR."""
        assert JiraBranchError("boom").exit_code == ExitCode.GENERAL_ERROR

    def test_explicit_exit_code_overrides_default(self):
        """An explicit exit code wins over the class default."""
        error = GitOperationError("boom", exit_code=ExitCode.GENERAL_ERROR)

        assert error.exit_code == ExitCode.GENERAL_ERROR

    def test_message(self):
        """str() returns the message."""
        assert str(JiraBranchError("something broke")) == "something broke"


class TestSpecificErrors:
    """Tests for the concrete error types."""

    def test_invalid_ticket_format(self):
        """Invalid format error names the input and the expected format."""
        error = InvalidTicketFormatError("war-1")

        assert error.ticket == "war-1"
        assert "war-1" in str(error)
        assert "PROJECT-123" in str(error)
        assert error.exit_code == ExitCode.GENERAL_ERROR

    def test_user_cancelled(self):
        """User cancellation has its own exit code."""
        assert UserCancelledError("bye").exit_code == ExitCode.USER_CANCELLED

    def test_git_errors_share_exit_code(self):
        """All git failures exit with GIT_ERROR."""
        errors = [
            NotAGitRepositoryError("/tmp/x"),
            BranchAlreadyExistsError("fy25/sprint01/A-1/x"),
            BranchCreationError("fy25/sprint01/A-1/x", "fatal: bad"),
        ]

        for error in errors:
            assert isinstance(error, GitOperationError)
            assert error.exit_code == ExitCode.GIT_ERROR

    def test_branch_already_exists_message(self):
        """Message quotes the branch name."""
        error = BranchAlreadyExistsError("fy25/sprint01/A-1/x")

        assert str(error) == 'Branch "fy25/sprint01/A-1/x" already exists'
        assert error.branch_name == "fy25/sprint01/A-1/x"

    def test_branch_creation_error_wraps_stderr(self):
        """Git's stderr is included in the message."""
        error = BranchCreationError("bad..name", "fatal: 'bad..name' is not a valid branch name\n")

        assert "is not a valid branch name" in str(error)
        assert error.stderr.startswith("fatal:")

    def test_branch_creation_error_without_stderr(self):
        """Missing stderr still produces a readable message."""
        assert str(BranchCreationError("x")) == "Failed to create branch: unknown error"


class TestTrackerErrors:
    """Tests for the Jira client exceptions."""

    def test_hierarchy(self):
        """Tracker errors are JiraBranchErrors."""
        for error in (
            JiraNotConfiguredError({"JIRA_EMAIL"}),
            TicketNotFoundError("WAR-1"),
            JiraTransportError("WAR-1", "boom"),
        ):
            assert isinstance(error, TrackerError)
            assert isinstance(error, JiraBranchError)

    def test_not_configured(self):
        """Missing keys are listed in sorted order."""
        error = JiraNotConfiguredError({"JIRA_EMAIL", "JIRA_API_TOKEN"})

        assert error.missing_keys == frozenset({"JIRA_EMAIL", "JIRA_API_TOKEN"})
        assert "JIRA_API_TOKEN, JIRA_EMAIL" in str(error)
        assert error.exit_code == ExitCode.TRACKER_NOT_CONFIGURED

    def test_not_found(self):
        """Not-found error carries the ticket id."""
        error = TicketNotFoundError("WAR-7974")

        assert error.ticket_id == "WAR-7974"
        assert "Ticket WAR-7974 not found" in str(error)
        assert error.exit_code == ExitCode.TICKET_NOT_FOUND

    def test_transport(self):
        """Transport error carries details and status code."""
        error = JiraTransportError("WAR-1", "Jira API error: 500 - Server Error", status_code=500)

        assert error.status_code == 500
        assert str(error) == "Failed to fetch Jira issue WAR-1: Jira API error: 500 - Server Error"
        assert error.exit_code == ExitCode.GENERAL_ERROR
