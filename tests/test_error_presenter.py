"""Tests for ErrorPresenter - user-friendly error messages."""

from dddcheck.domain.exceptions import (
    ConfigurationError,
    ParserUnavailableError,
    ProjectRootNotFoundError,
    RootPathError,
    UnknownMarkerKindError,
    ValidationCancelledError,
)
from dddcheck.infrastructure.presentation.error_presenter import ErrorPresenter


class TestErrorPresenter:
    """Test suite for ErrorPresenter."""

    def test_root_path_error(self):
        result = ErrorPresenter.present(RootPathError("Root path does not exist: /nope"))

        assert result.startswith("Error: Cannot read the source tree")
        assert "Root path does not exist: /nope" in result
        assert "Suggestions:" in result

    def test_project_root_not_found(self):
        result = ErrorPresenter.present(ProjectRootNotFoundError("no go.mod"))

        assert "Could not find the project root" in result
        assert "dddcheck validate <path>" in result

    def test_unknown_kind_keeps_message(self):
        error = UnknownMarkerKindError("Unknown marker kind: policy. Available kinds: entity")
        result = ErrorPresenter.present(error)

        assert "Error: Unknown marker kind: policy" in result
        assert "dddcheck kinds" in result

    def test_configuration_error(self):
        result = ErrorPresenter.present(ConfigurationError("Invalid YAML in x.yaml"))

        assert "Invalid configuration" in result
        assert "Invalid YAML in x.yaml" in result

    def test_parser_unavailable(self):
        result = ErrorPresenter.present(ParserUnavailableError("no grammar"))
        assert "Go grammar could not be loaded" in result

    def test_cancelled(self):
        assert ErrorPresenter.present(ValidationCancelledError()) == "Error: Operation cancelled by user"
        assert ErrorPresenter.present(KeyboardInterrupt()) == "Error: Operation cancelled by user"

    def test_file_not_found(self):
        result = ErrorPresenter.present(FileNotFoundError("Configuration file not found: ci.yaml"))
        assert "File not found: ci.yaml" in result

    def test_permission_error(self):
        result = ErrorPresenter.present(PermissionError("[Errno 13] Permission denied: '/secret'"))
        assert "Permission denied: /secret" in result

    def test_generic_error(self):
        result = ErrorPresenter.present(RuntimeError("unexpected"))

        assert "An error occurred: RuntimeError" in result
        assert "Error details: unexpected" in result
        assert "Technical Details" not in result

    def test_verbose_includes_traceback(self):
        try:
            try:
                raise OSError("disk gone")
            except OSError as cause:
                raise RootPathError("Cannot read root path /data") from cause
        except RootPathError as error:
            result = ErrorPresenter.present(error, verbose=True)

        assert "Technical Details:" in result
        assert "Error Type: RootPathError" in result
        assert "Caused by: OSError: disk gone" in result
        assert "Traceback:" in result
