"""
Unit tests for bakemcp/core/exceptions.py - Custom Exception Classes.

Every exception carries an error code and the exit code the CLI reports.
"""

import pytest


class TestBakeMCPException:
    """Base exception."""

    def test_inherits_from_exception(self):
        from bakemcp.core.exceptions import BakeMCPException

        assert issubclass(BakeMCPException, Exception)

    def test_message_and_default_codes(self):
        from bakemcp.core.exceptions import BakeMCPException, ErrorCode

        exc = BakeMCPException("boom")
        assert str(exc) == "boom"
        assert exc.message == "boom"
        assert exc.error_code == ErrorCode.BAKEMCP_ERROR
        assert exc.exit_code == 1

    def test_kwargs_become_attributes(self):
        from bakemcp.core.exceptions import BakeMCPException

        exc = BakeMCPException("boom", detail="extra")
        assert exc.detail == "extra"


class TestExitCodes:
    """Exit codes of the CLI contract."""

    @pytest.mark.parametrize(
        "factory, exit_code",
        [
            (lambda e: e.InputError("input file not found: x", source="x"), 2),
            (lambda e: e.OpenAPIError("invalid OpenAPI: bad"), 1),
            (lambda e: e.UnsupportedVersionError(), 1),
            (lambda e: e.NoOperationsError(), 4),
            (lambda e: e.OutputDirectoryNotEmptyError("/tmp/out"), 3),
            (lambda e: e.GenerationError("generation failed: disk full"), 1),
        ],
    )
    def test_exit_code(self, factory, exit_code):
        from bakemcp.core import exceptions

        assert factory(exceptions).exit_code == exit_code


class TestMessages:
    """Default messages match the CLI output."""

    def test_unsupported_version_message(self):
        from bakemcp.core.exceptions import ErrorCode, OpenAPIError, UnsupportedVersionError

        exc = UnsupportedVersionError(version="2.0")
        assert str(exc) == "OpenAPI 2.0 is not supported; use OpenAPI 3.x"
        assert exc.version == "2.0"
        assert exc.error_code == ErrorCode.UNSUPPORTED_VERSION
        assert isinstance(exc, OpenAPIError)

    def test_no_operations_message(self):
        from bakemcp.core.exceptions import NoOperationsError

        assert str(NoOperationsError()) == "no mappable operations found in OpenAPI spec"

    def test_output_not_empty_message(self):
        from bakemcp.core.exceptions import OutputDirectoryNotEmptyError

        exc = OutputDirectoryNotEmptyError("/tmp/out")
        assert str(exc) == "output directory is not empty; use --force to overwrite"
        assert exc.output_dir == "/tmp/out"

    def test_input_error_keeps_source(self):
        from bakemcp.core.exceptions import InputError

        exc = InputError("cannot read input: denied", source="spec.yaml")
        assert exc.source == "spec.yaml"
