"""Tests for structured logging setup."""

import io
import json

from aml_rollout.errors import (
    DeploymentFileNotFoundError,
    ResourceNotFoundError,
    TrafficSpecError,
)
from aml_rollout.logging import (
    OutputTruncationProcessor,
    get_logger,
    set_log_stream,
    setup_logging,
)


class TestOutputTruncationProcessor:
    """Test cases for OutputTruncationProcessor."""

    def test_truncates_long_output(self):
        processor = OutputTruncationProcessor(max_chars=10)

        event = processor(None, "info", {"event": "x", "stdout": "a" * 25})

        assert event["stdout"] == "a" * 10 + "...[15 chars truncated]"

    def test_leaves_short_output_and_other_fields(self):
        processor = OutputTruncationProcessor(max_chars=10)

        event = processor(None, "info", {"event": "y" * 50, "stderr": "  short \n"})

        assert event["event"] == "y" * 50
        assert event["stderr"] == "short"

    def test_zero_disables_truncation(self):
        processor = OutputTruncationProcessor(max_chars=0)

        event = processor(None, "info", {"stdout": "a" * 5000})

        assert len(event["stdout"]) == 5000


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_json_format(self):
        stream = io.StringIO()
        setup_logging(log_level="INFO", log_format="json", max_output_chars=5, stream=stream)

        get_logger("test").info("Resource found", kind="endpoint", stdout="0123456789")

        record = json.loads(stream.getvalue().strip().splitlines()[-1])
        assert record["event"] == "Resource found"
        assert record["kind"] == "endpoint"
        assert record["level"] == "info"
        assert record["stdout"].startswith("01234...")

    def test_level_filters_events(self):
        stream = io.StringIO()
        setup_logging(log_level="WARNING", log_format="console", stream=stream)

        get_logger("test").info("hidden")
        get_logger("test").error("Traffic update failed", deployment="blue")

        output = stream.getvalue()
        assert "hidden" not in output
        assert "Traffic update failed" in output
        assert "deployment=blue" in output

    def test_set_log_stream_moves_console_output(self):
        first, second = io.StringIO(), io.StringIO()
        setup_logging(log_level="INFO", log_format="console", stream=first)

        set_log_stream(second)
        get_logger("test").info("Deployment created")

        assert first.getvalue() == ""
        assert "Deployment created" in second.getvalue()


class TestErrors:
    """Test cases for rollout error types."""

    def test_resource_not_found_details(self):
        error = ResourceNotFoundError(
            "Workspace 'ws' does not exist in resource group 'rg'.",
            "workspace",
            {"workspace_name": "ws", "resource_group": "rg"},
        )

        data = error.to_dict()
        assert data["error_code"] == "RESOURCE_NOT_FOUND"
        assert data["details"]["kind"] == "workspace"
        assert data["details"]["identifiers"]["workspace_name"] == "ws"
        assert str(error) == "Workspace 'ws' does not exist in resource group 'rg'."

    def test_traffic_spec_error_code(self):
        assert TrafficSpecError("bad").error_code == "INVALID_TRAFFIC_SPEC"

    def test_details_argument_is_not_modified(self):
        details = {"step": "file-check"}

        error = DeploymentFileNotFoundError("Deployment YAML file 'x' does not exist.", "x", details=details)

        assert details == {"step": "file-check"}
        assert error.details == {"step": "file-check", "path": "x"}
