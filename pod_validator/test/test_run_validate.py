"""Tests for the command-line entry point."""

import json
import logging

import pytest

from pod_validator import validate_file, validate_text
from pod_validator.config import ValidatorConfig
from pod_validator.exceptions import DecodeError
from pod_validator.validator.run_validate import main, run

from conftest import VALID_POD_YAML

INVALID_POD_YAML = VALID_POD_YAML.replace("registry.bigbrother.io/app:1.0", "myapp").replace(
    "containerPort: 8080", "containerPort: 70000"
)


@pytest.fixture(autouse=True)
def _clean_env_and_logging(monkeypatch):
    for name in ("POD_VALIDATOR_LOG_LEVEL", "POD_VALIDATOR_PRINT_LEVEL", "POD_VALIDATOR_FORMAT"):
        monkeypatch.delenv(name, raising=False)
    yield
    package_logger = logging.getLogger("pod_validator")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


class TestExitCodes:
    def test_valid_document(self, write_yaml, capsys):
        assert run([str(write_yaml(VALID_POD_YAML))]) == 0

        assert capsys.readouterr().out == "YAML is valid\n"

    def test_violations(self, write_yaml, capsys):
        assert run([str(write_yaml(INVALID_POD_YAML))]) == 1

        assert capsys.readouterr().out.splitlines() == [
            "Validation errors:",
            "- container[0].image must be from registry.bigbrother.io and contain tag",
            "- container[0].ports.containerPort must be 1-65535",
        ]

    @pytest.mark.parametrize("argv", [[], ["a.yaml", "b.yaml"]])
    def test_usage_error(self, argv, capsys):
        assert run(argv) == 2

        assert "Usage" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert run([str(tmp_path / "absent.yaml")]) == 3

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("File not found")

    def test_decode_error(self, write_yaml, capsys):
        assert run([str(write_yaml("spec: [\n"))]) == 4

        assert len(capsys.readouterr().err.strip().splitlines()) == 1

    def test_type_mismatch_is_decode_error(self, write_yaml):
        assert run([str(write_yaml("spec:\n  containers: web\n"))]) == 4

    def test_main_exits_with_status(self, write_yaml, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([str(write_yaml(INVALID_POD_YAML))])

        assert excinfo.value.code == 1


class TestOutputFormats:
    def test_json(self, write_yaml, capsys):
        path = write_yaml(INVALID_POD_YAML)

        assert run(["--format", "json", str(path)]) == 1

        output = json.loads(capsys.readouterr().out)
        assert output["file"] == str(path)
        assert output["valid"] is False
        assert [e["yaml_path"] for e in output["errors"]] == [
            "/spec/containers/0/image",
            "/spec/containers/0/ports/containerPort",
        ]
        assert output["errors"][0]["line"] == 8
        assert output["errors"][1]["container_index"] == 0

    def test_github_actions(self, write_yaml, capsys):
        path = write_yaml(INVALID_POD_YAML)

        assert run(["--format", "github-actions", str(path)]) == 1

        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == f"::error file={path},line=8,col=14::container[0].image must be from registry.bigbrother.io and contain tag"
        assert len(lines) == 2

    def test_format_from_environment(self, write_yaml, capsys, monkeypatch):
        monkeypatch.setenv("POD_VALIDATOR_FORMAT", "json")

        assert run([str(write_yaml(VALID_POD_YAML))]) == 0

        assert json.loads(capsys.readouterr().out) == {"file": str(write_yaml(VALID_POD_YAML)), "valid": True, "errors": []}


class TestLibraryApi:
    def test_validate_file(self, write_yaml):
        result = validate_file(write_yaml(INVALID_POD_YAML))

        assert not result.valid
        assert len(result.violations) == 2
        assert result.locate(result.violations[1]).line == 10

    def test_validate_text(self):
        assert validate_text(VALID_POD_YAML).valid

    def test_validate_text_locates_violations(self):
        result = validate_text(INVALID_POD_YAML)

        assert result.file_path is None
        assert [result.locate(v).line for v in result.violations] == [8, 10]

    def test_validate_text_raises_on_malformed_input(self):
        with pytest.raises(DecodeError):
            validate_text("kind: [")


class TestConfig:
    def test_defaults(self):
        config = ValidatorConfig.from_env()

        assert config.log_level == "WARNING"
        assert config.output_format == "human"

    def test_unknown_format_falls_back_to_human(self, monkeypatch):
        monkeypatch.setenv("POD_VALIDATOR_FORMAT", "xml")

        assert ValidatorConfig.from_env().output_format == "human"


class TestLogging:
    def test_debug_log_traces_violations_with_location(self, write_yaml, capsys):
        path = write_yaml(INVALID_POD_YAML)

        assert run(["--log-level", "DEBUG", str(path)]) == 1

        out = capsys.readouterr().out
        assert f"source= {path}:8:14 yaml_path=/spec/containers/0/image" in out
        assert out.rstrip().endswith("- container[0].ports.containerPort must be 1-65535")

    def test_only_package_logger_is_configured(self):
        root_handlers = list(logging.getLogger().handlers)

        logger = ValidatorConfig(log_level="INFO").set_logging()

        assert logger.name == "pod_validator"
        assert logger.propagate is False
        assert len(logger.handlers) == 2
        assert logging.getLogger().handlers == root_handlers

    @pytest.mark.parametrize("output_format", ["json", "github-actions"])
    def test_machine_formats_keep_logs_off_stdout(self, write_yaml, capsys, output_format):
        path = write_yaml(INVALID_POD_YAML)

        assert run(["--format", output_format, "--log-level", "DEBUG", str(path)]) == 1

        captured = capsys.readouterr()
        assert "DEBUG" in captured.err
        if output_format == "json":
            assert json.loads(captured.out)["valid"] is False
        else:
            assert all(line.startswith("::error ") for line in captured.out.splitlines())
