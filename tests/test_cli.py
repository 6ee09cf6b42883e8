"""
Tests for the tfcodegen command line.

Covers:
- generate writing files and printing code
- Configuration flags and files
- Exit codes for load, configuration and generation failures
- targets listing
"""

import json

import pytest
from rich.console import Console

from tfcodegen.codegen import cli_integration
from tfcodegen.codegen.cli_integration import create_parser, run_cli


@pytest.fixture
def output(monkeypatch):
    """Capture CLI console output."""
    console = Console(record=True, width=200, force_terminal=False)
    monkeypatch.setattr(cli_integration, "console", console)
    return console


class TestParser:
    """Tests for argument parsing."""

    def test_input_required(self):
        """generate needs an input file or URL."""
        with pytest.raises(SystemExit) as exc_info:
            create_parser().parse_args(["generate", "resources"])
        assert exc_info.value.code == 2

    def test_input_exclusive(self):
        """An input file and a URL cannot be combined."""
        with pytest.raises(SystemExit):
            create_parser().parse_args(
                ["generate", "all", "-i", "spec.json", "--url", "https://example.com/spec.json"]
            )

    def test_flags(self):
        """Flags are parsed into the namespace."""
        args = create_parser().parse_args(
            ["generate", "data-sources", "-i", "spec.json", "-o", "out", "--no-models", "-v"]
        )
        assert args.kind == "data-sources"
        assert args.output == "out"
        assert args.no_models
        assert args.verbose
        assert not args.no_object_types


class TestGenerateCommand:
    """Tests for tfcodegen generate."""

    def test_no_command(self, output):
        """Running without a subcommand prints help and fails."""
        assert run_cli([]) == 1

    def test_write_resources(self, output, spec_file, tmp_path):
        """Resource files are written to the output directory."""
        out_dir = tmp_path / "out"
        code = run_cli(["generate", "resources", "-i", str(spec_file), "-o", str(out_dir)])

        assert code == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ["thing_resource_gen.go"]
        content = (out_dir / "thing_resource_gen.go").read_text(encoding="utf-8")
        assert "func ThingResourceSchema(ctx context.Context) schema.Schema {" in content
        assert "Wrote" in output.export_text()

    def test_write_all(self, output, spec_file, tmp_path):
        """all generates resources and data sources."""
        out_dir = tmp_path / "out"
        code = run_cli(["generate", "all", "-i", str(spec_file), "-o", str(out_dir)])

        assert code == 0
        assert sorted(p.name for p in out_dir.iterdir()) == [
            "thing_data_source_gen.go",
            "thing_resource_gen.go",
        ]

    def test_print(self, output, spec_file):
        """Without an output directory the code is printed."""
        code = run_cli(["generate", "data-sources", "-i", str(spec_file), "--package", "things"])

        assert code == 0
        text = output.export_text()
        assert "thing_data_source_gen.go" in text
        assert "package things" in text

    def test_flags_applied(self, output, spec_file, tmp_path):
        """--no-models and --no-object-types change the output."""
        out_dir = tmp_path / "out"
        run_cli(
            [
                "generate",
                "resources",
                "-i",
                str(spec_file),
                "-o",
                str(out_dir),
                "--no-models",
                "--no-object-types",
            ]
        )
        content = (out_dir / "thing_resource_gen.go").read_text(encoding="utf-8")
        assert "ThingModel" not in content
        assert "ConfigType" not in content

    def test_config_file(self, output, spec_file, tmp_path):
        """Settings are read from the configuration file."""
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"package_name": "fromconfig", "add_header": False}))
        out_dir = tmp_path / "out"

        code = run_cli(
            ["generate", "resources", "-i", str(spec_file), "-o", str(out_dir), "--config", str(config)]
        )

        assert code == 0
        content = (out_dir / "thing_resource_gen.go").read_text(encoding="utf-8")
        assert content.startswith("package fromconfig\n")

    def test_verbose_metadata(self, output, spec_file):
        """Verbose runs show the generation metadata."""
        assert run_cli(["generate", "resources", "-i", str(spec_file), "-v"]) == 0
        assert "Schema Count" in output.export_text()

    def test_missing_input(self, output, tmp_path):
        """Missing input files fail with exit code 1."""
        code = run_cli(["generate", "resources", "-i", str(tmp_path / "missing.json")])
        assert code == 1
        assert "Failed to load input" in output.export_text()

    def test_invalid_specification(self, output, tmp_path):
        """Structurally invalid specifications fail with exit code 1."""
        path = tmp_path / "spec.json"
        path.write_text(json.dumps({"resources": "nope"}), encoding="utf-8")
        assert run_cli(["generate", "resources", "-i", str(path)]) == 1

    def test_missing_config(self, output, spec_file, tmp_path):
        """Missing configuration files fail with exit code 1."""
        code = run_cli(
            ["generate", "resources", "-i", str(spec_file), "--config", str(tmp_path / "nope.json")]
        )
        assert code == 1
        assert "Configuration error" in output.export_text()

    def test_conversion_failure(self, output, tmp_path, spec_document):
        """Conversion errors fail with exit code 1."""
        spec_document["resources"][0]["schema"]["attributes"].append(
            {"name": "broken", "set": {"computed_optional_required": "optional"}}
        )
        path = tmp_path / "spec.json"
        path.write_text(json.dumps(spec_document), encoding="utf-8")

        assert run_cli(["generate", "resources", "-i", str(path)]) == 1
        assert "Code generation failed" in output.export_text()


class TestTargetsCommand:
    """Tests for tfcodegen targets."""

    def test_lists_targets(self, output):
        """Every registered target is shown."""
        assert run_cli(["targets"]) == 0
        text = output.export_text()
        assert "resource" in text
        assert "data_source" in text
        assert "DataSourceGenerator" in text
