"""
Test suite for the envinfo command line.

Run with: pytest tests/test_cli.py -xvs
"""

from unittest.mock import Mock, patch

from typer.testing import CliRunner

from envinfo.build import BuildMetadata
from envinfo.cli.app import app
from envinfo.utils.exceptions import MemoryConfigurationError, VersionResolutionError

runner = CliRunner()


class TestVersionCommand:
    """Test suite for 'envinfo version'."""

    @patch("envinfo.cli.commands.report.get_build_metadata")
    def test_prints_metadata(self, mock_metadata):
        """Test the resolved facts are printed."""
        mock_metadata.return_value = BuildMetadata(project_version="1.18.0", commit_id_abbrev="4f6b2a9c")

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "1.18.0" in result.output
        assert "4f6b2a9c" in result.output

    @patch("envinfo.cli.commands.report.get_build_metadata")
    def test_corrupt_resource_exits_2(self, mock_metadata):
        """Test a resolution failure exits with code 2."""
        mock_metadata.side_effect = VersionResolutionError("corrupt version file")

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 2
        assert "corrupt version file" in result.output


class TestBannerCommand:
    """Test suite for 'envinfo banner'."""

    @patch("envinfo.cli.commands.banner.configure_logging")
    @patch("envinfo.cli.commands.banner.log_environment_info")
    def test_passes_component_and_args(self, mock_log, mock_logging):
        """Test the component name and program arguments reach the banner."""
        result = runner.invoke(app, ["banner", "-n", "JobManager", "--", "--db.password=x", "input.csv"])

        assert result.exit_code == 0
        logger, component, args, config = mock_log.call_args.args
        assert logger.name == "JobManager"
        assert component == "JobManager"
        assert args == ["--db.password=x", "input.csv"]
        assert config["banner"]["component_name"] == "JobManager"

    @patch("envinfo.cli.commands.banner.configure_logging")
    @patch("envinfo.cli.commands.banner.log_environment_info")
    def test_resolution_error_exits_2(self, mock_log, mock_logging):
        """Test a fatal resolution error aborts with code 2."""
        mock_log.side_effect = VersionResolutionError("corrupt version file")

        result = runner.invoke(app, ["banner"])

        assert result.exit_code == 2
        assert "corrupt version file" in result.output

    @patch("envinfo.cli.commands.banner.configure_logging")
    @patch("envinfo.cli.commands.banner.log_environment_info")
    def test_banner_is_default_command(self, mock_log, mock_logging):
        """Test running without a subcommand logs the banner."""
        result = runner.invoke(app, [])

        assert result.exit_code == 0
        mock_log.assert_called_once()
        assert mock_log.call_args.args[1] == "envinfo"

    def test_missing_config_file(self, tmp_path):
        """Test an explicit config path must exist."""
        result = runner.invoke(app, ["banner", "-c", str(tmp_path / "missing.yaml")])

        assert result.exit_code != 0
        assert isinstance(result.exception, FileNotFoundError)


class TestRuntimeCommand:
    """Test suite for 'envinfo runtime'."""

    def test_prints_runtime_facts(self, tmp_path):
        """Test the configured memory ceiling is reported."""
        config = tmp_path / "envinfo.yaml"
        config.write_text("memory:\n  max_bytes: 536870912\n")

        result = runner.invoke(app, ["runtime", "-c", str(config)])

        assert result.exit_code == 0
        assert "512" in result.output
        assert "Python runtime" in result.output

    @patch("envinfo.cli.commands.report.get_max_memory")
    def test_memory_error_exits_2(self, mock_max):
        """Test an undeterminable memory budget exits with code 2."""
        mock_max.side_effect = MemoryConfigurationError("Could not determine the amount of free memory.")

        result = runner.invoke(app, ["runtime"])

        assert result.exit_code == 2
        assert "Could not determine the amount of free memory" in result.output


class TestGenerateCommand:
    """Test suite for 'envinfo generate-version-file'."""

    @patch("envinfo.cli.commands.generate.GitRevisionDetector")
    def test_writes_file(self, mock_detector_cls, tmp_path):
        """Test the version file is written where requested."""
        mock_detector = Mock()
        mock_detector.detect.return_value = {
            "git.commit.id": "4f6b2a9c0d1e",
            "git.commit.id.abbrev": "4f6b2a9c",
            "git.commit.time": "2020-01-01T00:00:00+0000",
        }
        mock_detector_cls.return_value = mock_detector
        output = tmp_path / ".envinfo.version.properties"

        result = runner.invoke(
            app,
            ["generate-version-file", "-o", str(output), "--project-version", "2.0.0", "--repository", "/src"],
        )

        assert result.exit_code == 0
        mock_detector_cls.assert_called_once_with("/src")
        text = output.read_text()
        assert "project.version=2.0.0" in text
        assert "git.commit.id.abbrev=4f6b2a9c" in text
