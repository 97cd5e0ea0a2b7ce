"""
Test suite for the runtime probe.

Run with: pytest tests/test_probe.py -xvs
"""

import logging
import os
import sys
import tempfile
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from envinfo.constants import UNKNOWN
from envinfo.runtime import probe
from envinfo.runtime.capability import ProbeResult, ProbeStatus


class FakeGSSError(Exception):
    """Stand-in for gssapi.exceptions.GSSError."""


def fake_sys(flags=None, warnoptions=None, xoptions=None):
    return SimpleNamespace(
        flags=SimpleNamespace(**(flags or {})),
        warnoptions=warnoptions or [],
        _xoptions=xoptions or {},
    )


class TestRuntimeVersion:
    """Test suite for get_runtime_version."""

    def test_runtime_version_format(self):
        """Test the 'Name - Compiler - Spec/Version' shape."""
        version = probe.get_runtime_version()

        parts = version.split(" - ")
        assert len(parts) == 3
        assert parts[2].startswith(f"{sys.version_info.major}.{sys.version_info.minor}/")

    @patch("envinfo.runtime.probe.platform")
    def test_runtime_version_failure(self, mock_platform):
        """Test any failure yields the unknown sentinel."""
        mock_platform.python_implementation.side_effect = RuntimeError("boom")

        assert probe.get_runtime_version() == UNKNOWN


class TestStartupOptions:
    """Test suite for interpreter startup options."""

    def test_no_options(self):
        """Test a plain interpreter has no options."""
        with patch.object(probe, "sys", fake_sys()):
            assert probe.get_startup_options_array() == []
            assert probe.get_startup_options() == ""

    def test_flags_warnings_and_xoptions_in_order(self):
        """Test options are rebuilt from flags, warnings and -X options."""
        fake = fake_sys(
            flags={"dont_write_bytecode": 1, "optimize": 2, "verbose": 0},
            warnoptions=["error::DeprecationWarning"],
            xoptions={"dev": True, "importtime": True, "frozen_modules": "off"},
        )

        with patch.object(probe, "sys", fake):
            options = probe.get_startup_options_array()
            joined = probe.get_startup_options()

        assert options == [
            "-B",
            "-OO",
            "-Werror::DeprecationWarning",
            "-Xdev",
            "-Ximporttime",
            "-Xfrozen_modules=off",
        ]
        assert joined == " ".join(options)

    def test_isolated_hides_implied_flags(self):
        """Test -I is reported without the flags it implies."""
        fake = fake_sys(flags={"isolated": 1, "ignore_environment": 1, "no_user_site": 1, "safe_path": 1})

        with patch.object(probe, "sys", fake):
            assert probe.get_startup_options_array() == ["-I"]

    def test_failure_yields_empty_values(self):
        """Test a failing lookup gives empty string and empty list."""
        broken = SimpleNamespace(flags=None, warnoptions=None, _xoptions={})

        with patch.object(probe, "sys", broken):
            assert probe.get_startup_options_array() == []
            assert probe.get_startup_options() == ""


class TestTemporaryDirectory:
    """Test suite for get_temporary_file_directory."""

    def test_matches_tempfile(self):
        """Test the configured temporary directory is returned."""
        assert probe.get_temporary_file_directory() == tempfile.gettempdir()


class TestOpenFileHandlesLimit:
    """Test suite for get_open_file_handles_limit."""

    @patch("envinfo.runtime.probe.probe_capability")
    @patch("envinfo.runtime.probe.platform.system", return_value="Windows")
    def test_windows_skips_lookup(self, mock_system, mock_probe):
        """Test Windows returns -1 without attempting the lookup."""
        assert probe.get_open_file_handles_limit() == -1
        mock_probe.assert_not_called()

    @pytest.mark.skipif(os.name == "nt", reason="RLIMIT_NOFILE is POSIX only")
    def test_posix_limit_matches_resource(self):
        """Test the soft RLIMIT_NOFILE is reported."""
        import resource

        soft, _hard = resource.getrlimit(resource.RLIMIT_NOFILE)
        expected = -1 if soft == resource.RLIM_INFINITY else soft

        assert probe.get_open_file_handles_limit() == expected

    @patch("envinfo.runtime.probe.probe_capability")
    @patch("envinfo.runtime.probe.platform.system", return_value="Linux")
    def test_missing_module_is_silent(self, mock_system, mock_probe, caplog):
        """Test an unavailable lookup returns -1 without a warning."""
        mock_probe.return_value = ProbeResult(ProbeStatus.MISSING, error=ModuleNotFoundError("resource"))

        with caplog.at_level(logging.WARNING, logger="envinfo.runtime.probe"):
            assert probe.get_open_file_handles_limit() == -1

        assert caplog.records == []

    @patch("envinfo.runtime.probe.probe_capability")
    @patch("envinfo.runtime.probe.platform.system", return_value="Linux")
    def test_unexpected_failure_warns(self, mock_system, mock_probe, caplog):
        """Test an unexpected failure returns -1 and logs a warning."""
        mock_probe.return_value = ProbeResult(ProbeStatus.FAILED, error=OSError("EPERM"))

        with caplog.at_level(logging.WARNING, logger="envinfo.runtime.probe"):
            assert probe.get_open_file_handles_limit() == -1

        assert "Unexpected error when accessing file handle limit" in caplog.text

    def test_open_file_limit_accessor_handles_infinity(self):
        """Test an unlimited soft limit is reported as -1."""
        resource = Mock(RLIMIT_NOFILE=7, RLIM_INFINITY=-1)
        resource.getrlimit.return_value = (-1, -1)

        assert probe._open_file_limit(resource) == -1

        resource.getrlimit.return_value = (1024, 4096)
        assert probe._open_file_limit(resource) == 1024


class TestKerberosUser:
    """Test suite for get_kerberos_user."""

    @patch("envinfo.runtime.probe.probe_capability")
    def test_missing_dependency(self, mock_probe):
        """Test an absent gssapi yields the no-dependency marker."""
        mock_probe.return_value = ProbeResult(ProbeStatus.MISSING)

        assert probe.get_kerberos_user() == "<no gssapi dependency found>"

    @patch("envinfo.runtime.probe.probe_capability")
    def test_incompatible_dependency_logs_debug(self, mock_probe, caplog):
        """Test an unloadable gssapi logs at DEBUG and yields UNKNOWN."""
        mock_probe.return_value = ProbeResult(ProbeStatus.INCOMPATIBLE, error=ImportError("abi"))

        with caplog.at_level(logging.DEBUG, logger="envinfo.runtime.probe"):
            assert probe.get_kerberos_user() == UNKNOWN

        assert [record.levelno for record in caplog.records] == [logging.DEBUG]

    @patch("envinfo.runtime.probe.probe_capability")
    def test_unexpected_error_logs_warning(self, mock_probe, caplog):
        """Test other errors log at WARNING and yield UNKNOWN."""
        mock_probe.return_value = ProbeResult(ProbeStatus.FAILED, error=RuntimeError("no ccache"))

        with caplog.at_level(logging.DEBUG, logger="envinfo.runtime.probe"):
            assert probe.get_kerberos_user() == UNKNOWN

        assert [record.levelno for record in caplog.records] == [logging.WARNING]

    def test_provider_failing_at_import_yields_unknown(self, tmp_path, monkeypatch, caplog):
        """Test a gssapi module that raises on import never escapes the accessor."""
        (tmp_path / "gssapi.py").write_text("raise RuntimeError('broken native init')\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        monkeypatch.delitem(sys.modules, "gssapi", raising=False)

        with caplog.at_level(logging.WARNING, logger="envinfo.runtime.probe"):
            assert probe.get_kerberos_user() == UNKNOWN
            assert probe.get_kerberos_version_string() is None

        assert "broken native init" in caplog.text

    @patch("envinfo.runtime.probe.importlib.import_module")
    def test_short_name_strips_instance_and_realm(self, mock_import):
        """Test the principal is reduced to its short name."""
        mock_import.return_value = SimpleNamespace(GSSError=FakeGSSError)
        gssapi = Mock(__name__="gssapi")
        gssapi.Credentials.return_value.name = "hdfs/node1.example.com@EXAMPLE.COM"

        assert probe._kerberos_short_name(gssapi) == "hdfs"
        gssapi.Credentials.assert_called_once_with(usage="initiate")
        mock_import.assert_called_once_with("gssapi.exceptions")

    @patch("envinfo.runtime.probe.importlib.import_module")
    def test_no_credentials_is_not_an_error(self, mock_import, caplog):
        """Test a missing ticket cache yields UNKNOWN with only a DEBUG record."""
        mock_import.return_value = SimpleNamespace(GSSError=FakeGSSError)
        gssapi = Mock(__name__="gssapi")
        gssapi.Credentials.side_effect = FakeGSSError("No Kerberos credentials available")

        with patch.object(probe, "probe_capability") as mock_probe:
            mock_probe.side_effect = lambda name, accessor: ProbeResult(ProbeStatus.AVAILABLE, value=accessor(gssapi))
            with caplog.at_level(logging.DEBUG, logger="envinfo.runtime.probe"):
                assert probe.get_kerberos_user() == UNKNOWN

        assert [record.levelno for record in caplog.records] == [logging.DEBUG]

    @patch("envinfo.runtime.probe.probe_capability")
    def test_available_user(self, mock_probe):
        """Test an available principal is returned."""
        mock_probe.return_value = ProbeResult(ProbeStatus.AVAILABLE, value="alice")

        assert probe.get_kerberos_user() == "alice"


class TestKerberosVersion:
    """Test suite for get_kerberos_version_string."""

    @patch("envinfo.runtime.probe.probe_capability")
    def test_missing_dependency_returns_none(self, mock_probe):
        """Test an absent gssapi yields None."""
        mock_probe.return_value = ProbeResult(ProbeStatus.MISSING)

        assert probe.get_kerberos_version_string() is None

    @patch("envinfo.runtime.probe.probe_capability")
    def test_unexpected_error_is_logged(self, mock_probe, caplog):
        """Test unexpected errors are logged and yield None."""
        mock_probe.return_value = ProbeResult(ProbeStatus.FAILED, error=ValueError("bad metadata"))

        with caplog.at_level(logging.ERROR, logger="envinfo.runtime.probe"):
            assert probe.get_kerberos_version_string() is None

        assert "Cannot determine the gssapi version" in caplog.text

    @patch("envinfo.runtime.probe.probe_capability")
    def test_available_version(self, mock_probe):
        """Test the distribution version is returned."""
        mock_probe.return_value = ProbeResult(ProbeStatus.AVAILABLE, value="1.8.3")

        assert probe.get_kerberos_version_string() == "1.8.3"

    @patch("envinfo.runtime.probe.metadata.version", return_value="1.9.0")
    def test_version_accessor_reads_distribution(self, mock_version):
        """Test the accessor asks importlib.metadata for the module's distribution."""
        assert probe._kerberos_version(SimpleNamespace(__name__="gssapi")) == "1.9.0"
        mock_version.assert_called_once_with("gssapi")


class TestUserAndPath:
    """Test suite for OS user and module search path."""

    @patch("envinfo.runtime.probe.getpass.getuser", return_value="bob")
    def test_os_user(self, mock_getuser):
        """Test the OS user is returned."""
        assert probe.get_os_user() == "bob"

    @patch("envinfo.runtime.probe.getpass.getuser", side_effect=OSError("no user"))
    def test_os_user_failure(self, mock_getuser):
        """Test a failing lookup yields UNKNOWN."""
        assert probe.get_os_user() == UNKNOWN

    def test_python_path(self):
        """Test the module search path is joined with os.pathsep."""
        assert probe.get_python_path() == os.pathsep.join(sys.path)
