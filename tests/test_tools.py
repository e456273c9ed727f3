"""Tests for locating external executables."""

from unittest.mock import patch

import pytest

from scad2trotec.config import Settings
from scad2trotec.exceptions import ToolNotFound
from scad2trotec.tools import (
    INKSCAPE,
    OPENSCAD,
    ToolPaths,
    current_platform,
    find_tool,
    resolve_tools,
)


class TestPlatform:
    """Tests for platform detection."""

    @pytest.mark.parametrize("value,expected", [
        ("win32", "windows"),
        ("darwin", "darwin"),
        ("linux", "linux"),
        ("freebsd13", "linux"),
    ])
    def test_current_platform(self, value, expected):
        """Test sys.platform maps to a candidate list key."""
        with patch("scad2trotec.tools.sys.platform", value):
            assert current_platform() == expected


class TestToolSpec:
    """Tests for ToolSpec candidate lists."""

    def test_linux_candidates(self):
        """Test Linux search order ends with a PATH lookup."""
        paths = OPENSCAD.candidate_paths("linux")
        assert paths[0] == "/usr/bin/openscad"
        assert paths[-1] == "openscad"

    def test_windows_candidates(self):
        """Test Windows search list uses Program Files."""
        paths = INKSCAPE.candidate_paths("windows")
        assert paths[0] == r"C:\Program Files\Inkscape\bin\inkscape.exe"
        assert paths[-1] == "inkscape"

    def test_unknown_platform(self):
        """Test an unknown platform still searches PATH."""
        assert OPENSCAD.candidate_paths("plan9") == ["openscad"]

    def test_candidates_not_shared(self):
        """Test the returned list can be modified safely."""
        OPENSCAD.candidate_paths("linux").clear()
        assert len(OPENSCAD.candidate_paths("linux")) == 4


def make_executable(path):
    """Create an empty executable file."""
    path.write_text("")
    path.chmod(0o755)
    return path


class TestFindTool:
    """Tests for find_tool."""

    def test_override_exists(self, tmp_path):
        """Test an existing override is returned as-is."""
        exe = make_executable(tmp_path / "openscad-nightly")
        assert find_tool(OPENSCAD, str(exe)) == str(exe)

    def test_override_on_path(self):
        """Test an override given as a command name is resolved on PATH."""
        with patch("scad2trotec.tools.shutil.which", return_value="/opt/bin/openscad-nightly"):
            assert find_tool(OPENSCAD, "openscad-nightly") == "/opt/bin/openscad-nightly"

    def test_override_missing(self, tmp_path):
        """Test a missing override is an error, not a fallback."""
        with patch("scad2trotec.tools.shutil.which", return_value=None):
            with pytest.raises(ToolNotFound, match="TROTEC_OPENSCAD"):
                find_tool(OPENSCAD, str(tmp_path / "nope"))

    def test_override_directory(self, tmp_path):
        """Test an override pointing at a directory is rejected."""
        folder = tmp_path / "OpenSCAD"
        folder.mkdir()
        with pytest.raises(ToolNotFound, match="TROTEC_OPENSCAD"):
            find_tool(OPENSCAD, str(folder))

    def test_bare_name_ignores_working_directory(self, tmp_path, monkeypatch):
        """Test a folder named like the tool in the cwd is not taken for it."""
        (tmp_path / "openscad").mkdir()
        monkeypatch.chdir(tmp_path)
        with patch("scad2trotec.tools.shutil.which", return_value=None):
            with pytest.raises(ToolNotFound):
                find_tool(OPENSCAD, platform="plan9")

    def test_first_existing_candidate(self):
        """Test the first existing candidate wins."""
        existing = {"/usr/local/bin/openscad", "/snap/bin/openscad"}
        with patch("scad2trotec.tools._is_executable", side_effect=lambda p: p in existing), \
                patch("scad2trotec.tools.shutil.which", return_value=None):
            assert find_tool(OPENSCAD, platform="linux") == "/usr/local/bin/openscad"

    def test_path_fallback(self):
        """Test falling back to PATH lookup."""
        def which(name):
            return "/home/user/bin/inkscape" if name == "inkscape" else None

        with patch("scad2trotec.tools._is_executable", return_value=False), \
                patch("scad2trotec.tools.shutil.which", side_effect=which) as mock_which:
            assert find_tool(INKSCAPE, platform="linux") == "/home/user/bin/inkscape"

        mock_which.assert_called_once_with("inkscape")

    def test_not_found(self):
        """Test a missing tool names the override variable."""
        with patch("scad2trotec.tools._is_executable", return_value=False), \
                patch("scad2trotec.tools.shutil.which", return_value=None):
            with pytest.raises(ToolNotFound) as exc_info:
                find_tool(INKSCAPE, platform="linux")

        assert "TROTEC_INKSCAPE" in str(exc_info.value)
        assert exc_info.value.stage == "locate"


class TestResolveTools:
    """Tests for resolve_tools."""

    def test_resolve_from_settings(self, tmp_path):
        """Test both tools come from settings overrides."""
        openscad = make_executable(tmp_path / "openscad")
        inkscape = make_executable(tmp_path / "inkscape")

        tools = resolve_tools(Settings(openscad=str(openscad), inkscape=str(inkscape)))

        assert tools == ToolPaths(openscad=str(openscad), inkscape=str(inkscape))

    def test_resolve_from_environment(self, tmp_path, monkeypatch):
        """Test TROTEC_* environment variables feed the overrides."""
        openscad = make_executable(tmp_path / "openscad")
        inkscape = make_executable(tmp_path / "inkscape")
        monkeypatch.setenv("TROTEC_OPENSCAD", str(openscad))
        monkeypatch.setenv("TROTEC_INKSCAPE", str(inkscape))

        tools = resolve_tools(Settings())

        assert tools.openscad == str(openscad)
        assert tools.inkscape == str(inkscape)

    def test_missing_inkscape(self, tmp_path):
        """Test a missing second tool still fails resolution."""
        openscad = make_executable(tmp_path / "openscad")
        with patch("scad2trotec.tools._is_executable", side_effect=lambda p: p == str(openscad)), \
                patch("scad2trotec.tools.shutil.which", return_value=None):
            with pytest.raises(ToolNotFound, match="inkscape"):
                resolve_tools(Settings(openscad=str(openscad)))
