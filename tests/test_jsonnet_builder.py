"""Tests for JsonnetBuilder."""

from unittest.mock import patch

import pytest

from grafana_admin.core.jsonnet_builder import JsonnetBuilder, folder_title_from_dir


class TestJsonnetBuilder:
    """Tests for building Jsonnet templates."""

    @patch("grafana_admin.core.jsonnet_builder._jsonnet.evaluate_file")
    def test_build_single_dashboard(self, mock_evaluate, dashboards_structure):
        """Single dashboard should be built into the build directory."""
        jsonnet_file = dashboards_structure["src"] / "test.jsonnet"
        jsonnet_file.write_text("{}")
        mock_evaluate.return_value = '{"uid": "test", "title": "Test Dashboard"}'

        built_files = JsonnetBuilder(dashboards_structure["base"]).build_all()

        mock_evaluate.assert_called_once_with(str(jsonnet_file))
        assert built_files == [dashboards_structure["build"] / "test.json"]
        assert built_files[0].exists()

    @patch("grafana_admin.core.jsonnet_builder._jsonnet.evaluate_file")
    def test_build_nested_dashboard(self, mock_evaluate, dashboards_structure):
        """Nested dashboard should preserve folder structure."""
        nested_dir = dashboards_structure["src"] / "folder1" / "folder2"
        nested_dir.mkdir(parents=True)
        (nested_dir / "nested.jsonnet").write_text("{}")
        mock_evaluate.return_value = '{"uid": "nested", "title": "Nested"}'

        JsonnetBuilder(dashboards_structure["base"]).build_all()

        assert (dashboards_structure["build"] / "folder1" / "folder2" / "nested.json").exists()

    @patch("grafana_admin.core.jsonnet_builder._jsonnet.evaluate_file")
    def test_build_jsonnet_error(self, mock_evaluate, dashboards_structure):
        """Jsonnet build error should exit with error code."""
        (dashboards_structure["src"] / "bad.jsonnet").write_text("invalid jsonnet")
        mock_evaluate.side_effect = RuntimeError("Syntax error")

        with pytest.raises(SystemExit) as exc_info:
            JsonnetBuilder(dashboards_structure["base"]).build_all()
        assert exc_info.value.code == 1

    def test_no_jsonnet_files(self, dashboards_structure, capsys):
        """Empty src directory should complete without error."""
        built_files = JsonnetBuilder(dashboards_structure["base"]).build_all()

        assert built_files == []
        assert "No .jsonnet files found" in capsys.readouterr().out


class TestLoadDashboard:
    """Tests for turning built files into upsertable dashboards."""

    def test_top_level_dashboard_has_no_folder(self, dashboards_structure):
        json_file = dashboards_structure["build"] / "overview.json"
        json_file.write_text('{"title": "Overview"}')

        folder_title, dashboard = JsonnetBuilder(dashboards_structure["base"]).load_dashboard(json_file)

        assert folder_title is None
        assert dashboard.title == "Overview"

    def test_subdirectory_names_the_folder(self, dashboards_structure):
        folder_dir = dashboards_structure["build"] / "team-a"
        folder_dir.mkdir()
        json_file = folder_dir / "latency.json"
        json_file.write_text('{"title": "Latency"}')

        folder_title, dashboard = JsonnetBuilder(dashboards_structure["base"]).load_dashboard(json_file)

        assert folder_title == "Team A"
        assert dashboard.to_dict() == {"title": "Latency"}

    def test_untitled_dashboard_is_rejected(self, dashboards_structure):
        json_file = dashboards_structure["build"] / "broken.json"
        json_file.write_text('{"uid": "broken"}')

        with pytest.raises(ValueError):
            JsonnetBuilder(dashboards_structure["base"]).load_dashboard(json_file)


@pytest.mark.parametrize(
    "dir_name, title",
    [("team-a", "Team A"), ("infrastructure", "Infrastructure"), ("data-platform-prod", "Data Platform Prod")],
)
def test_folder_title_from_dir(dir_name, title):
    assert folder_title_from_dir(dir_name) == title
