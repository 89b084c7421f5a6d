#!/usr/bin/env python3
"""Jsonnet builder for Grafana dashboards."""

import json
import sys
from pathlib import Path

import _jsonnet

from .dashboard_builder import DashboardBuilder


def folder_title_from_dir(dir_name: str) -> str:
    """Turn a build subdirectory name back into a folder title ("team-a" -> "Team A")."""
    return dir_name.replace("-", " ").title()


class JsonnetBuilder:
    """
    Compiles Jsonnet dashboard templates to JSON.

    Layout: ``<dashboards_dir>/src/**/*.jsonnet`` is built into
    ``<dashboards_dir>/build/**/*.json``. The first directory level under
    src names the Grafana folder a dashboard belongs to.
    """

    def __init__(self, dashboards_dir: Path):
        self.dashboards_dir = Path(dashboards_dir)
        self.src_dir = self.dashboards_dir / "src"
        self.build_dir = self.dashboards_dir / "build"

    def build_all(self) -> list[Path]:
        """
        Build every .jsonnet file under src.

        Returns:
            List of paths to built JSON files

        Raises:
            SystemExit: If any build fails
        """
        jsonnet_files = sorted(self.src_dir.glob("**/*.jsonnet"))

        if not jsonnet_files:
            print(f"No .jsonnet files found in {self.src_dir}")
            return []

        built_files = []
        for jsonnet_file in jsonnet_files:
            print(f"Building {jsonnet_file}")
            built_files.append(self._build_one(jsonnet_file))

        return built_files

    def _build_one(self, jsonnet_file: Path) -> Path:
        rel_path = jsonnet_file.relative_to(self.src_dir)

        build_path = self.build_dir / rel_path.parent
        build_path.mkdir(parents=True, exist_ok=True)
        output_file = build_path / f"{jsonnet_file.stem}.json"

        try:
            json_data = json.loads(_jsonnet.evaluate_file(str(jsonnet_file)))
        except RuntimeError as e:
            print(f"Error building {jsonnet_file}: {e}")
            sys.exit(1)
        except json.JSONDecodeError as e:
            print(f"Error parsing JSON from {jsonnet_file}: {e}")
            sys.exit(1)

        with open(output_file, "w") as f:
            json.dump(json_data, f, indent=2)

        return output_file

    def load_dashboard(self, json_file: Path) -> tuple[str | None, DashboardBuilder]:
        """
        Load a built dashboard.

        Args:
            json_file: Path to a JSON file inside the build directory

        Returns:
            (folder title or None for the General folder, dashboard builder)

        Raises:
            ValueError: If the file holds no dashboard title
        """
        with open(json_file) as f:
            dashboard_json = json.load(f)

        relative_path = Path(json_file).relative_to(self.build_dir)
        folder_title = None
        if len(relative_path.parts) > 1:
            folder_title = folder_title_from_dir(relative_path.parts[0])

        return folder_title, DashboardBuilder.from_json(dashboard_json)
