#!/usr/bin/env python3
"""grafanactl-compatible context configuration for grafana-admin."""

import os
import sys
from pathlib import Path

import yaml

AUTH_FIELDS_HELP = "token or user/password"


def has_auth(grafana_config: dict) -> bool:
    """Whether a context's grafana section carries usable credentials."""
    return bool(grafana_config.get("token")) or (
        bool(grafana_config.get("user")) and bool(grafana_config.get("password"))
    )


class GrafanaConfigManager:
    """Reads and writes Grafana contexts in the grafanactl config file."""

    def __init__(self, context: str | None = None):
        """
        Initialize config manager and determine config file path.

        Args:
            context: Optional context name. If None, the file's current-context is used.
        """
        self._config_path = self._find_config_path()
        self._config = None
        self._context = context

    @staticmethod
    def _find_config_path() -> Path:
        """
        Find the path to the config file.

        Returns the path even if the file doesn't exist yet (for creating new configs).
        Lookup order:
        1. $XDG_CONFIG_HOME/grafanactl/config.yaml
        2. $HOME/.config/grafanactl/config.yaml
        3. $XDG_CONFIG_DIRS/grafanactl/config.yaml (first existing)

        Raises:
            SystemExit: If config path cannot be determined
        """
        xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
        if xdg_config_home:
            config_path = Path(xdg_config_home) / "grafanactl" / "config.yaml"
            if config_path.exists():
                return config_path

        home = os.environ.get("HOME")
        if home:
            config_path = Path(home) / ".config" / "grafanactl" / "config.yaml"
            if config_path.exists() or not xdg_config_home:
                return config_path

        xdg_config_dirs = os.environ.get("XDG_CONFIG_DIRS")
        if xdg_config_dirs:
            for config_dir in xdg_config_dirs.split(":"):
                config_path = Path(config_dir) / "grafanactl" / "config.yaml"
                if config_path.exists():
                    return config_path

        if home:
            return Path(home) / ".config" / "grafanactl" / "config.yaml"
        if xdg_config_home:
            return Path(xdg_config_home) / "grafanactl" / "config.yaml"

        print("Error: Could not determine config file location")
        sys.exit(1)

    @property
    def config_path(self) -> Path:
        return self._config_path

    def load(self) -> dict:
        """
        Load the configuration file, caching the result.

        Returns:
            Configuration dictionary with 'contexts' and optionally 'current-context'
        """
        if self._config is not None:
            return self._config

        if not self._config_path.exists():
            self._config = {"contexts": {}}
            return self._config

        with open(self._config_path) as f:
            self._config = yaml.safe_load(f) or {"contexts": {}}

        return self._config

    def reload(self) -> dict:
        """Force reload configuration from disk."""
        self._config = None
        return self.load()

    def save(self):
        """Write the configuration to disk with 0600 permissions."""
        if self._config is None:
            return

        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w") as f:
            yaml.dump(self._config, f, default_flow_style=False, sort_keys=False)
        self._config_path.chmod(0o600)

    def add_context(
        self,
        name: str,
        server: str,
        token: str | None = None,
        user: str | None = None,
        password: str | None = None,
        org_id: int = 1,
    ):
        """
        Add or replace a context.

        Args:
            name: Context name
            server: Grafana server URL
            token: Service account token
            user: Basic auth username (used when no token is given)
            password: Basic auth password
            org_id: Grafana organization ID

        Raises:
            SystemExit: If neither a token nor user/password is given
        """
        grafana = {"server": server}
        if token:
            grafana["token"] = token
        if user and password:
            grafana["user"] = user
            grafana["password"] = password
        grafana["org-id"] = org_id

        if not has_auth(grafana):
            print(f"Error: context '{name}' needs {AUTH_FIELDS_HELP}")
            sys.exit(1)

        config = self.load()
        config.setdefault("contexts", {})[name] = {"grafana": grafana}
        self.save()

    def _resolve_context_name(self) -> str:
        if self._context:
            return self._context

        current_context = self.load().get("current-context")
        if current_context:
            return current_context

        print("Error: No context specified.")
        print("Please either:")
        print("  1. Set GRAFANA_CONTEXT environment variable")
        print("  2. Set current-context in your config file")
        sys.exit(1)

    def get_context(self, name: str | None = None) -> dict:
        """
        Get the grafana section of a context.

        Args:
            name: Optional context name. If None, resolved from init param or current-context.

        Returns:
            Dictionary with 'server', 'org-id' and either 'token' or 'user'/'password'

        Raises:
            SystemExit: If the context doesn't exist or is incomplete
        """
        if name is None:
            name = self._resolve_context_name()

        contexts = self.load().get("contexts", {})

        if name not in contexts:
            print(f"Error: context '{name}' not found in config")
            available = list(contexts.keys())
            if available:
                print(f"Available contexts: {', '.join(available)}")
            else:
                print("No contexts configured")
            sys.exit(1)

        grafana_config = dict(contexts[name].get("grafana", {}))

        missing = []
        if not grafana_config.get("server"):
            missing.append("server")
        if not has_auth(grafana_config):
            missing.append(AUTH_FIELDS_HELP)
        if missing:
            print(f"Error: context '{name}' is missing required fields: {', '.join(missing)}")
            sys.exit(1)

        grafana_config.setdefault("org-id", 1)
        return grafana_config

    def list_contexts(self) -> list[str]:
        return list(self.load().get("contexts", {}).keys())

    def get_current_context(self) -> str | None:
        return self.load().get("current-context")

    def use_context(self, name: str):
        """
        Set the current context.

        Raises:
            SystemExit: If context doesn't exist
        """
        config = self.load()

        if name not in config.get("contexts", {}):
            print(f"Error: context '{name}' not found")
            sys.exit(1)

        config["current-context"] = name
        self.save()

    def delete_context(self, name: str):
        """
        Delete a context.

        Deleting the current context clears current-context; the user has to
        pick a new one with 'config use'.

        Raises:
            SystemExit: If context doesn't exist
        """
        config = self.load()

        if name not in config.get("contexts", {}):
            print(f"Error: context '{name}' not found")
            sys.exit(1)

        del config["contexts"][name]

        if config.get("current-context") == name:
            config["current-context"] = None

        self.save()

    def set_value(self, path: str, value: str):
        """
        Set a config value using dot notation.

        Args:
            path: Dot-separated path (e.g., "contexts.default.grafana.token")
            value: Value to set

        Raises:
            SystemExit: If the path format is invalid or org-id isn't an integer
        """
        config = self.load()

        parts = path.split(".")

        if len(parts) != 4 or parts[0] != "contexts" or parts[2] != "grafana":
            print("Error: path must be in format: contexts.<name>.grafana.<key>")
            print("Examples:")
            print("  contexts.default.grafana.server")
            print("  contexts.default.grafana.token")
            print("  contexts.default.grafana.user")
            print("  contexts.default.grafana.password")
            print("  contexts.default.grafana.org-id")
            sys.exit(1)

        context_name = parts[1]
        key = parts[3]

        if key == "org-id":
            try:
                value = int(value)
            except ValueError:
                print(f"Error: org-id must be an integer, got: {value}")
                sys.exit(1)

        context = config.setdefault("contexts", {}).setdefault(context_name, {})
        context.setdefault("grafana", {})[key] = value

        self.save()
