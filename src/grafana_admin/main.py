#!/usr/bin/env python3
"""Main CLI entrypoint for grafana-admin."""

import argparse
import os
import sys
from importlib.metadata import version
from pathlib import Path

import requests

from grafana_admin.core.client import AdminAPIClient
from grafana_admin.core.config_manager import GrafanaConfigManager, has_auth
from grafana_admin.core.errors import GrafanaError, NotFoundError
from grafana_admin.core.jsonnet_builder import JsonnetBuilder

# Read version from package metadata (defined in pyproject.toml)
try:
    __version__ = version("grafana-admin")
except Exception:
    __version__ = "unknown"


def make_client(grafana_config: dict) -> AdminAPIClient:
    """
    Create an API client for a resolved context.

    Token auth goes through the client; user/password contexts use basic
    auth on the session instead.
    """
    session = requests.Session()
    session.headers["X-Grafana-Org-Id"] = str(grafana_config.get("org-id", 1))

    token = grafana_config.get("token") or ""
    if not token:
        session.auth = (grafana_config["user"], grafana_config["password"])

    return AdminAPIClient(session, grafana_config["server"], token=token)


def client_from_args(args) -> AdminAPIClient:
    config_manager = GrafanaConfigManager(context=args.grafana_context)
    return make_client(config_manager.get_context())


def fail(message: str):
    print(f"Error: {message}")
    sys.exit(1)


# ============================================================================
# Config Commands
# ============================================================================


def config_add(args):
    """Add or update a context in the config file."""
    manager = GrafanaConfigManager()
    manager.add_context(
        args.name,
        args.server,
        token=args.token,
        user=args.user,
        password=args.password,
        org_id=args.org_id,
    )

    if args.use_context or manager.get_current_context() is None:
        manager.use_context(args.name)

    print(f"Context '{args.name}' added to {manager.config_path}")


def config_list(args):
    """List all contexts in the config file."""
    manager = GrafanaConfigManager()
    contexts = manager.list_contexts()
    current_context = manager.get_current_context()

    if not contexts:
        print("No contexts configured")
        return

    config = manager.load()
    print("Available contexts:")
    for name in contexts:
        marker = "*" if name == current_context else " "
        server = config["contexts"][name].get("grafana", {}).get("server", "")
        print(f"{marker} {name:<20} {server}")


def config_use(args):
    """Set the current context."""
    manager = GrafanaConfigManager()
    manager.use_context(args.name)
    print(f"Switched to context '{args.name}'")


def config_delete(args):
    """Delete a context from the config file."""
    manager = GrafanaConfigManager()
    manager.delete_context(args.name)
    print(f"Context '{args.name}' deleted")


def config_show(args):
    """Show details of a context, with secrets masked."""
    manager = GrafanaConfigManager()
    config = manager.load()

    context_name = args.name or manager.get_current_context()
    if not context_name:
        fail("no context specified and no current context set")

    if context_name not in config.get("contexts", {}):
        fail(f"context '{context_name}' not found")

    grafana = config["contexts"][context_name].get("grafana", {})

    print(f"Context: {context_name}")
    print(f"  Server:   {grafana.get('server', 'N/A')}")
    if grafana.get("token"):
        print(f"  Token:    {'*' * len(grafana['token'])}")
    else:
        print(f"  User:     {grafana.get('user', 'N/A')}")
        print(f"  Password: {'*' * len(grafana.get('password', ''))}")
    print(f"  Org ID:   {grafana.get('org-id', 'N/A')}")


def config_set(args):
    """Set a config value using dot notation."""
    manager = GrafanaConfigManager()
    manager.set_value(args.key, args.value)
    print(f"Set {args.key} = {args.value}")


def config_check(args):
    """Check the configuration and display the config file in use."""
    manager = GrafanaConfigManager()
    config_path = manager.config_path

    print(f"Configuration file: {config_path}")
    print(f"Exists: {config_path.exists()}")

    if not config_path.exists():
        print("\nNo configuration file found.")
        print("Create one with: config add <name> --server <url> --token <token>")
        return

    contexts = manager.load().get("contexts", {})
    current_context = manager.get_current_context()

    print(f"\nContexts: {len(contexts)}")
    print(f"Current context: {current_context or 'none'}")

    if not contexts:
        print("\nNo contexts configured.")
        return

    if current_context:
        if current_context in contexts:
            print(f"\nCurrent context '{current_context}' is valid")
            grafana = contexts[current_context].get("grafana", {})

            has_server = bool(grafana.get("server"))
            auth_ok = has_auth(grafana)

            print(f"  Server configured: {has_server}")
            print(f"  Authentication configured: {auth_ok}")

            if not has_server or not auth_ok:
                print("\n  Warning: Configuration incomplete")
                if not has_server:
                    print("    - Missing server URL")
                if not auth_ok:
                    print("    - Missing authentication (token or user/password)")
        else:
            print(f"\nWarning: Current context '{current_context}' does not exist")

    print("\nAll contexts:")
    for name in contexts:
        marker = "*" if name == current_context else " "
        server = contexts[name].get("grafana", {}).get("server", "no server")
        print(f"{marker} {name}: {server}")


# ============================================================================
# Folder and Alert Channel Commands
# ============================================================================


def folder_create(args):
    """Create a folder."""
    client = client_from_args(args)
    try:
        folder = client.create_folder(args.title)
    except (GrafanaError, requests.RequestException) as e:
        fail(str(e))

    print(f"Created folder '{folder.title}' (id={folder.id}, uid={folder.uid})")


def folder_get(args):
    """Look up a folder by title."""
    client = client_from_args(args)
    try:
        folder = client.get_folder_by_title(args.title)
    except NotFoundError:
        fail(f"folder '{args.title}' not found")
    except (GrafanaError, requests.RequestException) as e:
        fail(str(e))

    print(f"Folder: {folder.title}")
    print(f"  ID:  {folder.id}")
    print(f"  UID: {folder.uid}")


def alert_channel_get(args):
    """Look up an alert notification channel by name."""
    client = client_from_args(args)
    try:
        channel = client.get_alert_channel_by_name(args.name)
    except NotFoundError:
        fail(f"alert channel '{args.name}' not found")
    except (GrafanaError, requests.RequestException) as e:
        fail(str(e))

    print(f"Alert channel: {channel.name}")
    print(f"  ID:   {channel.id}")
    print(f"  UID:  {channel.uid}")
    print(f"  Type: {channel.type}")


# ============================================================================
# Upload Command
# ============================================================================


def upload_dashboards(args):
    """Build Jsonnet dashboards and upsert them into Grafana."""
    if not args.dashboard_dir.exists():
        fail(f"dashboards directory not found at {args.dashboard_dir}")

    print("=" * 42)
    print("Uploading Grafana dashboards...")
    print("=" * 42)
    print(f"Using dashboards directory: {args.dashboard_dir}")

    client = client_from_args(args)

    builder = JsonnetBuilder(args.dashboard_dir)
    json_files = builder.build_all()

    if not json_files:
        print("No dashboards to upload")
        return

    print("\nUploading dashboards to Grafana...")
    print(f"Found {len(json_files)} dashboards to upload")

    success_count = 0
    error_count = 0

    # Folder title -> Folder, so each folder is resolved once per run
    folder_cache = {}

    for json_file in json_files:
        try:
            folder_title, dashboard = builder.load_dashboard(json_file)
        except ValueError as e:
            print(f"  ✗ Skipping {json_file.name}: {e}")
            error_count += 1
            continue

        folder = None
        if folder_title:
            if folder_title not in folder_cache:
                try:
                    folder_cache[folder_title] = client.get_or_create_folder(folder_title)
                    print(f"  Using folder: {folder_cache[folder_title].title}")
                except (GrafanaError, requests.RequestException) as e:
                    print(f"  Warning: Failed to get/create folder '{folder_title}': {e}")
                    folder_cache[folder_title] = None
            folder = folder_cache[folder_title]

        try:
            result = client.upsert_dashboard(folder, dashboard, message="Updated by grafana-admin")
            print(f"  ✓ Uploaded: {dashboard.title} (version {result.version}, {result.url})")
            success_count += 1
        except (GrafanaError, requests.RequestException) as e:
            print(f"  ✗ Failed to upload {json_file.name}: {e}")
            error_count += 1

    print(f"\nUpload complete: {success_count} succeeded, {error_count} failed")

    if error_count > 0:
        sys.exit(1)

    print("\n" + "=" * 42)
    print("Dashboards uploaded successfully!")
    print("=" * 42)


# ============================================================================
# CLI Setup and Main Entry Point
# ============================================================================


def add_dashboard_dir_arg(parser):
    parser.add_argument(
        "--dashboard-dir",
        type=Path,
        default=Path(os.environ.get("DASHBOARD_DIR", str(Path.cwd() / "dashboards"))),
        help="Dashboard directory root (defaults to DASHBOARD_DIR env var or './dashboards')",
    )


def add_grafana_context_arg(parser):
    parser.add_argument(
        "--grafana-context",
        default=os.environ.get("GRAFANA_CONTEXT"),
        help="Grafana context name (defaults to GRAFANA_CONTEXT env var or current-context in config)",
    )


def main():
    """Main CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(
        prog="grafana-admin",
        description="Manage Grafana folders, dashboards and alert channels",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True, help="Available commands")

    # Config subcommand
    config_parser = subparsers.add_parser("config", help="Manage Grafana configuration")
    config_subparsers = config_parser.add_subparsers(dest="config_command", required=True, help="Config commands")

    # config add
    add_parser = config_subparsers.add_parser("add", help="Add a new context")
    add_parser.add_argument("name", help="Context name")
    add_parser.add_argument(
        "--server",
        default=os.environ.get("GRAFANA_SERVER"),
        required=not os.environ.get("GRAFANA_SERVER"),
        help="Grafana server URL (defaults to GRAFANA_SERVER env var)",
    )
    add_parser.add_argument(
        "--token",
        default=os.environ.get("GRAFANA_TOKEN"),
        help="Service account token (defaults to GRAFANA_TOKEN env var)",
    )
    add_parser.add_argument(
        "--user",
        default=os.environ.get("GRAFANA_USER", "admin"),
        help="Grafana username when not using a token (defaults to GRAFANA_USER env var or 'admin')",
    )
    add_parser.add_argument(
        "--password",
        default=os.environ.get("GRAFANA_PASSWORD"),
        help="Grafana password when not using a token (defaults to GRAFANA_PASSWORD env var)",
    )
    add_parser.add_argument(
        "--org-id",
        type=int,
        default=int(os.environ.get("GRAFANA_ORG_ID", "1")),
        help="Grafana organization ID (defaults to GRAFANA_ORG_ID env var or 1)",
    )
    add_parser.add_argument("--use-context", action="store_true", help="Set as current context")
    add_parser.set_defaults(func=config_add)

    # config list
    list_parser = config_subparsers.add_parser("list", help="List all contexts")
    list_parser.set_defaults(func=config_list)

    # config use
    use_parser = config_subparsers.add_parser("use", help="Switch to a context")
    use_parser.add_argument("name", help="Context name")
    use_parser.set_defaults(func=config_use)

    # config show
    show_parser = config_subparsers.add_parser("show", help="Show context details")
    show_parser.add_argument("name", nargs="?", help="Context name (defaults to current)")
    show_parser.set_defaults(func=config_show)

    # config delete
    delete_parser = config_subparsers.add_parser("delete", help="Delete a context")
    delete_parser.add_argument("name", help="Context name")
    delete_parser.set_defaults(func=config_delete)

    # config set
    set_parser = config_subparsers.add_parser("set", help="Set a config value")
    set_parser.add_argument("key", help="Config key (e.g., contexts.myproject-1.grafana.token)")
    set_parser.add_argument("value", help="Config value")
    set_parser.set_defaults(func=config_set)

    # config check
    check_parser = config_subparsers.add_parser("check", help="Check config file location")
    check_parser.set_defaults(func=config_check)

    # Folder subcommand
    folder_parser = subparsers.add_parser("folder", help="Manage folders")
    folder_subparsers = folder_parser.add_subparsers(dest="folder_command", required=True, help="Folder commands")

    folder_create_parser = folder_subparsers.add_parser("create", help="Create a folder")
    folder_create_parser.add_argument("title", help="Folder title")
    add_grafana_context_arg(folder_create_parser)
    folder_create_parser.set_defaults(func=folder_create)

    folder_get_parser = folder_subparsers.add_parser("get", help="Find a folder by title (case-insensitive)")
    folder_get_parser.add_argument("title", help="Folder title")
    add_grafana_context_arg(folder_get_parser)
    folder_get_parser.set_defaults(func=folder_get)

    # Alert channel subcommand
    channel_parser = subparsers.add_parser("alert-channel", help="Inspect alert notification channels")
    channel_subparsers = channel_parser.add_subparsers(
        dest="channel_command", required=True, help="Alert channel commands"
    )

    channel_get_parser = channel_subparsers.add_parser("get", help="Find a channel by name (case-insensitive)")
    channel_get_parser.add_argument("name", help="Channel name")
    add_grafana_context_arg(channel_get_parser)
    channel_get_parser.set_defaults(func=alert_channel_get)

    # Upload subcommand
    upload_parser = subparsers.add_parser("upload", help="Build and upload dashboards to Grafana")
    add_dashboard_dir_arg(upload_parser)
    add_grafana_context_arg(upload_parser)
    upload_parser.set_defaults(func=upload_dashboards)

    args = parser.parse_args()

    # Call the function associated with the selected command
    args.func(args)


if __name__ == "__main__":
    main()
