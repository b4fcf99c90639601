# CLI interface for mcpscope
import argparse
import logging
import sys

from mcpscope import __version__
from mcpscope.config import GLOBAL_SCOPE
from mcpscope.errors import ConfigStoreError, ServerNotFound
from mcpscope.models import SERVER_TYPES, ServerEntry
from mcpscope.store import ConfigStore
from mcpscope.utils import validate_server_entry

# ABOUTME: Exit codes
# 0 = success, 2 = config error (not found, bad input), 3 = fatal
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 2
EXIT_FATAL = 3


def _print_server(server: ServerEntry) -> None:
    print(f"  {server.name}")
    print(f"    type: {server.type}")
    if server.url is not None:
        print(f"    url: {server.url}")
    if server.command is not None:
        print(f"    command: {server.command}")
    if server.args:
        print(f"    args: {' '.join(server.args)}")
    if server.env:
        env_str = ", ".join(f"{k}={v}" for k, v in server.env.items())
        print(f"    env: {env_str}")


def _parse_pairs(value: str | None) -> dict[str, str] | None:
    """Parse comma-separated KEY=VALUE pairs; entries without '=' are ignored."""
    if not value:
        return None
    pairs: dict[str, str] = {}
    for pair in value.split(","):
        if "=" in pair:
            key, val = pair.split("=", 1)
            pairs[key.strip()] = val.strip()
    return pairs


def cmd_list(args: argparse.Namespace, store: ConfigStore) -> int:
    """Execute list command.

    ABOUTME: Prints every server in the selected scope
    """
    try:
        servers = store.list_servers(args.scope)
    except ConfigStoreError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR

    print(f"MCP Servers in {args.scope}:")
    print()
    for server in servers:
        _print_server(server)
        print()

    print(f"Total: {len(servers)} server(s)")
    return EXIT_SUCCESS


def cmd_get(args: argparse.Namespace, store: ConfigStore) -> int:
    """Execute get command."""
    try:
        server = store.get_server(args.name, args.scope)
    except ConfigStoreError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR

    _print_server(server)
    return EXIT_SUCCESS


def cmd_add(args: argparse.Namespace, store: ConfigStore) -> int:
    """Execute add command.

    ABOUTME: Builds a ServerEntry from flags and upserts it into the scope
    ABOUTME: Validation problems are printed; errors abort before writing
    """
    server = ServerEntry(
        name=args.name,
        type=args.type,
        url=args.url,
        command=args.command,
        args=[arg.strip() for arg in args.args.split(",")] if args.args else None,
        env=_parse_pairs(args.env),
    )

    problems = validate_server_entry(server)
    for problem in problems:
        prefix = "Error" if problem.severity == "error" else "Warning"
        print(f"  {prefix}: {problem.message}")
    if any(problem.severity == "error" for problem in problems):
        print()
        print("Server not added. Fix errors above and try again.")
        return EXIT_CONFIG_ERROR

    try:
        response = store.add_server(server, args.scope)
    except ConfigStoreError as e:
        print(f"Error: {e}")
        return EXIT_FATAL

    print(response.message)
    return EXIT_SUCCESS


def cmd_remove(args: argparse.Namespace, store: ConfigStore) -> int:
    """Execute remove command."""
    try:
        response = store.remove_server(args.name, args.scope)
    except ServerNotFound as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR
    except ConfigStoreError as e:
        print(f"Error: {e}")
        return EXIT_FATAL

    print(response.message)
    return EXIT_SUCCESS


def cmd_scopes(args: argparse.Namespace, store: ConfigStore) -> int:
    """Execute scopes command."""
    try:
        scopes = store.list_scopes()
    except ConfigStoreError as e:
        print(f"Error: {e}")
        return EXIT_CONFIG_ERROR

    for scope in scopes:
        print(scope)
    return EXIT_SUCCESS


def cmd_status(args: argparse.Namespace, store: ConfigStore) -> int:
    """Execute status command.

    ABOUTME: Reports CLI availability and whether any config document exists
    """
    cli_ok = store.is_cli_available()
    print(f"  {'✓' if cli_ok else '✗'} {store.cli_command} CLI {'available' if cli_ok else 'not found'}")

    try:
        config_ok = store.config_file_exists()
    except ConfigStoreError as e:
        print(f"Error: {e}")
        return EXIT_FATAL

    print(f"  {'✓' if config_ok else '✗'} {store.filename} {'found' if config_ok else 'not found'}")
    return EXIT_SUCCESS


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all subcommands."""
    parser = argparse.ArgumentParser(
        prog="mcpscope",
        description="Manage MCP servers in ~/.claude.json by user or project scope"
    )

    parser.add_argument(
        "--version", "-V",
        action="version",
        version=f"mcpscope v{__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )

    # Scope option shared by the server commands
    scope_parent = argparse.ArgumentParser(add_help=False)
    scope_parent.add_argument(
        "--scope", "-s",
        default=GLOBAL_SCOPE,
        help=f"Scope id: a project path, or a global sentinel (default: {GLOBAL_SCOPE})"
    )

    subparsers = parser.add_subparsers(dest="cmd", help="Available commands")

    subparsers.add_parser(
        "list",
        parents=[scope_parent],
        help="List servers in a scope"
    )

    get_parser = subparsers.add_parser(
        "get",
        parents=[scope_parent],
        help="Show one server"
    )
    get_parser.add_argument("name", help="Name of the MCP server")

    add_parser = subparsers.add_parser(
        "add",
        parents=[scope_parent],
        help="Add or replace a server"
    )
    add_parser.add_argument("name", help="Name of the MCP server to add")
    add_parser.add_argument(
        "--type",
        choices=list(SERVER_TYPES),
        default="stdio",
        help="Server type (default: stdio)"
    )
    add_parser.add_argument("--command", help="Command to run (for stdio type)")
    add_parser.add_argument("--url", help="URL endpoint (for http/sse type)")
    add_parser.add_argument("--args", help="Comma-separated arguments (for stdio type)")
    add_parser.add_argument("--env", help="Comma-separated KEY=VALUE environment variables")

    remove_parser = subparsers.add_parser(
        "remove",
        parents=[scope_parent],
        help="Remove a server"
    )
    remove_parser.add_argument("name", help="Name of the MCP server to remove")

    subparsers.add_parser("scopes", help="List available scopes")
    subparsers.add_parser("status", help="Check CLI availability and config presence")

    return parser


COMMANDS = {
    "list": cmd_list,
    "get": cmd_get,
    "add": cmd_add,
    "remove": cmd_remove,
    "scopes": cmd_scopes,
    "status": cmd_status,
}


def main(argv: list[str] | None = None, store: ConfigStore | None = None) -> int:
    """Main CLI entry point.

    ABOUTME: Parses args and dispatches to appropriate command
    ABOUTME: Returns exit code for sys.exit()
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(message)s",
        )

    handler = COMMANDS.get(args.cmd)
    if handler is None:
        parser.print_help()
        return EXIT_SUCCESS

    try:
        return handler(args, store if store is not None else ConfigStore())
    except ConfigStoreError as e:
        print(f"Fatal error: {e}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
