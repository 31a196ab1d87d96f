#!/usr/bin/env python3
"""Main entry point for the casbin CLI."""

import json
import sys

import typer

from casbin_cli.config import get_logger, get_settings
from casbin_cli.enforcer import EnforcementDispatcher
from casbin_cli.exceptions import CasbinCliError
from casbin_cli.utils.common import USAGE_HINT, console, handle_error
from casbin_cli.utils.shell import ProcessRunner
from casbin_cli.version import VersionOracle, VersionQuery, VersionReporter

logger = get_logger("main")

app = typer.Typer(
    name="casbin",
    help=(
        "Casbin is a powerful and efficient open-source access control library. "
        "It provides support for enforcing authorization based on various access control models."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

ModelOption = typer.Option(
    ...,
    "--model",
    "-m",
    help=(
        'The path of the model file or model text. Wrap it with "" and '
        'separate each line with "|".'
    ),
)
PolicyOption = typer.Option(
    ...,
    "--policy",
    "-p",
    help=(
        'The path of the policy file or policy text. Wrap it with "" and '
        'separate each line with "|". Changes to policy text are not saved.'
    ),
)


def build_version_banner() -> str:
    """Resolve the tool and library versions and render the banner."""
    settings = get_settings()
    oracle = VersionOracle(
        runner=ProcessRunner(timeout=settings.command_timeout),
        executable=settings.vcs_executable,
    )
    banner = VersionReporter(oracle=oracle).build_banner(
        tool_name=settings.tool_name,
        query=VersionQuery(settings.library_group_id, settings.library_artifact_id),
        document_path=settings.manifest_path,
    )
    return banner.render()


def version_callback(value: bool):
    """Show version and exit."""
    if not value:
        return
    try:
        banner = build_version_banner()
    except CasbinCliError as e:
        logger.warning("Version lookup failed", error=str(e))
        console.print("Failed to retrieve version information.", markup=False, highlight=False)
        console.print(USAGE_HINT, markup=False, highlight=False)
        raise typer.Exit(1) from None
    console.print(banner, markup=False, highlight=False)
    raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
):
    """
    Test requests against Casbin models and manage policy files.
    """
    if ctx.invoked_subcommand is None:
        console.print(
            "Error: no method given; expected one of enforce, enforceEx, addPolicy, removePolicy",
            style="red",
            markup=False,
            highlight=False,
        )
        console.print(USAGE_HINT, markup=False, highlight=False)
        raise typer.Exit(1)

    try:
        get_settings()
    except CasbinCliError as e:
        handle_error(e)
        raise typer.Exit(1) from None


def _dispatch(model: str, policy: str, method: str, args: list[str] | None):
    try:
        dispatcher = EnforcementDispatcher(model, policy)
        return getattr(dispatcher, method)(*(args or []))
    except CasbinCliError as e:
        handle_error(e)
        raise typer.Exit(1) from None


def _print_bool(value: bool) -> None:
    console.print("true" if value else "false", markup=False, highlight=False)


@app.command("enforce")
def enforce(
    model: str = ModelOption,
    policy: str = PolicyOption,
    args: list[str] | None = typer.Argument(None, help="Request values, e.g. alice data1 read"),
):
    """Test if a 'subject' can access an 'object' with a given 'action' based on the policy."""
    _print_bool(_dispatch(model, policy, "enforce", args))


@app.command("enforceEx")
def enforce_ex(
    model: str = ModelOption,
    policy: str = PolicyOption,
    args: list[str] | None = typer.Argument(None, help="Request values, e.g. alice data1 read"),
):
    """Check permissions and get which policy it matches."""
    allowed, explain = _dispatch(model, policy, "enforce_ex", args)
    console.print(
        json.dumps({"allow": allowed, "explain": explain}), markup=False, highlight=False
    )


@app.command("addPolicy")
def add_policy(
    model: str = ModelOption,
    policy: str = PolicyOption,
    args: list[str] | None = typer.Argument(None, help="Policy rule, e.g. alice data2 write"),
):
    """Add a policy rule to the policy file."""
    _print_bool(_dispatch(model, policy, "add_policy", args))


@app.command("removePolicy")
def remove_policy(
    model: str = ModelOption,
    policy: str = PolicyOption,
    args: list[str] | None = typer.Argument(None, help="Policy rule, e.g. alice data2 write"),
):
    """Remove a policy rule from the policy file."""
    _print_bool(_dispatch(model, policy, "remove_policy", args))


def run():
    """Main entry point for the CLI."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    run()
