"""Deploy commands — push the branch and Pantheon tags with git."""

from __future__ import annotations

import os
import subprocess
from typing import Optional

import typer

from starterkit.deploy import (
    TARGETS,
    DeployAllOptions,
    DeployError,
    GitRunner,
    deploy_all,
    deploy_target,
)

deploy_app = typer.Typer(help="Deploy via git pushes and annotated tags.", no_args_is_help=True)

_DRY_RUN = typer.Option(False, "--dry-run", help="Print commands instead of running them (or set DRY_RUN).")
_BRANCH = typer.Option("main", envvar="DEPLOY_BRANCH", help="Branch to push HEAD to.")
_BUILD = typer.Option(None, "--build-command", envvar="DEPLOY_BUILD_COMMAND", help="Command to run before pushing.")


def _dry_run_env() -> bool:
    """Any non-empty ``DRY_RUN`` turns on dry-run mode."""
    return bool(os.environ.get("DRY_RUN"))


def _skip_env(name: str) -> bool:
    """A ``SKIP_*`` variable skips its step unless it is empty or ``"0"``."""
    value = os.environ.get(name)
    return bool(value) and value != "0"


def _abort(exc: Exception) -> None:
    if isinstance(exc, subprocess.CalledProcessError):
        typer.echo(f"[deploy] Command failed: {exc}")
    else:
        typer.echo(f"[deploy] Abort: {exc}")
    raise typer.Exit(code=1)


@deploy_app.command("target")
def deploy_target_cmd(
    target: str = typer.Argument(..., help="main | pantheon_test | pantheon_live"),
    branch: str = _BRANCH,
    tag: Optional[str] = typer.Option(None, envvar="TAG_NAME", help="Tag name (default: generated)."),
    message: Optional[str] = typer.Option(None, envvar="TAG_MESSAGE", help="Tag message."),
    build_command: Optional[str] = _BUILD,
    dry_run: bool = _DRY_RUN,
) -> None:
    """Deploy a single target."""
    if target not in TARGETS:
        typer.echo(f"[deploy] Unknown target {target!r}. Use: {' | '.join(TARGETS)}")
        raise typer.Exit(code=1)
    try:
        deploy_target(
            GitRunner(dry_run=dry_run or _dry_run_env()),
            target,
            branch=branch,
            tag=tag,
            message=message,
            build_command=build_command,
        )
    except (DeployError, subprocess.CalledProcessError) as exc:
        _abort(exc)
    typer.echo(f"[deploy] Deployed {target}")


@deploy_app.command("all")
def deploy_all_cmd(
    branch: str = _BRANCH,
    tag_test: Optional[str] = typer.Option(None, envvar="TAG_NAME_TEST", help="Test tag name."),
    tag_live: Optional[str] = typer.Option(None, envvar="TAG_NAME_LIVE", help="Live tag name."),
    message_test: Optional[str] = typer.Option(None, envvar="TAG_MESSAGE_TEST", help="Test tag message."),
    message_live: Optional[str] = typer.Option(None, envvar="TAG_MESSAGE_LIVE", help="Live tag message."),
    skip_main: bool = typer.Option(False, "--skip-main", help="Skip the branch push (or set SKIP_MAIN)."),
    skip_test: bool = typer.Option(False, "--skip-test", help="Skip the test tag (or set SKIP_TEST)."),
    skip_live: bool = typer.Option(False, "--skip-live", help="Skip the live tag (or set SKIP_LIVE)."),
    build_command: Optional[str] = _BUILD,
    dry_run: bool = _DRY_RUN,
) -> None:
    """Push the branch, then the test and live tags."""
    options = DeployAllOptions(
        branch=branch,
        tag_test=tag_test,
        tag_live=tag_live,
        message_test=message_test,
        message_live=message_live,
        skip_main=skip_main or _skip_env("SKIP_MAIN"),
        skip_test=skip_test or _skip_env("SKIP_TEST"),
        skip_live=skip_live or _skip_env("SKIP_LIVE"),
        build_command=build_command,
    )
    try:
        deploy_all(GitRunner(dry_run=dry_run or _dry_run_env()), options)
    except (DeployError, subprocess.CalledProcessError) as exc:
        _abort(exc)
