"""Git-based deploy helpers.

Targets
-------
``main``            push ``HEAD`` to ``origin/<branch>`` (default ``main``)
``pantheon_test``   create + push an annotated ``pantheon_test_<stamp>`` tag
``pantheon_live``   create + push an annotated ``pantheon_live_<stamp>`` tag

``deploy_all`` runs all three in that order, each of them skippable.  Every
deploy refuses to start from a dirty working tree and refuses to reuse an
existing tag.  In dry-run mode commands are printed instead of executed.
"""

from __future__ import annotations

import shlex
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

TAG_PREFIXES = {
    "pantheon_test": "pantheon_test_",
    "pantheon_live": "pantheon_live_",
}
TARGETS = ("main", *TAG_PREFIXES)


class DeployError(Exception):
    """A deploy precondition failed; nothing further was executed."""


def generate_tag(prefix: str, now: datetime | None = None) -> str:
    """Return *prefix* followed by a ``YYYYMMDDHHMMSS`` UTC timestamp."""
    now = now or datetime.now(timezone.utc)
    return f"{prefix}{now.astimezone(timezone.utc):%Y%m%d%H%M%S}"


@dataclass
class GitRunner:
    """Runs (or, in dry-run mode, prints) the git commands of a deploy."""

    dry_run: bool = False
    cwd: Path | None = None

    def run(self, cmd: list[str]) -> None:
        if self.dry_run:
            print(f"[dry-run] {shlex.join(cmd)}")
            return
        subprocess.run(cmd, check=True, cwd=self.cwd)

    def output(self, cmd: list[str]) -> str:
        if self.dry_run:
            print(f"[dry-run-output] {shlex.join(cmd)}")
            return ""
        completed = subprocess.run(
            cmd, check=True, cwd=self.cwd, capture_output=True, text=True
        )
        return completed.stdout.strip()

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------
    def ensure_clean_working_tree(self) -> None:
        if self.output(["git", "status", "--porcelain"]):
            raise DeployError(
                "working tree has uncommitted changes. Commit/stash before deploying."
            )

    def tag_exists(self, tag: str) -> bool:
        if self.dry_run:
            return False
        return bool(self.output(["git", "tag", "--list", tag]))

    def build(self, command: str | None) -> None:
        if not command:
            return
        print(f"[deploy] Building project: {command}")
        self.run(shlex.split(command))

    def push_branch(self, branch: str) -> None:
        print(f"[deploy] Pushing HEAD to origin/{branch}...")
        self.run(["git", "push", "origin", f"HEAD:{branch}"])
        print(f"[deploy] Pushed to branch {branch}")

    def create_and_push_tag(
        self,
        prefix: str,
        tag: str | None = None,
        message: str | None = None,
    ) -> str:
        """Create an annotated tag and push it; return the tag name.

        Raises:
            DeployError: If the tag already exists.
        """
        tag = tag or generate_tag(prefix)
        message = message or f"Deploy {tag}"

        if self.tag_exists(tag):
            raise DeployError(f"tag {tag} already exists.")

        print(f"[deploy] Creating tag {tag}...")
        self.run(["git", "tag", "-a", tag, "-m", message])
        print(f"[deploy] Pushing tag {tag}...")
        self.run(["git", "push", "origin", tag])
        print(f"[deploy] Pushed {tag}")
        return tag


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def deploy_target(
    runner: GitRunner,
    target: str,
    *,
    branch: str = "main",
    tag: str | None = None,
    message: str | None = None,
    build_command: str | None = None,
) -> None:
    """Deploy a single *target* (``main``, ``pantheon_test`` or ``pantheon_live``).

    Raises:
        DeployError: Unknown target, dirty working tree or existing tag.
        subprocess.CalledProcessError: A git or build command failed.
    """
    if target not in TARGETS:
        raise DeployError(
            f'Unknown target "{target}". Use {" | ".join(TARGETS)}'
        )

    runner.ensure_clean_working_tree()
    runner.build(build_command)

    if target == "main":
        runner.push_branch(branch)
        return

    runner.create_and_push_tag(TAG_PREFIXES[target], tag=tag, message=message)


@dataclass
class DeployAllOptions:
    branch: str = "main"
    tag_test: str | None = None
    tag_live: str | None = None
    message_test: str | None = None
    message_live: str | None = None
    skip_main: bool = False
    skip_test: bool = False
    skip_live: bool = False
    build_command: str | None = None


def deploy_all(runner: GitRunner, options: DeployAllOptions) -> None:
    """Build once, then push the branch and both Pantheon tags."""
    runner.ensure_clean_working_tree()
    runner.build(options.build_command)

    if options.skip_main:
        print("[deploy] Skipping main branch push (SKIP_MAIN set).")
    else:
        runner.push_branch(options.branch)

    if options.skip_test:
        print("[deploy] Skipping test tag (SKIP_TEST set).")
    else:
        runner.create_and_push_tag(
            TAG_PREFIXES["pantheon_test"],
            tag=options.tag_test,
            message=options.message_test,
        )

    if options.skip_live:
        print("[deploy] Skipping live tag (SKIP_LIVE set).")
    else:
        runner.create_and_push_tag(
            TAG_PREFIXES["pantheon_live"],
            tag=options.tag_live,
            message=options.message_live,
        )

    print("[deploy] All deploy targets processed.")
