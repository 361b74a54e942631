"""
doctor.py - Environment health check command.

Checks that git is usable and the repository can be described.
"""

from __future__ import annotations

import json
import shutil
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table

from gitversion_core.cache import query
from gitversion_core.config import GitVersionConfig
from gitversion_core.locator import find_repo_root
from gitversion_core.models import VERSION_ABBR_LENGTH
from gitversion_core.vcs import GitAdapter

from ..util import console, load_effective_config


@dataclass
class CheckResult:
    """Result of a single check."""
    name: str
    passed: bool
    message: str
    details: Optional[str] = None


@dataclass
class DoctorResult:
    """Overall doctor check result."""
    all_passed: bool
    checks: List[CheckResult]


def check_git_executable(config: GitVersionConfig) -> CheckResult:
    """Check that the git executable is on PATH."""
    resolved = shutil.which(config.git_executable)
    if resolved is None:
        return CheckResult(
            name="Git Executable",
            passed=False,
            message=f"'{config.git_executable}' not found on PATH",
            details="Install git or set git_executable in .gitversion.toml",
        )
    return CheckResult(name="Git Executable", passed=True, message=resolved)


def check_repo_root(path: Path, config: GitVersionConfig) -> CheckResult:
    """Check that a repository marker exists at or above path."""
    root = find_repo_root(path, config.marker)
    if root is None:
        return CheckResult(
            name="Repository Root",
            passed=False,
            message=f"Cannot find '{config.marker}' above {path.resolve()}",
            details="Run inside a git checkout or pass --path",
        )
    return CheckResult(name="Repository Root", passed=True, message=str(root))


def check_head(git: GitAdapter) -> CheckResult:
    """Check that HEAD resolves to a commit."""
    head = query(lambda: git.abbreviate(git.resolve_head(), VERSION_ABBR_LENGTH), "resolve HEAD")
    if head.is_degraded:
        return CheckResult(
            name="HEAD",
            passed=False,
            message="HEAD does not resolve (no commits yet?)",
            details=head.error,
        )
    return CheckResult(name="HEAD", passed=True, message=head.value or "")


def check_describe(git: GitAdapter, config: GitVersionConfig) -> CheckResult:
    """Check that some tag describes HEAD."""
    described = query(lambda: git.describe(config.describe.to_hint()), "describe HEAD")
    if described.is_degraded:
        return CheckResult(name="Describe", passed=False, message="git describe failed", details=described.error)
    if not described.value:
        return CheckResult(
            name="Describe",
            passed=False,
            message="No tag describes HEAD",
            details="Create an annotated tag (git tag -a v0.1.0 -m v0.1.0) or set describe.tags = true",
        )
    return CheckResult(name="Describe", passed=True, message=described.value)


def run_doctor(path: Path, config: GitVersionConfig) -> DoctorResult:
    """Run all doctor checks."""
    checks = [check_git_executable(config), check_repo_root(path, config)]
    root = find_repo_root(path, config.marker)
    if checks[0].passed and root is not None:
        git = GitAdapter(root, git_executable=config.git_executable)
        checks.append(check_head(git))
        checks.append(check_describe(git, config))

    all_passed = all(c.passed for c in checks)
    return DoctorResult(all_passed=all_passed, checks=checks)


def format_result_plain(result: DoctorResult) -> None:
    """Print result in plain text format."""
    table = Table(title="gitversion doctor", show_header=True)
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Message")

    for check in result.checks:
        status = "[green]✓ PASS[/green]" if check.passed else "[red]✗ FAIL[/red]"
        table.add_row(check.name, status, check.message)
        if check.details:
            table.add_row("", "", f"[dim]{check.details}[/dim]")

    console.print(table)

    if result.all_passed:
        console.print("\n[green bold]All checks passed![/green bold]")
    else:
        console.print("\n[red bold]Some checks failed.[/red bold]")


def format_result_json(result: DoctorResult) -> None:
    """Print result in JSON format."""
    output = {
        "all_passed": result.all_passed,
        "checks": [asdict(c) for c in result.checks],
    }
    typer.echo(json.dumps(output, indent=2))


def doctor(
    path: Path = typer.Option(
        Path("."), "--path", exists=True, file_okay=False, help="Directory inside the repository"
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Explicit config file"),
    format: str = typer.Option(
        "plain", "--format", "-f",
        help="Output format: plain, json",
    ),
) -> None:
    """
    Check environment health.

    Verifies:
    - git is installed
    - a repository root is discoverable
    - HEAD resolves
    - a tag describes HEAD
    """
    effective = load_effective_config(path, config)
    result = run_doctor(path, effective)

    if format == "json":
        format_result_json(result)
    else:
        format_result_plain(result)

    raise typer.Exit(0 if result.all_passed else 1)
