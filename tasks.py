"""Invoke tasks for testdeck development and bulk imports."""

from invoke import task
from invoke.context import Context


@task
def test(ctx: Context, verbose: bool = False, coverage: bool = False) -> None:
    """Run the test suite.

    Args:
        ctx: Invoke context
        verbose: Enable verbose output
        coverage: Run with coverage report
    """
    cmd = "uv run pytest"
    if verbose:
        cmd += " -v"
    if coverage:
        cmd += " --cov=testdeck --cov-report=term-missing"
    ctx.run(cmd, pty=True)


@task
def template(ctx: Context, dest: str = "") -> None:
    """Download the bulk import template from the backend.

    Args:
        ctx: Invoke context
        dest: Directory to save into (default: imports.download_dir)
    """
    cmd = "uv run testdeck-import template"
    if dest:
        cmd += f" --dest {dest}"
    ctx.run(cmd, pty=True)


@task(name="parameter-template")
def parameter_template(ctx: Context, dest: str = "") -> None:
    """Write the example execution parameter workbook.

    Args:
        ctx: Invoke context
        dest: Directory to save into (default: imports.download_dir)
    """
    cmd = "uv run testdeck-import parameter-template"
    if dest:
        cmd += f" --dest {dest}"
    ctx.run(cmd, pty=True)


@task(name="check-params")
def check_params(ctx: Context, file: str) -> None:
    """Validate an execution parameter file locally."""
    ctx.run(f"uv run testdeck-import check-params {file}", pty=True)


@task
def upload(ctx: Context, file: str, project: str, user: str, confirm_warnings: bool = False, yes: bool = False) -> None:
    """Validate a workbook remotely and create its test components.

    Args:
        ctx: Invoke context
        file: Import workbook (.xlsx)
        project: Target project id
        user: Uploading user id
        confirm_warnings: Import sheets that only have warnings
        yes: Skip confirmation prompt
    """
    cmd = f"uv run testdeck-import upload {file} --project-id {project} --user-id {user}"
    if confirm_warnings:
        cmd += " --confirm-warnings"
    if yes:
        cmd += " --yes"
    ctx.run(cmd, pty=True)


@task
def clean(ctx: Context) -> None:
    """Clean up temporary files."""
    # Clean Python cache
    for pattern in ["__pycache__", "*.pyc", "*.pyo", ".pytest_cache"]:
        ctx.run(f"find . -name '{pattern}' -exec rm -rf {{}} + 2>/dev/null || true", warn=True)

    # Clean build artifacts
    for path in ["build", "dist", "*.egg-info", ".eggs"]:
        ctx.run(f"rm -rf {path} 2>/dev/null || true", warn=True)

    print("Cleanup complete")
