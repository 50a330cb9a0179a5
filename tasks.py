"""Invoke tasks for importbox development."""

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
        cmd += " --cov=importbox --cov-report=term-missing"
    ctx.run(cmd, pty=True)


@task
def preview(ctx: Context, file: str, entity: str = "transaction", existing: str = "") -> None:
    """Preview a CSV import and print the result as JSON.

    Args:
        ctx: Invoke context
        file: CSV file to preview
        entity: transaction, lead, contact, opportunity or task
        existing: Optional JSON file of stored records to check against
    """
    cmd = f"uv run importbox-preview {file} --entity {entity}"
    if existing:
        cmd += f" --existing {existing}"
    ctx.run(cmd, pty=True)


@task
def clean(ctx: Context) -> None:
    """Remove build artifacts and caches."""
    patterns = ["__pycache__", "*.pyc", ".pytest_cache", "*.egg-info"]
    for pattern in patterns:
        ctx.run(f"find . -name '{pattern}' -exec rm -rf {{}} + 2>/dev/null || true", warn=True)
    for path in ("build", "dist", "docs/_build"):
        ctx.run(f"rm -rf {path} 2>/dev/null || true", warn=True)


@task(name="docs-build")
def docs_build(ctx: Context) -> None:
    """Build the Sphinx documentation."""
    ctx.run("uv run sphinx-build -b html docs docs/_build/html", pty=True)


@task(name="docs-serve")
def docs_serve(ctx: Context, port: int = 8080) -> None:
    """Serve the built documentation locally.

    Args:
        ctx: Invoke context
        port: Port to serve on (default: 8080)
    """
    ctx.run(f"uv run python -m http.server {port} --directory docs/_build/html", pty=True)
