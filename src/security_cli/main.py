import json
import logging
from pathlib import Path

import typer
from security_linter.engine import LinterEngine
from security_linter.errors import LinterError
from security_linter.registry import registry

from .config import LintConfig, find_config
from .converters import internal_issue_to_lint_issue

app = typer.Typer(help="JavaScript Security Linter - Detect unsafe patterns in JavaScript code")

SEVERITY_RANK = {"ERROR": 3, "WARNING": 2, "INFO": 1}


def _collect_files(paths: list[Path], extensions: list[str]) -> list[Path]:
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(p for p in path.rglob("*") if p.suffix in extensions and "node_modules" not in p.parts))
        else:
            files.append(path)
    return files


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def lint(
    files: list[Path] = typer.Argument(None, help="Files or directories to lint"),
    project: bool = typer.Option(False, help="Lint entire project"),
    config_file: Path = typer.Option(
        None, "--config", help="Path to config file (default: .security-lint.toml, then pyproject.toml)"
    ),
    severity: str = typer.Option("INFO", help="Minimum severity to show"),
    output_format: str = typer.Option("text", "--format", help="Output format: text or json"),
):
    """Run linter on JavaScript files"""
    try:
        config = LintConfig(config_file or find_config(Path.cwd()))
        enabled_rules = config.apply_to_registry(registry)
        engine = LinterEngine(rules=enabled_rules, rule_settings=config.settings_for(registry, enabled_rules))

        if project:
            root = Path.cwd()
            typer.echo(f"Scanning project at {root}...", err=True)
            files = [root]

        if not files:
            typer.echo("Error: Provide files or use --project", err=True)
            raise typer.Exit(code=2)

        all_issues = []
        for file_path in _collect_files(files, config.extensions):
            all_issues.extend(engine.analyze_file(file_path))
    except LinterError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    external_issues = [internal_issue_to_lint_issue(i) for i in all_issues]

    min_rank = SEVERITY_RANK.get(severity.upper(), 1)
    reported = [
        issue
        for issue in sorted(external_issues, key=lambda x: (x.file_path, x.line_number, x.column))
        if SEVERITY_RANK[issue.severity.value] >= min_rank
    ]

    if output_format == "json":
        typer.echo(json.dumps([issue.model_dump(mode="json") for issue in reported], indent=2))
    else:
        for issue in reported:
            typer.echo(
                f"{issue.severity.value}: {issue.file_path}:{issue.line_number}:{issue.column}"
                f" [{issue.rule_id}] - {issue.message}"
            )
        typer.echo(f"\nTotal issues found: {len(external_issues)} ({len(reported)} reported)")

    errors = sum(1 for i in external_issues if i.severity.value == "ERROR")
    if errors > 0:
        raise typer.Exit(code=1)


@app.command()
def rules():
    """List available rules"""
    for rule in registry.get_all_rules():
        typer.echo(f"{rule.rule_id}  {rule.name}  [{rule.severity.value}]  {rule.description}")


if __name__ == "__main__":
    app()
