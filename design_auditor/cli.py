"""
Command-Line Interface

CLI using rich for colored output, progress indicators and formatted
results. Entry point for auditing one or more URLs.
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import __version__
from .auditor import DesignAuditor
from .config import load_config
from .dataset import Dataset
from .errors import InvalidCredentialFormat
from .log import setup_logging
from .models import AUDIT_CATEGORIES, Config
from .providers import get_provider


console = Console()
err_console = Console(stderr=True)


@click.command()
@click.argument('urls', nargs=-1)
@click.option(
    '--urls-file',
    default=None,
    type=click.Path(exists=True, dir_okay=False),
    help='File with one URL per line (blank lines and # comments ignored)'
)
@click.option(
    '--category',
    default=None,
    type=click.Choice(AUDIT_CATEGORIES, case_sensitive=False),
    help='Audit category. Defaults to AUDIT_CATEGORY from .env or "general"'
)
@click.option(
    '--viewport',
    default=None,
    type=click.Choice(['desktop', 'mobile'], case_sensitive=False),
    help='Viewport preset: desktop (1920x1080) or mobile (390x844)'
)
@click.option(
    '--api-key',
    default=None,
    help='OpenAI (sk-...), OpenRouter (sk-or-...) or Gemini (AIza...) key. Defaults to AUDITOR_API_KEY'
)
@click.option(
    '--free-tier/--no-free-tier',
    default=None,
    help='Cap the run at FREE_TIER_LIMIT analyzed pages (requires your own key)'
)
@click.option(
    '--concurrency',
    default=None,
    type=click.IntRange(1, 50),
    help='Pages processed in parallel. Defaults to MAX_CONCURRENCY or 5'
)
@click.option(
    '--output-dir',
    default=None,
    type=click.Path(file_okay=False),
    help='Directory for screenshots and dataset.jsonl'
)
@click.option(
    '--output',
    default='rich',
    type=click.Choice(['rich', 'json'], case_sensitive=False),
    help='Output format: rich (colored terminal) or json'
)
@click.option(
    '--env-file',
    default=None,
    type=click.Path(exists=True),
    help='Path to .env file (defaults to ./.env)'
)
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.version_option(version=__version__)
def main(
    urls: tuple[str, ...],
    urls_file: Optional[str],
    category: Optional[str],
    viewport: Optional[str],
    api_key: Optional[str],
    free_tier: Optional[bool],
    concurrency: Optional[int],
    output_dir: Optional[str],
    output: str,
    env_file: Optional[str],
    verbose: bool
):
    """
    Design Auditor - AI UI/UX Audit Tool

    Screenshot web pages with a headless browser and get a structured
    design critique from a vision model.

    Examples:

      # Demo mode (no API key)
      design-auditor https://example.com

      # SEO audit with a Gemini key
      design-auditor https://example.com --category seo --api-key AIza...

      # Mobile viewport, URLs from a file, JSON output
      design-auditor --urls-file urls.txt --viewport mobile --output json
    """
    try:
        config = load_config(Path(env_file) if env_file else None)
        config = _apply_overrides(
            config,
            category=category,
            viewport=viewport,
            api_key=api_key,
            free_tier=free_tier,
            max_concurrency=concurrency,
            output_dir=output_dir,
            log_level="DEBUG" if verbose else None
        )
        setup_logging(config.log_level, err_console)

        targets = list(urls)
        if urls_file:
            targets.extend(_read_urls_file(Path(urls_file)))
        if not targets:
            err_console.print("[red]❌ No URLs provided[/red]")
            err_console.print("\nUsage: design-auditor <url> [<url> ...] or --urls-file urls.txt")
            sys.exit(1)

        provider = get_provider(config)
        records = asyncio.run(_run_audit(provider, config, targets, show_progress=output == 'rich'))

        if output == 'json':
            _output_json(records)
        else:
            _output_rich(records, provider.name, config)

    except InvalidCredentialFormat as e:
        err_console.print(f"[red]❌ {escape(str(e))}[/red]")
        sys.exit(1)
    except (ValidationError, ValueError) as e:
        err_console.print(f"[red]❌ Invalid configuration: {escape(str(e))}[/red]")
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print("\n[yellow]⚠️  Interrupted by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        err_console.print(f"[red]❌ Error: {escape(str(e))}[/red]")
        if verbose:
            err_console.print_exception()
        sys.exit(1)


def _apply_overrides(config: Config, **overrides) -> Config:
    """Return a config with every non-None CLI override applied and re-validated."""
    updates = {key: value for key, value in overrides.items() if value is not None}
    if "category" in updates:
        updates["category"] = updates["category"].lower()
    if "viewport" in updates:
        updates["viewport"] = updates["viewport"].lower()
    return Config.model_validate({**config.model_dump(), **updates})


def _read_urls_file(path: Path) -> list[str]:
    urls = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if line and not line.startswith("#"):
            urls.append(line)
    return urls


async def _run_audit(provider, config: Config, urls: list[str], show_progress: bool) -> list[dict]:
    """Run the audit with a progress spinner"""
    auditor = DesignAuditor(provider, config)

    if not show_progress:
        return await auditor.audit_urls(urls)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=err_console,
        transient=True
    ) as progress:
        progress.add_task(
            f"[cyan]Auditing {len(urls)} page(s) with {provider.name}...",
            total=None
        )
        return await auditor.audit_urls(urls)


def _output_rich(records: list[dict], provider_name: str, config: Config):
    """Output records as a rich summary table"""

    console.print()
    console.print(Panel.fit(
        f"[bold]UI/UX Design Audit[/bold]\n"
        f"Provider: {provider_name}  Category: {config.category}  Viewport: {config.viewport}",
        border_style="cyan"
    ))

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("URL", style="cyan", overflow="fold")
    table.add_column("Status", justify="center")
    table.add_column("Score", justify="right")
    table.add_column("Summary / Error")

    def get_score_color(score: float) -> str:
        if score >= 8:
            return "green"
        elif score >= 6:
            return "yellow"
        else:
            return "red"

    for record in records:
        status = record.get("status")
        if status is None:
            score = record["score"]
            table.add_row(
                escape(record["url"]),
                "[green]✓[/green]",
                f"[{get_score_color(score)}]{score:g}/10[/]",
                escape(record["summary"])
            )
        else:
            table.add_row(
                escape(record["url"]),
                f"[red]{status}[/red]",
                "-",
                escape(record.get("error") or record.get("message") or "")
            )

    console.print(table)

    for record in records:
        if record.get("status") is not None:
            continue
        if record.get("scores"):
            checks = "  ".join(f"{area} {score:g}" for area, score in record["scores"].items())
            console.print(f"\n[bold]📊 Page checks for {escape(record['url'])}[/bold]: {checks}")
        if record.get("recommendations"):
            console.print(f"\n[bold]💡 Recommendations for {escape(record['url'])}[/bold]")
            for i, recommendation in enumerate(record["recommendations"][:5], 1):
                console.print(f"  {i}. {escape(recommendation)}")

    dataset = Dataset(Path(config.output_dir))
    stored = sum(1 for _ in dataset.read())
    console.print(f"\n[dim]📄 Dataset: {escape(str(dataset.path))} ({stored} records)[/dim]")
    console.print()


def _output_json(records: list[dict]):
    """Output records as JSON"""
    print(json.dumps(records, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
