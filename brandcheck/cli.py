"""brandcheck CLI: check a video against brand guidelines.

Usage:
    brandcheck --video spot.mp4 --guidelines guidelines.md --brand Acme
    brandcheck --video https://cdn.example.com/spot.mp4 --guidelines "Logo top-right" --brand Acme --no-sensitive
    brandcheck --video spot.mp4 --guidelines guidelines.md --brand Acme --raw
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import typer

from . import config

app = typer.Typer(add_completion=False, pretty_exceptions_enable=False)


def _read_guidelines(value: str) -> str:
    """Guidelines may be given inline or as a path to a text file."""
    path = Path(value)
    if len(value) < 4096 and path.is_file():
        return path.read_text(encoding="utf-8")
    return value


@app.command()
def main(
    video: str = typer.Option(..., help="Video file path, URL or data URI"),
    guidelines: str = typer.Option(..., help="Brand guidelines text, or a path to a file containing them"),
    brand: str = typer.Option("", "--brand", help="Brand name used for the contextual risk search"),
    sensitive: bool = typer.Option(True, "--sensitive/--no-sensitive", help="Run the contextual risk search"),
    content_type: str = typer.Option(None, "--content-type", help="Video MIME type (detected when omitted)"),
    depth: int = typer.Option(1, "--depth", min=0, max=2, help="Detail level: 0=headline, 1=report, 2=detailed"),
    raw: bool = typer.Option(False, "--raw", help="Output raw JSON instead of rendered text"),
    quiet: bool = typer.Option(False, "--quiet", help="Hide progress messages"),
) -> None:
    """Check a video for brand compliance and contextual risks."""
    sys.stdout.reconfigure(encoding="utf-8")
    logging.basicConfig(
        level=config.get("BRANDCHECK_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    from .pipeline import check_compliance_sync
    from .renderer import render_progress, render_report
    from .schemas import ComplianceRequest

    if sensitive and not brand:
        typer.echo("Error: --brand is required for the contextual risk search (or pass --no-sensitive).", err=True)
        raise typer.Exit(1)

    request = ComplianceRequest(
        video=video,
        guidelines=_read_guidelines(guidelines),
        brand_name=brand,
        enable_sensitive_topics_check=sensitive,
        content_type=content_type,
    )

    def on_progress(update) -> None:
        if not quiet:
            typer.echo(render_progress(update), err=True)

    try:
        report = check_compliance_sync(request, on_progress=on_progress)
    except Exception as exc:
        typer.echo(f"Compliance check failed: {exc}", err=True)
        raise typer.Exit(1)

    if raw:
        typer.echo(json.dumps(report.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    else:
        typer.echo(render_report(report, depth=depth))


if __name__ == "__main__":
    app()
