#!/usr/bin/env python3
"""
RSSForge CLI

사용법:
    python -m rssforge.cli.main generate --url https://example.com/news
    python -m rssforge.cli.main generate --url https://example.com --selector ".headline a" --out data/feed.xml
    python -m rssforge.cli.main check --url https://example.com
    python -m rssforge.cli.main selectors --url https://www.bbc.com/news
"""
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from rssforge.core.config import PROJECT_ROOT
from rssforge.core.container import Container
from rssforge.core.exceptions import RSSException
from rssforge.services.progress import Failure, Progress, Success, error_body
from rssforge.utils.selectors import load_site_selectors, resolve_selectors

# Note: CLI는 Container를 통해 서비스를 생성하므로 API 계층을 의존하지 않습니다.

logging.basicConfig(
    level=logging.WARNING,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

app = typer.Typer(help="RSSForge CLI")
console = Console()


@app.callback()
def callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="디버그 로그 출력")):
    """RSSForge CLI"""
    if verbose:
        logging.getLogger("rssforge").setLevel(logging.DEBUG)


@app.command("generate")
def generate(
    url: str = typer.Option(..., "--url", "-u", help="대상 페이지 URL"),
    selector: Optional[str] = typer.Option(None, "--selector", "-s", help="기사 링크 CSS 셀렉터"),
    out: Optional[str] = typer.Option(None, "--out", "-o", help="출력 파일 경로"),
):
    """피드를 찾거나 생성"""
    console.print(f"[bold blue]피드 생성 시작: {url}[/bold blue]")
    service = Container.get_feed_service()

    for event in service.generate(url, selector=selector):
        if isinstance(event, Progress):
            console.print(f"[cyan]…[/cyan] {event.message}")
        elif isinstance(event, Failure):
            body = error_body(event.error, url)
            console.print(f"[bold red]✗ {body['error']}[/bold red]")
            if body.get("triedSelectors"):
                console.print(f"[yellow]시도한 셀렉터:[/yellow] {', '.join(body['triedSelectors'])}")
            raise typer.Exit(code=1)
        elif isinstance(event, Success):
            result = event.result
            if result.rss_url:
                console.print(f"[green]✓[/green] 피드 URL: {result.rss_url}")
            if out:
                output_path = Path(out)
                if not output_path.is_absolute():
                    output_path = PROJECT_ROOT / output_path
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(result.document, encoding="utf-8")
                console.print(f"[green]✓[/green] 피드 저장: {output_path}")
            else:
                console.print(result.document, markup=False, highlight=False)
            console.print(f"[bold green]✓ 완료 ({result.source})[/bold green]")


@app.command("check")
def check(url: str = typer.Option(..., "--url", "-u", help="대상 페이지 URL")):
    """기존 RSS 피드 확인 (생성하지 않음)"""
    service = Container.get_feed_service()
    try:
        feed_url = service.check(url)
    except RSSException as e:
        console.print(f"[bold red]✗ {e.message}[/bold red]")
        raise typer.Exit(code=1)
    console.print(json.dumps({"rss": feed_url}, ensure_ascii=False))


@app.command("selectors")
def selectors(
    url: str = typer.Option(..., "--url", "-u", help="대상 페이지 URL"),
    selector: Optional[str] = typer.Option(None, "--selector", "-s", help="지정 셀렉터"),
):
    """URL에 적용될 셀렉터 목록 확인"""
    table = Table(title=f"셀렉터 ({url})")
    table.add_column("순서", style="cyan")
    table.add_column("셀렉터", style="green")
    for i, sel in enumerate(resolve_selectors(url, selector, load_site_selectors()), start=1):
        table.add_row(str(i), sel)
    console.print(table)


if __name__ == "__main__":
    app()
