#!/usr/bin/env python3
"""
SafeUrl - URL Expander & Safety Checker Entry Point.

Usage:
    safeurl <url> [<url> ...] [--json] [--no-resolve] [--strict]

Example:
    safeurl https://bit.ly/3ABC123
    safeurl http://192.168.1.1/login --no-resolve --json
"""
import sys
import json
import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.markup import escape

from safeurl.config.settings import settings
from safeurl.core.logger import log
from safeurl.core.analyzer import Analyzer
from safeurl.core.models import AnalysisResult, ResolutionResult, SafetyStatus
from safeurl.modules.engine import RuleEngine
from safeurl.modules.resolver import RedirectResolver
from safeurl.modules.rules import ThreatListRule

console = Console()

STATUS_STYLES = {
    SafetyStatus.SAFE: "[bold green]\\[OK][/bold green]",
    SafetyStatus.SUSPICIOUS: "[bold yellow]\\[WARN][/bold yellow]",
    SafetyStatus.UNSAFE: "[bold red]\\[DANGER][/bold red]",
    SafetyStatus.MALICIOUS: "[bold magenta]\\[BLOCKED][/bold magenta]",
    SafetyStatus.UNKNOWN: "[dim]\\[?][/dim]",
}


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="safeurl",
        description="SafeUrl - Expand URLs and check them for safety issues",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  safeurl https://bit.ly/3ABC123                  # Expand and check
  safeurl http://example.com --no-resolve         # Check only, no network
  safeurl https://x.tk --json --strict            # JSON output, exit 1 if not safe
        """
    )

    parser.add_argument("urls", nargs="+", help="URL(s) to analyze")

    parser.add_argument("--json", action="store_true", help="Emit JSON instead of a report")

    parser.add_argument(
        "--no-resolve",
        action="store_true",
        help="Skip redirect resolution and only evaluate the given URL"
    )

    parser.add_argument(
        "--max-redirects",
        type=int,
        default=settings.MAX_REDIRECTS,
        help=f"Maximum redirects to follow (default: {settings.MAX_REDIRECTS})"
    )

    parser.add_argument(
        "--timeout",
        type=int,
        default=settings.REQUEST_TIMEOUT_MS,
        help=f"Per-request timeout in milliseconds (default: {settings.REQUEST_TIMEOUT_MS})"
    )

    parser.add_argument(
        "--threat-list",
        type=Path,
        default=settings.THREAT_LIST_FILE,
        help="JSON threat list file to check against"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 if any URL is not safe"
    )

    args = parser.parse_args(argv)
    if args.max_redirects < 0:
        parser.error("--max-redirects must be >= 0")
    if args.timeout < 1:
        parser.error("--timeout must be >= 1")
    return args


def build_analyzer(args) -> Analyzer:
    """Builds an Analyzer configured from the command line."""
    resolver = RedirectResolver(max_redirects=args.max_redirects, timeout_ms=args.timeout)
    engine = RuleEngine()
    if args.threat_list:
        if not args.threat_list.exists():
            log.warning(f"[Config] Threat list not found: {args.threat_list}")
        engine.add_rule(ThreatListRule.from_file(args.threat_list))
    return Analyzer(resolver=resolver, engine=engine)


def skipped_resolution(url: str) -> ResolutionResult:
    """Resolution placeholder for --no-resolve: the URL is its own destination."""
    return ResolutionResult(original_url=url, final_url=url, succeeded=True)


def print_report(result: AnalysisResult):
    """Prints a human-readable report for one analysis."""
    resolution = result.resolution
    evaluation = result.evaluation

    console.rule(f"[bold blue]{escape(resolution.original_url)}[/bold blue]")
    console.print(f"  Final URL:     [cyan]{escape(result.final_url)}[/cyan]")
    console.print(f"  Redirects:     {resolution.redirect_count}")
    console.print(f"  Expand Time:   {resolution.elapsed_ms:.0f}ms")
    if resolution.error_reason:
        console.print(f"  Resolution:    [red]{escape(resolution.error_reason)}[/red]")

    if resolution.chain:
        chain = Table(title="Redirect Chain")
        chain.add_column("Step", style="dim")
        chain.add_column("Status", style="cyan")
        chain.add_column("URL", style="blue")
        for hop in resolution.chain:
            chain.add_row(str(hop.step), str(hop.status_code), escape(hop.url))
        console.print(chain)

    console.print(f"\n  Safety Status: {STATUS_STYLES[evaluation.status]} {evaluation.status.value}")
    console.print(f"  Safety Score:  {evaluation.score}/100")
    if evaluation.error_reason:
        console.print(f"  Error:         [red]{escape(evaluation.error_reason)}[/red]")

    if evaluation.findings:
        table = Table(title=f"Issues Found ({len(evaluation.findings)})")
        table.add_column("Severity", style="bold red")
        table.add_column("Rule", style="cyan")
        table.add_column("Description")
        for finding in evaluation.findings:
            table.add_row(finding.severity.value.upper(), finding.rule_id, escape(finding.description))
        console.print(table)
    elif evaluation.succeeded:
        console.print("\n  [green]No issues found.[/green]")
    console.print()


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    results = []
    try:
        with build_analyzer(args) as analyzer:
            for url in args.urls:
                if args.no_resolve:
                    result = AnalysisResult(
                        resolution=skipped_resolution(url),
                        evaluation=analyzer.evaluate(url),
                    )
                else:
                    result = analyzer.analyze(url)
                results.append(result)
                if not args.json:
                    print_report(result)
    except KeyboardInterrupt:
        log.info("[Main] Interrupted by user.")
        return 130

    if args.json:
        print(json.dumps([r.to_dict() for r in results], indent=2))

    if args.strict and not all(r.is_safe for r in results):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
