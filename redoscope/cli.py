"""
Command line entry point.

Discovers pattern files, checks each one and prints a markdown summary.
"""
import asyncio
import json
import sys
import time

import click
from dotenv import load_dotenv

from redoscope.config import get_settings, logger
from redoscope.discovery import discover_patterns
from redoscope.models import InvokerOptions
from redoscope.report import diagnose_all
from redoscope.summary import render_summary, write_summary


@click.command()
@click.argument("files", required=False)
@click.option("--timeout", type=float, default=None, help="Deadline per pattern in seconds")
@click.option("--no-diagnostics", is_flag=True, help="Skip complexity diagnostics")
@click.option("--concurrency", type=int, default=None, help="Patterns checked at once")
@click.option(
    "--summary-file",
    envvar="GITHUB_STEP_SUMMARY",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append the markdown summary to this file",
)
@click.option("--json", "output_json", is_flag=True, help="Output reports as JSON")
@click.option("--fail-on-vulnerable", is_flag=True, help="Exit with code 2 if a pattern is vulnerable")
def main(files, timeout, no_diagnostics, concurrency, summary_file, output_json, fail_on_vulnerable):
    """
    Check regular expression files for ReDoS vulnerabilities.

    FILES is a glob of pattern files (one pattern per file). A leading
    inline marker such as (?i) sets the pattern flags.

    \b
    Examples:
      redoscope "patterns/**/*.regex"
      redoscope "*.re" --timeout 5 --json
    """
    load_dotenv()
    settings = get_settings()
    files = files or settings.PATTERN_GLOB
    options = InvokerOptions(
        timeout=timeout if timeout is not None else settings.ANALYSIS_TIMEOUT_SECONDS,
        enable_diagnostics=settings.ENABLE_DIAGNOSTICS and not no_diagnostics,
    )

    start_time = time.time()
    try:
        patterns = list(discover_patterns(files))
        logger.info("Checking %d pattern files matching %s", len(patterns), files)

        reports = asyncio.run(diagnose_all(
            patterns,
            options=options,
            concurrency=concurrency or settings.BATCH_CONCURRENCY,
            suggestion_limit=settings.MAX_SUGGESTIONS,
        ))

        if output_json:
            click.echo(json.dumps(
                [report.model_dump(mode="json", exclude_none=True) for report in reports],
                indent=2,
            ))
        else:
            summary = render_summary(reports)
            click.echo(summary)
            if summary_file:
                write_summary(summary, summary_file)

    except Exception as e:
        logger.error("Check failed after %.3fs: %s", time.time() - start_time, e)
        click.echo(f"Error checking patterns: {e}", err=True)
        sys.exit(1)

    logger.info("Checked %d patterns in %.3fs", len(reports), time.time() - start_time)
    if fail_on_vulnerable and any(report.status == "vulnerable" for report in reports):
        sys.exit(2)


if __name__ == "__main__":
    main()
