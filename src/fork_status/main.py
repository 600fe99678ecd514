"""
Main CLI entry point for the composer fork status report.
"""

import sys

import click
from dotenv import load_dotenv

from ..shared_utilities import OutputManager, configure_logging, get_logger
from ..shared_utilities.telemetry import trace_function
from .config import ACTION_OUTPUT_NAME, ForkStatusConfig
from .core import ForkStatusReporter
from .manifest import ManifestError
from .output_formatter import StatusTableFormatter

# Load environment variables from .env file
load_dotenv()


@click.command()
@click.option(
    "--composer-json",
    "composer_path",
    type=click.Path(dir_okay=False),
    help="Path to composer.json (default: $COMPOSER_JSON or ./composer.json)",
)
@click.option(
    "--token",
    help="GitHub token (or set GITHUB_TOKEN env var)",
)
@click.option(
    "--debug/--no-debug",
    default=None,
    help="Verbose diagnostics on stderr (or set DEBUG=1)",
)
@click.option(
    "--github-output",
    type=click.Path(dir_okay=False),
    help="GitHub Actions output file (default: $GITHUB_OUTPUT)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(list(StatusTableFormatter.FORMATS)),
    default="markdown",
    help="Output format",
    show_default=True,
)
@click.option(
    "-o",
    "--output",
    "output_file",
    type=click.Path(dir_okay=False),
    help="Also write the report to this file",
)
@click.option(
    "-q",
    "--quiet",
    is_flag=True,
    help="Do not print the report to stdout",
)
@trace_function("fork_status_main")
def main(
    composer_path: str | None,
    token: str | None,
    debug: bool | None,
    github_output: str | None,
    output_format: str,
    output_file: str | None,
    quiet: bool,
) -> None:
    """
    Report the status of forked repositories declared in composer.json.

    For each VCS repository on GitHub, finds the dependency it provides, the
    dev- branch in use, the age of that branch, any open pull request from it
    and whether that pull request is merged.

    Examples:

        # Report on ./composer.json
        fork-status

        # Another manifest, with debug output
        fork-status --composer-json path/to/composer.json --debug

        # Machine-readable output
        fork-status --format json -o fork-status.json
    """
    try:
        config = ForkStatusConfig.from_env()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    if composer_path:
        config.composer_path = composer_path
    if token:
        config.token = token
    if debug is not None:
        config.debug = debug
    if github_output:
        config.github_output = github_output

    configure_logging(debug=config.debug)
    logger = get_logger(__name__)

    try:
        reporter = ForkStatusReporter(config)
        manifest = reporter.load_manifest()
        report = reporter.generate_report(manifest)

        formatter = StatusTableFormatter()
        output = formatter.format(report, output_format)

        if not quiet:
            click.echo(output)

        output_manager = OutputManager()
        if output_file:
            output_manager.save_output(output, output_file)
        if config.github_output:
            # The action output is always the markdown table
            table = formatter.format_markdown(report)
            output_manager.append_github_output(
                ACTION_OUTPUT_NAME, table, config.github_output
            )

        reporter.log_rate_limit()

    except ManifestError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(130)
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
