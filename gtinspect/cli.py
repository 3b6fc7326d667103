"""
CLI tool to parse barcodes and print their fields.

Usage:
    gtinspect 96385074 012345678905
    gtinspect --input codes.txt --format json
    gtinspect --input codes.txt --format csv --output report.csv --strict
"""

import csv
import json
import sys
from io import StringIO
from pathlib import Path

import click
import structlog
from pydantic import ValidationError

from gtinspect.barcode import RegistryError, get_default_registry, try_parse
from gtinspect.config import configure_logging, get_settings
from gtinspect.models import ROW_FIELDS, BarcodeReport

logger = structlog.get_logger(__name__)


def load_codes(path: Path) -> list[str]:
    """
    Read codes from a text file, one per line.

    Blank lines and lines starting with '#' are skipped.
    """
    codes = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            code = line.strip()
            if code and not code.startswith("#"):
                codes.append(code)
    return codes


def build_reports(codes: list[str]) -> list[BarcodeReport]:
    """Parse each code and collect a report for it."""
    reports = []
    for code in codes:
        result = try_parse(code)
        if not result.ok:
            logger.info("Rejected barcode", code=code, kind=result.error_kind.value)
        reports.append(BarcodeReport.from_result(result))
    return reports


def format_table(reports: list[BarcodeReport]) -> str:
    """Format reports as a fixed-width console table."""
    rows = [r.to_row() for r in reports]
    widths = {
        field: max([len(field)] + [len(row[field]) for row in rows]) for field in ROW_FIELDS
    }
    header = "  ".join(f"{field:<{widths[field]}}" for field in ROW_FIELDS)
    lines = [header, "-" * len(header)]
    for row in rows:
        lines.append("  ".join(f"{row[field]:<{widths[field]}}" for field in ROW_FIELDS).rstrip())
    valid = sum(1 for r in reports if r.valid)
    lines.append("-" * len(header))
    lines.append(f"Total: {len(reports)} code(s), {valid} valid")
    return "\n".join(lines)


def format_json(reports: list[BarcodeReport]) -> str:
    """Format reports as a JSON array."""
    return json.dumps([r.model_dump(mode="json") for r in reports], indent=2)


def format_csv(reports: list[BarcodeReport]) -> str:
    """Format reports as CSV."""
    output = StringIO()
    writer = csv.DictWriter(output, fieldnames=ROW_FIELDS)
    writer.writeheader()
    for report in reports:
        writer.writerow(report.to_row())
    return output.getvalue()


def format_markdown(reports: list[BarcodeReport]) -> str:
    """Format reports as a markdown table."""
    lines = [
        "| " + " | ".join(ROW_FIELDS) + " |",
        "|" + "|".join("---" for _ in ROW_FIELDS) + "|",
    ]
    for report in reports:
        row = report.to_row()
        lines.append("| " + " | ".join(row[field] for field in ROW_FIELDS) + " |")
    return "\n".join(lines)


FORMATTERS = {
    "table": format_table,
    "json": format_json,
    "csv": format_csv,
    "markdown": format_markdown,
}


@click.command()
@click.argument("codes", nargs=-1)
@click.option(
    "--input", "-i",
    "input_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="File with one code per line",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Output file path (defaults to stdout)",
)
@click.option(
    "--format", "-f",
    "output_format",
    type=click.Choice(list(FORMATTERS)),
    default=None,
    help="Output format (default: OUTPUT_FORMAT setting, else table)",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Exit with status 1 if any code is invalid",
)
def main(
    codes: tuple[str, ...],
    input_path: Path | None,
    output: Path | None,
    output_format: str | None,
    strict: bool,
) -> None:
    """Parse GTIN barcodes and print their fields."""
    try:
        settings = get_settings()
        configure_logging(settings)
        get_default_registry()
    except (ValidationError, RegistryError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e

    all_codes = list(codes)
    if input_path:
        all_codes.extend(load_codes(input_path))

    if not all_codes:
        raise click.UsageError("No codes given; pass codes as arguments or use --input")

    reports = build_reports(all_codes)
    content = FORMATTERS[output_format or settings.output_format](reports)

    if output:
        with open(output, "w", encoding="utf-8") as f:
            f.write(content)
        click.echo(f"Report written to: {output}")
    else:
        click.echo(content)

    if strict and not all(r.valid for r in reports):
        sys.exit(1)


if __name__ == "__main__":
    main()
