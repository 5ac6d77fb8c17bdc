"""Bulk import command line for testdeck.

Commands:
    template            Download the backend's import template
    parameter-template  Write the example execution parameter workbook
    check-params        Validate an execution parameter file locally
    upload              Validate a workbook remotely and create its components
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from testdeck.config import settings
from testdeck.models.import_session import UploadedFile
from testdeck.schemas.import_schemas import ValidationReport
from testdeck.services.bulk_upload_client import BulkUploadClient
from testdeck.services.import_service import (
    BulkImportError,
    ImportWorkflow,
    validate_parameter_file,
    write_parameter_template,
)


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def print_report(report: ValidationReport) -> None:
    """Print a per-sheet summary of a validation report."""
    print(f"File: {report.file_name or '-'} (upload {report.upload_id})")
    for sheet in report.sheets:
        print(
            f"  [{sheet.validation_status.value:>7}] {sheet.name} "
            f"({sheet.kind.value}): {sheet.row_count} rows, "
            f"{sheet.error_count} errors, {sheet.warning_count} warnings"
        )
        for error in sheet.errors:
            column = f" {error.column}" if error.column else ""
            print(f"      {error.severity.value}: row {error.row}{column}: {error.message}")
    print(f"Total rows: {report.total_rows}")


async def download_template(dest_dir: Path) -> Path:
    async with BulkUploadClient.from_settings(settings) as client:
        return await client.download_template(dest_dir, default_name=settings.template_filename)


async def upload_file(
    path: Path,
    project_id: str,
    user_id: str,
    confirm_warnings: bool = False,
    assume_yes: bool = False,
) -> int:
    """Run one file through the import workflow."""
    upload = UploadedFile.from_path(path)

    async with BulkUploadClient.from_settings(settings) as client:
        workflow = ImportWorkflow(client, settings=settings)
        try:
            report = await workflow.select_file(upload, project_id=project_id, user_id=user_id)
        except BulkImportError as e:
            print(f"Error: {e}")
            return 1

        if report is None:
            return 1
        print_report(report)

        if not workflow.can_process:
            print("\nFix the sheets with errors and upload again.")
            return 1

        if not assume_yes:
            confirm = input("\nCreate these test components? [y/N]: ")
            if confirm.lower() not in ("y", "yes"):
                print("Aborted.")
                return 0

        try:
            result = await workflow.process(confirm_warnings=confirm_warnings)
        except BulkImportError as e:
            print(f"Error: {e}")
            return 1

    counts = result.total_components or report.component_counts
    print("\nTest components created:")
    for kind, count in counts.items():
        print(f"  - {kind}: {count}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Bulk import test packages, suites and cases",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    template_parser = subparsers.add_parser("template", help="Download the import template")
    template_parser.add_argument("--dest", "-d", type=Path, help="Directory to save into")

    params_template_parser = subparsers.add_parser(
        "parameter-template", help="Write the example execution parameter workbook"
    )
    params_template_parser.add_argument("--dest", "-d", type=Path, help="Directory to save into")

    check_parser = subparsers.add_parser("check-params", help="Validate an execution parameter file")
    check_parser.add_argument("file", type=Path, help="Parameter file (.xlsx or .csv)")

    upload_parser = subparsers.add_parser("upload", help="Validate and import a workbook")
    upload_parser.add_argument("file", type=Path, help="Import workbook (.xlsx)")
    upload_parser.add_argument("--project-id", "-p", required=True, help="Target project")
    upload_parser.add_argument("--user-id", "-u", required=True, help="Uploading user")
    upload_parser.add_argument(
        "--confirm-warnings", action="store_true", help="Import sheets that only have warnings"
    )
    upload_parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation prompt")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    configure_logging()

    try:
        if args.command == "template":
            path = asyncio.run(download_template(args.dest or settings.download_dir))
            print(f"Template saved to {path}")

        elif args.command == "parameter-template":
            path = write_parameter_template(args.dest or settings.download_dir)
            print(f"Parameter template saved to {path}")

        elif args.command == "check-params":
            if not args.file.exists():
                print(f"Error: File not found: {args.file}")
                return 1
            file_type = args.file.suffix.lstrip(".") or "xlsx"
            result = validate_parameter_file(args.file.read_bytes(), file_type=file_type)
            for error in result.errors:
                print(f"  error: {error}")
            for warning in result.warnings:
                print(f"  warning: {warning}")
            print(f"{result.total_rows} rows, {result.active_rows} active")
            if not result.valid:
                return 1
            print("Parameter file is valid.")

        elif args.command == "upload":
            if not args.file.exists():
                print(f"Error: File not found: {args.file}")
                return 1
            return asyncio.run(
                upload_file(
                    args.file,
                    project_id=args.project_id,
                    user_id=args.user_id,
                    confirm_warnings=args.confirm_warnings,
                    assume_yes=args.yes,
                )
            )

    except BulkImportError as e:
        print(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\nAborted.")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
