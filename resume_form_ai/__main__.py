"""Command-line résumé extraction. Use: python -m resume_form_ai resume.pdf"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from resume_form_ai.resume_pipeline.form_controller import ResumeFormController, UploadState
from resume_form_ai.resume_pipeline.text_extractor import mime_type_for_filename
from resume_form_ai.schemas.form_record import FormRecord


def process_resume(file_path: str, verbose: bool = False) -> ResumeFormController:
    """Run one upload attempt for a file on disk and return the finished controller."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Resume not found: {file_path}")

    def show_progress(record: FormRecord) -> None:
        print(json.dumps(record.model_dump(by_alias=True, exclude_defaults=True), ensure_ascii=False))

    controller = ResumeFormController(on_change=show_progress if verbose else None)
    with path.open("rb") as handle:
        asyncio.run(controller.handle_upload(handle, mime_type_for_filename(path.name)))
    return controller


def main() -> None:
    """Main entry point for CLI usage."""
    parser = argparse.ArgumentParser(
        description="Fill the registration form from a PDF/DOCX/TXT resume",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m resume_form_ai resume.pdf
    python -m resume_form_ai resume.docx --verbose
        """,
    )
    parser.add_argument("file_path", help="Path to the resume file (PDF, DOCX or TXT)")
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print the partial form after every extracted field",
    )
    args = parser.parse_args()

    try:
        controller = process_resume(args.file_path, verbose=args.verbose)
    except FileNotFoundError as e:
        print(f"✗ Error: {e}", file=sys.stderr)
        sys.exit(1)

    if controller.state is UploadState.ERRORED:
        print(f"✗ Error: {controller.error}", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.file_path).with_suffix(".json")
    output_json = json.dumps(controller.record.model_dump(by_alias=True), indent=2, ensure_ascii=False)
    output_path.write_text(output_json, encoding="utf-8")
    print(f"✓ Results saved to: {output_path}")


if __name__ == "__main__":
    main()
