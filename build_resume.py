"""Build a static HTML (and optionally PDF) resume from a JSON Resume file."""

import argparse
import json
import sys
from pathlib import Path

import yaml

from resume_builder.config import get_settings
from resume_builder.services.html_renderer import HTMLRenderer, document_title
from resume_builder.services.pdf_generator import PDFGenerator, generate_filename
from resume_builder.services.resume_data_loader import ResumeDataError, ResumeDataLoader
from resume_builder.utils.logger import get_logger, setup_logging
from resume_builder.utils.template_registry import TEMPLATES, get_selected_template

logger = get_logger("build_resume")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build a static resume from JSON Resume data")
    parser.add_argument(
        "--data-dir",
        type=Path,
        help="Directory containing the resume file (defaults to RESUME_DATA_DIR)"
    )
    parser.add_argument(
        "--file",
        help="Resume file name inside the data directory (defaults to RESUME_RESUME_FILE)"
    )
    parser.add_argument(
        "--template",
        choices=sorted(TEMPLATES),
        help="Template to render with (defaults to RESUME_TEMPLATE)"
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("dist"),
        help="Directory the build is written to"
    )
    parser.add_argument("--pdf", action="store_true", help="Also export a PDF")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail when the resume does not validate against the schema"
    )
    return parser.parse_args(argv)


def build(args) -> int:
    """
    Render the resume and write the build output.

    Args:
        args: Parsed command line arguments

    Returns:
        int: Process exit code
    """
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_file)

    loader = ResumeDataLoader(args.data_dir, settings)
    try:
        processed = loader.load_and_process(args.file)
    except ResumeDataError as e:
        logger.error("Build failed: %s (%s)", e, e.code)
        return 1

    validation = processed.validation
    for error in validation.errors:
        logger.warning("%s: %s", error.path or "/", error.message)
    for warning in validation.warnings:
        logger.info("[%s] %s", warning.severity, warning.message)

    if args.strict and not validation.isValid:
        logger.error("Resume has %d validation errors", len(validation.errors))
        return 1

    template_id = args.template or get_selected_template(settings.template).id
    renderer = HTMLRenderer()
    html = renderer.generate_html(processed, template_id)

    output_dir = args.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    (output_dir / "index.html").write_text(html, encoding="utf-8")
    with open(output_dir / "resume.json", "w", encoding="utf-8") as f:
        json.dump(processed.data, f, indent=2, ensure_ascii=False)
    with open(output_dir / "build-info.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump(
            {
                "title": document_title(processed.data),
                "template": template_id,
                "metadata": processed.metadata.model_dump(),
            },
            f,
            sort_keys=False,
        )
    logger.info("HTML written to %s", output_dir / "index.html")

    if args.pdf:
        pdf_bytes = PDFGenerator(renderer).generate_pdf(processed, template_id)
        pdf_path = output_dir / generate_filename(processed.data, template_id)
        pdf_path.write_bytes(pdf_bytes)
        logger.info("PDF written to %s", pdf_path)

    return 0


def main(argv=None) -> int:
    return build(parse_args(argv))


if __name__ == "__main__":
    sys.exit(main())
