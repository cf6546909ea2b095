#!/usr/bin/env python3
"""Build one calendar slide per month of a semester.

Usage:
    # Local PowerPoint file from a calendar description:
    python scripts/build_calendar.py --info calendar.yaml -o calendar.pptx

    # Inline dates, English theme:
    python scripts/build_calendar.py --semester W --year 2024 \
        --classes "2024-01-10, 2024-01-17" --quizzes "2024-01-15" \
        --theme themes/english.yaml -o winter.pptx

    # Existing Google Slides presentation:
    python scripts/build_calendar.py --info calendar.yaml --backend google \
        --presentation-id 1AbC... --credentials service_account.json
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Add project root to path
sys.path.insert(0, str(PROJECT_ROOT))

from slide_calendar.agents.calendar_builder import CalendarBuilderAgent
from slide_calendar.backends import GoogleSlidesBackend, PptxBackend
from slide_calendar.errors import CalendarError
from slide_calendar.schemas.calendar_schema import CalendarInfo
from slide_calendar.schemas.theme import CalendarTheme
from slide_calendar.utils.file_utils import load_mapping, save_json

logger = logging.getLogger(__name__)

DEFAULT_THEME = PROJECT_ROOT / "themes" / "default.yaml"

_DATE_OPTIONS = ("classes", "labs", "exams", "quizzes", "holidays")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Build month calendar slides for a semester")

    source = parser.add_argument_group("calendar")
    source.add_argument("--info", type=Path, default=None,
                        help="Calendar description (.yaml or .json)")
    source.add_argument("--semester", help="W (winter), S (spring) or F (fall)")
    source.add_argument("--year", help="Calendar year")
    for name in _DATE_OPTIONS:
        source.add_argument(f"--{name}", default=None,
                            help=f"{name.capitalize()} dates, YYYY-MM-DD separated by commas")

    parser.add_argument("--theme", type=Path, default=None,
                        help=f"Theme YAML path (default: {DEFAULT_THEME} if present)")
    parser.add_argument("--layout", default=CalendarBuilderAgent.DEFAULT_LAYOUT,
                        help="Slide layout to create month slides from (default: Blank)")
    parser.add_argument("--backend", choices=("pptx", "google"), default="pptx")

    pptx = parser.add_argument_group("pptx backend")
    pptx.add_argument("-o", "--output", type=Path, default=Path("calendar.pptx"),
                      help="Output PPTX path (default: calendar.pptx)")
    pptx.add_argument("--base-template", type=Path, default=None,
                      help="PPTX whose layouts are used; its slides are dropped")

    google = parser.add_argument_group("google backend")
    google.add_argument("--presentation-id", help="Google Slides presentation id")
    google.add_argument("--credentials", type=Path, default=Path("service_account.json"),
                        help="Service-account key file (default: service_account.json)")

    parser.add_argument("--report", type=Path, default=None,
                        help="Write the per-month results as JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser.parse_args(argv)


def load_info(args) -> CalendarInfo:
    data = load_mapping(args.info) if args.info else {}
    if args.semester is not None:
        data["semester"] = args.semester
    if args.year is not None:
        data["year"] = args.year
    for name in _DATE_OPTIONS:
        value = getattr(args, name)
        if value is not None:
            data[name] = value
    return CalendarInfo.model_validate(data)


def load_theme(path: Path | None) -> CalendarTheme:
    if path is not None:
        return CalendarTheme.from_yaml(path)
    if DEFAULT_THEME.exists():
        return CalendarTheme.from_yaml(DEFAULT_THEME)
    logger.info("No theme file found, using built-in defaults")
    return CalendarTheme()


def make_backend(args, theme: CalendarTheme):
    if args.backend == "google":
        if not args.presentation_id:
            raise ValueError("--presentation-id is required with --backend google")
        return GoogleSlidesBackend.from_service_account_file(args.credentials, args.presentation_id)
    if args.base_template:
        return PptxBackend.from_template(args.base_template)
    return PptxBackend(page_size=theme.page_size())


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    try:
        info = load_info(args)
        theme = load_theme(args.theme)
        backend = make_backend(args, theme)
    except (ValidationError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        result = CalendarBuilderAgent(backend, theme).build(info, layout_name=args.layout)
    except CalendarError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if isinstance(backend, PptxBackend):
        backend.save(args.output)

    if args.report:
        save_json(result.model_dump(mode="json"), args.report)

    for month in result.months:
        line = f"  {theme.month_name(month.month):<12} {month.status.value}"
        if month.error:
            line += f" ({month.error.splitlines()[0]})"
        print(line)
    print(result.summary())
    print(f"Theme: {theme.name}")
    if isinstance(backend, PptxBackend):
        print(f"Presentation generated: {args.output}")

    return 0 if result.ok else 1


if __name__ == "__main__":
    sys.exit(main())
