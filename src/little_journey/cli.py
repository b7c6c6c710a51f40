"""Command-line interface for Little Journey curation."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional

from .config import settings
from .models.photo_book import BookCover, BookLayoutTemplate
from .sample_data import generate_sample_journal
from .storage import FilesystemEntryStore, StorageError
from .tools.book_export import render_photo_book_html
from .tools.milestone_detection import detect_milestones_from_images
from .tools.image_analysis import create_image_analyzer
from .tools.photo_book import build_full_book, build_monthly_book, curate_monthly_book
from .tools.year_in_review import YearInReviewService
from .utils.simple_logger import setup_logging


logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="little-journey",
        description="Curate photo books, year in review highlights and milestone suggestions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Pages for a monthly photo book
  %(prog)s book child-1 --year 2025 --month 3

  # Same book exported to HTML with the playful layout
  %(prog)s book child-1 --year 2025 --month 3 --html book.html --layout playful

  # Year in review and a monthly recap
  %(prog)s review child-1 --year 2025
  %(prog)s recap child-1 --year 2025 --month 6

  # Milestone suggestions for a photo carousel
  %(prog)s detect photos/walking_park.jpg photos/birthday_cake.jpg

  # Try it out with a generated journal
  %(prog)s seed demo --seed 1 && %(prog)s review demo --year 2024
        """
    )

    parser.add_argument(
        '--data',
        default=None,
        help=f'Journal data directory (default: {settings.storage_path})'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    book = subparsers.add_parser('book', help='Curate photo book pages')
    book.add_argument('child_id')
    book.add_argument('--year', type=int, help='Year of the monthly book')
    book.add_argument('--month', type=int, help='Month of the monthly book (1-12)')
    book.add_argument(
        '--full',
        action='store_true',
        help='Build the whole first-year book instead of a single month'
    )
    book.add_argument('--html', help='Also write the book as HTML to this path')
    book.add_argument(
        '--layout',
        choices=[layout.value for layout in BookLayoutTemplate],
        default=BookLayoutTemplate.CLASSIC.value,
        help='Layout used for --html (default: classic)'
    )

    review = subparsers.add_parser('review', help='Curate a year in review')
    review.add_argument('child_id')
    review.add_argument('--year', type=int, required=True)

    recap = subparsers.add_parser('recap', help='Curate a monthly recap')
    recap.add_argument('child_id')
    recap.add_argument('--year', type=int, required=True)
    recap.add_argument('--month', type=int, required=True)

    detect = subparsers.add_parser('detect', help='Suggest milestones for images')
    detect.add_argument('images', nargs='+', help='Image paths or URIs')

    seed = subparsers.add_parser('seed', help='Write a sample journal to the data directory')
    seed.add_argument('child_id', nargs='?', default='sample-child')
    seed.add_argument('--name', default='Mei')
    seed.add_argument('--seed', type=int, default=None, help='Random seed for reproducible data')

    args = parser.parse_args(argv)
    if args.command == 'book' and not args.full and (args.year is None or args.month is None):
        parser.error("book requires --year and --month unless --full is given")
    return args


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


async def _run_book(store: FilesystemEntryStore, args: argparse.Namespace) -> None:
    entries = await store.load_entries(args.child_id)
    child = await store.load_child(args.child_id)

    if args.full:
        milestones = await store.load_milestones(args.child_id)
        pages = build_full_book(entries, milestones, child)
        cover = BookCover(
            title=f"{child.name}'s First Year" if child else "My First Year",
            child_name=child.name if child else None,
        )
    elif args.html:
        # Exported books get the title page and month cover
        pages, cover = build_monthly_book(entries, args.year, args.month, child)
    else:
        pages = curate_monthly_book(entries, args.year, args.month)

    if args.html:
        render_photo_book_html(pages, cover, args.layout, output_path=Path(args.html))

    _print_json([page.model_dump(mode="json") for page in pages])


async def _run_review(store: FilesystemEntryStore, args: argparse.Namespace) -> None:
    entries = await store.load_entries(args.child_id)
    milestones = await store.load_milestones(args.child_id)
    review = YearInReviewService().generate_year_in_review(
        args.child_id, args.year, entries, milestones
    )
    _print_json(review.model_dump(mode="json"))


async def _run_recap(store: FilesystemEntryStore, args: argparse.Namespace) -> None:
    entries = await store.load_entries(args.child_id)
    milestones = await store.load_milestones(args.child_id)
    recap = YearInReviewService().generate_monthly_recap(
        args.child_id, args.year, args.month, entries, milestones
    )
    _print_json(recap.model_dump(mode="json"))


async def _run_seed(store: FilesystemEntryStore, args: argparse.Namespace) -> None:
    child, entries, milestones = generate_sample_journal(args.child_id, args.name, seed=args.seed)
    await store.save_child(child)
    await store.save_entries(child.id, entries)
    await store.save_milestones(child.id, milestones)
    logger.info(f"Wrote {len(entries)} entries and {len(milestones)} milestones for {child.id}")
    _print_json({"child_id": child.id, "entries": len(entries), "milestones": len(milestones)})


async def _run_detect(args: argparse.Namespace) -> None:
    if not settings.validate_api_keys():
        raise ValueError("No image analysis configured: set GEMINI_API_KEY or USE_MOCK_IMAGE_ANALYSIS=true")
    result = await detect_milestones_from_images(args.images, create_image_analyzer())
    _print_json(result.model_dump(mode="json"))


async def run(args: argparse.Namespace) -> None:
    if args.command == 'detect':
        await _run_detect(args)
        return

    store = FilesystemEntryStore(args.data or settings.storage_path)
    if args.command == 'book':
        await _run_book(store, args)
    elif args.command == 'review':
        await _run_review(store, args)
    elif args.command == 'recap':
        await _run_recap(store, args)
    elif args.command == 'seed':
        await _run_seed(store, args)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging("DEBUG" if args.verbose or settings.debug else settings.log_level)

    try:
        asyncio.run(run(args))
    except (StorageError, ValueError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
