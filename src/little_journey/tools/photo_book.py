"""Photo book curation: monthly page selection, full-book assembly and page editing."""

import logging
import math
import uuid
from collections import defaultdict
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..catalog import get_template
from ..config import settings
from ..models.journal_entry import EntryType, JournalEntry
from ..models.milestone import ChildProfile, Milestone
from ..models.photo_book import (
    BookCover,
    BookLayout,
    BookLayoutTemplate,
    BookPricingTier,
    CoverColorTheme,
    CoverTheme,
    PhotoBookPage,
    PhotoBookPageType,
)
from ..utils.simple_logger import log_start, log_complete


logger = logging.getLogger(__name__)

# Scoring weights for page curation
SCORE_BASE = 1.0
SCORE_MILESTONE = 2.0  # Linked to a milestone
SCORE_CAPTION = 1.0  # Parent wrote a caption

# A completed milestone is illustrated by a photo taken within this many days
MILESTONE_PHOTO_WINDOW_DAYS = 3

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

BOOK_PRICING_TIERS: Tuple[BookPricingTier, ...] = (
    BookPricingTier(
        id="mini", name="Mini Book", pages=20, price_min=15, price_max=20,
        description="Perfect for monthly memories", icon="📘",
    ),
    BookPricingTier(
        id="standard", name="Standard Book", pages=40, price_min=25, price_max=35,
        description="Great for quarterly highlights", icon="📗",
    ),
    BookPricingTier(
        id="premium", name="Premium Book", pages=80, price_min=45, price_max=60,
        description="Complete yearly collection", icon="📕",
    ),
)

BOOK_LAYOUTS: Tuple[BookLayout, ...] = (
    BookLayout(
        id=BookLayoutTemplate.CLASSIC, name="Classic",
        description="Timeless elegance with serif fonts and clean borders", icon="📖",
    ),
    BookLayout(
        id=BookLayoutTemplate.MODERN, name="Modern",
        description="Minimalist design with sans-serif fonts and full-bleed photos", icon="🎨",
    ),
    BookLayout(
        id=BookLayoutTemplate.PLAYFUL, name="Playful",
        description="Fun and colorful with rounded corners and decorative elements", icon="🎈",
    ),
)

COVER_COLOR_THEMES: Tuple[CoverTheme, ...] = (
    CoverTheme(id=CoverColorTheme.CORAL, name="Coral", background="#FF6B6B", text="#FFFFFF"),
    CoverTheme(id=CoverColorTheme.SAGE, name="Sage", background="#87A878", text="#FFFFFF"),
    CoverTheme(id=CoverColorTheme.NAVY, name="Navy", background="#2C3E50", text="#FFFFFF"),
    CoverTheme(id=CoverColorTheme.BLUSH, name="Blush", background="#F5B7B1", text="#4A3728"),
    CoverTheme(id=CoverColorTheme.GOLD, name="Gold", background="#C9A959", text="#4A3728"),
    CoverTheme(id=CoverColorTheme.CHARCOAL, name="Charcoal", background="#36454F", text="#FFFFFF"),
)


def calculate_discounted_price(price: float, discount_percent: Optional[int] = None) -> int:
    """Subscriber price, rounded half up to a whole dollar.

    Args:
        price: Undiscounted price
        discount_percent: Override for the configured subscription discount

    Returns:
        Discounted price as an integer
    """
    if discount_percent is None:
        discount_percent = settings.subscription_discount_percent
    return int(math.floor(price * (1 - discount_percent / 100) + 0.5))


def format_display_date(value: date) -> str:
    """Format a date the way the book prints it, e.g. '5 March 2025'."""
    return f"{value.day} {MONTH_NAMES[value.month - 1]} {value.year}"


def score_book_entry(entry: JournalEntry) -> float:
    """Score an entry for page curation. Higher is more likely to be selected."""
    score = SCORE_BASE
    if entry.milestone_id:
        score += SCORE_MILESTONE
    if entry.has_caption:
        score += SCORE_CAPTION
    return score


def _is_photo_with_media(entry: JournalEntry) -> bool:
    return entry.type == EntryType.PHOTO and entry.has_media


def _page_from_entry(
    entry: JournalEntry, page_id: str, page_type: Optional[PhotoBookPageType] = None
) -> PhotoBookPage:
    if page_type is None:
        page_type = PhotoBookPageType.MILESTONE if entry.milestone_id else PhotoBookPageType.PHOTO
    return PhotoBookPage(
        id=page_id,
        type=page_type,
        entry_id=entry.id,
        milestone_id=entry.milestone_id,
        image_uri=entry.primary_media_uri,
        caption=entry.caption,
        date=entry.date,
    )


def curate_monthly_book(
    entries: Iterable[JournalEntry],
    year: int,
    month: int,
    max_pages: Optional[int] = None,
    max_per_day: Optional[int] = None,
) -> List[PhotoBookPage]:
    """Curate the pages of a monthly photo book.

    Photo entries with media from the requested month are scored, sorted by
    score (ties in chronological order) and taken greedily, skipping any
    candidate whose day is already full, until the book is full.

    Args:
        entries: Snapshot of the child's journal entries
        year: Calendar year
        month: Calendar month, 1-12
        max_pages: Book size, defaults to settings.max_photos_per_book
        max_per_day: Per-day cap, defaults to settings.max_photos_per_day

    Returns:
        Selected pages in chronological order; empty when nothing qualifies
    """
    if max_pages is None:
        max_pages = settings.max_photos_per_book
    if max_per_day is None:
        max_per_day = settings.max_photos_per_day

    if year < 1 or not 1 <= month <= 12 or max_pages <= 0 or max_per_day <= 0:
        return []

    eligible = [e for e in entries if _is_photo_with_media(e) and e.in_month(year, month)]
    if not eligible:
        return []

    ranked = sorted(eligible, key=lambda e: (-score_book_entry(e), e.date))

    selected: List[JournalEntry] = []
    pages_per_day: Dict[date, int] = defaultdict(int)
    for entry in ranked:
        if pages_per_day[entry.date] >= max_per_day:
            continue
        selected.append(entry)
        pages_per_day[entry.date] += 1
        if len(selected) >= max_pages:
            break

    selected.sort(key=lambda e: e.date)
    return [_page_from_entry(e, f"page-curated-{e.id}") for e in selected]


def _title_page(title: str, caption: Optional[str] = None) -> PhotoBookPage:
    return PhotoBookPage(
        id=f"page-title-{uuid.uuid4().hex[:8]}",
        type=PhotoBookPageType.TITLE,
        title=title,
        caption=caption,
    )


def build_full_book(
    entries: Iterable[JournalEntry],
    milestones: Iterable[Milestone],
    child: Optional[ChildProfile] = None,
) -> List[PhotoBookPage]:
    """Assemble a "first year" book from every photo in the journal.

    Layout: a title page, then one page per completed milestone that has a
    photo within a few days of it, then the remaining photos in date order.
    """
    photos = sorted((e for e in entries if _is_photo_with_media(e)), key=lambda e: e.date)

    title = f"{child.name}'s First Year" if child else "My First Year"
    subtitle = None
    if child and child.date_of_birth:
        subtitle = f"Born {format_display_date(child.date_of_birth)}"
    pages = [_title_page(title, subtitle)]

    for milestone in milestones:
        if not milestone.is_completed:
            continue
        when = milestone.effective_date
        nearby = next(
            (e for e in photos if abs((e.date - when).days) <= MILESTONE_PHOTO_WINDOW_DAYS),
            None,
        )
        if nearby is None:
            continue
        template = get_template(milestone.template_id) if milestone.template_id else None
        pages.append(PhotoBookPage(
            id=f"page-milestone-{milestone.id}",
            type=PhotoBookPageType.MILESTONE,
            entry_id=nearby.id,
            milestone_id=milestone.id,
            image_uri=nearby.primary_media_uri,
            caption=nearby.caption,
            date=when,
            title=milestone.custom_title or (template.title if template else None),
        ))

    used_entry_ids = {p.entry_id for p in pages if p.entry_id}
    for entry in photos:
        if entry.id in used_entry_ids:
            continue
        pages.append(_page_from_entry(entry, f"page-photo-{entry.id}", PhotoBookPageType.PHOTO))

    logger.info(f"Built full book with {len(pages)} pages")
    return pages


def build_monthly_book(
    entries: Iterable[JournalEntry],
    year: int,
    month: int,
    child: Optional[ChildProfile] = None,
    cover: Optional[BookCover] = None,
) -> Tuple[List[PhotoBookPage], BookCover]:
    """Assemble a monthly book: a title page followed by the curated pages.

    Returns:
        (pages, cover) where the cover carries the month title and date range.
        An invalid month gives no pages and leaves the cover untouched.
    """
    if cover is None:
        cover = BookCover(
            title=f"{child.name}'s First Year" if child else "My First Year",
            child_name=child.name if child else None,
        )
    if year < 1 or not 1 <= month <= 12:
        logger.warning(f"Cannot build monthly book for {year}-{month}")
        return [], cover

    log_start(logger, f"Curating monthly book for {year}-{month:02d}")
    period = f"{MONTH_NAMES[month - 1]} {year}"
    title = f"{child.name}'s {period}" if child else f"{period} Memories"

    curated = curate_monthly_book(entries, year, month)
    pages = [
        _title_page(title, f"A curated collection of {settings.max_photos_per_book} special moments"),
        *curated,
    ]
    cover = cover.model_copy(update={"title": title, "date_range": period})

    log_complete(logger, f"Selected {len(curated)} photos for {period}")
    return pages, cover


class PhotoBookEditor:
    """Caller-owned editing state for a photo book.

    Holds the page list, cover and layout between curation and export.
    Curation functions never touch this state; load their output here.
    """

    def __init__(
        self,
        pages: Optional[Sequence[PhotoBookPage]] = None,
        cover: Optional[BookCover] = None,
        layout: BookLayoutTemplate = BookLayoutTemplate.CLASSIC,
    ):
        self.pages: List[PhotoBookPage] = list(pages or [])
        self.cover = cover or BookCover(title="My First Year")
        self.layout = BookLayoutTemplate(layout)

    def load(self, pages: Sequence[PhotoBookPage], cover: Optional[BookCover] = None) -> None:
        """Replace the pages (and optionally the cover) with a fresh curation."""
        self.pages = list(pages)
        if cover is not None:
            self.cover = cover

    def reorder_page(self, from_index: int, to_index: int) -> None:
        """Move a page to a new position."""
        page = self.pages.pop(from_index)
        self.pages.insert(to_index, page)

    def remove_page(self, page_id: str) -> None:
        self.pages = [p for p in self.pages if p.id != page_id]

    def add_page(self, page_type: PhotoBookPageType, **fields) -> PhotoBookPage:
        """Append a page; its id is generated."""
        page_type = PhotoBookPageType(page_type)
        page = PhotoBookPage(
            id=f"page-{page_type.value}-{uuid.uuid4().hex[:8]}",
            type=page_type,
            **fields,
        )
        self.pages.append(page)
        return page

    def update_page_caption(self, page_id: str, caption: str) -> None:
        self.pages = [
            p.model_copy(update={"caption": caption}) if p.id == page_id else p
            for p in self.pages
        ]

    def update_cover(self, **updates) -> BookCover:
        """Merge updates into the cover (validated through the model)."""
        self.cover = BookCover(**{**self.cover.model_dump(), **updates})
        return self.cover

    def set_layout(self, layout: BookLayoutTemplate) -> None:
        self.layout = BookLayoutTemplate(layout)

    def clear(self) -> None:
        self.pages = []

    def render_html(self) -> str:
        """Render the current book to HTML for PDF export."""
        from .book_export import render_photo_book_html

        return render_photo_book_html(self.pages, self.cover, self.layout)
