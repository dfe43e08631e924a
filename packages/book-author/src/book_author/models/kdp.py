"""Amazon KDP publishing metadata, pricing and print models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID

from llm_core.config import BaseConfig
from pydantic import Field

from .base import Entity


class KdpMarketplace(str, Enum):
    US = "US"
    UK = "UK"
    DE = "DE"
    FR = "FR"
    ES = "ES"
    IT = "IT"
    NL = "NL"
    JP = "JP"
    BR = "BR"
    CA = "CA"
    MX = "MX"
    AU = "AU"
    IN = "IN"


class BookFormatType(str, Enum):
    EBOOK = "ebook"
    PAPERBACK = "paperback"
    HARDCOVER = "hardcover"
    AUDIOBOOK = "audiobook"


class TrimSize(str, Enum):
    """Trim sizes in inches, width x height."""

    SIZE_5X8 = "5x8"
    SIZE_5_25X8 = "5.25x8"
    SIZE_5_5X8_5 = "5.5x8.5"
    SIZE_6X9 = "6x9"
    SIZE_6_14X9_21 = "6.14x9.21"
    SIZE_6_69X9_61 = "6.69x9.61"
    SIZE_7X10 = "7x10"
    SIZE_7_44X9_69 = "7.44x9.69"
    SIZE_7_5X9_25 = "7.5x9.25"
    SIZE_8X10 = "8x10"
    SIZE_8_25X6 = "8.25x6"
    SIZE_8_25X8_25 = "8.25x8.25"
    SIZE_8_5X8_5 = "8.5x8.5"
    SIZE_8_5X11 = "8.5x11"


class PaperType(str, Enum):
    WHITE = "white"
    CREAM = "cream"


class CoverFinish(str, Enum):
    GLOSSY = "glossy"
    MATTE = "matte"


class SeriesStatus(str, Enum):
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETE = "complete"
    ON_HIATUS = "on_hiatus"


class IssueSeverity(str, Enum):
    ERROR = "Error"
    WARNING = "Warning"


class KdpCategory(BaseConfig):
    """An Amazon browse category."""

    category_id: str = ""
    category_path: str = ""
    bisac_code: Optional[str] = None
    name: str = ""
    is_top_level: bool = False
    parent_category_id: Optional[str] = None


class SeriesInfo(Entity):
    name: str = ""
    position: int = Field(1, ge=1)
    total_books: Optional[int] = None
    status: SeriesStatus = SeriesStatus.IN_PROGRESS
    description: Optional[str] = None
    series_url: Optional[str] = None
    book_ids: list[UUID] = Field(default_factory=list)


class KdpMetadata(Entity):
    """Everything KDP asks for when publishing a title."""

    asin: Optional[str] = None
    isbn10: Optional[str] = None
    isbn13: Optional[str] = None
    use_free_isbn: bool = True
    primary_category: Optional[KdpCategory] = None
    secondary_category: Optional[KdpCategory] = None
    keywords: list[str] = Field(default_factory=list)
    description: str = ""
    series: Optional[SeriesInfo] = None
    edition_number: int = Field(1, ge=1)
    publication_date: Optional[datetime] = None
    adult_content: bool = False
    public_domain: bool = False
    language: str = "English"
    ai_generated: bool = True
    kdp_select: bool = False


class PricingInfo(BaseConfig):
    list_price: Decimal
    currency: str = "USD"
    royalty_percentage: int = 70
    delivery_cost: Decimal = Decimal("0")
    estimated_royalty: Decimal = Decimal("0")
    price_matching_enabled: bool = True


class PrintSpecifications(BaseConfig):
    """Physical specs of a print edition and the costs derived from them."""

    format_type: BookFormatType = BookFormatType.PAPERBACK
    trim_size: TrimSize = TrimSize.SIZE_6X9
    has_bleed: bool = False
    paper_type: PaperType = PaperType.CREAM
    cover_finish: CoverFinish = CoverFinish.MATTE
    page_count: int = Field(0, ge=0)
    printing_cost: Decimal = Decimal("0")
    minimum_list_price: Decimal = Decimal("0")

    @property
    def spine_width(self) -> float:
        """Spine width in inches."""
        per_page = 0.0025 if self.paper_type == PaperType.CREAM else 0.002252
        return self.page_count * per_page


class KeywordSuggestion(BaseConfig):
    keyword: str
    relevance_score: float = 0.5
    estimated_search_volume: Optional[int] = None
    competition_level: Optional[str] = None
    related_category: Optional[str] = None
    is_long_tail: bool = False


class BookDescriptionSuggestion(BaseConfig):
    description: str
    style: str = ""
    has_html_formatting: bool = False
    hook: Optional[str] = None
    call_to_action: Optional[str] = None

    @property
    def character_count(self) -> int:
        return len(self.description)


class ValidationIssue(BaseConfig):
    field: str
    message: str
    severity: IssueSeverity = IssueSeverity.ERROR
    suggested_fix: Optional[str] = None
