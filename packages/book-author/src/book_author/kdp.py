"""Amazon KDP publishing support: metadata storage, AI suggestions, pricing."""

import json
from decimal import ROUND_CEILING, Decimal
from pathlib import Path
from typing import Any, Optional
from uuid import UUID

from llm_core import GenerationRequest, LlmModelError, ProviderClient, parse_json_response
from loguru import logger
from pydantic import ValidationError

from book_author.config import AppSettings
from book_author.models import (
    BookDescriptionSuggestion,
    BookFormatType,
    IssueSeverity,
    KdpCategory,
    KdpMarketplace,
    KdpMetadata,
    KeywordSuggestion,
    PaperType,
    PricingInfo,
    PrintSpecifications,
    Project,
    SeriesInfo,
    TrimSize,
    ValidationIssue,
)
from book_author.result import Result

MAX_DESCRIPTION_LENGTH = 4000
MAX_KEYWORDS = 7
MAX_CATEGORY_RESULTS = 20

PRINT_FIXED_COST = Decimal("0.85")
PRINT_PER_PAGE_COST = {PaperType.CREAM: Decimal("0.012"), PaperType.WHITE: Decimal("0.010")}
PRINT_ROYALTY_RATE = Decimal("0.60")
EBOOK_HIGH_RATE = Decimal("0.70")
EBOOK_LOW_RATE = Decimal("0.35")
EBOOK_DELIVERY_COST = Decimal("0.15")
EBOOK_HIGH_RATE_MIN_PRICE = Decimal("2.99")
EBOOK_HIGH_RATE_MAX_PRICE = Decimal("9.99")

DESCRIPTION_STYLES = ["hook-based thriller style", "emotional literary style", "mystery teaser style"]
DEFAULT_DESCRIPTION_STYLE = "compelling hook-based"

MARKETPLACE_CURRENCIES = {
    KdpMarketplace.US: "USD",
    KdpMarketplace.UK: "GBP",
    KdpMarketplace.DE: "EUR",
    KdpMarketplace.FR: "EUR",
    KdpMarketplace.ES: "EUR",
    KdpMarketplace.IT: "EUR",
    KdpMarketplace.NL: "EUR",
    KdpMarketplace.JP: "JPY",
    KdpMarketplace.BR: "BRL",
    KdpMarketplace.CA: "CAD",
    KdpMarketplace.MX: "MXN",
    KdpMarketplace.AU: "AUD",
    KdpMarketplace.IN: "INR",
}

CATEGORIES = [
    KdpCategory(category_id="1", category_path="Fiction > Fantasy > Epic", name="Epic Fantasy", bisac_code="FIC009020"),
    KdpCategory(
        category_id="2",
        category_path="Fiction > Fantasy > Contemporary",
        name="Contemporary Fantasy",
        bisac_code="FIC009010",
    ),
    KdpCategory(
        category_id="3", category_path="Fiction > Science Fiction > Space Opera", name="Space Opera", bisac_code="FIC028030"
    ),
    KdpCategory(
        category_id="4",
        category_path="Fiction > Romance > Contemporary",
        name="Contemporary Romance",
        bisac_code="FIC027020",
    ),
    KdpCategory(
        category_id="5", category_path="Fiction > Romance > Historical", name="Historical Romance", bisac_code="FIC027050"
    ),
    KdpCategory(category_id="6", category_path="Fiction > Mystery > Cozy", name="Cozy Mystery", bisac_code="FIC022060"),
    KdpCategory(
        category_id="7",
        category_path="Fiction > Thriller > Psychological",
        name="Psychological Thriller",
        bisac_code="FIC031080",
    ),
    KdpCategory(
        category_id="8",
        category_path="Fiction > Horror > Supernatural",
        name="Supernatural Horror",
        bisac_code="FIC015000",
    ),
    KdpCategory(category_id="9", category_path="Fiction > Literary", name="Literary Fiction", bisac_code="FIC019000"),
    KdpCategory(category_id="10", category_path="Fiction > Coming of Age", name="Coming of Age", bisac_code="FIC043000"),
]

CATEGORY_PROMPT = """Based on this book information, suggest the 5 most appropriate Amazon KDP browse categories:

{book_info}

Return the categories in order of relevance as a JSON array:
[
  {{
    "categoryPath": "Fiction > Fantasy > Epic",
    "name": "Epic Fantasy",
    "bisacCode": "FIC009020"
  }}
]

Use real Amazon KDP category paths.
Return ONLY the JSON array."""

KEYWORD_PROMPT = """Generate {count} highly effective Amazon KDP search keywords for this book:

{book_info}

Requirements for keywords:
- Mix of broad and long-tail keywords
- Keywords readers would actually search for
- Avoid author name, title, or category names
- Focus on themes, tropes, comparisons, reader emotions
- Include "books like [similar popular book]" style keywords

Format as JSON array:
[
  {{
    "keyword": "the keyword phrase",
    "relevanceScore": 0.95,
    "competitionLevel": "Low/Medium/High",
    "relatedCategory": "Related category",
    "isLongTail": true
  }}
]

Return ONLY the JSON array."""

DESCRIPTION_PROMPT = """Write a {style} Amazon book description for this book:

{book_info}

Requirements:
- Maximum {max_length} characters
- Start with a powerful hook
- Use HTML formatting (bold, italic, line breaks)
- Include emotional appeal
- End with a call to action

Format the response as JSON:
{{
  "description": "The full HTML-formatted description",
  "style": "{style}",
  "hasHtmlFormatting": true,
  "hook": "The opening hook line",
  "callToAction": "The closing call to action"
}}

Return ONLY the JSON object."""

SYSTEM_PROMPT = "You are an Amazon KDP publishing expert who helps authors market their books."


def _book_info(project: Project) -> str:
    metadata = project.metadata
    lines = [
        f"Title: {metadata.title or project.name}",
        f"Genre: {metadata.genre or 'Not specified'}",
        f"Description: {project.description or metadata.description or 'Not specified'}",
        f"Tags: {', '.join(metadata.tags) or 'None'}",
        f"Target Audience: {metadata.target_audience or 'General'}",
    ]
    return "\n".join(lines)


def _as_list(data: Any) -> list:
    if isinstance(data, dict):
        for value in data.values():
            if isinstance(value, list):
                return value
        return []
    return data if isinstance(data, list) else []


class KdpService:
    """KDP metadata, AI-assisted marketing copy, print costs and royalties.

    Metadata is stored as ``<kdp_dir>/<project_id>.json`` and series as
    ``<kdp_dir>/series.json``.
    """

    def __init__(
        self,
        provider: Optional[ProviderClient] = None,
        app_settings: Optional[AppSettings] = None,
        model: Optional[str] = None,
    ):
        self.provider = provider
        self.settings = app_settings or AppSettings()
        self.model = model

    @property
    def kdp_dir(self) -> Path:
        return self.settings.kdp_dir

    # ------------------------------------------------------------------
    # Metadata storage
    # ------------------------------------------------------------------

    def get_metadata(self, project_id: UUID) -> Result[KdpMetadata]:
        """Stored metadata for a project, or a fresh record when none is saved."""
        path = self.kdp_dir / f"{project_id}.json"
        if not path.is_file():
            return Result.ok(KdpMetadata())
        try:
            return Result.ok(KdpMetadata.model_validate_json(path.read_text(encoding="utf-8")))
        except (OSError, ValueError) as e:
            logger.exception(f"Failed to read KDP metadata for {project_id}")
            return Result.fail(f"Failed to get metadata: {e}", e)

    def save_metadata(self, project_id: UUID, metadata: KdpMetadata) -> Result[KdpMetadata]:
        if metadata is None:
            raise ValueError("metadata is required")
        try:
            self.kdp_dir.mkdir(parents=True, exist_ok=True)
            metadata.mark_modified()
            (self.kdp_dir / f"{project_id}.json").write_text(metadata.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            logger.exception(f"Failed to save KDP metadata for {project_id}")
            return Result.fail(f"Failed to save metadata: {e}", e)
        logger.info(f"Saved KDP metadata for project {project_id}")
        return Result.ok(metadata)

    # ------------------------------------------------------------------
    # Categories, keywords and descriptions
    # ------------------------------------------------------------------

    def search_categories(self, query: str) -> Result[list[KdpCategory]]:
        needle = (query or "").strip().lower()
        matches = [c for c in CATEGORIES if needle in c.category_path.lower() or needle in c.name.lower()]
        return Result.ok(matches[:MAX_CATEGORY_RESULTS])

    def suggest_categories(self, project: Project) -> Result[list[KdpCategory]]:
        prompt = CATEGORY_PROMPT.format(book_info=_book_info(project))
        data = self._ask(prompt, max_tokens=1000, temperature=0.3, action="AI suggestion")
        if data.is_failure:
            return data
        categories = []
        for item in _as_list(data.value):
            if not isinstance(item, dict):
                continue
            path = item.get("categoryPath") or ""
            try:
                categories.append(
                    KdpCategory(
                        category_path=path,
                        name=item.get("name") or str(path).split(">")[-1].strip(),
                        bisac_code=item.get("bisacCode"),
                    )
                )
            except ValidationError as e:
                logger.warning(f"Skipping malformed category suggestion {item!r}: {e}")
        logger.info(f"Suggested {len(categories)} categories for project {project.id}")
        return Result.ok(categories)

    def generate_keywords(self, project: Project, count: int = MAX_KEYWORDS) -> Result[list[KeywordSuggestion]]:
        prompt = KEYWORD_PROMPT.format(count=count, book_info=_book_info(project))
        data = self._ask(prompt, max_tokens=1500, temperature=0.7, action="Keyword generation")
        if data.is_failure:
            return data
        keywords = []
        for item in _as_list(data.value):
            if isinstance(item, str):
                keywords.append(KeywordSuggestion(keyword=item))
            elif isinstance(item, dict) and item.get("keyword"):
                try:
                    keywords.append(
                        KeywordSuggestion(
                            keyword=item["keyword"],
                            relevance_score=item.get("relevanceScore", 0.5),
                            competition_level=item.get("competitionLevel"),
                            related_category=item.get("relatedCategory"),
                            is_long_tail=bool(item.get("isLongTail", False)),
                        )
                    )
                except ValidationError as e:
                    logger.warning(f"Skipping malformed keyword suggestion {item!r}: {e}")
        logger.info(f"Generated {len(keywords)} keywords for project {project.id}")
        return Result.ok(keywords)

    def generate_description(
        self,
        project: Project,
        style: Optional[str] = None,
        max_length: int = MAX_DESCRIPTION_LENGTH,
    ) -> Result[BookDescriptionSuggestion]:
        """Ask for a marketing description; a non-JSON reply is used verbatim."""
        style = style or DEFAULT_DESCRIPTION_STYLE
        prompt = DESCRIPTION_PROMPT.format(style=style, max_length=max_length, book_info=_book_info(project))
        content = self._complete(prompt, max_tokens=2000, temperature=0.8, action="Description generation")
        if content.is_failure:
            return content

        try:
            data = parse_json_response(content.value)
            suggestion = BookDescriptionSuggestion(
                description=data["description"],
                style=data.get("style") or style,
                has_html_formatting=bool(data.get("hasHtmlFormatting", False)),
                hook=data.get("hook"),
                call_to_action=data.get("callToAction"),
            )
        except (ValueError, KeyError, TypeError, AttributeError, ValidationError):
            logger.warning("Description response was not JSON; using the raw text")
            raw = content.value.strip()
            suggestion = BookDescriptionSuggestion(description=raw, style=style, has_html_formatting="<" in raw)

        logger.info(f"Generated book description for project {project.id}, {suggestion.character_count} characters")
        return Result.ok(suggestion)

    def generate_description_variations(self, project: Project, count: int = 3) -> Result[list[BookDescriptionSuggestion]]:
        """One description per built-in style, keeping only those that succeed."""
        descriptions = []
        for style in DESCRIPTION_STYLES[: min(count, len(DESCRIPTION_STYLES))]:
            result = self.generate_description(project, style)
            if result.is_success:
                descriptions.append(result.value)
        return Result.ok(descriptions)

    # ------------------------------------------------------------------
    # Print and pricing
    # ------------------------------------------------------------------

    def calculate_print_specs(
        self,
        page_count: int,
        trim_size: TrimSize = TrimSize.SIZE_6X9,
        paper_type: PaperType = PaperType.CREAM,
        has_bleed: bool = False,
    ) -> Result[PrintSpecifications]:
        """Paperback printing cost and the lowest list price that breaks even."""
        if page_count < 0:
            return Result.fail("Page count cannot be negative")
        printing_cost = PRINT_FIXED_COST + page_count * PRINT_PER_PAGE_COST[paper_type]
        minimum_price = (printing_cost / PRINT_ROYALTY_RATE * 100).to_integral_value(rounding=ROUND_CEILING) / 100
        specs = PrintSpecifications(
            format_type=BookFormatType.PAPERBACK,
            trim_size=trim_size,
            paper_type=paper_type,
            has_bleed=has_bleed,
            page_count=page_count,
            printing_cost=printing_cost,
            minimum_list_price=minimum_price,
        )
        logger.debug(f"Print specs: {page_count} pages, cost {printing_cost}, minimum price {minimum_price}")
        return Result.ok(specs)

    def calculate_royalties(
        self,
        list_price: Decimal,
        marketplace: KdpMarketplace = KdpMarketplace.US,
        format_type: BookFormatType = BookFormatType.EBOOK,
        print_specs: Optional[PrintSpecifications] = None,
    ) -> Result[PricingInfo]:
        """Estimated royalty per sale.

        Ebooks earn 70% minus delivery between 2.99 and 9.99 and 35% outside
        that band. Paperbacks earn 60% minus the printing cost.
        """
        list_price = Decimal(str(list_price))
        if list_price < 0:
            return Result.fail("List price cannot be negative")
        pricing = PricingInfo(list_price=list_price, currency=MARKETPLACE_CURRENCIES.get(marketplace, "USD"))

        if format_type == BookFormatType.EBOOK:
            if EBOOK_HIGH_RATE_MIN_PRICE <= list_price <= EBOOK_HIGH_RATE_MAX_PRICE:
                pricing.royalty_percentage = 70
                pricing.delivery_cost = EBOOK_DELIVERY_COST
                pricing.estimated_royalty = list_price * EBOOK_HIGH_RATE - EBOOK_DELIVERY_COST
            else:
                pricing.royalty_percentage = 35
                pricing.delivery_cost = Decimal("0")
                pricing.estimated_royalty = list_price * EBOOK_LOW_RATE
        elif format_type == BookFormatType.PAPERBACK and print_specs is not None:
            pricing.royalty_percentage = 60
            pricing.delivery_cost = print_specs.printing_cost
            pricing.estimated_royalty = list_price * PRINT_ROYALTY_RATE - print_specs.printing_cost
        return Result.ok(pricing)

    # ------------------------------------------------------------------
    # Series
    # ------------------------------------------------------------------

    def get_all_series(self) -> Result[list[SeriesInfo]]:
        try:
            return Result.ok(self._read_series())
        except (OSError, ValueError) as e:
            logger.exception("Failed to read series")
            return Result.fail(f"Failed to get series: {e}", e)

    def get_or_create_series(self, name: str) -> Result[SeriesInfo]:
        """Find a series by name, ignoring case, or create and store it."""
        if not name or not name.strip():
            return Result.fail("Series name is required")
        try:
            all_series = self._read_series()
            existing = next((s for s in all_series if s.name.lower() == name.strip().lower()), None)
            if existing is not None:
                return Result.ok(existing)
            series = SeriesInfo(name=name.strip())
            all_series.append(series)
            self.kdp_dir.mkdir(parents=True, exist_ok=True)
            payload = [s.model_dump(mode="json") for s in all_series]
            self._series_path().write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except (OSError, ValueError) as e:
            logger.exception(f"Series operation failed for {name}")
            return Result.fail(f"Series operation failed: {e}", e)
        logger.info(f"Created series '{series.name}'")
        return Result.ok(series)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate_metadata(self, metadata: KdpMetadata) -> list[ValidationIssue]:
        """Problems KDP would reject (errors) or flag (warnings)."""
        issues = []
        description = metadata.description or ""
        if not description.strip():
            issues.append(
                ValidationIssue(
                    field="Description",
                    message="Book description is required",
                    suggested_fix="Add a compelling book description (up to 4000 characters)",
                )
            )
        elif len(description) > MAX_DESCRIPTION_LENGTH:
            issues.append(
                ValidationIssue(
                    field="Description",
                    message=f"Description exceeds maximum length ({len(description)}/4000)",
                    suggested_fix="Shorten the description to 4000 characters or less",
                )
            )

        if not metadata.keywords:
            issues.append(
                ValidationIssue(
                    field="Keywords",
                    message="No keywords specified",
                    severity=IssueSeverity.WARNING,
                    suggested_fix="Add up to 7 search keywords for discoverability",
                )
            )
        elif len(metadata.keywords) > MAX_KEYWORDS:
            issues.append(
                ValidationIssue(
                    field="Keywords",
                    message=f"Too many keywords ({len(metadata.keywords)}/7)",
                    suggested_fix="Remove keywords to have maximum 7",
                )
            )

        if metadata.primary_category is None:
            issues.append(
                ValidationIssue(
                    field="PrimaryCategory",
                    message="Primary category is required",
                    suggested_fix="Select a primary browse category",
                )
            )

        if not metadata.use_free_isbn and not (metadata.isbn13 or "").strip():
            issues.append(
                ValidationIssue(
                    field="ISBN",
                    message="ISBN-13 required when not using KDP free ISBN",
                    suggested_fix="Provide your own ISBN-13 or enable KDP free ISBN",
                )
            )
        return issues

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _series_path(self) -> Path:
        return self.kdp_dir / "series.json"

    def _read_series(self) -> list[SeriesInfo]:
        path = self._series_path()
        if not path.is_file():
            return []
        return [SeriesInfo.model_validate(item) for item in json.loads(path.read_text(encoding="utf-8"))]

    def _complete(self, prompt: str, max_tokens: int, temperature: float, action: str) -> Result[str]:
        if self.provider is None:
            return Result.fail(f"{action} failed: no AI provider configured")
        request = GenerationRequest(
            system_prompt=SYSTEM_PROMPT,
            user_prompt=prompt,
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        try:
            return Result.ok(self.provider.generate(request).content)
        except LlmModelError as e:
            logger.error(f"{action} failed: {e}")
            return Result.fail(f"{action} failed: {e}", e)

    def _ask(self, prompt: str, max_tokens: int, temperature: float, action: str) -> Result[Any]:
        content = self._complete(prompt, max_tokens, temperature, action)
        if content.is_failure:
            return content
        try:
            return Result.ok(parse_json_response(content.value))
        except ValueError as e:
            logger.error(f"{action} returned malformed JSON")
            return Result.fail(f"{action} failed: {e}", e)
