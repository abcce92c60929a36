"""Feature extraction passes over a parsed HTML document.

Each pass reads the same BeautifulSoup tree and never modifies it, so the
document is parsed once per session and shared by every enabled pass.
"""

import re
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup

from ..storage.types import (
    ColorInfo,
    ContentBlock,
    ImageInfo,
    ScrapedResults,
    ScrapingOptions,
    TypographyInfo,
)
from ..utils.logging import get_structured_logger
from .types import ExtractionError

logger = get_structured_logger(__name__)

COLOR_REGEX = re.compile(
    r"#[0-9a-fA-F]{6}|#[0-9a-fA-F]{3}|rgb\([^)]+\)|rgba\([^)]+\)"
)
FONT_FAMILY_REGEX = re.compile(r"font-family:\s*([^;]+)", re.IGNORECASE)
FONT_SIZE_REGEX = re.compile(r"font-size:\s*([^;]+)", re.IGNORECASE)
FONT_WEIGHT_REGEX = re.compile(r"font-weight:\s*([^;]+)", re.IGNORECASE)
LEADING_INT_REGEX = re.compile(r"^\s*([+-]?\d+)")

HEADING_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6"]
TYPOGRAPHY_TAGS = HEADING_TAGS + ["p", "span"]
CONTENT_TAGS = HEADING_TAGS + ["p"]
PARAGRAPH_HIERARCHY = 7


class FeatureExtractor:
    """Extracts images, colors, typography and text content from HTML."""

    def parse(self, html: str) -> BeautifulSoup:
        """Parse raw HTML into a queryable tree."""
        try:
            return BeautifulSoup(html, "lxml")
        except Exception as e:
            raise ExtractionError(f"Failed to parse HTML: {str(e)}") from e

    def extract(
        self, soup: BeautifulSoup, page_url: str, options: ScrapingOptions
    ) -> ScrapedResults:
        """Run the enabled passes in order: images, colors, typography, content.

        A failing pass aborts the remaining ones.
        """
        results = ScrapedResults()

        if options.images:
            results.images = self.extract_images(soup, page_url)
            logger.debug("Extracted images", url=page_url, count=len(results.images))

        if options.colors:
            results.colors = self.extract_colors(soup)
            logger.debug("Extracted colors", url=page_url, count=len(results.colors))

        if options.typography:
            results.typography = self.extract_typography(soup)
            logger.debug(
                "Extracted typography", url=page_url, count=len(results.typography)
            )

        if options.content:
            results.content = self.extract_content(soup)
            logger.debug("Extracted content", url=page_url, count=len(results.content))

        return results

    def extract_images(self, soup: BeautifulSoup, page_url: str) -> list[ImageInfo]:
        """Every ``<img>`` with a ``src``, resolved against the page URL."""
        images = []

        for img in soup.find_all("img"):
            src = img.get("src")
            if not src:
                continue

            images.append(
                ImageInfo(
                    src=self._resolve_url(src, page_url),
                    alt=img.get("alt") or "",
                    width=self._parse_int(img.get("width")),
                    height=self._parse_int(img.get("height")),
                )
            )

        return images

    def extract_colors(self, soup: BeautifulSoup) -> list[ColorInfo]:
        """Unique color tokens from style blocks and inline style attributes."""
        colors = []
        seen = set()

        for token in COLOR_REGEX.findall(self._collect_styles(soup)):
            if token in seen:
                continue
            seen.add(token)
            colors.append(
                ColorInfo(
                    hex=token if token.startswith("#") else "",
                    rgb=token if token.startswith("rgb") else "",
                    usage="unknown",
                )
            )

        return colors

    def extract_typography(self, soup: BeautifulSoup) -> list[TypographyInfo]:
        """One record per heading, paragraph and span, defaults included."""
        typography = []

        for element in soup.find_all(TYPOGRAPHY_TAGS):
            style = element.get("style") or ""
            family = self._style_value(FONT_FAMILY_REGEX, style)
            size = self._style_value(FONT_SIZE_REGEX, style)
            weight = self._style_value(FONT_WEIGHT_REGEX, style)
            typography.append(
                TypographyInfo(
                    font_family=family or "inherit",
                    font_size=size or "inherit",
                    font_weight=weight or "normal",
                    element=element.name.lower(),
                )
            )

        return typography

    def extract_content(self, soup: BeautifulSoup) -> list[ContentBlock]:
        """Non-empty headings and paragraphs with their outline level."""
        content = []

        for element in soup.find_all(CONTENT_TAGS):
            text = element.get_text().strip()
            if not text:
                continue

            tag_name = element.name.lower()
            content.append(
                ContentBlock(
                    text=text,
                    element=tag_name,
                    hierarchy=(
                        int(tag_name[1])
                        if tag_name in HEADING_TAGS
                        else PARAGRAPH_HIERARCHY
                    ),
                )
            )

        return content

    def _collect_styles(self, soup: BeautifulSoup) -> str:
        """Style block text followed by inline style values, in document order."""
        parts = [style.get_text() for style in soup.find_all("style")]
        parts.extend(
            element["style"] for element in soup.find_all(attrs={"style": True})
        )
        return " ".join(parts)

    @staticmethod
    def _resolve_url(src: str, page_url: str) -> str:
        if src.startswith("http"):
            return src
        return urljoin(page_url, src)

    @staticmethod
    def _parse_int(value: Optional[str]) -> Optional[int]:
        """Leading integer of an attribute value ("100px" -> 100)."""
        if not value:
            return None
        match = LEADING_INT_REGEX.match(value)
        return int(match.group(1)) if match else None

    @staticmethod
    def _style_value(pattern: re.Pattern, style: str) -> Optional[str]:
        match = pattern.search(style)
        if not match:
            return None
        return match.group(1).strip() or None
