"""
Content Generation Service - optional AI helpers for plot pages

Every feature is capability-flagged: unless AI_FEATURES_ENABLED is set and
an Anthropic API key is configured, calls return an unavailable
GenerationResult without touching the network. Provider failures are
logged and reported the same way, never raised. Market insights fall back
to a fixed teaser so the home page always has something to show.
"""
import base64
import json
import re
from typing import Any, Dict, List, Optional, Sequence, Type

from anthropic import AsyncAnthropic, APIError
from pydantic import BaseModel

from plotdesk.core.config import settings
from plotdesk.core.logging_config import logger
from plotdesk.schemas import Plot
from plotdesk.schemas.content import (
    GenerationResult,
    MarketInsights,
    NearbyAmenities,
    PlotAttributes,
    VastuAnalysis,
)

UNAVAILABLE = "AI features are currently unavailable"

FALLBACK_INSIGHTS = MarketInsights(
    hotspot_area="Multiple premium locations with excellent connectivity and growth potential.",
    trending_opportunity="High-demand plots with optimal facing directions and sizes for modern construction.",
    investment_teaser="Exclusive properties in emerging areas with strong appreciation prospects.",
)

EMPTY_LISTING_INSIGHTS = MarketInsights(
    hotspot_area="A variety of premium plots are available across several promising locations.",
    trending_opportunity="Plots suitable for immediate construction and long-term investment are currently listed.",
    investment_teaser="Explore our exclusive listings to find properties with significant growth potential.",
)

# Image types the messages API accepts as input
SUPPORTED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/gif", "image/webp"}

_DATA_URL = re.compile(r"^data:(?P<type>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)
_SVG = re.compile(r"<svg\b.*?</svg>", re.DOTALL | re.IGNORECASE)


class ContentGenerationService:
    """
    Thin wrapper over the Anthropic messages API.

    Prompts are kept minimal; each method returns GenerationResult with
    `data` holding a string, a dict or a validated model dump.
    """

    def __init__(self, client: Optional[AsyncAnthropic] = None, enabled: Optional[bool] = None):
        self.enabled = settings.ai_available if enabled is None else enabled
        self.model = settings.CLAUDE_MODEL
        self.max_tokens = settings.CLAUDE_MAX_TOKENS
        self._client = client

    @property
    def available(self) -> bool:
        return self.enabled

    def _get_client(self) -> AsyncAnthropic:
        """Lazy initialization of the API client"""
        if self._client is None:
            kwargs: Dict[str, Any] = {
                "api_key": settings.ANTHROPIC_API_KEY,
                "timeout": settings.CLAUDE_REQUEST_TIMEOUT,
            }
            if settings.ANTHROPIC_BASE_URL:
                kwargs["base_url"] = settings.ANTHROPIC_BASE_URL
            self._client = AsyncAnthropic(**kwargs)
        return self._client

    async def _complete(self, feature: str, content: Any) -> str:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": content}],
        }
        response = await self._get_client().messages.create(**kwargs)
        logger.debug(
            f"[AI] {feature}: {response.usage.input_tokens} in, {response.usage.output_tokens} out"
        )
        return "".join(block.text for block in response.content if getattr(block, "type", "") == "text").strip()

    @staticmethod
    def _parse_json(text: str, schema: Type[BaseModel]) -> Dict[str, Any]:
        match = _JSON_OBJECT.search(text)
        if match is None:
            raise ValueError("response did not contain a JSON object")
        return schema.model_validate(json.loads(match.group())).model_dump(by_alias=True)

    @staticmethod
    def _svg_data_url(text: str) -> str:
        match = _SVG.search(text)
        if match is None:
            raise ValueError("response did not contain an SVG document")
        payload = base64.b64encode(match.group().encode("utf-8")).decode("ascii")
        return f"data:image/svg+xml;base64,{payload}"

    async def _run(self, feature: str, call) -> GenerationResult:
        if not self.available:
            return GenerationResult(available=False, error=UNAVAILABLE)

        try:
            return GenerationResult(available=True, data=await call())
        except (APIError, ValueError) as e:
            logger.warning(f"[AI] {feature} failed: {type(e).__name__}: {e}")
            return GenerationResult(available=True, error=f"Failed to generate {feature.replace('_', ' ')}.")

    # ========== Features ==========

    async def generate_description(self, plot: PlotAttributes) -> GenerationResult:
        prompt = (
            "You are an expert real estate copywriter. Write a compelling, professional "
            "marketing description for a plot of land as a single paragraph. Highlight the "
            "size, facing direction and location.\n\n"
            f"- Plot Size: {plot.plot_size}\n"
            f"- Facing Direction: {plot.plot_facing.value}\n"
            f"- Village: {plot.village_name or 'not specified'}\n"
            f"- Area/Colony: {plot.area_name}\n\n"
            "Reply with the description only."
        )

        async def call():
            text = await self._complete("description", prompt)
            if not text:
                raise ValueError("empty description")
            return {"description": text}

        return await self._run("description", call)

    async def analyze_vastu(self, plot: PlotAttributes) -> GenerationResult:
        prompt = (
            "You are an expert in Vastu Shastra. Analyse this plot for a potential buyer. "
            "North or East facing plots are generally considered most auspicious.\n\n"
            f"- Facing Direction: {plot.plot_facing.value}\n"
            f"- Plot Size: {plot.plot_size}\n"
            f"- Location: {plot.area_name}\n\n"
            'Reply with JSON only: {"vastuRating": "Excellent|Good|Average|Poor", '
            '"analysisSummary": "...", "positivePoints": ["..."], "negativePoints": ["..."]}'
        )

        async def call():
            return self._parse_json(await self._complete("vastu_analysis", prompt), VastuAnalysis)

        return await self._run("vastu_analysis", call)

    async def nearby_amenities(self, location: str) -> GenerationResult:
        prompt = (
            "You are a helpful local assistant for a real estate website. For the location "
            "below list up to 3 plausible nearby names in each category. Do not invent distances.\n\n"
            f"Location: {location}\n\n"
            'Reply with JSON only: {"schools": [], "hospitals": [], "markets": [], "transport": []}'
        )

        async def call():
            return self._parse_json(await self._complete("nearby_amenities", prompt), NearbyAmenities)

        return await self._run("nearby_amenities", call)

    async def generate_site_plan_image(self, plot: PlotAttributes) -> GenerationResult:
        prompt = (
            "Draw a 2D top-down architectural site plan for a residential house on an empty plot "
            "as a single standalone SVG document. Show a house layout with labelled rooms "
            "(Living Room, Bedroom, Kitchen), a garden and a driveway, in black and white with "
            "blue accents.\n\n"
            f"- Size: {plot.plot_size}\n"
            f"- Facing: {plot.plot_facing.value}\n"
            f"- Location Context: {plot.area_name}\n\n"
            "Reply with the <svg> element only."
        )

        async def call():
            return {"imageUrl": self._svg_data_url(await self._complete("site_plan", prompt))}

        return await self._run("site_plan", call)

    async def visualize_future_development(self, image_data_url: str, location: str) -> GenerationResult:
        match = _DATA_URL.match(image_data_url or "")
        if match is None or match.group("type") not in SUPPORTED_IMAGE_TYPES:
            return GenerationResult(
                available=self.available,
                error="A JPEG, PNG, GIF or WebP image data URL is required.",
            )

        content = [
            {
                "type": "image",
                "source": {"type": "base64", "media_type": match.group("type"), "data": match.group("data")},
            },
            {
                "type": "text",
                "text": (
                    f"This is a vacant plot in the area '{location}'. Sketch, as a single standalone "
                    "SVG document, how the SURROUNDING area could look after future development: "
                    "modern residential buildings, commercial complexes, improved roads and parks, "
                    "with the plot itself kept vacant in the foreground. Reply with the <svg> element only."
                ),
            },
        ]

        async def call():
            return {"futureImageUrl": self._svg_data_url(await self._complete("future_development", content))}

        return await self._run("future_development", call)

    async def market_insights(self, plots: Sequence[Plot]) -> GenerationResult:
        """Home page teaser, always returns data"""
        if not plots:
            return GenerationResult(available=self.available, data=EMPTY_LISTING_INSIGHTS.model_dump(by_alias=True))

        if not self.available:
            return GenerationResult(available=False, data=FALLBACK_INSIGHTS.model_dump(by_alias=True))

        listing: List[str] = [
            f"- Location: {p.area_name}, {p.village_name} | Facing: {p.plot_facing.value} | Size: {p.plot_size}"
            for p in plots
        ]
        prompt = (
            "You are a real estate market analyst for a consultancy in India. Generate three short, "
            "enticing teaser insights for the home page from the plots below. Do not mention plot numbers.\n\n"
            + "\n".join(listing)
            + '\n\nReply with JSON only: {"hotspotArea": "...", "trendingOpportunity": "...", '
            '"investmentTeaser": "..."}'
        )

        result = await self._run(
            "market_insights",
            lambda: self._market_call(prompt),
        )
        if result.data is None:
            result.data = FALLBACK_INSIGHTS.model_dump(by_alias=True)
        return result

    async def _market_call(self, prompt: str) -> Dict[str, Any]:
        return self._parse_json(await self._complete("market_insights", prompt), MarketInsights)


content_generation_service = ContentGenerationService()
