"""Advisory compatibility scoring using the Claude API."""

import asyncio
import json
import logging
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from app.config import Settings
from app.errors import AdvisoryFailure
from app.models import Business, RankingFactors, RankingResult, UserPreferences
from .base import BusinessScorer
from .heuristic import HeuristicScorer

logger = logging.getLogger(__name__)


class AdvisoryReply(BaseModel):
    """Shape the advisory service must return."""

    score: int
    reasoning: str
    factors: RankingFactors


class AdvisoryScorer(BusinessScorer):
    """Score businesses with an LLM advisor, falling back to heuristics on any failure."""

    name = "advisory"

    SYSTEM_PROMPT = (
        "You are an expert business acquisition advisor. Analyze business "
        "opportunities and provide compatibility scores based on investor "
        "preferences. Return ONLY a valid JSON response with the exact "
        "structure requested."
    )

    RANKING_PROMPT = """Analyze this business opportunity against the investor's preferences and provide a compatibility score.

BUSINESS:
Name: {name}
Industry: {industry}
Location: {location}
Description: {description}
Asking Price: ${asking_price:,}
Annual Revenue: ${annual_revenue:,}
Cash Flow: ${cash_flow:,}
EBITDA: ${ebitda:,}
Employees: {employees}
Year Established: {year_established}

INVESTOR PREFERENCES:
Capital Range: ${capital_min:,} - ${capital_max:,}
Target Income: {target_income}
Risk Tolerance: {risk_tolerance}
Involvement Level: {involvement}
Preferred Location: {preferred_location}
Preferred Industries: {industries}
Business Size: {business_size}
Payback Period: {payback_period}

Provide a JSON response with this exact structure:
{{
  "score": <integer 0-100>,
  "reasoning": "<2-3 sentence explanation of the score>",
  "factors": {{
    "priceMatch": <integer 0-100>,
    "industryFit": <integer 0-100>,
    "riskAlignment": <integer 0-100>,
    "involvementFit": <integer 0-100>,
    "locationScore": <integer 0-100>,
    "financialHealth": <integer 0-100>
  }}
}}

Consider:
- Price match: How well does the asking price fit the investor's capital range?
- Industry fit: Does the business industry match preferences?
- Risk alignment: Does the business risk profile match tolerance?
- Involvement fit: Does required involvement match investor preferences?
- Location: Geographic compatibility
- Financial health: Revenue, cash flow, EBITDA strength and sustainability

Overall score should reflect investment attractiveness based on ALL factors combined.
Return only valid JSON, no other text."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[Any] = None,
        fallback: Optional[HeuristicScorer] = None,
    ):
        self.settings = settings
        self.fallback = fallback or HeuristicScorer()
        self._client = client

    @property
    def client(self):
        """Lazy-load Anthropic client."""
        if self._client is None:
            if not self.settings.anthropic_api_key:
                raise AdvisoryFailure("ANTHROPIC_API_KEY not configured")
            import anthropic
            self._client = anthropic.Anthropic(
                api_key=self.settings.anthropic_api_key,
                timeout=self.settings.advisory_timeout,
                max_retries=self.settings.advisory_max_retries,
            )
        return self._client

    async def score(
        self,
        business: Business,
        preferences: UserPreferences,
    ) -> RankingResult:
        """Score via the advisory service; never raises."""
        prompt = self.build_prompt(business, preferences)

        try:
            text = await asyncio.wait_for(
                asyncio.to_thread(self._call_api, prompt),
                timeout=self.settings.advisory_deadline,
            )
            return self.parse_reply(text)

        except asyncio.TimeoutError:
            logger.warning(
                f"Advisory scoring timed out after {self.settings.advisory_deadline}s "
                f"for {business.name}; using fallback"
            )
        except Exception as e:
            logger.warning(f"Advisory scoring failed for {business.name}: {e}; using fallback")

        return self.fallback.calculate(business, preferences)

    def build_prompt(self, business: Business, preferences: UserPreferences) -> str:
        capital_min, capital_max = preferences.capital_range
        return self.RANKING_PROMPT.format(
            name=business.name,
            industry=business.industry,
            location=business.location,
            description=business.description,
            asking_price=business.asking_price,
            annual_revenue=business.annual_revenue,
            cash_flow=business.cash_flow,
            ebitda=business.ebitda,
            employees=business.employees,
            year_established=business.year_established or "unknown",
            capital_min=capital_min,
            capital_max=capital_max,
            target_income=preferences.target_income,
            risk_tolerance=preferences.risk_tolerance,
            involvement=preferences.involvement,
            preferred_location=preferences.location,
            industries=", ".join(preferences.industries) or "any",
            business_size=preferences.business_size,
            payback_period=preferences.payback_period,
        )

    def _call_api(self, prompt: str) -> str:
        """Call Claude API synchronously and return the reply text."""
        response = self.client.messages.create(
            model=self.settings.llm_model,
            max_tokens=self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
            system=self.SYSTEM_PROMPT,
            messages=[
                {"role": "user", "content": prompt}
            ],
        )
        if not response.content:
            raise AdvisoryFailure("Empty response from advisory service")
        return response.content[0].text

    def parse_reply(self, text: str) -> RankingResult:
        """Validate a reply and clamp its score into [0, 100]."""
        # Handle potential markdown code blocks
        if "```json" in text:
            text = text.split("```json")[1].split("```")[0]
        elif "```" in text:
            text = text.split("```")[1].split("```")[0]

        try:
            reply = AdvisoryReply.model_validate(json.loads(text.strip()))
        except (json.JSONDecodeError, ValidationError) as e:
            raise AdvisoryFailure(f"Malformed advisory reply: {e}") from e

        return RankingResult(
            score=max(0, min(100, reply.score)),
            reasoning=reply.reasoning,
            factors=reply.factors,
            source="advisory",
        )
