"""
AI oracle: an external chat-completion model used as a text-to-JSON black box.

The oracle is tried over an ordered list of models. Each attempt has its own
timeout; a rate-limit failure waits a fixed delay before the next model is
tried. When every model fails the call raises OracleFailure, which the
pipeline turns into a heuristic-only result.
"""

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol, Tuple

import openai
from openai import AsyncOpenAI

from resume_analyzer.config import Settings
from resume_analyzer.core.exceptions import MalformedOracleJSON, OracleFailure
from resume_analyzer.core.schemas import ExtractedProfile

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an expert résumé analyzer and career coach with years of experience in technical recruiting.

You read résumés from three perspectives:
1. ATS (Applicant Tracking Systems): keyword density and parseable formatting.
2. Recruiters: scannability and immediate impact.
3. Hiring managers: technical depth, problem solving and quantified business impact.

Be honest but constructive, and stay grounded in the résumé data you are given."""

EXTRACTION_PROMPT = """DATA EXTRACTION MODE: return a JSON object ONLY.
- "address": city and state/country only (e.g. "New York, NY"), null when absent.
- Never use placeholders such as "[Location]" and never put company names in "address".
- "experience": real jobs with clear titles.
Structure: {"name": null, "email": null, "phone": null, "address": null, "summary": null,
"experience": [{"company": "", "position": "", "duration": "", "responsibilities": []}],
"education": [{"institution": "", "degree": "", "dates": "", "gpa": ""}],
"skills": {"technical": [], "soft": []},
"projects": [{"name": "", "description": "", "technologies": []}],
"certifications": [{"name": "", "issuer": "", "date": ""}],
"languages": [{"language": "", "proficiency": ""}], "interests": []}"""

EVALUATION_PROMPT = """RESUME ANALYSIS MODE: return a JSON object ONLY.
Scoring (total 100): ats 0-30, keyword 0-30, content 0-20, relevance 0-20.
Structure: {"overallScore": 0, "scores": {"ats": 0, "keyword": 0, "content": 0, "relevance": 0},
"strengths": [], "weaknesses": [], "suggestions": [],
"industrySpecific": {"recommendations": [], "trendingKeywords": []},
"keywordMatches": {"matched": [], "missing": []},
"personalization": {"targetRoleFit": "", "careerGoalsAlignment": "", "customFeedback": ""}}"""

MATCHING_PROMPT = """JOB MATCHING MODE: return a JSON object ONLY.
Structure: {"matchPercentage": 0, "matched": [], "missing": [], "totalJobKeywords": 0,
"analysis": "", "recommendations": []}"""

CODE_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
# Control characters other than tab/newline/carriage return break json.loads
CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

Sleep = Callable[[float], Awaitable[None]]


class ResumeOracle(Protocol):
    """Anything that can turn résumé data into the three JSON payloads."""

    async def extract_structured(self, text: str) -> Dict[str, Any]: ...

    async def evaluate(self, profile: ExtractedProfile) -> Dict[str, Any]: ...

    async def match_job(self, profile: ExtractedProfile, job_description: str) -> Dict[str, Any]: ...


@dataclass(frozen=True)
class RetryPolicy:
    """
    Ordered model fallback.

    Attributes:
        models: Model names, tried in order
        timeout: Seconds allowed per attempt
        rate_limit_delay: Seconds to wait after a rate-limit failure before
            trying the next model
    """
    models: Tuple[str, ...] = ("gpt-4o-mini", "gpt-4o", "gpt-3.5-turbo")
    timeout: float = 30.0
    rate_limit_delay: float = 1.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "RetryPolicy":
        return cls(
            models=tuple(settings.get_oracle_models()),
            timeout=settings.oracle_timeout_seconds,
            rate_limit_delay=settings.oracle_rate_limit_delay_seconds,
        )


def parse_oracle_json(raw: Optional[str]) -> Dict[str, Any]:
    """
    Recover a JSON object from model output.

    Strips code fences and control characters, tries the whole text, then
    the largest "{...}" span (first "{" to last "}").

    Raises:
        MalformedOracleJSON: when no JSON object can be recovered

    Examples:
        >>> parse_oracle_json('```json\\n{"name": "Jane"}\\n```')
        {'name': 'Jane'}
        >>> parse_oracle_json('Sure! Here it is: {"a": 1} Hope this helps.')
        {'a': 1}
    """
    if not raw or not raw.strip():
        raise MalformedOracleJSON("Oracle returned empty output", raw_output=raw or "")

    text = CONTROL_CHARS_RE.sub("", CODE_FENCE_RE.sub("", raw)).strip()
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        start, end = text.find("{"), text.rfind("}")
        if start == -1 or end <= start:
            raise MalformedOracleJSON("No JSON object found in oracle output", raw_output=raw)
        try:
            data = json.loads(text[start:end + 1])
        except json.JSONDecodeError as exc:
            raise MalformedOracleJSON("Oracle output is not valid JSON", raw_output=raw, cause=exc)

    if not isinstance(data, dict):
        raise MalformedOracleJSON("Oracle output is not a JSON object", raw_output=raw)
    return data


@dataclass
class OpenAIResumeOracle:
    """
    ResumeOracle backed by the OpenAI chat completions API.

    Examples:
        >>> oracle = OpenAIResumeOracle(AsyncOpenAI(api_key="sk-..."), RetryPolicy(models=("gpt-4o-mini",)))
    """
    client: Any
    policy: RetryPolicy = field(default_factory=RetryPolicy)
    sleep: Sleep = asyncio.sleep

    @classmethod
    def from_settings(cls, settings: Settings) -> "OpenAIResumeOracle":
        return cls(
            client=AsyncOpenAI(api_key=settings.openai_api_key),
            policy=RetryPolicy.from_settings(settings),
        )

    async def _complete(self, task: str, user_prompt: str, temperature: float, max_tokens: int) -> Dict[str, Any]:
        last_error: Optional[Exception] = None
        last_model: Optional[str] = None

        for attempt, model in enumerate(self.policy.models):
            last_model = model
            try:
                response = await asyncio.wait_for(
                    self.client.chat.completions.create(
                        model=model,
                        messages=[
                            {"role": "system", "content": f"{SYSTEM_PROMPT}\n\n{task}"},
                            {"role": "user", "content": user_prompt},
                        ],
                        temperature=temperature,
                        max_tokens=max_tokens,
                    ),
                    timeout=self.policy.timeout,
                )
                # Content-filtered answers can come back with no choices
                if not response.choices:
                    raise MalformedOracleJSON("Oracle returned no choices", model_name=model)
                return parse_oracle_json(response.choices[0].message.content)
            except openai.RateLimitError as exc:
                last_error = exc
                logger.warning("oracle model %s rate limited", model)
                if attempt < len(self.policy.models) - 1:
                    await self.sleep(self.policy.rate_limit_delay)
            except asyncio.TimeoutError as exc:
                last_error = exc
                logger.warning("oracle model %s timed out after %.1fs", model, self.policy.timeout)
            except (openai.OpenAIError, MalformedOracleJSON) as exc:
                last_error = exc
                logger.warning("oracle model %s failed: %s", model, exc)

        raise OracleFailure("All oracle models failed", model_name=last_model, cause=last_error)

    async def extract_structured(self, text: str) -> Dict[str, Any]:
        return await self._complete(EXTRACTION_PROMPT, f"Resume Text:\n---\n{text}\n---", 0.1, 2000)

    async def evaluate(self, profile: ExtractedProfile) -> Dict[str, Any]:
        payload = profile.model_dump_json(by_alias=True)
        return await self._complete(EVALUATION_PROMPT, f"Resume Data:\n{payload}", 0.5, 1500)

    async def match_job(self, profile: ExtractedProfile, job_description: str) -> Dict[str, Any]:
        payload = profile.model_dump_json(by_alias=True)
        return await self._complete(MATCHING_PROMPT, f"Resume: {payload}\nJD: {job_description}", 0.3, 1000)
