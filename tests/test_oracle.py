"""Tests for oracle JSON recovery and the model fallback policy (no network)."""

import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from resume_analyzer.config import Settings
from resume_analyzer.core.exceptions import MalformedOracleJSON, OracleFailure
from resume_analyzer.core.oracle import OpenAIResumeOracle, RetryPolicy, parse_oracle_json
from resume_analyzer.core.schemas import ExtractedProfile

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def _rate_limit_error():
    response = httpx.Response(429, request=httpx.Request("POST", OPENAI_URL))
    return openai.RateLimitError("rate limited", response=response, body=None)


def _connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL))


class FakeCompletions:
    """Stands in for client.chat.completions; plays back one outcome per call."""

    def __init__(self, outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome == "hang":
            await asyncio.sleep(5)
        if outcome == "no-choices":
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=outcome))])


def _oracle(outcomes, models=("m1", "m2", "m3"), timeout=1.0):
    completions = FakeCompletions(outcomes)
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    oracle = OpenAIResumeOracle(
        client=client,
        policy=RetryPolicy(models=models, timeout=timeout, rate_limit_delay=1.0),
        sleep=fake_sleep,
    )
    return oracle, completions, delays


# ---------- JSON recovery ----------

def test_parse_plain_json():
    assert parse_oracle_json('{"name": "Jane"}') == {"name": "Jane"}


def test_parse_code_fenced_json():
    assert parse_oracle_json('```json\n{"name": "Jane"}\n```') == {"name": "Jane"}


def test_parse_json_inside_prose():
    assert parse_oracle_json('Sure! Here it is: {"a": {"b": 1}} Hope this helps.') == {"a": {"b": 1}}


def test_parse_strips_control_characters():
    assert parse_oracle_json('{"name": "Ja\x00ne"}') == {"name": "Jane"}


@pytest.mark.parametrize("raw", ["", "   ", "no json here", "[1, 2, 3]", "{broken: json}"])
def test_parse_failures_raise_malformed(raw):
    with pytest.raises(MalformedOracleJSON):
        parse_oracle_json(raw)


def test_malformed_is_an_oracle_failure():
    assert issubclass(MalformedOracleJSON, OracleFailure)


# ---------- fallback policy ----------

def test_first_model_success():
    oracle, completions, delays = _oracle(['{"name": "Jane Roe"}'])

    data = asyncio.run(oracle.extract_structured("Jane Roe resume text"))

    assert data == {"name": "Jane Roe"}
    assert [c["model"] for c in completions.calls] == ["m1"]
    assert completions.calls[0]["temperature"] == 0.1
    assert completions.calls[0]["max_tokens"] == 2000
    assert delays == []


def test_rate_limit_waits_then_tries_next_model():
    oracle, completions, delays = _oracle([_rate_limit_error(), '{"ok": true}'])

    data = asyncio.run(oracle.evaluate(ExtractedProfile(name="Jane Roe")))

    assert data == {"ok": True}
    assert [c["model"] for c in completions.calls] == ["m1", "m2"]
    assert delays == [1.0], "one rate-limit delay before the second model"


def test_empty_choices_tries_next_model():
    oracle, completions, delays = _oracle(["no-choices", '{"name": "Jane Roe"}'], models=("m1", "m2"))

    data = asyncio.run(oracle.extract_structured("Jane Roe resume text"))

    assert data == {"name": "Jane Roe"}
    assert [c["model"] for c in completions.calls] == ["m1", "m2"]


def test_empty_choices_on_every_model_is_oracle_failure():
    oracle, completions, delays = _oracle(["no-choices"], models=("only",))

    with pytest.raises(OracleFailure) as excinfo:
        asyncio.run(oracle.extract_structured("Jane Roe resume text"))
    assert excinfo.value.model_name == "only"


def test_no_delay_after_last_model():
    oracle, completions, delays = _oracle([_rate_limit_error()], models=("only",))

    with pytest.raises(OracleFailure):
        asyncio.run(oracle.match_job(ExtractedProfile(), "Python developer"))
    assert delays == []


def test_malformed_output_and_api_errors_fall_through():
    oracle, completions, delays = _oracle(["not json", _connection_error(), '{"matchPercentage": 40}'])

    data = asyncio.run(oracle.match_job(ExtractedProfile(), "Python developer"))

    assert data == {"matchPercentage": 40}
    assert [c["model"] for c in completions.calls] == ["m1", "m2", "m3"]
    assert delays == []


def test_timeout_moves_to_next_model():
    oracle, completions, delays = _oracle(["hang", '{"name": "Jane"}'], timeout=0.05)

    data = asyncio.run(oracle.extract_structured("text"))

    assert data == {"name": "Jane"}
    assert len(completions.calls) == 2


def test_all_models_fail():
    oracle, completions, delays = _oracle([_connection_error(), "nope", _rate_limit_error()])

    with pytest.raises(OracleFailure) as excinfo:
        asyncio.run(oracle.extract_structured("text"))

    assert excinfo.value.model_name == "m3"
    assert isinstance(excinfo.value.cause, openai.RateLimitError)
    assert excinfo.value.to_dict()["error_code"] == "ORACLE_FAILURE"
    assert delays == []


def test_retry_policy_from_settings():
    settings = Settings(
        openai_api_key="",
        oracle_models="gpt-4o-mini, gpt-4o",
        oracle_timeout_seconds=12.5,
        oracle_rate_limit_delay_seconds=2.0,
    )
    policy = RetryPolicy.from_settings(settings)

    assert policy.models == ("gpt-4o-mini", "gpt-4o")
    assert policy.timeout == 12.5
    assert policy.rate_limit_delay == 2.0
