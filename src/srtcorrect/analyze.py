"""Spelling review of subtitles using LLMs (OpenAI-compatible APIs and Ollama)."""

import json
import logging
import re
import time

import httpx
import ollama
from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from .errors import AnalysisError
from .models import ErrorReport


ANALYSIS_SYSTEM_PROMPT = """You are a meticulous subtitle proofreader. The subtitles are a verbatim transcript of a speaker such as a lecturer.

Your only task is to find:
1. Spelling mistakes (typos)
2. Words that do not exist in a standard dictionary

Rules:
1. Do NOT flag grammar mistakes or awkward phrasing when the word itself is spelled correctly
2. Flag a word that is itself malformed, e.g. a stuttered ending that is not a real word
3. Write each "reason" briefly in {language}, e.g. "typo" or "not a dictionary word"
4. Give at most 3 suggestions per error, best first
5. Return ONLY valid JSON, no other text

Output format: {{"errors": [{{"subtitleId": 1, "originalWord": "wrold", "context": "Hello wrold", "reason": "typo", "suggestions": ["world"]}}]}}
Return {{"errors": []}} when nothing is wrong."""

MAX_RETRIES = 3
RETRY_DELAY = 1.0

OPENAI_COMPATIBLE = ("openai", "deepseek", "openrouter", "groq")
PROVIDERS = OPENAI_COMPATIBLE + ("ollama",)


def _extract_json(text: str) -> str:
    """Strip markdown fences and surrounding chatter from LLM output."""
    text = re.sub(r'^```(?:json)?\s*', '', text.strip(), flags=re.MULTILINE)
    text = re.sub(r'^```\s*$', '', text, flags=re.MULTILINE)

    match = re.search(r'[\[{].*[\]}]', text, re.DOTALL)
    if not match:
        raise ValueError("Could not find JSON in response")

    # Trailing commas before ] or }
    json_str = re.sub(r',\s*]', ']', match.group())
    return re.sub(r',\s*}', '}', json_str)


def parse_analysis_response(response: str | None) -> list[ErrorReport]:
    """Parse the analyzer's JSON into validated error reports.

    Raises ValueError on anything that is not a list of well-formed records.
    """
    if not response:
        raise ValueError("Empty response")

    try:
        data = json.loads(_extract_json(response))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in response: {e}\nResponse: {response[:500]}")

    if isinstance(data, dict):
        data = data.get("errors")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of errors\nResponse: {response[:500]}")

    try:
        return [ErrorReport.model_validate(item) for item in data]
    except ValidationError as e:
        raise ValueError(f"Malformed error record: {e}")


LANGUAGE_NAMES = {
    "en": "English",
    "ja": "Japanese",
    "zh": "Chinese",
    "ko": "Korean",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
}


def get_language_name(code: str) -> str:
    """Get full language name from code."""
    return LANGUAGE_NAMES.get(code.lower(), code)


class SubtitleAnalyzer:
    """Client for the external spelling-review service.

    One call per document; the full SRT text goes out, the whole batch of
    flagged errors comes back or a single AnalysisError is raised.
    """

    def __init__(
        self,
        provider: str = "openai",
        model: str = "gpt-4o",
        base_url: str | None = None,
        language: str = "ko",
    ):
        if provider not in PROVIDERS:
            raise ValueError(f"Unknown analysis provider: {provider}")
        self.provider = provider
        self.model = model
        self.base_url = base_url
        self.language = get_language_name(language)

    @property
    def requires_credential(self) -> bool:
        return self.provider != "ollama"

    def _messages(self, srt_content: str) -> list[dict]:
        return [
            {
                "role": "system",
                "content": ANALYSIS_SYSTEM_PROMPT.format(language=self.language),
            },
            {"role": "user", "content": f"SRT content:\n---\n{srt_content}\n---"},
        ]

    def _complete_openai(self, srt_content: str, api_key: str) -> str | None:
        client = OpenAI(api_key=api_key, base_url=self.base_url)
        kwargs = {
            "model": self.model,
            "messages": self._messages(srt_content),
            "response_format": {"type": "json_object"},
        }
        # GPT-5 models don't support custom temperature
        if not self.model.startswith("gpt-5"):
            kwargs["temperature"] = 0.1

        response = client.chat.completions.create(**kwargs)
        return response.choices[0].message.content

    def _complete_ollama(self, srt_content: str) -> str | None:
        response = ollama.chat(
            model=self.model,
            messages=self._messages(srt_content),
            format="json",
            options={"temperature": 0.1},
        )
        return response["message"]["content"]

    def find_errors(self, srt_content: str, api_key: str | None = None) -> list[ErrorReport]:
        """Ask the model for suspected spelling errors in ``srt_content``."""
        if self.requires_credential and (not api_key or not api_key.strip()):
            raise AnalysisError("No API key was provided.")

        last_error = None
        for attempt in range(MAX_RETRIES):
            try:
                if self.provider == "ollama":
                    result_text = self._complete_ollama(srt_content)
                else:
                    result_text = self._complete_openai(srt_content, api_key)
                reports = parse_analysis_response(result_text)
                logging.info(f"{self.provider} flagged {len(reports)} possible errors")
                return reports

            except (ValueError, IndexError, KeyError, TypeError) as e:
                last_error = e
                logging.warning(f"Malformed analysis response (attempt {attempt + 1}): {e}")
                if attempt < MAX_RETRIES - 1:
                    time.sleep(RETRY_DELAY)
                    continue

            except (OpenAIError, ollama.ResponseError, httpx.HTTPError, ConnectionError) as e:
                logging.error(f"Error calling {self.provider}: {e}")
                raise AnalysisError(f"Failed to analyze subtitles: {e}") from e

        raise AnalysisError(f"Failed to analyze subtitles: {last_error}") from last_error
