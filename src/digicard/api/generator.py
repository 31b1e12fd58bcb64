"""Bio drafting through a generative text service."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import requests

from digicard.config import GeneratorConfig
from digicard.exceptions import GeneratorError

logger = logging.getLogger(__name__)

DEFAULT_TONE = "professional"
MAX_BIO_WORDS = 40


def build_bio_prompt(name: str, job_title: str, company_name: str, tone: str = DEFAULT_TONE) -> str:
    """
    Build the instruction sent to the text model.

    Args:
        name: Full name on the card.
        job_title: Job title on the card.
        company_name: Company on the card.
        tone: Desired tone, e.g. "professional" or "friendly".

    Returns:
        Prompt text.
    """
    return (
        f"Write a short, engaging professional bio (max {MAX_BIO_WORDS} words) "
        f"for a digital business card.\n"
        f"Name: {name}\n"
        f"Job: {job_title}\n"
        f"Company: {company_name}\n"
        f"Tone: {tone}\n"
        f"Return only the bio text."
    )


class TextGenerator(ABC):
    """Drafts card text."""

    @abstractmethod
    def draft_bio(self, name: str, job_title: str, company_name: str, tone: str = DEFAULT_TONE) -> str:
        """
        Draft a short bio.

        Args:
            name: Full name on the card.
            job_title: Job title on the card.
            company_name: Company on the card.
            tone: Desired tone.

        Returns:
            Bio text.

        Raises:
            GeneratorError: If the service fails or returns no text.
        """
        pass


class GeminiBioGenerator(TextGenerator):
    """TextGenerator backed by the Gemini generateContent REST API."""

    def __init__(self, config: GeneratorConfig) -> None:
        self.config = config

    def draft_bio(self, name: str, job_title: str, company_name: str, tone: str = DEFAULT_TONE) -> str:
        if not self.config.api_key:
            raise GeneratorError("No API key configured. Set GEMINI_API_KEY or [generator] api_key.")

        url = f"{self.config.endpoint.rstrip('/')}/models/{self.config.model}:generateContent"
        payload = {
            "contents": [{"parts": [{"text": build_bio_prompt(name, job_title, company_name, tone)}]}],
        }
        headers = {
            "content-type": "application/json",
            "x-goog-api-key": self.config.api_key,
        }

        try:
            response = requests.post(url, json=payload, headers=headers, timeout=self.config.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            logger.error(f"Bio generation failed: {e}")
            raise GeneratorError(f"Bio generation failed: {e}") from e
        except ValueError as e:
            raise GeneratorError(f"Bio generation returned invalid JSON: {e}") from e

        text = _extract_text(data)
        if not text:
            raise GeneratorError("Bio generation returned no text")
        logger.info(f"Drafted bio ({len(text.split())} words)")
        return text


def _extract_text(data: Any) -> str:
    """
    Pull the first candidate's text out of a generateContent response.

    Raises:
        GeneratorError: If the body does not have the generateContent shape.
    """
    try:
        candidates = data.get("candidates") or []
        if not candidates:
            return ""
        parts = (candidates[0].get("content") or {}).get("parts") or []
        return "".join(part.get("text") or "" for part in parts).strip()
    except (AttributeError, TypeError, KeyError) as e:
        raise GeneratorError(f"Bio generation returned an unexpected response: {e}") from e
