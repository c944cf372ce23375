import json
import logging
from typing import Dict, List, Optional

import requests
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from reviewhub.core.config import settings
from reviewhub.core.exceptions import AIError, AIKillSwitchError

logger = logging.getLogger(__name__)

OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


class AIOrchestrator:
    @staticmethod
    @retry(
        stop=stop_after_attempt(settings.ai.max_attempts),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        retry=retry_if_exception_type(AIError),
        reraise=True
    )
    def _do_call(
        messages: List[Dict[str, str]],
        model_name: str,
        temperature: float
    ) -> str:
        """Perform the HTTP call. Attempts are bounded by AI_MAX_ATTEMPTS (default: one)."""
        logger.info(f"Calling AI Model: {model_name}")

        try:
            response = requests.post(
                url=OPENROUTER_URL,
                headers={
                    "Authorization": f"Bearer {settings.ai.openrouter_api_key}",
                    "Content-Type": "application/json",
                    "HTTP-Referer": settings.app_url,
                },
                data=json.dumps({
                    "model": model_name,
                    "messages": messages,
                    "temperature": temperature
                }),
                timeout=settings.ai.timeout_seconds
            )
            response.raise_for_status()
            return response.json()["choices"][0]["message"]["content"]

        except requests.exceptions.Timeout:
            logger.error("AI service timeout.")
            raise AIError("AI service reached timeout limit.")
        except requests.exceptions.HTTPError as e:
            logger.error(f"AI service HTTP error: {e}")
            raise AIError(f"AI service returned error: {e.response.status_code}")
        except requests.exceptions.RequestException as e:
            logger.error(f"AI service connection error: {e}")
            raise AIError("AI service is unreachable.")
        except (KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Unexpected AI service payload: {e}")
            raise AIError("AI service returned an unexpected payload.")

    @classmethod
    def call_model(
        cls,
        messages: List[Dict[str, str]],
        temperature: Optional[float] = None
    ) -> str:
        """
        Single entry point for model calls: kill-switch and configuration checks,
        then one call to the configured model. Returns the raw response text.
        """
        if settings.ai.kill_switch:
            logger.warning("AI Kill-switch is active. Blocking request.")
            raise AIKillSwitchError()

        if not settings.ai.openrouter_api_key:
            logger.error("OpenRouter API Key missing.")
            raise AIError("AI service configuration error.")

        return cls._do_call(
            messages,
            settings.ai.model_name,
            settings.ai.temperature if temperature is None else temperature
        )
