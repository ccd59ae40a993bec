"""
Summarization module.

Sends the prompt to a chat-completion endpoint (OpenRouter by default) once
per requested model and extracts the assistant's reply. A model that fails
is logged and skipped; the remaining models still run.
"""

import logging
from typing import Dict, Iterable, Optional

import requests

from .models import ModelOutput
from .writer import ScratchDir

logger = logging.getLogger("activity-summary.summarizer")

DEFAULT_TIMEOUT = 300
NO_VALUE = "null"


def extract_content(payload) -> Optional[str]:
    """
    Return ``choices[0].message.content`` from a chat-completion response.

    Missing fields, an empty string and the literal "null" all yield None.
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(content, str) or not content.strip() or content.strip() == NO_VALUE:
        return None
    return content


class ModelSummarizer:
    """
    Chat-completion client.

    Args:
        token: Bearer token for the completion API.
        url: Chat-completion endpoint.
        scratch: Where the raw response of every call is saved, if given.
        timeout: Seconds to wait for one response.
    """

    def __init__(self, token: str, url: str, scratch: Optional[ScratchDir] = None,
                 timeout: int = DEFAULT_TIMEOUT) -> None:
        self.url = url
        self.scratch = scratch
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })

    def summarize(self, model: str, prompt: str) -> Optional[ModelOutput]:
        """
        Ask one model for the summary.

        Returns:
            ModelOutput, or None if the request failed or the reply was empty
        """
        body = {"model": model, "messages": [{"role": "user", "content": prompt}]}
        try:
            response = self.session.post(self.url, json=body, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error("Request to %s failed for model %s: %s", self.url, model, e)
            return None

        if self.scratch is not None:
            self.scratch.write_response(model, response.text)

        if not response.ok:
            logger.error("Model %s returned HTTP %d. Response: %s", model, response.status_code, response.text)
            return None

        try:
            payload = response.json()
        except ValueError:
            logger.error("Model %s returned a non-JSON body. Response: %s", model, response.text)
            return None

        content = extract_content(payload)
        if content is None:
            logger.error("Failed to generate AI summary with %s. Response: %s", model, response.text)
            return None
        return ModelOutput(model=model, text=content)

    def summarize_all(self, models: Iterable[str], prompt: str) -> Dict[str, str]:
        """
        Run every model in turn.

        Returns:
            Mapping of successful model -> summary text, in request order
        """
        outputs: Dict[str, str] = {}
        for model in models:
            print(f"Generating AI summary with {model}...")
            result = self.summarize(model, prompt)
            if result is None:
                print(f"Error: Failed to generate AI summary with {model}")
                continue
            outputs[model] = result.text
        return outputs
