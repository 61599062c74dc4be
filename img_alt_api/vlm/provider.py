"""
Purpose:
- The one outbound call: OpenAI-style chat completion against the vision provider.
- Builds the message array (prompt + image part, optional language turn), POSTs it
  with bearer auth and pulls choices[0].message.content out of the reply.

Notes:
- No retries, no streaming, httpx default timeout.
- Error-shaped or non-JSON replies are not special-cased: no content means the
  generation failed.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple
import httpx

from ..core.errors import GenerationFailed, ProviderError
from ..core.settings import Settings
from .schema import VisionRequest

logger = logging.getLogger(__name__)

PROMPT = (
    "What’s in this image? Be brief, it's for image alt description on a social network. "
    "Don't write in the first person."
)
MAX_TOKENS = 85
DETAIL = "low"
LANGUAGE_INSTRUCTION = 'Answer only in this language (code): "{lang}"'

def build_messages(request: VisionRequest) -> List[Dict[str, Any]]:
    messages: List[Dict[str, Any]] = [
        {
            "role": "user",
            "content": [
                {"type": "text", "text": PROMPT},
                {
                    "type": "image_url",
                    "image_url": {"url": request.image_reference, "detail": DETAIL},
                },
            ],
        }
    ]
    if request.target_language:
        messages.append({
            "role": "system",
            "content": LANGUAGE_INSTRUCTION.format(lang=request.target_language),
        })
    return messages

def extract_description(payload: Any) -> Optional[str]:
    """
    choices[0].message.content, or None for anything that doesn't have it.
    """
    if not isinstance(payload, dict):
        return None
    choices = payload.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    message = first.get("message") if isinstance(first, dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content:
        return None
    return content

class VisionProvider:
    """Chat-completions client bound to one immutable Settings."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._settings = settings
        self._transport = transport

    def build_payload(self, request: VisionRequest) -> Dict[str, Any]:
        return {
            "model": self._settings.deepseek_model,
            "messages": build_messages(request),
            "max_tokens": MAX_TOKENS,
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self._settings.deepseek_api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, request: VisionRequest) -> Tuple[int, Any]:
        """
        POST the completion request and return (HTTP status, decoded body or None if not JSON).
        Raises ProviderError on any failure making the call.
        """
        logger.info(
            "Vision request: model=%s image=%s lang=%s",
            self._settings.deepseek_model, request.reference_kind, request.target_language,
        )
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                resp = await client.post(
                    self._settings.completions_url,
                    headers=self._headers(),
                    json=self.build_payload(request),
                )
        except Exception as e:
            logger.warning("Vision provider call failed: %r", e)
            raise ProviderError.from_exception(e) from e

        try:
            return resp.status_code, resp.json()
        except ValueError:
            logger.warning("Vision provider returned non-JSON body (status %s)", resp.status_code)
            return resp.status_code, None

    async def describe(self, request: VisionRequest) -> str:
        status, payload = await self.complete(request)
        description = extract_description(payload)
        if description is None:
            logger.warning("No description in provider reply (status %s): %.200r", status, payload)
            raise GenerationFailed()
        return description
