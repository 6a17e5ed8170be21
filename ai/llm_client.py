"""
Groq LLM client for Pathfinder's AI features.
Every call is JSON-in/JSON-out: the prompt declares the JSON shape and the
reply is parsed into a dict. Failures come back as {"error": "..."} so the
callers decide how to degrade.
"""
import json
import logging
import os
import re

import groq
from groq import AsyncGroq

from core import settings

log = logging.getLogger(__name__)

_client = None


def _get_client(use_backup: bool = False) -> AsyncGroq:
    global _client
    if use_backup:
        api_key = os.environ.get("GROQ_BACKUP_API_KEY")
        if not api_key:
            raise groq.GroqError("GROQ_BACKUP_API_KEY is not set")
        _client = AsyncGroq(api_key=api_key)
    elif _client is None:
        api_key = os.environ.get("GROQ_API_KEY")
        _client = AsyncGroq(api_key=api_key)
    return _client


MAX_RETRIES = 3


def _strip_fences(text: str) -> str:
    """Strip markdown code fences (```json ... ```) that Llama sometimes wraps around JSON."""
    text = text.strip()
    text = re.sub(r"^```(?:json)?\s*\n?", "", text)
    text = re.sub(r"\n?```\s*$", "", text)
    return text.strip()


async def analyse(
    system_prompt: str,
    user_prompt: str,
    temperature: float = 0.4,
) -> dict:
    """
    Send a prompt to the model and get structured JSON back.

    Groq does NOT guarantee valid JSON output, so a reply that fails to
    parse is re-requested up to MAX_RETRIES times.
    """
    try:
        client = _get_client()
    except groq.GroqError as e:
        log.error(f"[LLM] client unavailable: {e}")
        return {"error": str(e)}

    kwargs = {
        "model": settings.MODEL,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        "temperature": temperature,
        "response_format": {"type": "json_object"},
    }

    for attempt in range(1, MAX_RETRIES + 1):
        try:
            response = await client.chat.completions.create(**kwargs)
            text = (response.choices[0].message.content or "").strip()
            parsed = json.loads(_strip_fences(text))
            if not isinstance(parsed, dict):
                return {"error": "Model returned JSON that is not an object"}
            return parsed
        except json.JSONDecodeError:
            log.warning(f"[LLM] JSON parse failed (attempt {attempt}/{MAX_RETRIES})")
            if attempt == MAX_RETRIES:
                log.error(f"[LLM] analyse error: failed to parse JSON after {MAX_RETRIES} attempts")
                return {"error": f"JSON parse failed after {MAX_RETRIES} attempts"}
        except groq.RateLimitError:
            log.warning("[LLM] Rate limit exceeded, retrying with backup key.")
            try:
                client = _get_client(use_backup=True)
            except groq.GroqError as e:
                log.error(f"[LLM] backup client unavailable: {e}")
                return {"error": str(e)}
        except Exception as e:
            log.error(f"[LLM] analyse error: {e}")
            return {"error": str(e)}
    return {"error": "Max retries exceeded"}
