# src/utils/digitize_client.py
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class DigitizeRequestError(RuntimeError):
    """The digitize endpoint did not return a recipe."""


def digitize_images(
    images: List[str],
    user_id: Optional[str],
    *,
    api_url: Optional[str] = None,
    timeout: float = 180,
) -> Dict[str, Any]:
    """POST one submission to /api/digitize and return the extracted recipe."""
    if api_url is None:
        from journal.autostart_api import api_url as default_api_url
        api_url = default_api_url()

    try:
        resp = requests.post(
            f"{api_url.rstrip('/')}/api/digitize",
            json={"images": images, "userId": user_id},
            timeout=timeout,
        )
    except requests.RequestException as e:
        logger.error("Digitize request failed: %s", e)
        raise DigitizeRequestError(f"Could not reach the recipe API: {e}") from e

    try:
        result = resp.json()
    except ValueError:
        raise DigitizeRequestError(f"Unexpected response from the recipe API (HTTP {resp.status_code})")

    if resp.ok and result.get("success"):
        return result.get("recipe") or {}
    raise DigitizeRequestError(result.get("error") or f"HTTP {resp.status_code}")
