"""Trigger the catalog export workflow on GitHub Actions."""

import logging
from typing import Any

import httpx

from whattocook.config import get_settings

logger = logging.getLogger(__name__)


async def trigger_export_workflow(ref: str = "main") -> dict[str, Any]:
    """Dispatch the configured workflow.

    Returns:
        {"ok": True} on success, otherwise {"ok": False, "status": int | None, "detail": str}
    """
    settings = get_settings()
    if not settings.github_token:
        return {"ok": False, "status": None, "detail": "Server missing GitHub token"}

    url = (
        f"https://api.github.com/repos/{settings.github_repository}"
        f"/actions/workflows/{settings.github_sync_workflow}/dispatches"
    )
    try:
        async with httpx.AsyncClient(timeout=15.0) as client:
            response = await client.post(
                url,
                headers={
                    "Authorization": f"token {settings.github_token}",
                    "Accept": "application/vnd.github.v3+json",
                },
                json={"ref": ref},
            )
    except httpx.HTTPError as e:
        logger.error(f"HTTP error dispatching export workflow: {e}")
        return {"ok": False, "status": None, "detail": str(e)}

    if response.status_code == 204:
        logger.info(f"Dispatched {settings.github_sync_workflow} on {ref}")
        return {"ok": True}

    logger.warning(f"Workflow dispatch failed ({response.status_code}): {response.text}")
    return {"ok": False, "status": response.status_code, "detail": response.text}
