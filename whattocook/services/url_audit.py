"""Recipe image and YouTube URL cleanup.

Imported recipes often carry links wrapped in markdown or HTML, or Google
redirect URLs (``https://www.google.com/url?q=...``). These helpers recover
the real URL and the 11-character YouTube video id.
"""

import logging
import re
from typing import Any
from urllib.parse import parse_qs, urlparse

from sqlalchemy.orm import Session

from whattocook.models.recipe import Recipe

logger = logging.getLogger(__name__)

_MARKDOWN_LINK = re.compile(r"^\s*\[.*?\]\((.*?)\)\s*$")
_ANGLE_LINK = re.compile(r"^\s*<(.+)>\s*$")
_ANCHOR_HREF = re.compile(r"""href=["']([^"']+)["']""", re.IGNORECASE)

_YOUTUBE_ID_PATTERNS = [
    re.compile(r"[?&]v=([A-Za-z0-9_-]{11})"),
    re.compile(r"youtu\.be/([A-Za-z0-9_-]{11})"),
    re.compile(r"embed/([A-Za-z0-9_-]{11})"),
    re.compile(r"vi/([A-Za-z0-9_-]{11})"),
]


def unwrap_link(value: str | None) -> str | None:
    """Strip markdown ``[text](url)``, ``<url>`` or ``<a href>`` wrappers."""
    if not value:
        return value
    match = _MARKDOWN_LINK.match(value) or _ANCHOR_HREF.search(value) or _ANGLE_LINK.match(value)
    if match:
        return match.group(1)
    return value.strip()


def extract_q_param(url: str) -> str | None:
    """Return the ``q`` query parameter of an absolute URL, if present."""
    parsed = urlparse(url)
    if not parsed.scheme or not parsed.netloc:
        return None
    values = parse_qs(parsed.query).get("q")
    return values[0] if values and values[0] else None


def extract_youtube_id(url: str | None) -> str | None:
    url = unwrap_link(url)
    if not url:
        return None
    q = extract_q_param(url)
    if q and "youtube" in q:
        url = q
    for pattern in _YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def normalize_image_url(img: str | None) -> str | None:
    img = unwrap_link(img)
    if not img:
        return None
    q = extract_q_param(img)
    if q and q.startswith(("http://", "https://")):
        return q
    return img


def find_url_fixes(recipe: Recipe) -> tuple[dict[str, str], list[str]]:
    """Compute column updates for one recipe.

    Returns:
        (updates, issues) where ``updates`` maps column name to new value.
    """
    updates: dict[str, str] = {}
    issues: list[str] = []

    raw_youtube = recipe.youtube_url or ""
    q = extract_q_param(unwrap_link(raw_youtube) or "")
    if q and "youtube" in q:
        issues.append("youtube_url is a google search link")
        video_id = extract_youtube_id(q)
        if video_id:
            updates["youtube_url"] = f"https://www.youtube.com/watch?v={video_id}"

    if not recipe.youtube_id:
        video_id = extract_youtube_id(recipe.youtube_url)
        if video_id:
            updates["youtube_id"] = video_id

    normalized_image = normalize_image_url(recipe.image)
    if normalized_image and normalized_image != recipe.image:
        issues.append("image url was a redirect/search link")
        updates["image"] = normalized_image

    return updates, issues


def audit_recipe(db: Session, recipe: Recipe, fix: bool = False) -> dict[str, Any]:
    """Check one recipe's URLs, applying the fixes when ``fix`` is set."""
    updates, issues = find_url_fixes(recipe)
    if not updates:
        return {"id": recipe.id, "slug": recipe.slug, "fixed": False, "changes": None, "issues": []}

    if fix:
        for key, value in updates.items():
            setattr(recipe, key, value)
        db.commit()
        logger.info(f"Fixed URLs for recipe {recipe.id}: {sorted(updates)}")

    return {
        "id": recipe.id,
        "slug": recipe.slug,
        "fixed": fix,
        "changes": updates,
        "issues": issues,
    }


def audit_all_recipes(db: Session, fix: bool = False) -> list[dict[str, Any]]:
    recipes = db.query(Recipe).order_by(Recipe.id).all()
    return [audit_recipe(db, recipe, fix=fix) for recipe in recipes]
