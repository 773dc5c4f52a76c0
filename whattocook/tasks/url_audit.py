"""Celery task for auditing recipe URLs across the whole catalog."""

import logging

from whattocook.celery_app import app as celery_app
from whattocook.database import SessionLocal
from whattocook.services.url_audit import audit_all_recipes

logger = logging.getLogger(__name__)


@celery_app.task(bind=True, max_retries=3)
def audit_recipe_urls(self, fix: bool = False) -> dict:
    """Check (and optionally fix) image and YouTube URLs for every recipe.

    Args:
        fix: write the normalized URLs back when True

    Returns:
        dict with the per-recipe report
    """
    db = SessionLocal()
    try:
        logger.info(f"Auditing recipe URLs (fix={fix})")
        results = audit_all_recipes(db, fix=fix)
        changed = sum(1 for r in results if r["changes"])
        logger.info(f"URL audit finished: {changed}/{len(results)} recipes need changes")
        return {"ok": True, "results": results}
    except Exception as e:
        logger.error(f"URL audit failed: {e}", exc_info=True)
        db.rollback()

        # Retry if not exhausted
        if self.request.retries < self.max_retries:
            raise self.retry(exc=e, countdown=30) from e

        return {"ok": False, "error": str(e)}
    finally:
        db.close()
