"""APScheduler — purges expired drafts every hour."""

import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from riseup_site.services.drafts import purge_expired_drafts

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


@scheduler.scheduled_job("interval", hours=1, id="purge_expired_drafts")
async def purge_drafts():
    """Delete drafts past their expiry."""
    try:
        removed = await asyncio.to_thread(purge_expired_drafts)
        if removed:
            logger.info("Draft cleanup: %d expired draft(s) removed", removed)
    except Exception as e:
        logger.error("Draft cleanup failed: %s", e)
