from apscheduler.schedulers.asyncio import AsyncIOScheduler
from app.core.db import AsyncSessionLocal
from app.core.config import QUOTE_EXPIRY_INTERVAL_MINUTES

from app.services.workflow.quote_expiry_service import auto_expire_quotes

scheduler = AsyncIOScheduler()

@scheduler.scheduled_job("interval", minutes=QUOTE_EXPIRY_INTERVAL_MINUTES, id="expire_quotes")
async def expire_quotes_job():
    async with AsyncSessionLocal() as db:
        await auto_expire_quotes(db)
