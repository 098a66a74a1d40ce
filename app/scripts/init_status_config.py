from app.core.db import AsyncSessionLocal
from app.core.exceptions import AppException
from app.services.status.status_initializer import initialize_status_settings
import argparse
import asyncio


async def init_status_config(force: bool):
    async with AsyncSessionLocal() as session:
        try:
            data = await initialize_status_settings(session, force=force, actor="init-script")
        except AppException as e:
            print(f"Skipped: {e}")
            return
        print(f"Status settings initialized ({data.quote_count} quote, {data.order_count} order statuses)")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed default quote/order status settings")
    parser.add_argument("--force", action="store_true", help="overwrite existing settings")
    args = parser.parse_args()
    asyncio.run(init_status_config(args.force))
