"""Standalone script to run the Telegram bot.

Run this script separately from the ops API server:
    python backend/run_telegram_bot.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add backend directory to path
backend_dir = Path(__file__).resolve().parent
sys.path.insert(0, str(backend_dir))

from lift_logger.config import settings
from lift_logger.dependencies import get_backend_client, get_catalog_refresher
from lift_logger.telegram.bot import get_bot

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[
        logging.StreamHandler(),
        logging.FileHandler("telegram_bot.log"),
    ],
)

logger = logging.getLogger(__name__)


async def main():
    """Run the Telegram bot."""
    logger.info("=" * 50)
    logger.info("Starting Lift Logger Telegram Bot...")
    logger.info("=" * 50)

    refresher = get_catalog_refresher()
    try:
        # Warm the exercise catalog before accepting commands
        logger.info("Warming exercise catalog...")
        await refresher.start()

        # Start bot
        bot = get_bot()
        await bot.start_polling()
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        await refresher.shutdown()
        await get_backend_client().close()
        logger.info("Bot shut down cleanly")


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Received interrupt signal. Shutting down...")
