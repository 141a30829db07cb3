"""sitelog Telegram bot."""

import logging
from datetime import date

from telegram import Update, Bot
from telegram.ext import Application, CommandHandler, MessageHandler, filters
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .adapters.rest_backend import BackendError, ConfigurationError
from .config import Config, load_config
from .core.priority import DateParseError, Priority
from .telegram_format import send_markdown
from .telegram_handlers import (
    start_handler,
    help_handler,
    outstanding_handler,
    stats_handler,
    hours_handler,
)
from .workflows import format_digest, get_repository, outstanding_items

logger = logging.getLogger(__name__)


class AuthFilter(filters.BaseFilter):
    """Filter to only allow authorized users."""

    def __init__(self, allowed_users: list[int]):
        super().__init__()
        self.allowed_users = allowed_users

    def check_update(self, update: Update) -> bool:
        if not self.allowed_users:
            return True  # No restriction if no users configured
        user = update.effective_user
        if user is None:
            return False
        return user.id in self.allowed_users


def create_application(config: Config | None = None) -> Application:
    """Create and configure the Telegram bot application."""
    if config is None:
        config = load_config()

    if not config.telegram_bot_token:
        raise ValueError(
            "TELEGRAM_BOT_TOKEN not configured. "
            "Get a token from @BotFather on Telegram and add it to sitelog.conf"
        )

    app = Application.builder().token(config.telegram_bot_token).build()
    auth_filter = AuthFilter(config.telegram_allowed_users)

    app.add_handler(CommandHandler("start", start_handler, filters=auth_filter))
    app.add_handler(CommandHandler("help", help_handler, filters=auth_filter))
    app.add_handler(CommandHandler("outstanding", outstanding_handler, filters=auth_filter))
    app.add_handler(CommandHandler("stats", stats_handler, filters=auth_filter))
    app.add_handler(CommandHandler("hours", hours_handler, filters=auth_filter))

    async def unauthorized_handler(update: Update, context):
        user = update.effective_user
        logger.warning(f"Unauthorized access attempt from user {user.id} ({user.username})")
        await update.message.reply_text(
            "Unauthorized. This bot is private.\n"
            "If you're the owner, add your Telegram user ID to TELEGRAM_ALLOWED_USERS in sitelog.conf"
        )

    if config.telegram_allowed_users:
        app.add_handler(MessageHandler(~auth_filter & filters.ALL, unauthorized_handler))

    return app


def setup_scheduler(app: Application, config: Config | None = None) -> AsyncIOScheduler:
    """Set up the scheduled daily digest."""
    if config is None:
        config = load_config()

    scheduler = AsyncIOScheduler(timezone=config.timezone or "UTC")

    if config.telegram_digest_time and config.telegram_allowed_users:
        try:
            hour, minute = map(int, config.telegram_digest_time.split(":"))
            scheduler.add_job(
                send_daily_digest,
                CronTrigger(hour=hour, minute=minute),
                args=[app.bot, config.telegram_allowed_users, config],
                id="daily_digest",
            )
            logger.info(f"Scheduled daily digest at {hour:02d}:{minute:02d}")
        except ValueError:
            logger.warning(f"Invalid digest time format: {config.telegram_digest_time}")

    return scheduler


async def send_daily_digest(bot: Bot, user_ids: list[int], config: Config):
    """Send today's high-priority items to all authorized users."""
    today = date.today()
    try:
        items = outstanding_items(get_repository(config), Priority.HIGH, today)
    except (BackendError, ConfigurationError, DateParseError) as e:
        logger.error(f"Failed to build daily digest: {e}")
        return

    if not items:
        logger.info("No high-priority items, skipping digest")
        return

    text = f"**Site digest {today.strftime('%a %d %b')}**\n\n{format_digest(items, today)}"
    for user_id in user_ids:
        try:
            await send_markdown(bot, text, chat_id=user_id)
        except Exception as e:
            logger.error(f"Failed to send digest to user {user_id}: {e}")


def run_bot():
    """Run the Telegram bot."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )

    config = load_config()
    app = create_application(config)
    scheduler = setup_scheduler(app, config)

    async def post_init(application: Application) -> None:
        """Start scheduler after event loop is running."""
        scheduler.start()
        logger.info("Scheduler started")

    app.post_init = post_init

    if config.telegram_allowed_users:
        logger.info(f"Bot authorized for users: {config.telegram_allowed_users}")
    else:
        logger.warning("No TELEGRAM_ALLOWED_USERS configured - bot is open to anyone!")

    logger.info("Starting sitelog Telegram bot...")
    app.run_polling(allowed_updates=Update.ALL_TYPES)
