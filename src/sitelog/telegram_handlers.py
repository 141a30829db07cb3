"""Telegram command handlers."""

import logging
from datetime import date

from telegram import Update
from telegram.ext import ContextTypes

from .adapters.rest_backend import BackendError, ConfigurationError
from .config import load_config
from .core.hours import compute_hours, format_hours
from .core.priority import DateParseError, Priority
from .telegram_format import send_markdown
from .workflows import dashboard_stats, format_digest, format_stats, get_repository, outstanding_items

logger = logging.getLogger(__name__)

HELP_TEXT = (
    "/outstanding [high|medium|low] - Incomplete site items\n"
    "/stats - Dashboard counts\n"
    "/hours START FINISH [LUNCH] - Worked hours, e.g. /hours 07:00 16:30 30\n"
    "/help - Show all commands"
)


async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text("Site log assistant.\n\nCommands:\n" + HELP_TEXT)


async def help_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    await update.message.reply_text(HELP_TEXT)


async def outstanding_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /outstanding command - list incomplete items by priority."""
    tier = None
    if context.args:
        try:
            tier = Priority(context.args[0].lower())
        except ValueError:
            await update.message.reply_text("Priority must be high, medium or low.")
            return

    config = load_config()
    today = date.today()
    try:
        items = outstanding_items(get_repository(config), tier, today)
    except (BackendError, ConfigurationError, DateParseError) as e:
        logger.error(f"Failed to fetch outstanding items: {e}")
        await update.message.reply_text(f"Backend unavailable: {e}")
        return

    await send_markdown(update.message, f"**Outstanding items**\n\n{format_digest(items, today)}")


async def stats_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /stats command - dashboard counts."""
    config = load_config()
    try:
        result = dashboard_stats(get_repository(config))
    except (BackendError, ConfigurationError, DateParseError) as e:
        logger.error(f"Failed to fetch stats: {e}")
        await update.message.reply_text(f"Backend unavailable: {e}")
        return

    await send_markdown(update.message, f"**Site stats**\n\n```\n{format_stats(result)}\n```")


async def hours_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /hours START FINISH [LUNCH] command."""
    args = context.args or []
    if len(args) < 2:
        await update.message.reply_text("Usage: /hours START FINISH [LUNCH_MINUTES]")
        return

    lunch = 0
    if len(args) > 2:
        try:
            lunch = int(args[2])
        except ValueError:
            await update.message.reply_text("Lunch must be a number of minutes.")
            return

    config = load_config()
    result = compute_hours(args[0], args[1], lunch, config.rounding_minutes)
    await update.message.reply_text(f"{format_hours(result)} hrs")
