"""
Telegram bot services.
"""

from academy.services.telegram.telegram_service import TelegramService

__all__ = ["TelegramService"]
