"""
Trading bot services.

License issuing for the MetaTrader bot.
"""

from academy.services.bot.bot_service import BotService, generate_license_key

__all__ = ["BotService", "generate_license_key"]
