"""
Handlers package - Contains all notification transport implementations.
"""

from handlers.base_handler import BaseHandler
from handlers.webhook_handler import WebhookHandler
from handlers.discord_handler import DiscordHandler
from handlers.slack_handler import SlackHandler
from handlers.logger_handler import LoggerHandler

__all__ = [
    'BaseHandler',
    'WebhookHandler',
    'DiscordHandler',
    'SlackHandler',
    'LoggerHandler'
]
