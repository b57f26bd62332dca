"""
Discord webhook handler.
"""

from typing import Dict, Any, Tuple

from .base_handler import BaseHandler
from utils.errors import NotificationError

DISCORD_WEBHOOK_URL = 'https://discord.com/api/webhooks/{webhook_id}/{token}'


class DiscordHandler(BaseHandler):
    """Handler for 'discord://token@webhook_id' descriptors."""

    def __init__(self, settings: Dict[str, Any] = None):
        super().__init__(settings)

    def get_schemes(self) -> Tuple[str, ...]:
        return ('discord',)

    def target_url(self, destination: str) -> str:
        _, rest = self.split_destination(destination)
        token, sep, webhook_id = rest.partition('@')
        webhook_id = webhook_id.strip('/')
        if not sep or not token or not webhook_id:
            raise NotificationError("discord descriptor must look like discord://token@webhook_id")
        return DISCORD_WEBHOOK_URL.format(webhook_id=webhook_id, token=token)

    def send(self, destination: str, message: str) -> None:
        self.post(self.target_url(destination), json_body={'content': message})
