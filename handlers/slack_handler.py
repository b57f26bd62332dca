"""
Slack incoming webhook handler.
"""

from typing import Dict, Any, Tuple

from .base_handler import BaseHandler
from utils.errors import NotificationError

SLACK_WEBHOOK_URL = 'https://hooks.slack.com/services/{path}'


class SlackHandler(BaseHandler):
    """Handler for 'slack://T000/B000/XXXX' descriptors."""

    def __init__(self, settings: Dict[str, Any] = None):
        super().__init__(settings)

    def get_schemes(self) -> Tuple[str, ...]:
        return ('slack',)

    def target_url(self, destination: str) -> str:
        _, rest = self.split_destination(destination)
        parts = [part for part in rest.split('/') if part]
        if len(parts) != 3:
            raise NotificationError("slack descriptor must look like slack://T000/B000/XXXX")
        return SLACK_WEBHOOK_URL.format(path='/'.join(parts))

    def send(self, destination: str, message: str) -> None:
        self.post(self.target_url(destination), json_body={'text': message})
