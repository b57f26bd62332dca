"""
Generic webhook handler.

Serves 'generic+http://', 'generic+https://' and the Power Automate flavour
'generic+powerautomate://', which posts adaptive card JSON over https.
"""

import json
from typing import Dict, Any, Tuple

from .base_handler import BaseHandler

GENERIC_PREFIX = 'generic+'


class WebhookHandler(BaseHandler):
    """Handler that POSTs the message body to an arbitrary URL."""

    def __init__(self, settings: Dict[str, Any] = None):
        super().__init__(settings)

    def get_schemes(self) -> Tuple[str, ...]:
        return ('generic+http', 'generic+https', 'generic+powerautomate')

    def target_url(self, destination: str) -> str:
        """
        Translate the descriptor into the URL that receives the POST.

        Args:
            destination: e.g. 'generic+https://example.com/hook'

        Returns:
            e.g. 'https://example.com/hook'
        """
        scheme, rest = self.split_destination(destination)
        transport = scheme[len(GENERIC_PREFIX):] if scheme.startswith(GENERIC_PREFIX) else scheme
        if transport == 'powerautomate':
            transport = 'https'
        return f"{transport}://{rest}"

    def send(self, destination: str, message: str) -> None:
        url = self.target_url(destination)

        content_type = 'text/plain; charset=utf-8'
        try:
            json.loads(message)
            content_type = 'application/json'
        except ValueError:
            pass

        self.post(url, data=message.encode('utf-8'), content_type=content_type)
