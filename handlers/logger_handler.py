"""
Logger handler - writes notifications to the application log instead of a remote service.
"""

from typing import Dict, Any, Tuple

from .base_handler import BaseHandler


class LoggerHandler(BaseHandler):
    """Handler for 'logger://' descriptors, useful for dry runs."""

    def __init__(self, settings: Dict[str, Any] = None):
        super().__init__(settings)

    def get_schemes(self) -> Tuple[str, ...]:
        return ('logger',)

    def send(self, destination: str, message: str) -> None:
        self.logger.info(message)
