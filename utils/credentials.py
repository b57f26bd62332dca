"""
Access token resolution for the release source.
"""

import os
from typing import Optional, Tuple

from dotenv import load_dotenv, find_dotenv

TOKEN_ENV_VAR = 'GITHUB_TOKEN'


def resolve_access_token(configured: Optional[str]) -> Tuple[Optional[str], str]:
    """
    Pick the token used to talk to the release source.

    A token in the config file wins. Otherwise GITHUB_TOKEN is read from the
    environment, after loading a .env file if one exists (real environment
    variables are never overridden by it).

    Args:
        configured: access_token value from the config file

    Returns:
        (token or None, origin) where origin is 'config', 'environment' or 'anonymous'
    """
    if configured:
        return configured, 'config'

    load_dotenv(find_dotenv(usecwd=True), override=False)
    token = os.getenv(TOKEN_ENV_VAR)
    if token:
        return token, 'environment'

    return None, 'anonymous'
