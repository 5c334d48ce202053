"""Thin client for the external character-creation service.

The service is opaque: it takes captured product images and answers with a
character record. Only the response shape is checked here.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional

import requests

from scanbrawl.core.errors import ServiceError
from scanbrawl.core.logging import logger
from scanbrawl.characters.models import Character
from scanbrawl.characters.records import character_from_record

DEFAULT_TIMEOUT = 30

class CharacterServiceClient:
    def __init__(self, endpoint: str, *, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout = timeout
        self.session = session or requests.Session()

    def create_character(self, images: List[Dict[str, Any]]) -> Character:
        """POST ``{"images": [...]}`` and return the validated character.

        Raises ServiceError for transport failures and non-2xx answers, and
        CharacterValidationError when the body lacks usable combat fields.
        """
        logger.info("CharacterServiceRequest", endpoint=self.endpoint, images=len(images))
        try:
            response = self.session.post(self.endpoint, json={"images": images}, timeout=self.timeout)
        except requests.RequestException as e:
            raise ServiceError(0, str(e)) from e
        if not response.ok:
            logger.warn("CharacterServiceFailed", status=response.status_code)
            raise ServiceError(response.status_code, response.text)
        try:
            body = response.json()
        except ValueError as e:
            raise ServiceError(response.status_code, f"invalid JSON body: {e}") from e
        character = character_from_record(body)
        logger.info("CharacterServiceCreated", id=character.id)
        return character

__all__ = ["CharacterServiceClient"]
