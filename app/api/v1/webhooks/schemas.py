"""
Schémas Pydantic pour le module Webhooks.
"""
from typing import Literal

from pydantic import BaseModel


class WebhookResponse(BaseModel):
    """Accusé de traitement renvoyé à Svix."""
    success: bool = True
    status: Literal["processed", "ignored", "duplicate"]
    event_id: str
    event_type: str
