"""
Lead form handlers module.

This module contains handlers for the waiting-list form card, including:
- Showing the card and editing each field
- Submitting the lead and clearing the form
"""

from aiogram import Router

from .confirmation import confirmation_router
from .form_fields import form_fields_router

# Create a single router for all lead form handlers
lead_router = Router()

lead_router.include_router(form_fields_router)
lead_router.include_router(confirmation_router)


__all__ = ["lead_router"]
