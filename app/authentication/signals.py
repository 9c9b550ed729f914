"""
Django signals for authentication.

This module defines signal handlers for:
- Recording that the user validation pipeline ran

Related files:
    - models.py: User.validations_performed marker
    - core/signals.py: post_validation signal definition
    - apps.py: Signal import in ready()
"""

import logging

from django.conf import settings
from django.dispatch import receiver

from core.signals import post_validation

logger = logging.getLogger(__name__)


@receiver(post_validation, sender=settings.AUTH_USER_MODEL)
def record_validation_performed(sender, instance, valid, **kwargs):
    """
    Set User.validations_performed after every user validation run.

    Fires for valid and invalid users alike, after all validators.

    Args:
        sender: The User model class
        instance: The User instance that was validated
        valid: Whether validation passed
        **kwargs: Additional signal arguments
    """
    sender.mark_validations_performed()
    if not valid:
        logger.debug(f"Validation failed for user: {instance.email}")
