"""
Model lifecycle signals that Django does not provide out of the box.

Signals:
    post_validation: Sent after a model's full_clean() finishes, whether
        the record turned out valid or not.

post_validation is a ModelSignal, so receivers may name their sender
lazily with an "app_label.ModelName" string, the same way post_save
receivers can.

Usage:
    from django.dispatch import receiver
    from core.signals import post_validation

    @receiver(post_validation, sender="blog.Article")
    def audit_article_validation(sender, instance, valid, **kwargs):
        ...

Related files:
    - model_mixins.py: ValidationCallbacksMixin sends post_validation
"""

from django.db.models.signals import ModelSignal

# Arguments: instance, valid
post_validation = ModelSignal(use_caching=True)
