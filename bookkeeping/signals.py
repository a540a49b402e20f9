from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
from django.core.cache import cache

from account.models import Profile
from .models import Transaction

def increment_user_cache_version(user_id):
    """
    Increment the cache version for a specific user.
    """
    version_key = f'user_cache_version:{user_id}'
    try:
        cache.incr(version_key)
    except ValueError:
        # Key doesn't exist, initialize it
        cache.set(version_key, 2, timeout=None)

@receiver(post_save, sender=Transaction)
@receiver(post_delete, sender=Transaction)
def transaction_changed(sender, instance, **kwargs):
    """
    Clear cache when a transaction is added, updated, or deleted.
    """
    increment_user_cache_version(instance.user_id)

@receiver(post_save, sender=Profile)
@receiver(post_delete, sender=Profile)
def profile_changed(sender, instance, **kwargs):
    """
    Clear cache when the account type changes, since it selects the tax policy.
    """
    increment_user_cache_version(instance.user_id)
