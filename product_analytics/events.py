"""
Product events

Named, typed wrappers over AnalyticsClient.track so screens and services
don't spell event names and property keys by hand.
"""

import json
from datetime import datetime, timezone
from typing import Optional, List, Any

from .client import AnalyticsClient

STACK_LIMIT = 500


class ProductEvents:
    """Catalog of product events sent through an AnalyticsClient"""

    def __init__(self, client: AnalyticsClient):
        self.client = client

    @property
    def session(self):
        return self.client.session

    # App lifecycle

    def app_opened(self, source: Optional[str] = None):
        self.session.start()
        self.client.track('app_opened', {
            'source': source or 'direct',
            'version': self.client.config.app_version,
            'platform': self.client.identity.super_properties.get('platform'),
        })

    def app_backgrounded(self):
        self.session.mark('background')
        self.client.track('app_backgrounded', {
            'session_duration': self.session.session_duration(),
        })

    def app_foregrounded(self):
        time_in_background = self.session.elapsed('background')
        self.session.start()
        self.client.track('app_foregrounded', {
            'time_in_background': time_in_background,
        })

    # Onboarding

    def onboarding_started(self):
        self.session.mark('onboarding')
        self.client.track('onboarding_started')

    def terms_accepted(self):
        self.client.track('onboarding_terms_accepted')

    def photo_added(self, photo_count: int, source: str):
        """source is 'camera' or 'library'"""
        self.client.track('onboarding_photo_added', {
            'photo_count': photo_count,
            'source': source,
        })

    def photo_removed(self, remaining_count: int):
        self.client.track('onboarding_photo_removed', {'remaining_count': remaining_count})

    def main_photo_set(self, index: int):
        self.client.track('onboarding_main_photo_set', {'index': index})

    def photo_completed(self, total_photos: int):
        self.client.track('onboarding_photo_completed', {'total_photos': total_photos})

    def basics_completed(self, name: str, age: Optional[int], location: str):
        # Only the length of the name leaves the device
        self.client.track('onboarding_basics_completed', {
            'name_length': len(name),
            'age': age,
            'location': location,
        })

    def goals_selected(self, goals: List[str]):
        self.client.track('onboarding_goals_selected', {
            'goals': list(goals),
            'count': len(goals),
        })

    def interests_selected(self, interests: List[str], categories: List[str]):
        self.client.track('onboarding_interests_selected', {
            'interests': list(interests),
            'count': len(interests),
            'categories': list(categories),
        })

    def onboarding_completed(self):
        self.client.track('onboarding_completed', {
            'total_duration_seconds': self.session.elapsed('onboarding'),
        })

    def onboarding_step_back(self, from_step: int, to_step: int):
        self.client.track('onboarding_step_back', {
            'from_step': from_step,
            'to_step': to_step,
        })

    def onboarding_error(self, step: int, error_type: str, error_message: str):
        self.client.track('onboarding_error', {
            'step': step,
            'error_type': error_type,
            'error_message': error_message,
        })

    # Paywall & purchases

    def paywall_viewed(self, source: str, offerings_count: int):
        """source is 'onboarding', 'store' or 'feature_gate'"""
        self.session.mark('paywall')
        self.client.track('paywall_viewed', {
            'source': source,
            'offerings_count': offerings_count,
        })

    def plan_selected(self, plan_type: str, price: str):
        self.client.track('paywall_plan_selected', {'plan_type': plan_type, 'price': price})

    def purchase_initiated(self, plan_type: str, price: str):
        self.client.track('purchase_initiated', {'plan_type': plan_type, 'price': price})

    def purchase_completed(self, plan_type: str, price: str, transaction_id: Optional[str] = None):
        self.client.track('purchase_completed', {
            'plan_type': plan_type,
            'price': price,
            'transaction_id': transaction_id,
        })
        self.client.set_user_properties({
            'is_pro_user': True,
            'subscription_type': plan_type,
            'subscription_date': datetime.now(timezone.utc).isoformat(),
        })

    def purchase_failed(self, plan_type: str, error_code: str, error_message: str):
        self.client.track('purchase_failed', {
            'plan_type': plan_type,
            'error_code': error_code,
            'error_message': error_message,
        })

    def purchase_cancelled(self, plan_type: str):
        self.client.track('purchase_cancelled', {'plan_type': plan_type})

    def purchase_restored(self, plan_type: str):
        self.client.track('purchase_restored', {'plan_type': plan_type})

    def paywall_dismissed(self, source: str):
        self.client.track('paywall_dismissed', {
            'source': source,
            'time_on_paywall': self.session.elapsed('paywall'),
        })

    # Core app

    def message_sent(self, conversation_id: str, message_length: int):
        self.client.track('message_sent', {
            'conversation_id': conversation_id,
            'message_length': message_length,
        })

    def match_viewed(self, match_id: str):
        self.client.track('match_viewed', {'match_id': match_id})

    def match_messaged(self, match_id: str):
        self.client.track('match_messaged', {'match_id': match_id})

    def post_created(self, has_image: bool, text_length: int):
        self.client.track('post_created', {'has_image': has_image, 'text_length': text_length})

    def post_liked(self, post_id: str):
        self.client.track('post_liked', {'post_id': post_id})

    def companion_chat_started(self, companion_id: str):
        self.client.track('companion_chat_started', {'companion_id': companion_id})

    def companion_call_started(self, companion_id: str):
        self.client.track('companion_call_started', {'companion_id': companion_id})

    def companion_call_ended(self, companion_id: str, duration_seconds: int):
        self.client.track('companion_call_ended', {
            'companion_id': companion_id,
            'duration_seconds': duration_seconds,
        })

    def lesson_started(self, lesson_id: str, module_id: str):
        self.client.track('lesson_started', {'lesson_id': lesson_id, 'module_id': module_id})

    def lesson_completed(self, lesson_id: str, duration_seconds: int, score: Optional[float] = None):
        self.client.track('lesson_completed', {
            'lesson_id': lesson_id,
            'duration': duration_seconds,
            'score': score,
        })

    def settings_changed(self, setting_name: str, new_value: Any):
        if isinstance(new_value, (dict, list)):
            new_value = json.dumps(new_value)
        self.client.track('settings_changed', {
            'setting_name': setting_name,
            'new_value': new_value,
        })

    # Errors

    def error(self, screen: str, error_type: str, error_message: str, stack: Optional[str] = None):
        self.client.track('error_occurred', {
            'screen': screen,
            'error_type': error_type,
            'error_message': error_message,
            'stack': stack[:STACK_LIMIT] if stack else None,
        })

    def api_error(self, endpoint: str, status_code: int, error: str):
        self.client.track('api_error', {
            'endpoint': endpoint,
            'status_code': status_code,
            'error': error,
        })

    def permission_denied(self, permission_type: str):
        """permission_type: 'camera', 'photo_library', 'notifications' or 'microphone'"""
        self.client.track('permission_denied', {'permission_type': permission_type})
