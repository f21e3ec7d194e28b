"""
Delivery-outcome classification service.

Sign method and feedback are free-text operator entries without a controlled
vocabulary. Each accepted row is assigned exactly one outcome by an ordered
rule cascade: explicit negative outcomes first, then pending redelivery,
then station pickup, and finally address delivery as the catch-all.
The order determines the result and must not change.
"""

from typing import Optional, Tuple
import logging

from ..config import Settings, get_settings
from ..core.models import OutcomeCategory, RunningStats
from ..core.utils import TextUtils

logger = logging.getLogger(__name__)


class OutcomeClassifier:
    """
    Service assigning a delivery outcome to an accepted mail item.

    Rules, first match wins:

    1. returned   - sign method + feedback mention a return
    2. exception  - sign method + feedback mention an exception
    3. redelivery - feedback mentions retention/not delivered, or is empty
    4. station    - sign method names a station, locker or self pickup
    5. address    - sign method names the recipient or door delivery,
                    feedback says delivered, or nothing else matched
    """

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize the classifier.

        Args:
            settings: Application settings. If None, uses default settings.
        """
        self._keywords = (settings or get_settings()).keywords

    def classify_with_rule(self, sign_method: str, feedback: str) -> Tuple[OutcomeCategory, str]:
        """
        Classify and report which rule fired.

        Args:
            sign_method: Sign method text
            feedback: Feedback text

        Returns:
            Tuple of (category, rule name)
        """
        kw = self._keywords
        sign_method = (sign_method or "").strip()
        feedback = (feedback or "").strip()
        combined = sign_method + feedback

        if TextUtils.contains_any(combined, kw.returned):
            return OutcomeCategory.RETURNED, "returned"

        if TextUtils.contains_any(combined, kw.exception):
            return OutcomeCategory.EXCEPTION, "exception"

        if not feedback:
            return OutcomeCategory.REDELIVERY, "empty_feedback"
        if TextUtils.contains_any(feedback, kw.redelivery):
            return OutcomeCategory.REDELIVERY, "redelivery"

        if TextUtils.contains_any(sign_method, kw.station):
            return OutcomeCategory.STATION, "station"

        if TextUtils.contains_any(sign_method, kw.address):
            return OutcomeCategory.ADDRESS, "address"
        if TextUtils.contains_any(feedback, kw.delivered):
            return OutcomeCategory.ADDRESS, "delivered"

        return OutcomeCategory.ADDRESS, "default"

    def classify(self, sign_method: str, feedback: str) -> OutcomeCategory:
        """Return the delivery outcome for one accepted row."""
        return self.classify_with_rule(sign_method, feedback)[0]

    def apply(self, sign_method: str, feedback: str, stats: RunningStats) -> OutcomeCategory:
        """Classify a row and increment its outcome counter."""
        category, rule = self.classify_with_rule(sign_method, feedback)
        stats.delivery_stats.increment(category)
        logger.debug(f"Classified as {category.name} by rule '{rule}'")
        return category
