import logging
import os
from typing import Optional
import requests
from core.rule_effects import RuleEffect, effect_from_name
from exceptions.custom_errors import RuleClassificationError
from utils.constants import CLASSIFIER_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


class HttpRuleClassifier:
    """
    Rule classifier backed by an HTTP endpoint.

    POSTs `{"text": ...}` and expects `{"effect": "<effect name>"}` back, where the
    name is one of core.rule_effects.EFFECTS_BY_NAME. `{"effect": null}` means the
    service has no opinion.
    """

    def __init__(self, url: str, api_key: Optional[str] = None, timeout: float = CLASSIFIER_TIMEOUT_SECONDS):
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self.session = requests.Session()

    def classify(self, text: str) -> Optional[RuleEffect]:
        headers = {"x-api-key": self.api_key} if self.api_key else {}
        resp = self.session.post(self.url, json={"text": text}, headers=headers, timeout=self.timeout)
        resp.raise_for_status()

        try:
            data = resp.json()
        except ValueError as e:
            raise RuleClassificationError(f"Classifier returned non-JSON body: {resp.text[:200]}") from e

        if not isinstance(data, dict) or "effect" not in data:
            raise RuleClassificationError(f"Classifier response has no 'effect' field: {data}")
        if data["effect"] is None:
            return None

        effect = effect_from_name(data["effect"])
        if effect is None:
            raise RuleClassificationError(f"Unknown effect from classifier: {data['effect']}")
        logger.debug(f"Classifier mapped {text!r} to {effect.name}")
        return effect


def classifier_from_env() -> Optional[HttpRuleClassifier]:
    """HttpRuleClassifier for RULE_CLASSIFIER_URL, or None when no endpoint is configured."""
    url = os.getenv("RULE_CLASSIFIER_URL")
    if not url:
        return None
    return HttpRuleClassifier(url, api_key=os.getenv("RULE_CLASSIFIER_API_KEY"))
