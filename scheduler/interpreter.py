import logging
from typing import List, Optional, Protocol, Sequence, Tuple
from core.entities import BusinessRule
from core.rule_effects import EFFECT_TYPES, Inert, RuleEffect, effect_from_name
from utils.collaborators import call_with_fallback
from utils.constants import (
    CLASSIFIER_MAX_ATTEMPTS,
    CLASSIFIER_TIMEOUT_SECONDS,
    RULE_KEYWORDS,
)

logger = logging.getLogger(__name__)


class RuleClassifier(Protocol):
    """Maps free rule text to an effect; None means "no opinion"."""

    def classify(self, text: str) -> Optional[RuleEffect]:
        ...


def interpret_text(text: str) -> RuleEffect:
    """Keyword interpretation of free text; the first matching keyword group wins."""
    lowered = (text or "").lower()
    for effect_name, words in RULE_KEYWORDS:
        if any(word in lowered for word in words):
            return effect_from_name(effect_name) or Inert()
    return Inert()


def interpret_rule(rule: BusinessRule) -> RuleEffect:
    return interpret_text(rule.description)


def resolve_effect(
    rule: BusinessRule,
    classifier: Optional[RuleClassifier] = None,
    timeout: float = CLASSIFIER_TIMEOUT_SECONDS,
    attempts: int = CLASSIFIER_MAX_ATTEMPTS,
) -> RuleEffect:
    """
    Keyword interpretation first; the classifier is only asked about rules the keywords
    leave inert. A classifier that fails, times out or answers with something that is
    not an effect leaves the rule inert.
    """
    effect = interpret_rule(rule)
    if not isinstance(effect, Inert) or classifier is None:
        return effect

    answer = call_with_fallback(
        classifier.classify,
        rule.description,
        timeout=timeout,
        attempts=attempts,
        fallback=None,
        label=f"Rule classifier ({rule.id})",
    )
    if answer is None:
        return Inert()
    if isinstance(answer, str):
        answer = effect_from_name(answer)
    if not isinstance(answer, EFFECT_TYPES):
        logger.warning(f"⚠️ Rule classifier gave no usable effect for rule {rule.id}")
        return Inert()
    return answer


def resolve_effects(
    rules: Sequence[BusinessRule],
    classifier: Optional[RuleClassifier] = None,
) -> List[Tuple[BusinessRule, RuleEffect]]:
    """Resolve every rule once, before the allocation loop, preserving rule order."""
    resolved = [(rule, resolve_effect(rule, classifier)) for rule in rules]
    for rule, effect in resolved:
        logger.info(f"  Rule {rule.id} ({rule.display_name}) -> {effect.name}")
    return resolved
