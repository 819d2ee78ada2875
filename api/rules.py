from typing import List
from fastapi import APIRouter
from docs.rules.interpret import rules_interpret_description
from scheduler.classifier import classifier_from_env
from scheduler.interpreter import resolve_effect
from schemas.rules.interpret import RuleInterpretRequest, RuleInterpretation

router = APIRouter(prefix="/rules", tags=["Rules"])


@router.post(
    "/interpret",
    response_model=List[RuleInterpretation],
    description=rules_interpret_description,
    summary="Interpret Business Rules",
)
def interpret_rules(request: RuleInterpretRequest):
    classifier = classifier_from_env() if request.useClassifier else None
    results = []
    for model in request.rules:
        rule = model.to_rule()
        effect = resolve_effect(rule, classifier)
        results.append(
            RuleInterpretation(
                id=rule.id,
                name=rule.display_name,
                effect=effect.name,
                isActive=rule.is_active,
            )
        )
    return results
