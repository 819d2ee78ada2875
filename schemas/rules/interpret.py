from pydantic import BaseModel
from typing import List
from schemas.validation.run import BusinessRuleModel


class RuleInterpretRequest(BaseModel):
    rules: List[BusinessRuleModel]
    useClassifier: bool = False


class RuleInterpretation(BaseModel):
    id: str
    name: str
    effect: str
    isActive: bool
