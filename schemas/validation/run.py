from pydantic import BaseModel, Field, ConfigDict, model_validator
from typing import List, Optional, Any, Dict
from core.entities import BusinessRule, RULE_TYPES


# Entity rows are passed through untouched: a missing or malformed column is a
# validation finding, not a request error.
EntityRecords = List[Dict[str, Any]]


class RuleConditionModel(BaseModel):
    field: str
    operator: str = "equals"
    value: Any = None


class RuleActionModel(BaseModel):
    type: str
    parameters: Dict[str, Any] = Field(default_factory=dict)


class RuleConfigModel(BaseModel):
    conditions: List[RuleConditionModel] = Field(default_factory=list)
    actions: List[RuleActionModel] = Field(default_factory=list)
    priority: int = 1


class BusinessRuleModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str = ""
    naturalLanguage: str = ""
    ruleType: str = "custom"
    ruleConfig: Optional[RuleConfigModel] = None
    isActive: bool = True
    affectedEntities: List[str] = Field(default_factory=list)

    # typed payloads
    tasks: List[str] = Field(default_factory=list)
    taskId: Optional[str] = None
    allowedPhases: List[int] = Field(default_factory=list)
    targetGroup: Optional[str] = None
    minCommonSlots: Optional[int] = None
    workerGroup: Optional[str] = None
    maxSlotsPerPhase: Optional[int] = None

    @model_validator(mode="before")
    @classmethod
    def accept_description(cls, values: Any) -> Any:
        """
        Rules authored elsewhere may carry their free text as "description" rather
        than "naturalLanguage"; accept either.
        """
        if isinstance(values, dict) and not values.get("naturalLanguage"):
            if values.get("description"):
                values["naturalLanguage"] = values.pop("description")
        return values

    @model_validator(mode="after")
    def check_rule_type(self):
        if self.ruleType not in RULE_TYPES:
            raise ValueError(f"ruleType must be one of {list(RULE_TYPES)}, got: {self.ruleType}")
        return self

    def to_rule(self) -> BusinessRule:
        return BusinessRule.from_dict(self.model_dump())


class ValidationRunRequest(BaseModel):
    clients: EntityRecords = Field(default_factory=list)
    workers: EntityRecords = Field(default_factory=list)
    tasks: EntityRecords = Field(default_factory=list)
    rules: Optional[List[BusinessRuleModel]] = None

    def business_rules(self) -> Optional[List[BusinessRule]]:
        """None when no rules were sent, so rule-dependent checks pass vacuously."""
        if self.rules is None:
            return None
        return [r.to_rule() for r in self.rules]
