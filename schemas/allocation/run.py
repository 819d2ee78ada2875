from pydantic import BaseModel, Field
from typing import List, Optional
from core.entities import PRIORITY_CATEGORIES, Priority
from schemas.validation.run import ValidationRunRequest


class PriorityModel(BaseModel):
    id: str
    name: str
    weight: float = Field(ge=0.0, le=1.0)
    description: str = ""
    category: str = "custom"

    def to_priority(self) -> Priority:
        category = self.category if self.category in PRIORITY_CATEGORIES else "custom"
        return Priority(
            id=self.id,
            name=self.name,
            weight=self.weight,
            description=self.description,
            category=category,
        )


class AllocationRunRequest(ValidationRunRequest):
    priorities: List[PriorityModel] = Field(default_factory=list)
    gateOnErrors: bool = False
    useClassifier: bool = False

    def priority_list(self) -> List[Priority]:
        return [p.to_priority() for p in self.priorities]
