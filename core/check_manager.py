from typing import Callable, List, Tuple
from core.findings import ValidationFinding
from core.state import CheckOutcome, ValidationState

Check = Callable[[ValidationState], List[ValidationFinding]]


class CheckManager:
    def __init__(self, state: ValidationState):
        self.state = state
        self.checks: List[Tuple[str, Check]] = []

    def add_check(self, name: str, check_func: Check, condition: bool = True):
        """Register a named check with optional enablement condition."""
        if condition:
            self.checks.append((name, check_func))

    def run_all(self) -> List[CheckOutcome]:
        """Run all registered checks in order."""
        return [CheckOutcome(name, list(check(self.state))) for name, check in self.checks]
