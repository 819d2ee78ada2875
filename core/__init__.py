"""
core
----

Core components shared by the validation and allocation engines:

- entities:
  Typed, frozen Client / Worker / Task / BusinessRule / Priority records.

- findings & results:
  ValidationFinding / ValidationReport and AllocationResult / AllocationSummary.

- rule_effects:
  The closed set of worker-ordering effects a business rule can resolve to.

- CheckManager:
  Register and run validation checks in a controlled sequence.

- ValidationState / AllocationState:
  Encapsulate the inputs and accumulators of a single run.
"""
