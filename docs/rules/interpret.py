rules_interpret_description = """
Show how each business rule will be applied during allocation.

The rule text is matched against a fixed keyword vocabulary (first match wins):

- senior / experienced / expert, qualification / level: `qualification_order`
- balance / distribute / evenly: `utilization_balance`
- cost / budget / cheap: `cost_minimize`
- high priority / urgent: `high_priority_boost`
- group / team: `group_affinity`
- anything else: `inert` (the rule stays active but changes nothing)

With `useClassifier` set, rules that resolve to `inert` are sent to the configured
external classifier; if it is slow or unavailable they stay `inert`.
"""
