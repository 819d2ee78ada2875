"""
scheduler.rules
---------------

Exposes the worker-ordering effects of business rules by importing from:

- `ordering`: Qualification, utilization, cost, group and high-priority ordering.

Allows unified access to all rule effect definitions via wildcard imports.
"""
from .ordering import *
