"""
validation.checks
-----------------

Exposes every validation check by importing from:

- `structural`: Single-collection checks (columns, duplicate ids, lists, ranges, JSON).
- `references`: Cross-referential checks (task references, skill coverage, concurrency).
- `rules`: Checks that need rule context (co-run cycles, phase-window conflicts).
- `capacity`: Worker load and phase saturation checks.
"""
from .structural import *
from .references import *
from .rules import *
from .capacity import *
