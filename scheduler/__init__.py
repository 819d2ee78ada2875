"""
scheduler
---------

Main allocation module. Initializes key components:

- `builder`: Queue construction, rule resolution and the `allocate` entry point.
- `runner`: The greedy per-task allocation loop.
- `interpreter`: Business rule text to rule effect.
- `extractor`: Summary, rule attribution and tabular views of a run.

Provides high-level access to core allocation functionality.
"""
from . import builder, runner
from .builder import allocate
