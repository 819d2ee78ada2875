"""
validation
----------

Validation engine. Initializes key components:

- `engine`: Builds the validation state and runs the registered checks.
- `checks`: The individual checks, one function per finding family.
- `graph`: Indexed task graph used for co-run cycle detection.
"""
from .engine import validate
