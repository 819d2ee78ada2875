"""
utils package
-------------

Contains utility modules shared by the validation and allocation engines.

Includes the configuration constants, the list/JSON field parsers, the entity normalizer,
the sheet loader, the logger and the timeout/retry boundary for external collaborators.
"""
