"""Test suite for drillbook.

Test Structure:
- unit/: Unit tests per component (drill, editor, validation, scoring, ...)
- integration/: DrillSession wiring end to end
- conftest.py: Shared fixtures (store, two_sets, skilled_roster, ...)
"""
