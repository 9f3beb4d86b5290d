"""
Contact intake core.

validation -> field_mapper -> coordinator -> reporter, with catalog supplying
the option ids the form may submit.

Key rule:
- Nothing in this package talks HTTP. Clients are injected (see
  src/api/dependencies.py) so tests can swap in the mocks.
"""
