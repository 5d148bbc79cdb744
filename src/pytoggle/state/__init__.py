"""State/reconciliation layer.

This package is the single source of truth for how proposed changes are
resolved against caller overrides, passed through the state reducer, and
committed to a component's internal storage.
"""
