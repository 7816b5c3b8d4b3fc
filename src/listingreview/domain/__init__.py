"""Listing review domain: pure reconciliation and approval logic."""
