"""Lifecycle and computation rules for contracts and invoices."""
