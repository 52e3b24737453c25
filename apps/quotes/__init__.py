"""Quotes app package.

Quotes (rental proposals) are stored as records referencing a client and
optionally the booking they turned into. Totals are entered by the
quote screens and kept as given.
"""
