"""Finances app package.

Holds payment records taken against clients and bookings. Amounts and
due dates are entered by the finance screens; nothing here computes or
reconciles them.
"""
