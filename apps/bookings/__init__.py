"""Bookings app package.

This app encapsulates the booking domain: the booking aggregate and its
lifecycle, hold-window calculation, availability checks against the
bookings already in the store, and the synchronisation of equipment
status with the bookings that reference it. ``services.BookingService``
is the entry point for the forms and views.
"""
