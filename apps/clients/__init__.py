"""Clients app package.

Client records are data bags for the rental core: bookings, payments and
quotes reference them by id. Contact and billing details are edited by
the CRM screens through the generic record service.
"""
