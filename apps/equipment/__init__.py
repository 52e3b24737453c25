"""Equipment app package.

This app holds the rental inventory: climate-equipment line items, their
aggregate UI status and quantity breakdown, and the commands used by
the maintenance tracking screens to change them.
"""
