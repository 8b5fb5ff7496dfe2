"""Geo Attendance package.

Feature modules (geo, location, session, identity, ledger, offices, employees) sit behind
a thin Flask controller layer; the attendance session core has no Flask or database imports.
"""
