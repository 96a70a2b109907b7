# =======================================================================================
# app/__init__.py - Package Initialization
# =======================================================================================
"""
RFID Transit Access Backend

Station scanners post tag reads, the backend validates the tag against an
active account and records an entry/exit transaction. Passengers sign up and
view their profile; admins manage passenger accounts.
"""

__version__ = "1.0.0"
__author__ = "RFID Transit Team"
