"""
Core services package.

Business logic for the core app, one module per domain. Views call into
these modules; they never touch models directly.
"""
