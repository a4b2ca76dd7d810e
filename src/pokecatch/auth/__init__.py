"""Authentication and authorization.

Learn: One identity path only:
Users → email/password → bcrypt check → short-lived JWT bearer token.

The gate in dependencies.py turns that token back into a
"current identity" used to scope every collection query to its owner.
"""
