"""
security/ - Credential Handling
===============================
Password hashing used when seeding and authenticating user accounts.
"""
