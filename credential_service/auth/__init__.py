"""
Authentication microservice.

This package provides the authentication pipeline:
- Request validation against named schemas
- Password hashing and verification (bcrypt)
- Duplicate-account detection
- JWT issuance
- Status normalization into response envelopes
"""
