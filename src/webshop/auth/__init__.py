"""
webshop.auth

Authentication/authorization package.

Responsibilities:
- Basic-auth credential extraction.
- Password hashing and verification (bcrypt).
- Resolving credentials to a typed `Principal`.
"""

# Package marker.
