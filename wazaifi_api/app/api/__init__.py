"""
API package containing versioned routes.

A version subpackage exposes a top‑level ``router`` which includes all
of its endpoints.  The application mounts it under
``settings.api_prefix`` (the root by default).
"""
