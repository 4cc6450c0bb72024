"""
Gemini Books storefront.

A FastAPI service that asks Gemini for a catalog of fictional fantasy
and sci-fi books once at startup, keeps it in memory, and lets a
single-page front-end browse it and edit it in a password-gated admin
mode.
"""
