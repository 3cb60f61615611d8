"""
Module Webhooks API.

Expose la route de synchronisation des utilisateurs depuis Clerk.
"""
