"""
Module User API.

Expose les routes de gestion des utilisateurs synchronisés depuis Clerk.
"""
