"""
Domaine de la marketplace.

Entités, value objects, enums et erreurs métier. Aucune dépendance
vers la persistance ni vers FastAPI.
"""
