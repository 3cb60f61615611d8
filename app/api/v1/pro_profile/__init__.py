"""
Module ProProfile API.

Expose les routes de gestion des profils professionnels :
onboarding, modération et abonnement premium.
"""
