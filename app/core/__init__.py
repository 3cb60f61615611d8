"""
Socle technique : configuration, sécurité Clerk, authentification.
"""
