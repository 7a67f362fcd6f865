"""
API de la boutique de maillots: catalogue, comptes, commandes et paiement UniPaas.
"""
