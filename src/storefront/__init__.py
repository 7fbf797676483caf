"""Storefront: users, catalogue and orders for a single online shop."""
