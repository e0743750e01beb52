"""Delivery-zone resolution module for ShopZone.

This module contains the great-circle distance function, the matching of a
single delivery zone against a buyer's location or state, and the resolver
that ranks all matching zones of a store by cost.
"""
