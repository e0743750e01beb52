"""Marketplace data sources and nearby product search.

This module reads stores, sellers and products from the service's data
files and finds products sold by sellers close to a buyer.
"""
