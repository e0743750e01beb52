"""FastAPI application module for ShopZone.

This module contains the FastAPI application, route handlers, and API
endpoints for delivery validation and nearby product search.
"""
