"""Delivery coverage engine and API."""
