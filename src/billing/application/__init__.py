"""Billing application layer: pricing catalog, invoicing and payments."""
