"""Billing domain: pricing rules, invoices, payments and the billing calculator."""
