"""HTTP surface of pricing, invoicing and payments."""
