"""Course application layer: commands, DTOs and services."""
