"""Course lifecycle domain: statuses, the Course aggregate and its events."""
