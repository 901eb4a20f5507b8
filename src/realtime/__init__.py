"""Push delivery of course lifecycle events to connected sessions."""
