"""Small shared helpers for adapters (messages, vision parts)."""
