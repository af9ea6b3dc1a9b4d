"""Resume Form AI: registration form auto-filled from a streamed résumé extraction."""
