"""Infrastructure layer — file I/O for persisted state."""
