"""Cross-cutting infrastructure: exceptions and logging configuration."""
