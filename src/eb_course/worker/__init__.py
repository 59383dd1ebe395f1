"""Worker environment handlers: queue messages, scheduled tasks and health checks."""
