"""HTTP transport for calendarpicker."""
