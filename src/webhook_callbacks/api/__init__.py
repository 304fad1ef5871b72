"""HTTP transport for webhook deliveries."""
