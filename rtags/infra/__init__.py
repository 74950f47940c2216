"""Infrastructure: configuration and the Redis store adapter."""
