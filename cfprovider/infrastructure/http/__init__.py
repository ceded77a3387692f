"""HTTP client implementation of the ApiClientHandle interface."""
