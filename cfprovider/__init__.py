"""cfprovider: configuration resolution and API-client construction for the Cloudflare provider."""

__version__ = "0.1.0"
