"""Core Application Layer: resolves provider configuration and builds the API client.

Connects the domain layer with the infrastructure layer through interfaces.
Contains the resolver, the client builder, the provider entry point and the
command handler.
"""
