"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the provider core to the outside world (process environment,
configuration files, the HTTP API and the console) by implementing the
interfaces defined in the domain layer.
"""
