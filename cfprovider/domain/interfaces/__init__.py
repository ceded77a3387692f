"""Domain Interfaces (Ports):

Abstract contracts for the environment, the API client handle and the user
interface. The core depends on these, never on the concrete adapters.
"""
