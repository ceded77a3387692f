"""Domain Event definitions.

Represents significant occurrences during API calls that other parts
of the system might react to.
"""
