"""Domain Layer: value objects, interfaces and events with no I/O of their own."""
