"""Frame input and steering output adapters."""
