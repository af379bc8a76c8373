"""FOP Tax Assistant infrastructure adapters."""
