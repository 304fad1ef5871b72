"""Domain layer: events, filters, bindings and dispatch results."""
