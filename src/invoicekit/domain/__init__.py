"""Domain layer for invoicekit: entities, services and report aggregation."""
