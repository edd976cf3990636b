"""Domain model, ports and reconciliation logic for the order sync."""
