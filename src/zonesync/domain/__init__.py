"""Domain layer: DNS cache model, ports and the reconciliation engine."""
