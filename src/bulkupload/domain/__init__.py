"""Domain layer: value objects, ports and the bulk upload resolution engine."""
