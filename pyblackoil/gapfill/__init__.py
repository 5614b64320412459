from .gapfill import extend_undersaturated_rows
