"""CSV ingestion stages: limits, reader, cleaning, inference, signature, builder."""
