"""Command line interface (``order-ingest`` / ``python -m order_ingest.cli``)."""
