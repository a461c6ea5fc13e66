"""OpenIE CLI - serve the extraction API or run extractions locally."""
