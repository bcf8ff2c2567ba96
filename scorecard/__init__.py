"""Trading-card listing title extraction and classification."""
