"""HTTP boundary for the scraping service."""
