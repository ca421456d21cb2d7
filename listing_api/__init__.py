"""HTTP job-control surface for the directory-listing scraper."""
