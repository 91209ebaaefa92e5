"""Trip quote pricing core and its HTTP preview API."""
