"""jsondrip configuration."""
