"""Core building blocks of dbxpy."""
