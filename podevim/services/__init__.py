"""Business services package."""
