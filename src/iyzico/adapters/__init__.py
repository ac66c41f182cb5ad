"""Framework bindings for the iyzico client."""
