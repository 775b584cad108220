"""JSON fixtures for the mock handler."""
