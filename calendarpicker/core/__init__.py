"""Configuration, logging, health and time helpers for calendarpicker."""
