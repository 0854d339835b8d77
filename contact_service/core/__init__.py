"""Configuration, constants, errors and logging shared by every layer."""
