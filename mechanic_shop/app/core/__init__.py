"""Configuration, logging, the data store and the error taxonomy."""
