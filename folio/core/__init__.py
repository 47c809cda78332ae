"""Configuration, errors, logging and CLI helpers shared by all of Folio."""
