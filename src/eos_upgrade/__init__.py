"""Migrate an Endless OS 2 appliance to Endless OS 3."""
