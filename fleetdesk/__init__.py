"""Fleetdesk: fleet-expense administration API."""
