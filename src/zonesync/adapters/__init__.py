"""Adapters binding the domain ports to PowerDNS and SQLAlchemy."""
