"""Hosts around the core: route session, saved paths and the pygame viewer."""
