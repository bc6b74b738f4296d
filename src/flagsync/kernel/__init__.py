"""Kernel – error hierarchy and the record store port."""
