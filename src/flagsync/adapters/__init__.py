"""Adapters – concrete RecordStore backends."""
