"""Testing utilities – fakes for the record store port."""
