"""Sample classes resolved by name in the test suite."""
