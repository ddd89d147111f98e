"""Browser-free tests for the smoke framework and tools."""
