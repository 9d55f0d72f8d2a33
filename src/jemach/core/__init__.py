"""Core infrastructure shared by jemach subpackages."""
