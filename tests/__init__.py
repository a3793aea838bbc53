"""Test package for fabcast."""
